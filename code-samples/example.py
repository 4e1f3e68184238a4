import torch

from fake_quant_ext import DelayState, QuantParams, fake_quantize_grad_with, fake_quantize_with

# --- Parameters ---
QUANT_DELAY = 3      # iterations to run in full precision first
NUM_ITERS = 6
torch.manual_seed(42) # For reproducibility


if __name__ == "__main__":
    weights = torch.randn(8, dtype=torch.float32)
    params = QuantParams.from_tensor(weights, num_bits=3)
    print("Weights:", weights)
    print(f"Scale: {params.scale:.4f}, Zero-point: {params.zero_point}, "
          f"Range: [{params.quant_min}, {params.quant_max}]")

    # Walk the delay schedule the way a training loop would
    delay = DelayState(quant_delay=QUANT_DELAY)
    for _ in range(NUM_ITERS):
        out = fake_quantize_with(weights, params, delay)
        grad = fake_quantize_grad_with(torch.ones_like(weights), weights, params, delay)
        mode = "warm-up (identity)" if delay.in_warmup else "quantized"
        max_error = (weights - out).abs().max().item()
        print(f"iter {delay.iter}: {mode:18} max |x - fq(x)| = {max_error:.4f}, "
              f"gradient passes at {int(grad.sum().item())}/{grad.numel()} positions")
        delay = delay.step()
