import torch
from fake_quant_ext import fake_quantize, fake_quantize_grad

# pick the best available device
if torch.backends.mps.is_available():
    device = torch.device("mps")
elif torch.cuda.is_available():
    device = torch.device("cuda")
else:
    device = torch.device("cpu")

if __name__ == "__main__":
    input_tensor = torch.tensor([3.3, 200.0], device=device, dtype=torch.float) # Explicitly set dtype=torch.float

    print(f"Tensor before fake_quantize ({device}):")
    print(input_tensor)

    # scale=0.5, zero_point=10, 8-bit unsigned range
    output_tensor = fake_quantize(input_tensor, 0.5, 10, 0, 255)

    print("\nTensor after fake_quantize:")
    print(output_tensor)

    grad = fake_quantize_grad(torch.ones_like(input_tensor), input_tensor, 0.5, 10, 0, 255)
    print("\nStraight-through gradient:")
    print(grad)

    expected_tensor = torch.tensor([3.5, 122.5], device=device, dtype=torch.float)
    assert torch.equal(output_tensor, expected_tensor), "Tensor content is not as expected!"
    expected_grad = torch.tensor([1.0, 0.0], device=device, dtype=torch.float)
    assert torch.equal(grad, expected_grad), "Gradient is not as expected!"
    print("\nVerification successful!")
