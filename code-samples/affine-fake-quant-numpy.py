import numpy as np

from fake_quant_ext import QuantParams, fake_quantize_grad_with, fake_quantize_with, quant_range

if __name__ == "__main__":
    # --- Example Usage ---
    # Sample float data (e.g., representing activations after ReLU)
    data_fp32 = np.array([0.0, 0.5, 1.0, 1.5, 3.0, 5.0, 7.5, 10.0, 12.0, 15.5], dtype=np.float32)
    print("Original float32 data:\n", data_fp32)
    print("-" * 30)

    # Calibrate 4-bit unsigned parameters from the data itself
    num_bits = 4
    params = QuantParams.from_tensor(data_fp32, num_bits=num_bits)
    print(f"Target range: {quant_range(num_bits)} (uint{num_bits})")
    print(f"Calculated Scale: {params.scale:.4f}")
    print(f"Calculated Zero-Point: {params.zero_point}")
    print("-" * 30)

    # Values stay float32 but only take the 16 representable levels
    fake_quantized = fake_quantize_with(data_fp32, params)
    print("Fake-quantized float32 data:\n", fake_quantized)
    print("Distinct levels used:", np.unique(fake_quantized).size)
    print("-" * 30)

    error = np.abs(data_fp32 - fake_quantized)
    print("Quantization Error (Absolute Difference):\n", error)
    print(f"\nMean Absolute Error: {np.mean(error):.4f}")
    print("-" * 30)

    # Narrow the scheme so the upper values saturate, then look at the gradient mask
    narrow = QuantParams(params.scale, params.zero_point, params.quant_min, params.quant_max // 2)
    grad = fake_quantize_grad_with(np.ones_like(data_fp32), data_fp32, narrow)
    print(f"Straight-through gradient with quant_max={narrow.quant_max}:\n", grad)
