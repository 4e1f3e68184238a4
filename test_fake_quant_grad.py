import numpy as np
import pytest
import torch

from fake_quant_ext import ShapeMismatch, fake_quantize_grad

SCALE = 0.5
ZERO_POINT = 10
QMIN, QMAX = 0, 255


def test_saturated_values_get_zero_gradient(device):
    # q = 17, 410, -10, 10
    x = torch.tensor([3.3, 200.0, -10.0, 0.0], device=device, dtype=torch.float32)
    dy = torch.full((4,), 2.0, device=device, dtype=torch.float32)
    dx = fake_quantize_grad(dy, x, SCALE, ZERO_POINT, QMIN, QMAX)

    assert dx.device == x.device
    assert dx.cpu().tolist() == [2.0, 0.0, 0.0, 2.0]


def test_range_bounds_are_inclusive():
    # q = 255, 256, 0, -1
    x = torch.tensor([122.5, 123.0, -5.0, -5.5], dtype=torch.float32)
    dy = torch.tensor([1.0, 2.0, 3.0, 4.0], dtype=torch.float32)
    dx = fake_quantize_grad(dy, x, SCALE, ZERO_POINT, QMIN, QMAX)
    assert dx.tolist() == [1.0, 0.0, 3.0, 0.0]


def test_mask_matches_rounded_range(device):
    x = torch.randn(4096, device=device, dtype=torch.float32) * 100
    dy = torch.randn(4096, device=device, dtype=torch.float32)
    dx = fake_quantize_grad(dy, x, SCALE, ZERO_POINT, QMIN, QMAX)

    q = torch.round(x * (1.0 / SCALE) + ZERO_POINT)
    in_range = (q >= QMIN) & (q <= QMAX)
    assert torch.equal(dx[in_range], dy[in_range])
    assert torch.all(dx[~in_range] == 0)


def test_output_is_shaped_like_input():
    x = torch.zeros(2, 3, dtype=torch.float32)
    dy = torch.ones(6, dtype=torch.float32)
    dx = fake_quantize_grad(dy, x, SCALE, ZERO_POINT, QMIN, QMAX)
    assert dx.shape == (2, 3)
    assert torch.equal(dx, torch.ones(2, 3))


def test_inputs_are_not_modified():
    x = torch.tensor([1.0, 500.0], dtype=torch.float32)
    dy = torch.tensor([1.0, 1.0], dtype=torch.float32)
    fake_quantize_grad(dy, x, SCALE, ZERO_POINT, QMIN, QMAX)
    assert x.tolist() == [1.0, 500.0]
    assert dy.tolist() == [1.0, 1.0]


def test_size_mismatch():
    x = torch.zeros(5, dtype=torch.float32)
    dy = torch.zeros(4, dtype=torch.float32)
    with pytest.raises(ShapeMismatch):
        fake_quantize_grad(dy, x, SCALE, ZERO_POINT, QMIN, QMAX)


def test_empty_input_is_returned_as_is():
    x = torch.empty(0, dtype=torch.float32)
    dy = torch.empty(0, dtype=torch.float32)
    assert fake_quantize_grad(dy, x, SCALE, ZERO_POINT, QMIN, QMAX) is x


def test_warmup_passes_gradient_through(device):
    x = torch.tensor([3.3, 200.0], device=device, dtype=torch.float32)
    dy = torch.tensor([0.1, 0.2], device=device, dtype=torch.float32)
    for it in range(0, 4):
        dx = fake_quantize_grad(dy, x, SCALE, ZERO_POINT, QMIN, QMAX, quant_delay=3, iter=it)
        assert torch.equal(dx, dy)
        assert dx is not dy

    dx = fake_quantize_grad(dy, x, SCALE, ZERO_POINT, QMIN, QMAX, quant_delay=3, iter=4)
    assert dx.cpu().tolist()[1] == 0.0


def test_numpy_arrays():
    x = np.array([3.3, 200.0, -10.0], dtype=np.float32)
    dy = np.array([1.5, 1.5, 1.5], dtype=np.float32)
    dx = fake_quantize_grad(dy, x, SCALE, ZERO_POINT, QMIN, QMAX)

    assert isinstance(dx, np.ndarray)
    assert dx.dtype == np.float32
    np.testing.assert_array_equal(dx, np.array([1.5, 0.0, 0.0], dtype=np.float32))
