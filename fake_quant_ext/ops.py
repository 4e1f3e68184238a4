"""
Per-tensor affine fake quantization.

``fake_quantize`` snaps every value to the grid an integer type with range
[quant_min, quant_max] can represent under ``scale``/``zero_point``, and
returns the result as float32. ``fake_quantize_grad`` is its straight-through
estimator: gradients pass unchanged where the value was representable and
are zeroed where it saturated.

Both accept a ``quant_delay``: while ``iter <= quant_delay`` they return a
copy of their input, so a model can warm up in full precision first.
"""

import logging

from .elementwise import copy, elementwise_map, get_backend
from .qparams import DelayState
from .validation import (
    check_array, check_conformant, check_quant_params, check_scale, in_warmup
)

logger = logging.getLogger(__name__)


class FakeQuantizeFunctor:
    """round -> clamp -> dequantize for a single value."""

    def __init__(self, scale, zero_point, quant_min, quant_max):
        # plain Python scalars stay weak, so float32 arrays are not promoted
        self.scale = float(scale)
        self.inv_scale = 1.0 / self.scale
        self.zero_point = int(zero_point)
        self.quant_min = int(quant_min)
        self.quant_max = int(quant_max)

    def __call__(self, ops, x):
        q = ops.round(x * self.inv_scale + self.zero_point)
        q = ops.clamp(q, self.quant_min, self.quant_max)
        return (q - self.zero_point) * self.scale


class FakeQuantizeGradFunctor:
    """Straight-through estimator: dy where round(x) is in range, else 0."""

    def __init__(self, scale, zero_point, quant_min, quant_max):
        self.inv_scale = 1.0 / float(scale)
        self.zero_point = int(zero_point)
        self.quant_min = int(quant_min)
        self.quant_max = int(quant_max)

    def __call__(self, ops, dy, x):
        q = ops.round(x * self.inv_scale + self.zero_point)
        mask = ops.in_range(q, self.quant_min, self.quant_max)
        return mask * dy


def fake_quantize(input, scale, zero_point, quant_min, quant_max, quant_delay=0, iter=0):
    """
    Fake-quantize ``input`` with a per-tensor affine scheme.

    Args:
        input: float32 torch.Tensor (cpu/cuda/mps) or numpy.ndarray.
        scale: Quantization step.
        zero_point: Integer that real 0.0 maps to. Must be >= 0.
        quant_min: Lowest representable integer.
        quant_max: Highest representable integer.
        quant_delay: Number of warm-up iterations. 0 disables warm-up.
        iter: Current iteration, compared against ``quant_delay``.

    Returns:
        New array with the shape, dtype and device of ``input``. During
        warm-up it is an exact copy of ``input``.
    """
    check_quant_params(quant_min, quant_max, zero_point, quant_delay, iter)
    check_scale(scale)
    check_array(input, "input")

    if in_warmup(quant_delay, iter):
        logger.debug("fake_quantize: warm-up passthrough (iter=%d, quant_delay=%d)", iter, quant_delay)
        return copy(input)

    return elementwise_map(
        FakeQuantizeFunctor(scale, zero_point, quant_min, quant_max), input
    )


def fake_quantize_grad(grad_output, input, scale, zero_point, quant_min, quant_max,
                       quant_delay=0, iter=0):
    """
    Gradient of ``fake_quantize`` w.r.t. ``input`` (straight-through estimator).

    ``grad_output`` and ``input`` must have the same number of elements. The
    result is shaped like ``input``.

    A zero-element ``input`` is returned as is. During warm-up a copy of
    ``grad_output`` is returned.
    """
    check_quant_params(quant_min, quant_max, zero_point, quant_delay, iter)
    check_scale(scale)
    check_array(grad_output, "grad_output")
    check_array(input, "input")
    check_conformant(grad_output, input)

    if get_backend(input).numel(input) == 0:
        logger.debug("fake_quantize_grad: empty input, returning it unchanged")
        return input

    if in_warmup(quant_delay, iter):
        logger.debug("fake_quantize_grad: warm-up passthrough (iter=%d, quant_delay=%d)", iter, quant_delay)
        return copy(grad_output)

    return elementwise_map(
        FakeQuantizeGradFunctor(scale, zero_point, quant_min, quant_max),
        grad_output, input, like=input
    )


def fake_quantize_with(input, params, delay=None):
    """``fake_quantize`` driven by a QuantParams and an optional DelayState."""
    delay = delay if delay is not None else DelayState()
    return fake_quantize(input, params.scale, params.zero_point, params.quant_min,
                         params.quant_max, delay.quant_delay, delay.iter)


def fake_quantize_grad_with(grad_output, input, params, delay=None):
    """``fake_quantize_grad`` driven by a QuantParams and an optional DelayState."""
    delay = delay if delay is not None else DelayState()
    return fake_quantize_grad(grad_output, input, params.scale, params.zero_point,
                              params.quant_min, params.quant_max, delay.quant_delay, delay.iter)
