"""Argument checks shared by the forward and backward ops.

Everything here runs before any output is allocated, so a failing call
never leaves partial work behind.
"""

import math

from . import config
from .elementwise import NumpyBackend, get_backend
from .errors import (
    InvalidDelay, InvalidIter, InvalidRange, InvalidScale, InvalidZeroPoint,
    ShapeMismatch, UnsupportedDevice, UnsupportedDtype
)


def check_quant_params(quant_min, quant_max, zero_point, quant_delay, iter):
    """
    Validate the quantization range, zero point and delay arguments.

    zero_point is only required to be non-negative; it may lie outside
    [quant_min, quant_max].

    Raises:
        InvalidRange: quant_min > quant_max
        InvalidZeroPoint: zero_point < 0
        InvalidDelay: quant_delay < 0
        InvalidIter: quant_delay != 0 and iter < 0
    """
    if quant_min > quant_max:
        raise InvalidRange(
            f"`quant_min` should be less than or equal to `quant_max`, got {quant_min} > {quant_max}."
        )
    if zero_point < 0:
        raise InvalidZeroPoint(
            f"`zero_point` must be a non-negative integer, got {zero_point}."
        )
    if quant_delay < 0:
        raise InvalidDelay(f"`quant_delay` must be a non-negative integer, got {quant_delay}.")
    if quant_delay != 0 and iter < 0:
        raise InvalidIter(
            f"`iter` must be a non-negative integer when `quant_delay` is set, got {iter}."
        )


def check_scale(scale):
    if scale == 0 or not math.isfinite(scale):
        raise InvalidScale(f"`scale` must be a non-zero finite number, got {scale}.")


def check_array(array, name="input"):
    """Raise unless ``array`` is a float32 array on a supported device."""
    backend = get_backend(array)
    device_type = backend.device_type(array)
    if device_type not in config.SUPPORTED_DEVICE_TYPES:
        raise UnsupportedDevice(
            f"`{name}` is on device '{device_type}', expected one of {config.SUPPORTED_DEVICE_TYPES}."
        )
    if backend is NumpyBackend:
        supported = config.SUPPORTED_NUMPY_DTYPES
    else:
        supported = config.SUPPORTED_TORCH_DTYPES
    if array.dtype not in supported:
        raise UnsupportedDtype(f"`{name}` must be float32, got {array.dtype}.")


def check_conformant(grad_output, input):
    """Backward needs grad_output and input with the same element count."""
    backend = get_backend(input)
    if get_backend(grad_output) is not backend:
        raise UnsupportedDevice("`grad_output` and `input` come from different array libraries.")
    if backend.device(grad_output) != backend.device(input):
        raise UnsupportedDevice(
            f"`grad_output` is on {backend.device(grad_output)} but `input` is on {backend.device(input)}."
        )
    if backend.numel(grad_output) != backend.numel(input):
        raise ShapeMismatch(
            f"`input` and `grad_output` are not the same size: "
            f"{backend.numel(input)} vs {backend.numel(grad_output)} elements."
        )


def in_warmup(quant_delay, iter):
    """True while the ops should pass values through unquantized."""
    return quant_delay > 0 and iter <= quant_delay
