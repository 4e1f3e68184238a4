"""
fake_quant_ext: per-tensor affine fake quantization for torch and numpy arrays.

    import torch
    from fake_quant_ext import fake_quantize, fake_quantize_grad

    x = torch.randn(42)
    y = fake_quantize(x, 0.05, 128, 0, 255)
    dx = fake_quantize_grad(torch.ones_like(x), x, 0.05, 128, 0, 255)
"""

import logging

from . import config
from .elementwise import NumpyBackend, TorchBackend, elementwise_map, get_backend
from .errors import (
    FakeQuantError, InvalidDelay, InvalidIter, InvalidRange, InvalidScale,
    InvalidZeroPoint, ShapeMismatch, UnsupportedDevice, UnsupportedDtype
)
from .ops import (
    FakeQuantizeFunctor, FakeQuantizeGradFunctor, fake_quantize,
    fake_quantize_grad, fake_quantize_grad_with, fake_quantize_with
)
from .qparams import DelayState, QuantParams, choose_qparams, quant_range
from .validation import check_quant_params, in_warmup

__version__ = "0.0.1"

_logger = logging.getLogger(__name__)
_logger.addHandler(logging.NullHandler())
if config.LOG_LEVEL:
    _logger.setLevel(config.LOG_LEVEL.upper())

__all__ = [
    "fake_quantize", "fake_quantize_grad", "fake_quantize_with", "fake_quantize_grad_with",
    "FakeQuantizeFunctor", "FakeQuantizeGradFunctor",
    "elementwise_map", "get_backend", "TorchBackend", "NumpyBackend",
    "check_quant_params", "in_warmup",
    "QuantParams", "DelayState", "quant_range", "choose_qparams",
    "FakeQuantError", "InvalidRange", "InvalidZeroPoint", "InvalidDelay", "InvalidIter",
    "InvalidScale", "ShapeMismatch", "UnsupportedDevice", "UnsupportedDtype",
]
