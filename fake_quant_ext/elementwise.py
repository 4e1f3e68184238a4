"""
Elementwise map over equal-sized arrays.

The ops in this package never talk to torch or numpy directly. They hand a
pure per-element function to ``elementwise_map``, which picks the backend
from the arrays it is given, allocates the output and writes the result of
the (vectorized) function into it. Each output position depends only on
the same position of the inputs, so the runtime is free to run the
underlying kernels in parallel.
"""

import logging

import numpy as np
import torch

from .errors import ShapeMismatch, UnsupportedDevice, UnsupportedDtype

logger = logging.getLogger(__name__)


class TorchBackend:
    """torch.Tensor on any device torch can run elementwise kernels on."""

    name = "torch"

    @staticmethod
    def accepts(array):
        return isinstance(array, torch.Tensor)

    @staticmethod
    def device_type(array):
        return array.device.type

    @staticmethod
    def device(array):
        return array.device

    @staticmethod
    def numel(array):
        return array.numel()

    @staticmethod
    def empty_like(array):
        return torch.empty_like(array)

    @staticmethod
    def copy(array):
        return array.clone()

    @staticmethod
    def view_as(array, like):
        return array.reshape(like.shape)

    @staticmethod
    def write(out, values):
        out.copy_(values)

    @staticmethod
    def round(x):
        # ties to even
        return torch.round(x)

    @staticmethod
    def clamp(x, lo, hi):
        return torch.clamp(x, lo, hi)

    @staticmethod
    def in_range(q, lo, hi):
        return ((q >= lo) & (q <= hi)).to(q.dtype)


class NumpyBackend:
    """numpy.ndarray in host memory."""

    name = "numpy"

    @staticmethod
    def accepts(array):
        return isinstance(array, np.ndarray)

    @staticmethod
    def device_type(array):
        return "cpu"

    @staticmethod
    def device(array):
        return "cpu"

    @staticmethod
    def numel(array):
        return array.size

    @staticmethod
    def empty_like(array):
        return np.empty_like(array)

    @staticmethod
    def copy(array):
        return array.copy()

    @staticmethod
    def view_as(array, like):
        return array.reshape(like.shape)

    @staticmethod
    def write(out, values):
        out[...] = values

    @staticmethod
    def round(x):
        # ties to even
        return np.round(x)

    @staticmethod
    def clamp(x, lo, hi):
        return np.clip(x, lo, hi)

    @staticmethod
    def in_range(q, lo, hi):
        return ((q >= lo) & (q <= hi)).astype(q.dtype)


BACKENDS = (TorchBackend, NumpyBackend)


def get_backend(array):
    for backend in BACKENDS:
        if backend.accepts(array):
            return backend
    raise UnsupportedDtype(
        f"Expected a torch.Tensor or numpy.ndarray, got {type(array).__name__}."
    )


def copy(array):
    """Whole-array copy, used for the warm-up passthrough."""
    return get_backend(array).copy(array)


def elementwise_map(fn, *arrays, like=None):
    """
    Apply ``fn`` position-wise across ``arrays`` and return a new array.

    Args:
        fn: Pure function called as ``fn(backend, *views)``. It must only use
            elementwise arithmetic and the backend primitives (``round``,
            ``clamp``, ``in_range``).
        arrays: One or more arrays of the same backend, device and element
            count. They are read, never written.
        like: Array whose shape, dtype and device the output takes.
            Defaults to the first array.

    Returns:
        A freshly allocated array shaped like ``like``.
    """
    if not arrays:
        raise TypeError("elementwise_map() needs at least one array")
    if like is None:
        like = arrays[0]

    backend = get_backend(like)
    numel = backend.numel(like)
    for array in arrays:
        if get_backend(array) is not backend:
            raise UnsupportedDevice(
                f"Cannot mix {backend.name} and {get_backend(array).name} arrays."
            )
        if backend.device(array) != backend.device(like):
            raise UnsupportedDevice(
                f"Arrays live on different devices: {backend.device(array)} and {backend.device(like)}."
            )
        if backend.numel(array) != numel:
            raise ShapeMismatch(
                f"Arrays have different element counts: {backend.numel(array)} and {numel}."
            )

    out = backend.empty_like(like)
    views = [backend.view_as(array, like) for array in arrays]
    backend.write(out, fn(backend, *views))
    logger.debug("elementwise_map %s over %d element(s) on %s",
                 type(fn).__name__, numel, backend.device(like))
    return out
