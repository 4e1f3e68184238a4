"""Exceptions raised by the fake quantization ops.

All of them derive from ValueError, so callers that already guard the ops
with ``except ValueError`` keep working.
"""


class FakeQuantError(ValueError):
    """Base class for every precondition failure in fake_quant_ext."""


class InvalidRange(FakeQuantError):
    pass


class InvalidZeroPoint(FakeQuantError):
    pass


class InvalidDelay(FakeQuantError):
    pass


class InvalidIter(FakeQuantError):
    pass


class InvalidScale(FakeQuantError):
    pass


class ShapeMismatch(FakeQuantError):
    pass


class UnsupportedDevice(FakeQuantError):
    pass


class UnsupportedDtype(FakeQuantError):
    pass
