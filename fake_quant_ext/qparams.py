"""
Quantization parameter records and helpers for picking them.

The ops take plain numbers; these records just keep a scheme and a delay
schedule together and compute parameters from observed data.
"""

from dataclasses import dataclass
from typing import Tuple

from .config import DEFAULT_NUM_BITS
from .elementwise import get_backend
from .errors import InvalidRange
from .validation import check_quant_params, check_scale, in_warmup


@dataclass(frozen=True)
class QuantParams:
    scale: float
    zero_point: int
    quant_min: int
    quant_max: int

    def validate(self) -> None:
        check_quant_params(self.quant_min, self.quant_max, self.zero_point, 0, 0)
        check_scale(self.scale)

    @classmethod
    def from_tensor(cls, x, num_bits: int = DEFAULT_NUM_BITS, signed: bool = False) -> "QuantParams":
        """Min/max calibration over every element of ``x``."""
        quant_min, quant_max = quant_range(num_bits, signed)
        if get_backend(x).numel(x) == 0:
            return choose_qparams(0.0, 0.0, quant_min, quant_max)
        return choose_qparams(float(x.min()), float(x.max()), quant_min, quant_max)


@dataclass(frozen=True)
class DelayState:
    quant_delay: int = 0
    iter: int = 0

    @property
    def in_warmup(self) -> bool:
        return in_warmup(self.quant_delay, self.iter)

    def step(self) -> "DelayState":
        return DelayState(self.quant_delay, self.iter + 1)


def quant_range(num_bits: int, signed: bool = False) -> Tuple[int, int]:
    """
    Integer range of a ``num_bits`` wide type.

    Args:
        num_bits: Bit width, 1 to 32.
        signed: Two's complement range instead of [0, 2**num_bits - 1].

    Returns:
        (quant_min, quant_max)
    """
    if not 1 <= num_bits <= 32:
        raise InvalidRange(f"`num_bits` must be between 1 and 32, got {num_bits}.")
    if signed:
        return -(2 ** (num_bits - 1)), 2 ** (num_bits - 1) - 1
    return 0, 2 ** num_bits - 1


def choose_qparams(min_val: float, max_val: float, quant_min: int, quant_max: int) -> QuantParams:
    """
    Affine parameters that map [min_val, max_val] onto [quant_min, quant_max].

    The real range is widened to contain 0.0 so that zero is exactly
    representable. With a signed integer range the resulting zero_point can
    be negative, which the ops reject.
    """
    if quant_min > quant_max:
        raise InvalidRange(
            f"`quant_min` should be less than or equal to `quant_max`, got {quant_min} > {quant_max}."
        )
    if min_val > max_val:
        raise InvalidRange(f"`min_val` should be less than or equal to `max_val`, got {min_val} > {max_val}.")

    min_val = min(min_val, 0.0)
    max_val = max(max_val, 0.0)

    if max_val == min_val or quant_max == quant_min:
        scale = 1.0
    else:
        scale = (max_val - min_val) / (quant_max - quant_min)

    zero_point = int(round(quant_min - min_val / scale))
    zero_point = max(quant_min, min(quant_max, zero_point))

    return QuantParams(scale=scale, zero_point=zero_point, quant_min=quant_min, quant_max=quant_max)
