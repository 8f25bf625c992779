"""Floating-point precision metadata

Decimal precision and exponent range of the IEEE-754 single and double formats,
taken from ``numpy.finfo``.
"""

import math
from dataclasses import dataclass
from typing import Dict

import numpy as np


@dataclass(frozen=True)
class FloatPrecision:
    """Precision facts about one floating-point type"""

    name: str
    max_decimal: int  # guaranteed correct decimal digits
    max_10_exp: int  # largest power of 10 that is finite
    min_10_exp: int  # smallest power of 10 that is a normal number
    epsilon: float  # machine epsilon


def _from_finfo(dtype) -> FloatPrecision:
    info = np.finfo(dtype)
    return FloatPrecision(
        name=np.dtype(dtype).name,
        max_decimal=int(info.precision),
        max_10_exp=int(math.floor(math.log10(float(info.max)))),
        min_10_exp=int(math.ceil(math.log10(float(info.tiny)))),
        epsilon=float(info.eps),
    )


FLOAT32 = _from_finfo(np.float32)
FLOAT64 = _from_finfo(np.float64)

_BY_NAME: Dict[str, FloatPrecision] = {
    FLOAT32.name: FLOAT32,
    FLOAT64.name: FLOAT64,
}


def precision_of(dtype) -> FloatPrecision:
    """
    Look up precision metadata

    Args:
        dtype: numpy dtype, type or name ("float32", np.float64, float, ...)

    Returns:
        FloatPrecision

    Raises:
        ValueError: dtype is not float32 or float64
    """
    name = np.dtype(dtype).name
    if name not in _BY_NAME:
        raise ValueError(f"No precision metadata for dtype '{name}'")
    return _BY_NAME[name]
