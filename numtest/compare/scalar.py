"""
Scalar comparison

Applies one tolerance policy to a pair of numbers.

Non-finite values:
    policy  | NaN on either side | same infinity | mixed / one infinite
    --------|--------------------|---------------|---------------------
    exact   | FAIL               | PASS          | FAIL
    decimal | FAIL               | PASS          | FAIL
    atol    | FAIL               | PASS          | FAIL
    rtol    | FAIL               | PASS          | FAIL

``+0.0`` and ``-0.0`` are equal under every policy.
"""

import math
import numbers
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Callable, Dict, Optional

import numpy as np

from numtest.core.constants import ROUNDING_PRECISION
from numtest.core.errors import PolicyError, UnsupportedValueError
from numtest.core.precision import FLOAT64

from .types import (
    PASS,
    AbsoluteTolerance,
    DecimalPlaces,
    PolicyKind,
    RelativeTolerance,
    ScalarMismatch,
    TolerancePolicy,
    Verdict,
)

# Deepest decimal place at which two float64 reprs can still differ.
_MAX_SEARCH_DECIMAL = abs(FLOAT64.min_10_exp) + FLOAT64.max_decimal + 2


def as_float(value) -> float:
    """
    Read a numeric value as a Python float

    Accepts ints, floats, numpy integer/floating scalars and 0-d numpy arrays.
    Booleans, complex numbers, strings and ints that a float cannot hold exactly
    are rejected.

    Raises:
        UnsupportedValueError
    """
    if isinstance(value, np.ndarray) and value.ndim == 0:
        value = value.item()
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise UnsupportedValueError(
            f"Expected a real number, got {type(value).__name__}: {value!r}"
        )
    try:
        result = float(value)
    except OverflowError as exc:
        raise UnsupportedValueError(f"Value {value!r} does not fit in a float") from exc
    if isinstance(value, numbers.Integral) and int(result) != value:
        raise UnsupportedValueError(f"Integer {value!r} is not exactly representable as a float")
    return result


# ---------------------------------------------------------------------------
# Rounding
# ---------------------------------------------------------------------------

def _round_decimal(value: float, places: int) -> Decimal:
    d = Decimal(repr(value))
    if d.as_tuple().exponent >= -places:
        return d
    with localcontext() as ctx:
        ctx.prec = ROUNDING_PRECISION
        ctx.rounding = ROUND_HALF_UP  # half away from zero
        return d.quantize(Decimal(1).scaleb(-places))


def round_half_away(value: float, places: int) -> float:
    """
    Round a finite float to ``places`` decimal places, halves away from zero

    The float's shortest round-trip repr is rounded, not its binary expansion, so
    ``round_half_away(2.675, 2) == 2.68`` although the stored binary value is a
    little below 2.675.

    Args:
        value: finite float
        places: non-negative number of decimal places

    Returns:
        rounded value
    """
    return float(_round_decimal(value, places))


def achieved_decimal(a: float, b: float, upper: int) -> Optional[int]:
    """
    Largest number of decimal places below ``upper`` at which a and b agree

    Args:
        a, b: values that failed DecimalPlaces(upper)
        upper: the decimal places that were requested

    Returns:
        decimal places, or None when the values differ even at 0 places or are
        not finite
    """
    if not (math.isfinite(a) and math.isfinite(b)):
        return None
    for places in range(min(upper, _MAX_SEARCH_DECIMAL) - 1, -1, -1):
        if _round_decimal(a, places) == _round_decimal(b, places):
            return places
    return None


# ---------------------------------------------------------------------------
# Differences
# ---------------------------------------------------------------------------

def abs_diff(a: float, b: float) -> float:
    """|a - b|, 0.0 for equal values (including equal infinities)"""
    if a == b:
        return 0.0
    return abs(a - b)


def rel_diff(a: float, b: float) -> float:
    """|a - b| / max(|a|, |b|), 0.0 for equal values"""
    if a == b:
        return 0.0
    if math.isnan(a) or math.isnan(b):
        return math.nan
    if math.isinf(a) or math.isinf(b):
        return math.inf
    return abs(a - b) / max(abs(a), abs(b))


# ---------------------------------------------------------------------------
# Policy checks
# ---------------------------------------------------------------------------

def _non_finite(a: float, b: float) -> Optional[bool]:
    # Outcome for NaN/inf operands, None when both are finite.
    if math.isnan(a) or math.isnan(b):
        return False
    if math.isinf(a) or math.isinf(b):
        return a == b
    return None


def _check_exact(a: float, b: float, _policy: TolerancePolicy) -> bool:
    return a == b


def _check_decimal(a: float, b: float, policy: DecimalPlaces) -> bool:
    special = _non_finite(a, b)
    if special is not None:
        return special
    return _round_decimal(a, policy.places) == _round_decimal(b, policy.places)


def _check_atol(a: float, b: float, policy: AbsoluteTolerance) -> bool:
    special = _non_finite(a, b)
    if special is not None:
        return special
    return abs(a - b) <= policy.tol


def _check_rtol(a: float, b: float, policy: RelativeTolerance) -> bool:
    if a == 0.0 and b == 0.0:
        return True
    special = _non_finite(a, b)
    if special is not None:
        return special
    return abs(a - b) <= policy.tol * max(abs(a), abs(b))


_CHECKS: Dict[PolicyKind, Callable[[float, float, TolerancePolicy], bool]] = {
    PolicyKind.EXACT: _check_exact,
    PolicyKind.DECIMAL: _check_decimal,
    PolicyKind.ATOL: _check_atol,
    PolicyKind.RTOL: _check_rtol,
}


def is_equal(a: float, b: float, policy: TolerancePolicy) -> bool:
    """Policy check on two floats, without building a verdict."""
    if not isinstance(policy, TolerancePolicy):
        raise PolicyError(f"Expected a TolerancePolicy, got {type(policy).__name__}")
    return _CHECKS[policy.kind](a, b, policy)


def scalar_compare(a, b, policy: TolerancePolicy) -> Verdict:
    """
    Compare two numbers

    Args:
        a: first value
        b: second value
        policy: tolerance policy

    Returns:
        PASS or ScalarMismatch

    Raises:
        UnsupportedValueError: a or b is not a real number
        PolicyError: policy is not a TolerancePolicy
    """
    x = as_float(a)
    y = as_float(b)
    if is_equal(x, y, policy):
        return PASS

    reached = None
    if policy.kind is PolicyKind.DECIMAL:
        reached = achieved_decimal(x, y, policy.places)
    return ScalarMismatch(
        value_a=x,
        value_b=y,
        policy=policy,
        abs_diff=abs_diff(x, y),
        rel_diff=rel_diff(x, y),
        achieved_decimal=reached,
    )
