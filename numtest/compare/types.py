"""
Comparison type definitions

Tolerance policies, shape descriptors and verdicts. Everything here is immutable
and built fresh for each comparison.

Verdicts:
    Verdict        | passed | carries
    ---------------|--------|------------------------------------------
    Pass           | True   | nothing
    ScalarMismatch | False  | both values, policy, differences
    ValueMismatch  | False  | first failing position, values, policy
    ShapeMismatch  | False  | both shapes, policy (no element values)
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Iterator, Optional, Tuple, Union

from numtest.core.constants import POLICY_ATOL, POLICY_DECIMAL, POLICY_EXACT, POLICY_RTOL
from numtest.core.errors import PolicyError


class PolicyKind(str, Enum):
    """Tolerance policy kinds"""

    EXACT = POLICY_EXACT  # IEEE-754 equality
    DECIMAL = POLICY_DECIMAL  # equal after rounding to n decimal places
    ATOL = POLICY_ATOL  # |a - b| <= tol
    RTOL = POLICY_RTOL  # |a - b| <= tol * max(|a|, |b|)


# ---------------------------------------------------------------------------
# Tolerance policies
# ---------------------------------------------------------------------------

class TolerancePolicy:
    """Base class of the four tolerance policies."""

    kind: ClassVar[PolicyKind]

    @property
    def param(self):
        """The policy parameter, or None for exact equality."""
        return None

    def describe(self) -> str:
        raise NotImplementedError


def _check_tolerance(tol) -> float:
    if isinstance(tol, bool) or not isinstance(tol, numbers.Real):
        raise PolicyError(f"Tolerance must be a real number, got {tol!r}")
    tol = float(tol)
    if math.isnan(tol):
        raise PolicyError("Tolerance must not be NaN")
    if tol < 0:
        raise PolicyError(f"Tolerance must be non-negative, got {tol!r}")
    return tol


@dataclass(frozen=True)
class Exact(TolerancePolicy):
    """Values must be equal under IEEE-754 equality."""

    kind: ClassVar[PolicyKind] = PolicyKind.EXACT

    def describe(self) -> str:
        return "exact equality"


@dataclass(frozen=True)
class DecimalPlaces(TolerancePolicy):
    """Values must be equal after rounding both to ``places`` decimal places.

    Rounding is half away from zero, applied to the shortest decimal string that
    round-trips each float, so ``2.675`` rounds to ``2.68`` and ``-0.5`` to ``-1``.
    """

    places: int
    kind: ClassVar[PolicyKind] = PolicyKind.DECIMAL

    def __post_init__(self):
        if isinstance(self.places, bool) or not isinstance(self.places, numbers.Integral):
            raise PolicyError(f"Decimal places must be an integer, got {self.places!r}")
        if self.places < 0:
            raise PolicyError(f"Decimal places must be non-negative, got {self.places}")
        object.__setattr__(self, "places", int(self.places))

    @property
    def param(self) -> int:
        return self.places

    def describe(self) -> str:
        unit = "place" if self.places == 1 else "places"
        return f"equality to {self.places} decimal {unit}"


@dataclass(frozen=True)
class AbsoluteTolerance(TolerancePolicy):
    """``|a - b| <= tol``"""

    tol: float
    kind: ClassVar[PolicyKind] = PolicyKind.ATOL

    def __post_init__(self):
        object.__setattr__(self, "tol", _check_tolerance(self.tol))

    @property
    def param(self) -> float:
        return self.tol

    def describe(self) -> str:
        return f"absolute tolerance {self.tol!r}"


@dataclass(frozen=True)
class RelativeTolerance(TolerancePolicy):
    """``|a - b| <= tol * max(|a|, |b|)``; two zeros always pass."""

    tol: float
    kind: ClassVar[PolicyKind] = PolicyKind.RTOL

    def __post_init__(self):
        object.__setattr__(self, "tol", _check_tolerance(self.tol))

    @property
    def param(self) -> float:
        return self.tol

    def describe(self) -> str:
        return f"relative tolerance {self.tol!r}"


def make_policy(kind: Union[PolicyKind, str], param=None) -> TolerancePolicy:
    """
    Build a policy from its kind

    Args:
        kind: PolicyKind or its name ("exact", "decimal", "atol", "rtol")
        param: decimal places or tolerance (ignored for exact)

    Returns:
        TolerancePolicy

    Raises:
        PolicyError: unknown kind, missing or invalid parameter
    """
    try:
        kind = PolicyKind(kind)
    except ValueError as exc:
        names = [k.value for k in PolicyKind]
        raise PolicyError(f"Unknown policy kind {kind!r}, expected one of {names}") from exc

    if kind is PolicyKind.EXACT:
        return Exact()
    if param is None:
        raise PolicyError(f"Policy '{kind.value}' needs a parameter")
    if kind is PolicyKind.DECIMAL:
        return DecimalPlaces(param)
    if kind is PolicyKind.ATOL:
        return AbsoluteTolerance(param)
    return RelativeTolerance(param)


# ---------------------------------------------------------------------------
# Shape descriptors
# ---------------------------------------------------------------------------

Position = Union[int, Tuple[int, int]]


@dataclass(frozen=True)
class Flat:
    """One-dimensional container of ``length`` elements."""

    length: int
    family: ClassVar[str] = "flat"

    @property
    def size(self) -> int:
        return self.length

    def positions(self) -> Iterator[int]:
        """Indices in ascending order"""
        return iter(range(self.length))

    def __str__(self) -> str:
        return f"flat[{self.length}]"


@dataclass(frozen=True)
class Grid:
    """Two-dimensional container of ``rows`` x ``cols`` elements."""

    rows: int
    cols: int
    family: ClassVar[str] = "grid"

    @property
    def size(self) -> int:
        return self.rows * self.cols

    def positions(self) -> Iterator[Tuple[int, int]]:
        """(row, col) pairs in row-major order"""
        for row in range(self.rows):
            for col in range(self.cols):
                yield row, col

    def __str__(self) -> str:
        return f"grid[{self.rows}x{self.cols}]"


Shape = Union[Flat, Grid]


# ---------------------------------------------------------------------------
# Verdicts
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Pass:
    """The comparison succeeded."""

    passed: ClassVar[bool] = True

    def __bool__(self) -> bool:
        return True


PASS = Pass()


class Failure:
    """Base class of failed verdicts."""

    passed: ClassVar[bool] = False
    kind: ClassVar[str] = ""

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True)
class ScalarMismatch(Failure):
    """Two numbers are not equal under the policy."""

    value_a: float
    value_b: float
    policy: TolerancePolicy
    abs_diff: float
    rel_diff: float
    achieved_decimal: Optional[int] = None  # DecimalPlaces only
    kind: ClassVar[str] = "scalar"


@dataclass(frozen=True)
class ValueMismatch(Failure):
    """First element of two containers that is not equal under the policy."""

    index: Position
    value_a: float
    value_b: float
    policy: TolerancePolicy
    shape: Shape
    abs_diff: float
    rel_diff: float
    achieved_decimal: Optional[int] = None  # DecimalPlaces only
    kind: ClassVar[str] = "value"


@dataclass(frozen=True)
class ShapeMismatch(Failure):
    """Two containers of the same family have different dimensions."""

    shape_a: Shape
    shape_b: Shape
    policy: TolerancePolicy
    kind: ClassVar[str] = "shape"


Verdict = Union[Pass, ScalarMismatch, ValueMismatch, ShapeMismatch]
