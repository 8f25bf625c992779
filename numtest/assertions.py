"""Assertion helpers for test suites.

Thin wrappers over :mod:`numtest.compare`: run a comparison and raise
:class:`NumericAssertionError` carrying the formatted report when it fails. Works
with any test runner that treats ``AssertionError`` as a test failure.

Example::

    from numtest.assertions import assert_arrays_equal_to_decimal

    def test_solver():
        assert_arrays_equal_to_decimal(solve(a, b), [1.1, 2.2, 3.3], 6)
"""

from __future__ import annotations

from numtest.compare.array import array_compare
from numtest.compare.report import format_failure
from numtest.compare.scalar import scalar_compare
from numtest.compare.types import (
    AbsoluteTolerance,
    DecimalPlaces,
    Exact,
    RelativeTolerance,
    TolerancePolicy,
    Verdict,
)


class NumericAssertionError(AssertionError):
    """Raised when a numeric assertion fails.

    Attributes:
        verdict: The failed verdict the message was built from.
    """

    def __init__(self, verdict: Verdict, msg: str | None = None) -> None:
        text = format_failure(verdict)
        if msg:
            text = f"{msg}\n{text}"
        super().__init__(text)
        self.verdict = verdict


def _check(verdict: Verdict, msg: str | None) -> None:
    if not verdict:
        raise NumericAssertionError(verdict, msg)


def _scalar(a, b, policy: TolerancePolicy, msg: str | None) -> None:
    _check(scalar_compare(a, b, policy), msg)


def _arrays(a, b, policy: TolerancePolicy, msg: str | None) -> None:
    _check(array_compare(a, b, policy), msg)


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

def assert_equal(a, b, msg: str | None = None) -> None:
    """Assert ``a == b`` under IEEE-754 equality."""
    _scalar(a, b, Exact(), msg)


def assert_equal_to_decimal(a, b, decimal: int, msg: str | None = None) -> None:
    """Assert ``a`` and ``b`` are equal once rounded to ``decimal`` places."""
    _scalar(a, b, DecimalPlaces(decimal), msg)


def assert_equal_to_atol(a, b, atol: float, msg: str | None = None) -> None:
    """Assert ``|a - b| <= atol``."""
    _scalar(a, b, AbsoluteTolerance(atol), msg)


def assert_equal_to_rtol(a, b, rtol: float, msg: str | None = None) -> None:
    """Assert ``|a - b| <= rtol * max(|a|, |b|)``."""
    _scalar(a, b, RelativeTolerance(rtol), msg)


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------

def assert_arrays_equal(a, b, msg: str | None = None) -> None:
    """Assert element-wise IEEE-754 equality of two containers of the same shape."""
    _arrays(a, b, Exact(), msg)


def assert_arrays_equal_to_decimal(a, b, decimal: int, msg: str | None = None) -> None:
    """Assert element-wise equality to ``decimal`` places."""
    _arrays(a, b, DecimalPlaces(decimal), msg)


def assert_arrays_equal_to_atol(a, b, atol: float, msg: str | None = None) -> None:
    """Assert element-wise absolute tolerance."""
    _arrays(a, b, AbsoluteTolerance(atol), msg)


def assert_arrays_equal_to_rtol(a, b, rtol: float, msg: str | None = None) -> None:
    """Assert element-wise relative tolerance."""
    _arrays(a, b, RelativeTolerance(rtol), msg)
