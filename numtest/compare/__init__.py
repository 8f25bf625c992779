"""
Comparison module

Decides whether two numbers, or two numeric containers, are equal under one
tolerance policy and describes the first difference when they are not.

Policies:
    Exact()               IEEE-754 equality (NaN != NaN, +0.0 == -0.0)
    DecimalPlaces(n)      equal after rounding to n places, halves away from zero
    AbsoluteTolerance(t)  |a - b| <= t
    RelativeTolerance(t)  |a - b| <= t * max(|a|, |b|)

Basic usage:
    from numtest.compare import AbsoluteTolerance, array_compare, format_failure

    verdict = array_compare([1.0, 2.0, 3.0], np.array([1.0, 2.0, 3.1]), AbsoluteTolerance(0.01))
    if not verdict:
        print(format_failure(verdict))  # names index 2, both values, the tolerance

    # dispatch on the inputs, default policy from config
    from numtest.compare import compare
    verdict = compare(2.0, 2.0000001)
"""

from .types import (
    PASS,
    AbsoluteTolerance,
    DecimalPlaces,
    Exact,
    Failure,
    Flat,
    Grid,
    Pass,
    PolicyKind,
    RelativeTolerance,
    ScalarMismatch,
    ShapeMismatch,
    TolerancePolicy,
    ValueMismatch,
    make_policy,
)
from .scalar import (
    abs_diff,
    achieved_decimal,
    as_float,
    is_equal,
    rel_diff,
    round_half_away,
    scalar_compare,
)
from .adapters import (
    ArrayLikeAdapter,
    ColumnMajorAdapter,
    ContainerAdapter,
    NdarrayAdapter,
    NestedSequenceAdapter,
    SequenceAdapter,
    adapt,
    is_container,
    register_adapter,
    unregister_adapter,
)
from .array import array_compare
from .report import failure_to_dict, format_failure, format_position
from .engine import CompareEngine, compare

__all__ = [
    # policies
    "TolerancePolicy",
    "PolicyKind",
    "Exact",
    "DecimalPlaces",
    "AbsoluteTolerance",
    "RelativeTolerance",
    "make_policy",
    # shapes
    "Flat",
    "Grid",
    # verdicts
    "Pass",
    "PASS",
    "Failure",
    "ScalarMismatch",
    "ValueMismatch",
    "ShapeMismatch",
    # scalar comparison
    "scalar_compare",
    "is_equal",
    "as_float",
    "round_half_away",
    "achieved_decimal",
    "abs_diff",
    "rel_diff",
    # adapters
    "ContainerAdapter",
    "SequenceAdapter",
    "NestedSequenceAdapter",
    "NdarrayAdapter",
    "ArrayLikeAdapter",
    "ColumnMajorAdapter",
    "adapt",
    "is_container",
    "register_adapter",
    "unregister_adapter",
    # array comparison
    "array_compare",
    # reports
    "format_failure",
    "format_position",
    "failure_to_dict",
    # engine
    "CompareEngine",
    "compare",
]
