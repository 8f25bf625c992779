"""numtest

Numeric comparisons for test assertions.

Comparison engine:
    from numtest.compare import array_compare, DecimalPlaces, format_failure

    verdict = array_compare(result, expected, DecimalPlaces(6))
    if not verdict:
        print(format_failure(verdict))

Assertions:
    from numtest import assert_arrays_equal_to_atol

    assert_arrays_equal_to_atol(result, expected, 1e-9)

Configuration:
    from numtest.core import load_config, set_config

    set_config(config=load_config("numtest.yaml"))
"""
__version__ = "0.1.0"

# Module imports
from numtest import compare, core

# Convenience exports
from numtest.assertions import (
    NumericAssertionError,
    assert_arrays_equal,
    assert_arrays_equal_to_atol,
    assert_arrays_equal_to_decimal,
    assert_arrays_equal_to_rtol,
    assert_equal,
    assert_equal_to_atol,
    assert_equal_to_decimal,
    assert_equal_to_rtol,
)
from numtest.compare import (
    AbsoluteTolerance,
    DecimalPlaces,
    Exact,
    RelativeTolerance,
    array_compare,
    format_failure,
    scalar_compare,
)
from numtest.core.errors import (
    NumtestError,
    PolicyError,
    ShapeFamilyError,
    UnsupportedContainerError,
    UnsupportedValueError,
)

__all__ = [
    "compare",
    "core",
    # policies
    "Exact",
    "DecimalPlaces",
    "AbsoluteTolerance",
    "RelativeTolerance",
    # engine
    "scalar_compare",
    "array_compare",
    "format_failure",
    # assertions
    "NumericAssertionError",
    "assert_equal",
    "assert_equal_to_decimal",
    "assert_equal_to_atol",
    "assert_equal_to_rtol",
    "assert_arrays_equal",
    "assert_arrays_equal_to_decimal",
    "assert_arrays_equal_to_atol",
    "assert_arrays_equal_to_rtol",
    # errors
    "NumtestError",
    "PolicyError",
    "ShapeFamilyError",
    "UnsupportedContainerError",
    "UnsupportedValueError",
]
