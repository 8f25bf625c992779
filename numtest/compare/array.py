"""
Array comparison

Walks two containers in lockstep and stops at the first element that fails the
policy. Index-ascending for flat containers, row-major for grids.
"""

from numtest.core.errors import PolicyError, ShapeFamilyError

from .adapters import adapt
from .scalar import abs_diff, achieved_decimal, as_float, is_equal, rel_diff
from .types import (
    PASS,
    PolicyKind,
    ShapeMismatch,
    TolerancePolicy,
    ValueMismatch,
    Verdict,
)


def array_compare(a, b, policy: TolerancePolicy) -> Verdict:
    """
    Element-wise comparison of two containers

    Args:
        a: ContainerAdapter or any container ``adapt`` accepts
        b: ContainerAdapter or any container ``adapt`` accepts
        policy: tolerance policy applied to every element

    Returns:
        PASS, ShapeMismatch (same family, different dimensions) or ValueMismatch
        (first failing element)

    Raises:
        ShapeFamilyError: one container is flat and the other a grid
        UnsupportedContainerError: a or b has no adapter
        UnsupportedValueError: an element is not a real number
        PolicyError: policy is not a TolerancePolicy
    """
    if not isinstance(policy, TolerancePolicy):
        raise PolicyError(f"Expected a TolerancePolicy, got {type(policy).__name__}")

    view_a = adapt(a)
    view_b = adapt(b)
    shape_a = view_a.shape()
    shape_b = view_b.shape()

    if shape_a.family != shape_b.family:
        raise ShapeFamilyError(
            f"Cannot compare a {shape_a.family} container ({shape_a}) "
            f"with a {shape_b.family} container ({shape_b})"
        )
    if shape_a != shape_b:
        return ShapeMismatch(shape_a=shape_a, shape_b=shape_b, policy=policy)

    for position in shape_a.positions():
        x = as_float(view_a.element_at(position))
        y = as_float(view_b.element_at(position))
        if is_equal(x, y, policy):
            continue

        reached = None
        if policy.kind is PolicyKind.DECIMAL:
            reached = achieved_decimal(x, y, policy.places)
        return ValueMismatch(
            index=position,
            value_a=x,
            value_b=y,
            policy=policy,
            shape=shape_a,
            abs_diff=abs_diff(x, y),
            rel_diff=rel_diff(x, y),
            achieved_decimal=reached,
        )

    return PASS
