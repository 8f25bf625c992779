"""
Failure reports

Renders failed verdicts as assertion messages or JSON-safe dicts. Floats are
printed with repr(), the shortest string that reads back to the same value.
"""

import math

from .types import Failure, PolicyKind, ScalarMismatch, ShapeMismatch, ValueMismatch


def _num(value: float) -> str:
    return repr(float(value))


def format_position(index) -> str:
    """``index 2`` or ``(row 1, col 2)``"""
    if isinstance(index, tuple):
        row, col = index
        return f"(row {row}, col {col})"
    return f"index {index}"


def _detail_lines(verdict) -> list:
    lines = [
        f" --> a: {_num(verdict.value_a)}",
        f" --> b: {_num(verdict.value_b)}",
        f" --> absolute difference: {_num(verdict.abs_diff)}",
        f" --> relative difference: {_num(verdict.rel_diff)}",
    ]
    if verdict.policy.kind is PolicyKind.DECIMAL:
        if verdict.achieved_decimal is None:
            lines.append(" --> values do not agree at any decimal place")
        else:
            unit = "place" if verdict.achieved_decimal == 1 else "places"
            lines.append(f" --> values agree to {verdict.achieved_decimal} decimal {unit}")
    return lines


def format_failure(verdict: Failure) -> str:
    """
    Build the message for a failed verdict

    Args:
        verdict: ScalarMismatch, ValueMismatch or ShapeMismatch

    Returns:
        multi-line message

    Raises:
        ValueError: verdict is not a failure
    """
    if isinstance(verdict, ShapeMismatch):
        return (
            f"Shape mismatch: {verdict.shape_a} vs {verdict.shape_b} "
            f"(comparing with {verdict.policy.describe()}); no elements were compared."
        )

    if isinstance(verdict, ValueMismatch):
        lines = [
            f"Value mismatch at {format_position(verdict.index)} of {verdict.shape}: "
            f"elements are not equal under {verdict.policy.describe()}."
        ]
        lines.extend(_detail_lines(verdict))
        return "\n".join(lines)

    if isinstance(verdict, ScalarMismatch):
        lines = [f"Value mismatch: values are not equal under {verdict.policy.describe()}."]
        lines.extend(_detail_lines(verdict))
        return "\n".join(lines)

    raise ValueError(f"Not a failed verdict: {verdict!r}")


def _json_float(value: float):
    # JSON has no NaN/Infinity literals
    return value if math.isfinite(value) else repr(value)


def _shape_dict(shape) -> dict:
    if shape.family == "grid":
        return {"family": "grid", "rows": shape.rows, "cols": shape.cols}
    return {"family": "flat", "length": shape.length}


def failure_to_dict(verdict: Failure) -> dict:
    """
    JSON-safe dict for a failed verdict

    Non-finite floats become the strings "nan", "inf" and "-inf".
    """
    if not isinstance(verdict, (ScalarMismatch, ValueMismatch, ShapeMismatch)):
        raise ValueError(f"Not a failed verdict: {verdict!r}")

    d = {
        "kind": verdict.kind,
        "policy": {"kind": verdict.policy.kind.value, "param": verdict.policy.param},
        "message": format_failure(verdict),
    }

    if isinstance(verdict, ShapeMismatch):
        d["shape_a"] = _shape_dict(verdict.shape_a)
        d["shape_b"] = _shape_dict(verdict.shape_b)
        return d

    if isinstance(verdict, ValueMismatch):
        d["index"] = list(verdict.index) if isinstance(verdict.index, tuple) else verdict.index
        d["shape"] = _shape_dict(verdict.shape)

    d["value_a"] = _json_float(verdict.value_a)
    d["value_b"] = _json_float(verdict.value_b)
    d["abs_diff"] = _json_float(verdict.abs_diff)
    d["rel_diff"] = _json_float(verdict.rel_diff)
    d["achieved_decimal"] = verdict.achieved_decimal
    return d
