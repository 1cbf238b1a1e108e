"""Utilities."""

import math
from typing import Any

__all__ = ["merge", "round_div", "round_half_away"]


def merge(merged: dict[str, Any], obj2: dict[str, Any]) -> dict[str, Any]:
    """Merge the content of d2 into d1.

    Args:
        merged (dict): Dictionary to merge into
        obj2 (dict): Dictionary to merge from

    Returns:
        `merged` dictionary with the merged content

    Eg:
        merge({"a": {"b": 1}}, {"a": {"c": 2}}) == {"a": {"b": 1, "c": 2}}

    """
    for key, value in obj2.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties going away from zero.

    Unlike the builtin `round`, 2.5 gives 3 and -2.5 gives -3.
    """
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def round_div(numerator: int, denominator: int) -> int:
    """Divide and round half away from zero."""
    return round_half_away(numerator / denominator)
