"""Equality and nil checks for script values."""

from __future__ import annotations

from typing import Any

from goblin.convert import _float_to_int64, str_to_int64


def is_nil(value: Any) -> bool:
    """Return True if the value stands for nil."""
    return value is None


def is_number(value: Any) -> bool:
    """Return True if the value is an integer or a float (booleans excluded)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _convert_like(value: Any, template: Any) -> Any:
    if isinstance(template, float):
        return float(value)
    if isinstance(value, float):
        return _float_to_int64(value)
    return value


def _deep_equal(left: Any, right: Any) -> bool:
    if type(left) is not type(right):
        return False
    if isinstance(left, (list, tuple)):
        return len(left) == len(right) and all(
            _deep_equal(a, b) for a, b in zip(left, right)
        )
    if isinstance(left, dict):
        return left.keys() == right.keys() and all(
            _deep_equal(left[key], right[key]) for key in left
        )
    return left == right


def equal(left: Any, right: Any) -> bool:
    """Compare two values, converting numbers and numeric strings to match."""
    left_nil, right_nil = is_nil(left), is_nil(right)
    if left_nil or right_nil:
        return left_nil and right_nil
    left_num, right_num = is_number(left), is_number(right)
    if left_num and right_num:
        right = _convert_like(right, left)
    elif left_num and isinstance(right, str):
        try:
            right = _convert_like(str_to_int64(right), left)
        except ValueError:
            pass
    elif right_num and isinstance(left, str):
        try:
            left = _convert_like(str_to_int64(left), right)
        except ValueError:
            pass
    return _deep_equal(left, right)