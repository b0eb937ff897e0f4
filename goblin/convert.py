"""Loose conversions between script values: strings, booleans and numbers."""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any, Iterable

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_DEC_INT = re.compile(r"[+-]?[0-9]+")
_HEX_INT = re.compile(r"[+-]?[0-9a-fA-F]+")
_FLOAT = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


def _parse_int(text: str, base: int) -> int:
    pattern = _HEX_INT if base == 16 else _DEC_INT
    if not pattern.fullmatch(text):
        raise ValueError(f"invalid syntax: {text!r}")
    value = int(text, base)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"value out of range: {text!r}")
    return value


def _parse_float(text: str) -> float:
    if not _FLOAT.fullmatch(text):
        raise ValueError(f"invalid syntax: {text!r}")
    value = float(text)
    if math.isinf(value) and "inf" not in text.lower():
        raise ValueError(f"value out of range: {text!r}")
    return value


def _float_to_int64(value: float) -> int:
    if not math.isfinite(value) or not _INT64_MIN <= value < 2.0**63:
        return _INT64_MIN
    return int(value)


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    sign, digit_tuple, exponent = Decimal(repr(value)).as_tuple()
    digits = list(digit_tuple)
    while len(digits) > 1 and digits[-1] == 0:
        digits.pop()
        exponent += 1
    text = "".join(map(str, digits))
    point = len(text) + exponent
    sci_exp = point - 1
    if sci_exp < -4 or sci_exp >= 21:
        mantissa = text[0] + ("." + text[1:] if len(text) > 1 else "")
        body = f"{mantissa}e{'-' if sci_exp < 0 else '+'}{abs(sci_exp):02d}"
    elif point <= 0:
        body = "0." + "0" * -point + text
    elif point >= len(text):
        body = text + "0" * (point - len(text))
    else:
        body = f"{text[:point]}.{text[point:]}"
    return ("-" if sign else "") + body


def _format(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_format(item) for item in value) + "]"
    if isinstance(value, dict):
        try:
            keys = sorted(value)
        except TypeError:
            keys = list(value)
        return "map[" + " ".join(f"{_format(k)}:{_format(value[k])}" for k in keys) + "]"
    return str(value)


def to_string(value: Any) -> str:
    """Render a value as text, with ``"nil"`` for no value."""
    if isinstance(value, str):
        return value
    if value is None:
        return "nil"
    return _format(value)


def str_to_int64(text: str) -> int:
    """Parse decimal, ``0x`` hexadecimal or floating text into an int64."""
    if text.startswith("0x"):
        return _parse_int(text[2:], 16)
    try:
        return _parse_int(text, 10)
    except ValueError:
        pass
    return _float_to_int64(_parse_float(text))


def to_bool(value: Any) -> bool:
    """Interpret a value as a boolean."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        text = value
        if len(text) < 5:
            text = text.lower()
            if text in ("true", "y", "yes"):
                return True
        try:
            return str_to_int64(text) != 0
        except ValueError:
            return False
    return False


def to_int64(value: Any) -> int:
    """Interpret a value as an int64, yielding 0 when it cannot be read."""
    if isinstance(value, bool):
        return 1 if value else 0
    if isinstance(value, float):
        return _float_to_int64(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return str_to_int64(value)
        except ValueError:
            return 0
    return 0


def to_float64(value: Any) -> float:
    """Interpret a value as a float, yielding 0.0 when it cannot be read."""
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        if value.startswith("0x"):
            try:
                return float(_parse_int(value[2:], 16))
            except ValueError:
                return 0.0
        try:
            return float(_parse_int(value, 10))
        except ValueError:
            pass
        try:
            return _parse_float(value)
        except ValueError:
            return 0.0
    return 0.0


def to_slice(values: Iterable[Any], item_type: type) -> list:
    """Return the values as a list, checking that each one is of ``item_type``."""
    result = []
    for item in values:
        if not isinstance(item, item_type) or (
            isinstance(item, bool) and item_type is not bool and item_type is not object
        ):
            raise TypeError(
                f"value {item!r} of type {type(item).__name__} "
                f"is not assignable to {item_type.__name__}"
            )
        result.append(item)
    return result