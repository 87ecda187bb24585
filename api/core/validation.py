"""
Input normalization shared by the query helpers.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any


def to_non_negative_int_or_default(value: Any, default: int) -> int:
    """
    Coerce `value` to a non-negative int, or return `default`.

    Zero is a valid value. Numeric strings are accepted because query
    parameters arrive as text.
    """
    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, str):
        raw = value.strip()
        try:
            value = int(raw)
        except ValueError:
            try:
                value = float(raw)
            except ValueError:
                return default

    if isinstance(value, float):
        if not value.is_integer():
            return default
        value = int(value)

    if not isinstance(value, int) or value < 0:
        return default
    return value


def is_field_name(value: Any) -> bool:
    return isinstance(value, str)


def is_bindable_value(value: Any) -> bool:
    """
    String, number or timestamp. Booleans are not numbers here.
    """
    if isinstance(value, bool):
        return False
    return isinstance(value, (str, int, float, Decimal, datetime))
