"""Reusable coercion primitives shared by the normalizer and view-model builders."""

import math
from datetime import date
from decimal import Decimal
from typing import Any

SEVERITY_LEVELS = ("CRITICAL", "HIGH", "MEDIUM", "LOW")
SEVERITY_FILTERS = ("ALL",) + SEVERITY_LEVELS

# Sentinel used by upstream analyzers when no CVE applies.
CVE_NOT_APPLICABLE = "N/A"


def safe_list(value: Any) -> list[Any]:
    if isinstance(value, (str, bytes)):
        return []
    if isinstance(value, dict):
        return []
    try:
        return list(value or [])
    except (TypeError, ValueError):
        return []


def is_number(value: Any) -> bool:
    """True for real ints and floats; bools are not numbers here."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_finite_number(value: Any) -> bool:
    if not is_number(value):
        return False
    if isinstance(value, int):
        return True
    return math.isfinite(value)


def to_int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return int(default)
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return int(default)


def to_float(value: Any, default: float = 0.0) -> float:
    if not is_finite_number(value):
        return float(default)
    try:
        return float(value)
    except OverflowError:
        return float(default)


def to_count(value: Any) -> int:
    """Coerce an aggregate counter to a non-negative int."""
    return max(to_int(value, 0), 0)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def to_text(value: Any) -> str | None:
    """
    Scalar to str; None and containers become None.

    YAML loads unquoted timestamps as date/datetime objects; those come back
    in ISO 8601 form.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (int, float)):
        return str(value)
    return None


def format_number(value: Any) -> str:
    """Render 85.0 as ``85``, 85.5 as ``85.5`` and 0.00001 as ``0.00001``; never rounds."""
    number = to_float(value, 0.0)
    if number.is_integer():
        return str(int(number))
    # repr is the shortest exact form; Decimal drops its exponent notation.
    return format(Decimal(repr(number)), "f")
