from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Any

from . import canon
from .exceptions import require


def check_int(value: Any, lo: int, hi: int, what: str = "integer") -> int:
    """Return value as int if it is an integral number within [lo, hi]."""
    if isinstance(value, bool):
        raise ValueError(f"{what} must be a number, not a boolean")
    if isinstance(value, float):
        require(value.is_integer(), f"{what} must be integral, got {value!r}")
        value = int(value)
    require(isinstance(value, int), f"{what} must be an integer, got {type(value).__name__}")
    require(lo <= value <= hi, f"{what} {value} is outside [{lo}, {hi}]")
    return value


def check_int32(value: Any, what: str = "int32") -> int:
    return check_int(value, canon.INT32_MIN, canon.INT32_MAX, what)


def check_uint32(value: Any, what: str = "uint32") -> int:
    return check_int(value, 0, canon.UINT32_MAX, what)


def check_percentage(value: Any, what: str = "percentage") -> int:
    return check_int(value, 0, canon.PERCENTAGE_MAX, what)


def check_number(value: Any, what: str = "number") -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{what} must be a number, got {type(value).__name__}")
    require(math.isfinite(value), f"{what} must be finite, got {value!r}")
    return value


def check_bool(value: Any, what: str = "flag") -> bool:
    require(isinstance(value, bool), f"{what} must be a boolean, got {type(value).__name__}")
    return value


def check_text(value: Any, what: str = "text") -> str:
    require(isinstance(value, str), f"{what} must be a string, got {type(value).__name__}")
    return value


def check_name(value: Any, what: str = "name") -> str:
    value = check_text(value, what)
    require(bool(value.strip()), f"{what} must not be empty")
    return value


def check_whole_seconds(value: timedelta, what: str = "duration") -> timedelta:
    """A non-negative whole number of seconds that fits a uint32."""
    require(value >= timedelta(0), f"{what} must not be negative, got {value}")
    require(value.microseconds == 0, f"{what} must be whole seconds, got {value}")
    require(
        value.total_seconds() <= canon.UINT32_MAX,
        f"{what} {value} is longer than {canon.UINT32_MAX} seconds",
    )
    return value


def check_tz_aware(value: datetime, what: str = "timestamp") -> datetime:
    require(
        value.tzinfo is not None and value.utcoffset() is not None,
        f"{what} must carry a UTC offset",
    )
    return value


def check_scalar(value: Any) -> Any:
    """ValuesMap scalars: JSON booleans, numbers and strings."""
    if isinstance(value, (bool, str)):
        return value
    if isinstance(value, (int, float)):
        return check_number(value, "value")
    raise ValueError(f"unsupported value type {type(value).__name__}")
