"""
Primitive wire values: ISO 8601 timestamps and durations, float32 numbers
and URLs.

Timestamps are normalised to UTC with millisecond precision so that a value
re-encodes to exactly the text it was decoded from.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta
from typing import Any

import numpy as np
import pandas as pd
from pydantic import AnyUrl, TypeAdapter

from . import validate

_URL = TypeAdapter(AnyUrl)

_DURATION_RE = re.compile(
    r"^(?P<sign>[-+])?P"
    r"(?:(?P<weeks>\d+(?:\.\d+)?)W)?"
    r"(?:(?P<days>\d+(?:\.\d+)?)D)?"
    r"(?:T"
    r"(?:(?P<hours>\d+(?:\.\d+)?)H)?"
    r"(?:(?P<minutes>\d+(?:\.\d+)?)M)?"
    r"(?:(?P<seconds>\d+(?:\.\d+)?)S)?"
    r")?$"
)


# Timestamps


def normalize_timestamp(value: datetime) -> datetime:
    """UTC, millisecond precision; rejects naive datetimes."""
    validate.check_tz_aware(value)
    ts = pd.Timestamp(value).tz_convert("UTC").floor("ms")
    return ts.to_pydatetime()


def parse_timestamp(value: Any) -> datetime:
    validate.check_text(value, "timestamp")
    try:
        ts = pd.Timestamp(value)
    except (ValueError, TypeError) as e:
        raise ValueError(f"not an ISO 8601 timestamp: {value!r}") from e
    if pd.isna(ts):
        raise ValueError(f"not an ISO 8601 timestamp: {value!r}")
    if ts.tz is None:
        raise ValueError(f"timestamp must carry a UTC offset: {value!r}")
    return normalize_timestamp(ts.floor("us").to_pydatetime())


def format_timestamp(value: datetime) -> str:
    ts = pd.Timestamp(normalize_timestamp(value))
    return ts.strftime("%Y-%m-%dT%H:%M:%S") + f".{ts.microsecond // 1000:03d}Z"


# Durations


def parse_duration(value: Any) -> timedelta:
    """
    Parse an ISO 8601 duration such as PT1H, P1DT30M or PT0S.

    Years and months are rejected: their length depends on the calendar.
    """
    validate.check_text(value, "duration")
    text = value.strip()
    m = _DURATION_RE.match(text)
    parts = {} if m is None else {
        k: float(v)
        for k, v in m.groupdict().items()
        if k != "sign" and v is not None
    }
    if not parts or text.endswith("T"):
        raise ValueError(f"not an ISO 8601 duration: {value!r}")
    td = pd.Timedelta(**parts)
    if m.group("sign") == "-":
        td = -td
    return td.to_pytimedelta()


def format_duration(value: timedelta) -> str:
    td = pd.Timedelta(value)
    if td < pd.Timedelta(0):
        return "-" + format_duration(-value)
    c = td.components
    out = "P"
    if c.days:
        out += f"{c.days}D"
    time = ""
    if c.hours:
        time += f"{c.hours}H"
    if c.minutes:
        time += f"{c.minutes}M"
    fraction = c.milliseconds * 1000 + c.microseconds
    if c.seconds or fraction:
        secs = f"{c.seconds}.{fraction:06d}".rstrip("0").rstrip(".")
        time += f"{secs}S"
    if time:
        out += "T" + time
    return out if out != "P" else "PT0S"


# Numbers


def to_float32(value: Any, what: str = "number") -> float:
    """Narrow a JSON number to float32 precision, returned as a Python float."""
    validate.check_number(value, what)
    with np.errstate(over="ignore"):
        narrowed = np.float32(value)
    if not np.isfinite(narrowed):
        raise ValueError(f"{what} {value!r} does not fit a float32")
    return float(narrowed)


def format_float32(value: float) -> float:
    """Shortest decimal that reads back as the same float32 (0.1, not 0.10000000149)."""
    return float(np.format_float_positional(np.float32(value), unique=True, trim="-"))


# URLs


def parse_url(value: Any) -> str:
    validate.check_text(value, "URL")
    _URL.validate_python(value)
    return value
