from __future__ import annotations

from functools import total_ordering
from typing import Any, ClassVar

from pydantic_core import core_schema

from . import canon
from .exceptions import EmptyIdentifierError


@total_ordering
class Identifier:
    """
    Kind-tagged, non-empty string identifier.

    Equality and ordering ignore case; identifiers of different kinds never
    compare equal even when their text matches.
    """

    __slots__ = ("_text", "_key")

    what: ClassVar[str] = "identifier"

    def __init__(self, text: str):
        if not isinstance(text, str):
            raise TypeError(f"{self.what} must be a string, got {type(text).__name__}")
        text = text.strip()
        if not text:
            raise EmptyIdentifierError(self.what)
        self._text = text
        self._key = text.casefold()

    @classmethod
    def parse(cls, text: str):
        return cls(text)

    @classmethod
    def try_parse(cls, text: object):
        if not isinstance(text, str) or not text.strip():
            return None
        return cls(text)

    @property
    def text(self) -> str:
        return self._text

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._text!r})"

    def __len__(self) -> int:
        return len(self._text)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key == other._key  # type: ignore[attr-defined]

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key < other._key  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._key))

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: Any):
        return core_schema.no_info_plain_validator_function(
            cls._coerce,
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )

    @classmethod
    def _coerce(cls, value: Any):
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls(value)
        raise ValueError(f"expected a {cls.what} string, got {type(value).__name__}")


class ObjectId(Identifier):
    what = "object identification"


class ProgramId(Identifier):
    what = "program identification"


class EventId(Identifier):
    what = "event identification"


class ReportId(Identifier):
    what = "report identification"


class SubscriptionId(Identifier):
    what = "subscription identification"


class VirtualEndNodeId(Identifier):
    what = "virtual end node identification"


class ResourceId(Identifier):
    what = "resource identification"


@total_ordering
class IntervalId:
    """Client-chosen int64 interval identifier; not a sequence number."""

    __slots__ = ("_value",)

    def __init__(self, value: int):
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"interval identification must be an integer, got {value!r}")
        if not canon.INT64_MIN <= value <= canon.INT64_MAX:
            raise ValueError(f"interval identification {value} is out of int64 range")
        self._value = value

    @property
    def value(self) -> int:
        return self._value

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"IntervalId({self._value})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IntervalId):
            return NotImplemented
        return self._value == other._value

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, IntervalId):
            return NotImplemented
        return self._value < other._value

    def __hash__(self) -> int:
        return hash(("IntervalId", self._value))

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: Any):
        return core_schema.no_info_plain_validator_function(
            cls._coerce,
            serialization=core_schema.plain_serializer_function_ser_schema(int),
        )

    @classmethod
    def _coerce(cls, value: Any) -> IntervalId:
        if isinstance(value, IntervalId):
            return value
        try:
            return cls(value)
        except TypeError as e:
            raise ValueError(str(e)) from e
