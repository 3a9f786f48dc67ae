"""
Open, case-insensitive string enumerations.

Each OpenEnum subclass owns a process-wide registry of interned tokens.
Well-known values are registered at import time; any other non-blank text
is accepted and registered on first sight, so the set of valid values is
never closed. The first registration of a text fixes its canonical casing.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, ClassVar, TypeVar

from pydantic_core import core_schema

from .exceptions import EmptyIdentifierError

_LOGGER = logging.getLogger(__name__)

E = TypeVar("E", bound="OpenEnum")


class OpenEnum:
    __slots__ = ("_text", "_key")

    what: ClassVar[str] = "enumeration value"
    _registry: ClassVar[dict[str, Any]]
    _lock: ClassVar[threading.Lock]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._registry = {}
        cls._lock = threading.Lock()

    def __init__(self, text: str):
        self._text = text
        self._key = text.casefold()

    # registry

    @classmethod
    def register(cls: type[E], text: str) -> E:
        text = _clean(text, cls.what)
        key = text.casefold()
        token = cls._registry.get(key)
        if token is not None:
            return token
        with cls._lock:
            token = cls._registry.get(key)
            if token is None:
                token = cls(text)
                cls._registry[key] = token
                _LOGGER.debug("Registered new %s %r", cls.__name__, text)
        return token

    @classmethod
    def parse(cls: type[E], text: str) -> E:
        """Return the token for text, registering it if unseen."""
        return cls.register(text)

    @classmethod
    def try_parse(cls: type[E], text: object) -> E | None:
        if not isinstance(text, str) or not text.strip():
            return None
        return cls.register(text)

    @classmethod
    def lookup(cls: type[E], text: str) -> E | None:
        """Return an already registered token without registering."""
        return cls._registry.get(text.strip().casefold())

    @classmethod
    def all(cls: type[E]) -> set[E]:
        return set(cls._registry.values())

    @classmethod
    def count(cls) -> int:
        return len(cls._registry)

    # value semantics

    @property
    def text(self) -> str:
        return self._text

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._text!r})"

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if type(other) is not type(self):
            return NotImplemented
        return self._key == other._key  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash(self._key)

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key < other._key  # type: ignore[attr-defined]

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (type(self).register, (self._text,))

    # pydantic integration: accept tokens or plain strings

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: Any):
        return core_schema.no_info_plain_validator_function(
            cls._coerce,
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )

    @classmethod
    def _coerce(cls: type[E], value: Any) -> E:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        raise ValueError(f"expected a {cls.what} string, got {type(value).__name__}")


def _clean(text: object, what: str) -> str:
    if not isinstance(text, str):
        raise TypeError(f"{what} must be a string, got {type(text).__name__}")
    text = text.strip()
    if not text:
        raise EmptyIdentifierError(what)
    return text
