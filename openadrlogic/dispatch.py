from __future__ import annotations

import logging
import threading
from typing import Any, Optional, TypeVar

from .enums import ObjectType
from .exceptions import UnknownObjectTypeError

_LOGGER = logging.getLogger(__name__)

M = TypeVar("M", bound=type)


class VariantResolver:
    """
    Maps an objectType discriminator to the model class of one variant.

    Decoding looks variants up by tag; encoding needs no lookup because a
    value carries its own tag, but variant_of confirms the value belongs to
    this resolver's sum type.
    """

    def __init__(self, name: str):
        self.name = name
        self._by_tag: dict[ObjectType, type] = {}
        self._by_type: dict[type, ObjectType] = {}
        self._lock = threading.Lock()

    def variant(self, cls: M) -> M:
        """Class decorator registering cls under its OBJECT_TYPE."""
        tag = cls.OBJECT_TYPE
        if tag is None:
            raise TypeError(f"{cls.__name__} has no OBJECT_TYPE discriminator")
        self.register(tag, cls)
        return cls

    def register(self, tag: ObjectType | str, cls: type) -> None:
        tag = ObjectType.parse(str(tag))
        with self._lock:
            existing = self._by_tag.get(tag)
            if existing is not None and existing is not cls:
                raise ValueError(
                    f"{self.name} variant {tag} already bound to {existing.__name__}"
                )
            self._by_tag[tag] = cls
            self._by_type[cls] = tag
        _LOGGER.debug("Registered %s variant %s -> %s", self.name, tag, cls.__name__)

    def resolve(self, tag: ObjectType | str) -> type:
        cls = self.try_resolve(tag)
        if cls is None:
            raise UnknownObjectTypeError(str(tag))
        return cls

    def try_resolve(self, tag: ObjectType | str) -> Optional[type]:
        if isinstance(tag, str):
            token = ObjectType.lookup(tag)
            if token is None:
                return None
            tag = token
        return self._by_tag.get(tag)

    def variant_of(self, value: Any) -> ObjectType:
        tag = self._by_type.get(type(value))
        if tag is None:
            raise TypeError(f"{type(value).__name__} is not a {self.name} variant")
        return tag

    def tags(self) -> list[ObjectType]:
        return list(self._by_tag)

    def __contains__(self, tag: object) -> bool:
        if isinstance(tag, (str, ObjectType)):
            return self.try_resolve(tag) is not None
        return False


OBJECTS = VariantResolver("OpenADR object")
PAYLOAD_DESCRIPTORS = VariantResolver("payload descriptor")
