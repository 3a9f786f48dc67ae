"""
Public decode/encode surface.

decode turns a parsed JSON document (a dict) into a model, either of a
named class or, when no class is given, of the top-level object kind its
objectType names. encode is the inverse and produces a dict that json.dumps
can write unchanged. loads/dumps add the JSON text layer.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from typing import Any, Optional, TypeVar

from . import canon
from .config import DecodeConfig, default_config
from .dispatch import OBJECTS
from .enums import ObjectType
from .exceptions import (
    DecodeError,
    InvalidFieldError,
    MalformedDocumentError,
    MissingFieldError,
)
from .fields import EncodeContext, EncodeHook, decode_model, encode_model
from .types import WireModel

_LOGGER = logging.getLogger(__name__)

M = TypeVar("M", bound=WireModel)
DecodeHook = Callable[[Mapping[str, Any], Any], Any]


def decode(
    document: Any,
    kind: Optional[type[M]] = None,
    *,
    config: Optional[DecodeConfig] = None,
    hook: Optional[DecodeHook] = None,
) -> Any:
    """
    Decode one wire document.

    Parameters
    ----------
    document : Mapping
        Parsed JSON object.
    kind : WireModel subclass, optional
        Model to decode into. When omitted the document must be a top-level
        object and its objectType picks the class.
    config : DecodeConfig, optional
        Defaults to default_config().
    hook : callable, optional
        hook(document, value) -> value, applied to the decoded top-level value.

    Raises
    ------
    DecodeError
        MissingFieldError, InvalidFieldError, InvalidElementError,
        UnknownObjectTypeError, MalformedDocumentError or DecodeErrors.
    """
    if not isinstance(document, Mapping):
        raise MalformedDocumentError(
            f"expected a JSON object, got {type(document).__name__}"
        )
    config = config or default_config()

    if kind is None:
        kind = _kind_of(document)

    try:
        value = decode_model(kind, document, config)
    except DecodeError as e:
        _LOGGER.debug("Failed to decode %s: %s", kind.__name__, e)
        raise
    except (ValueError, TypeError) as e:
        raise MalformedDocumentError(str(e)) from e

    if hook is not None:
        value = hook(document, value)
    return value


def _kind_of(document: Mapping[str, Any]) -> type:
    raw = document.get(canon.OBJECT_TYPE_KEY)
    if raw is None:
        raise MissingFieldError(canon.OBJECT_TYPE_KEY)
    tag = ObjectType.try_parse(raw)
    if tag is None:
        raise InvalidFieldError(canon.OBJECT_TYPE_KEY, "expected a non-empty string")
    return OBJECTS.resolve(tag)


def try_decode(
    document: Any,
    kind: Optional[type[M]] = None,
    *,
    config: Optional[DecodeConfig] = None,
    hook: Optional[DecodeHook] = None,
) -> tuple[Any, Optional[DecodeError]]:
    """Like decode, but returns (value, None) or (None, error) instead of raising."""
    try:
        return decode(document, kind, config=config, hook=hook), None
    except DecodeError as e:
        return None, e


def encode(
    value: WireModel,
    hook: Optional[EncodeHook] = None,
    *,
    hooks: Optional[Mapping[type, EncodeHook]] = None,
) -> dict:
    """
    Encode a model to its wire document.

    hook(document, value) -> document rewrites the top-level document;
    hooks maps a model class to a hook applied to every document of that
    class, nested ones included.
    """
    if not isinstance(value, WireModel):
        raise TypeError(f"no wire encoding for {type(value).__name__}")
    doc = encode_model(value, EncodeContext(dict(hooks or {})))
    if hook is not None:
        doc = hook(doc, value)
    return doc


def loads(
    text: str | bytes,
    kind: Optional[type[M]] = None,
    *,
    config: Optional[DecodeConfig] = None,
    hook: Optional[DecodeHook] = None,
) -> Any:
    try:
        document = json.loads(text)
    except ValueError as e:
        raise MalformedDocumentError(f"invalid JSON: {e}") from e
    return decode(document, kind, config=config, hook=hook)


def dumps(
    value: WireModel,
    hook: Optional[EncodeHook] = None,
    *,
    hooks: Optional[Mapping[type, EncodeHook]] = None,
    **kwargs: Any,
) -> str:
    """Encode to JSON text; extra keyword arguments go to json.dumps."""
    return json.dumps(encode(value, hook, hooks=hooks), **kwargs)
