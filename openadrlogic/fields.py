"""
Field parse contract.

Every model field that appears on the wire is annotated with a Wire marker
naming its JSON key, the codec for one value, and its shape:

- "one":  a single value;
- "list": a JSON array whose order matters (decoded to a tuple);
- "set":  a JSON array whose order does not matter (decoded to a ValueSet).

Whether a field is mandatory and what its default is come from the pydantic
field definition, unless the marker overrides it. decode_model applies the
fields in declaration order and stops at the first failure unless the
config asks for all errors. encode_model is the mirror image and leaves out
absent values, empty optional collections and values equal to their default.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Literal, Optional, Protocol

from pydantic import ValidationError

from . import canon
from .config import DecodeConfig
from .equality import ValueSet
from .exceptions import (
    DecodeError,
    DecodeErrors,
    InvalidElementError,
    InvalidFieldError,
    MissingFieldError,
    UnknownObjectTypeError,
)

if TYPE_CHECKING:
    from .types import WireModel

_LOGGER = logging.getLogger(__name__)

Shape = Literal["one", "list", "set"]
EncodeHook = Callable[[dict, Any], dict]


class Codec(Protocol):
    def decode(self, raw: Any, ctx: DecodeContext) -> Any: ...

    def encode(self, value: Any, ctx: EncodeContext) -> Any: ...


class SkipElement(Exception):
    """Raised by a codec to drop one collection element without failing."""


@dataclass(frozen=True)
class DecodeContext:
    config: DecodeConfig
    # Fields of the enclosing object decoded so far, by attribute name
    siblings: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class EncodeContext:
    hooks: Mapping[type, EncodeHook] = field(default_factory=dict)


@dataclass(frozen=True)
class Wire:
    key: str
    codec: Codec
    shape: Shape = "one"
    required: Optional[bool] = None
    # Other keys accepted on decode; never emitted
    aliases: tuple[str, ...] = ()


def wire(
    key: str,
    codec: Codec,
    *,
    required: Optional[bool] = None,
    aliases: tuple[str, ...] = (),
) -> Wire:
    return Wire(key, codec, "one", required, aliases)


def wire_list(key: str, codec: Codec, *, required: Optional[bool] = None) -> Wire:
    return Wire(key, codec, "list", required)


def wire_set(key: str, codec: Codec, *, required: Optional[bool] = None) -> Wire:
    return Wire(key, codec, "set", required)


@dataclass(frozen=True)
class WireField:
    name: str
    key: str
    codec: Codec
    shape: Shape
    required: bool
    default: Any
    aliases: tuple[str, ...] = ()


@lru_cache(maxsize=None)
def wire_fields(cls: type[WireModel]) -> tuple[WireField, ...]:
    out: list[WireField] = []
    for name, info in cls.model_fields.items():
        marker = next((m for m in info.metadata if isinstance(m, Wire)), None)
        if marker is None:
            continue
        has_default = not info.is_required()
        required = marker.required if marker.required is not None else not has_default
        default = info.get_default(call_default_factory=True) if has_default else None
        out.append(
            WireField(
                name,
                marker.key,
                marker.codec,
                marker.shape,
                required,
                default,
                marker.aliases,
            )
        )
    return tuple(out)


_ABSENT = object()


# Decoding


def decode_model(cls: type[WireModel], doc: Mapping[str, Any], config: DecodeConfig):
    if not isinstance(doc, Mapping):
        raise ValueError(f"expected a JSON object, got {type(doc).__name__}")

    cls._check_discriminator(doc)

    values: dict[str, Any] = {}
    errors: list[DecodeError] = []
    for f in wire_fields(cls):
        try:
            value = _extract(doc, f, DecodeContext(config, values))
        except DecodeError as e:
            if config.fail_fast:
                raise
            errors.append(e)
            continue
        if value is not _ABSENT:
            values[f.name] = value

    if errors:
        raise DecodeErrors(errors)

    try:
        return cls(**values)
    except ValidationError as e:
        raise _from_validation_error(cls, e) from e


def _extract(doc: Mapping[str, Any], f: WireField, ctx: DecodeContext) -> Any:
    raw = doc.get(f.key)
    for alias in f.aliases:
        if raw is not None:
            break
        raw = doc.get(alias)
    if raw is None:
        if f.required:
            raise MissingFieldError(f.key)
        return _ABSENT

    if f.shape == "one":
        try:
            return f.codec.decode(raw, ctx)
        except UnknownObjectTypeError as e:
            raise UnknownObjectTypeError(e.discriminator, field=f.key) from e
        except (DecodeError, ValueError, TypeError) as e:
            raise InvalidFieldError(f.key, str(e)) from e

    if not isinstance(raw, list):
        raise InvalidFieldError(f.key, f"expected a JSON array, got {type(raw).__name__}")

    items = []
    for index, element in enumerate(raw):
        try:
            items.append(f.codec.decode(element, ctx))
        except SkipElement as e:
            _LOGGER.warning("Skipping element %d of '%s': %s", index, f.key, e)
        except UnknownObjectTypeError as e:
            raise UnknownObjectTypeError(e.discriminator, field=f.key, index=index) from e
        except (DecodeError, ValueError, TypeError) as e:
            raise InvalidElementError(f.key, index, str(e)) from e

    return tuple(items) if f.shape == "list" else ValueSet(items)


def _from_validation_error(cls: type[WireModel], e: ValidationError) -> DecodeError:
    first = e.errors()[0]
    loc = first.get("loc") or ()
    keys = {f.name: f.key for f in wire_fields(cls)}
    key = keys.get(str(loc[0]), str(loc[0])) if loc else cls.__name__
    return InvalidFieldError(key, first.get("msg", str(e)))


# Encoding


def encode_model(value: WireModel, ctx: EncodeContext) -> dict:
    cls = type(value)
    doc: dict[str, Any] = {}

    tag = cls.OBJECT_TYPE
    if tag is not None:
        doc[canon.OBJECT_TYPE_KEY] = str(tag)

    for f in wire_fields(cls):
        v = getattr(value, f.name)
        if v is None:
            continue
        if f.shape == "one":
            if not f.required and f.default is not None and v == f.default:
                continue
            doc[f.key] = f.codec.encode(v, ctx)
        else:
            if not f.required and not v:
                continue
            doc[f.key] = [f.codec.encode(item, ctx) for item in v]

    hook = ctx.hooks.get(cls)
    if hook is not None:
        doc = hook(doc, value)
    return doc
