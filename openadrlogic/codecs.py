"""Codecs for one wire value: primitives, open enumerations, nested models and variants."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import timedelta
from typing import TYPE_CHECKING, Any, Optional

from . import canon, validate, values
from .dispatch import VariantResolver
from .enums import ObjectType
from .exceptions import UnknownObjectTypeError
from .fields import DecodeContext, EncodeContext, SkipElement, decode_model, encode_model
from .ids import Identifier, IntervalId
from .registry import OpenEnum

if TYPE_CHECKING:
    from .types import WireModel


def _identity(value: Any) -> Any:
    return value


class FunctionCodec:
    def __init__(
        self,
        decode: Callable[[Any], Any],
        encode: Callable[[Any], Any] = _identity,
        name: str = "value",
    ):
        self._decode = decode
        self._encode = encode
        self.name = name

    def decode(self, raw: Any, ctx: DecodeContext) -> Any:
        return self._decode(raw)

    def encode(self, value: Any, ctx: EncodeContext) -> Any:
        return self._encode(value)

    def __repr__(self) -> str:
        return f"<codec {self.name}>"


TEXT = FunctionCodec(validate.check_text, name="text")
NAME = FunctionCodec(validate.check_name, name="name")
BOOL = FunctionCodec(validate.check_bool, name="boolean")
INT32 = FunctionCodec(validate.check_int32, name="int32")
UINT32 = FunctionCodec(validate.check_uint32, name="uint32")
PERCENTAGE = FunctionCodec(validate.check_percentage, name="percentage")
FLOAT32 = FunctionCodec(values.to_float32, values.format_float32, name="float32")
TIMESTAMP = FunctionCodec(values.parse_timestamp, values.format_timestamp, name="timestamp")
DURATION = FunctionCodec(values.parse_duration, values.format_duration, name="duration")
URL = FunctionCodec(values.parse_url, name="url")
INTERVAL_ID = FunctionCodec(
    lambda raw: IntervalId(validate.check_int(raw, canon.INT64_MIN, canon.INT64_MAX, "interval id")),
    int,
    name="interval id",
)
SECONDS = FunctionCodec(
    lambda raw: timedelta(seconds=validate.check_uint32(raw, "seconds")),
    lambda td: int(td.total_seconds()),
    name="seconds",
)


def open_enum(cls: type[OpenEnum]) -> FunctionCodec:
    def parse(raw: Any) -> OpenEnum:
        validate.check_text(raw, cls.what)
        return cls.parse(raw)

    return FunctionCodec(parse, str, name=cls.__name__)


def identifier(cls: type[Identifier]) -> FunctionCodec:
    def parse(raw: Any) -> Identifier:
        validate.check_text(raw, cls.what)
        return cls(raw)

    return FunctionCodec(parse, str, name=cls.__name__)


class ModelCodec:
    """A nested JSON object decoded into one model class."""

    def __init__(self, cls: type[WireModel]):
        self.cls = cls

    def decode(self, raw: Any, ctx: DecodeContext) -> Any:
        if not isinstance(raw, Mapping):
            raise ValueError(f"expected a JSON object, got {type(raw).__name__}")
        return decode_model(self.cls, raw, ctx.config)

    def encode(self, value: Any, ctx: EncodeContext) -> dict:
        return encode_model(value, ctx)

    def __repr__(self) -> str:
        return f"<codec {self.cls.__name__}>"


def nested(cls: type[WireModel]) -> ModelCodec:
    return ModelCodec(cls)


class ScalarOrModelCodec:
    """JSON scalars pass through; JSON objects decode into one model class."""

    def __init__(self, cls: type[WireModel]):
        self.model = ModelCodec(cls)

    def decode(self, raw: Any, ctx: DecodeContext) -> Any:
        if isinstance(raw, Mapping):
            return self.model.decode(raw, ctx)
        return validate.check_scalar(raw)

    def encode(self, value: Any, ctx: EncodeContext) -> Any:
        if isinstance(value, self.model.cls):
            return self.model.encode(value, ctx)
        return value


class VariantCodec:
    """
    A JSON object whose model class is picked by an objectType discriminator.

    The discriminator is either the element's own objectType key or, when
    sibling names one, an already decoded field of the enclosing object.
    """

    def __init__(
        self,
        resolver: VariantResolver,
        *,
        sibling: Optional[str] = None,
        skippable: bool = False,
    ):
        self.resolver = resolver
        self.sibling = sibling
        self.skippable = skippable

    def decode(self, raw: Any, ctx: DecodeContext) -> Any:
        if not isinstance(raw, Mapping):
            raise ValueError(f"expected a JSON object, got {type(raw).__name__}")

        if self.sibling is not None:
            tag = ctx.siblings.get(self.sibling)
            if tag is None:
                raise ValueError("discriminator is missing or invalid")
        else:
            tag = ObjectType.try_parse(raw.get(canon.OBJECT_TYPE_KEY))
            if tag is None:
                raise ValueError(f"missing {canon.OBJECT_TYPE_KEY} discriminator")

        try:
            cls = self.resolver.resolve(tag)
        except UnknownObjectTypeError as e:
            if self.skippable and ctx.config.unknown_payload_descriptors == "skip":
                raise SkipElement(f"unknown {self.resolver.name} type {tag}") from e
            raise
        return decode_model(cls, raw, ctx.config)

    def encode(self, value: Any, ctx: EncodeContext) -> dict:
        self.resolver.variant_of(value)
        return encode_model(value, ctx)
