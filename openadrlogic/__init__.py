from . import (
    canon,
    exceptions,
    config,
    registry,
    enums,
    ids,
    validate,
    values,
    equality,
    fields,
    codecs,
    dispatch,
    types,
    messages,
    formats,
)
from .config import DecodeConfig
from .formats import decode, dumps, encode, loads, try_decode

__all__ = [
    "canon",
    "exceptions",
    "config",
    "registry",
    "enums",
    "ids",
    "validate",
    "values",
    "equality",
    "fields",
    "codecs",
    "dispatch",
    "types",
    "messages",
    "formats",
    "DecodeConfig",
    "decode",
    "try_decode",
    "encode",
    "loads",
    "dumps",
]
