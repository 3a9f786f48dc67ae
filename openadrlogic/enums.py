from __future__ import annotations
from typing import ClassVar

from .registry import OpenEnum


class ObjectType(OpenEnum):
    what = "object type"

    PROGRAM: ClassVar[ObjectType]
    EVENT: ClassVar[ObjectType]
    REPORT: ClassVar[ObjectType]
    SUBSCRIPTION: ClassVar[ObjectType]
    VEN: ClassVar[ObjectType]
    RESOURCE: ClassVar[ObjectType]
    EVENT_PAYLOAD_DESCRIPTOR: ClassVar[ObjectType]
    REPORT_PAYLOAD_DESCRIPTOR: ClassVar[ObjectType]


class Operation(OpenEnum):
    """Notification/subscription operation; GET, POST, PUT or DELETE on the wire."""

    what = "operation"

    GET: ClassVar[Operation]
    POST: ClassVar[Operation]
    PUT: ClassVar[Operation]
    DELETE: ClassVar[Operation]


class PayloadType(OpenEnum):
    what = "payload type"

    SIMPLE: ClassVar[PayloadType]
    PRICE: ClassVar[PayloadType]
    EXPORT_PRICE: ClassVar[PayloadType]
    GHG: ClassVar[PayloadType]
    USAGE: ClassVar[PayloadType]
    DEMAND: ClassVar[PayloadType]
    READING: ClassVar[PayloadType]
    BASELINE: ClassVar[PayloadType]
    IMPORT_CAPACITY_LIMIT: ClassVar[PayloadType]
    EXPORT_CAPACITY_LIMIT: ClassVar[PayloadType]
    DISPATCH_SETPOINT: ClassVar[PayloadType]
    CHARGE_STATE_SETPOINT: ClassVar[PayloadType]
    STORAGE_CHARGE_LEVEL: ClassVar[PayloadType]
    VEN_NAME: ClassVar[PayloadType]
    RESOURCE_NAME: ClassVar[PayloadType]
    GROUP: ClassVar[PayloadType]
    LOCATION: ClassVar[PayloadType]


class UnitType(OpenEnum):
    what = "unit type"

    KWH: ClassVar[UnitType]
    KW: ClassVar[UnitType]
    KVAH: ClassVar[UnitType]
    KVARH: ClassVar[UnitType]
    VOLTS: ClassVar[UnitType]
    AMPS: ClassVar[UnitType]
    CELSIUS: ClassVar[UnitType]
    PERCENT: ClassVar[UnitType]


class ReadingType(OpenEnum):
    what = "reading type"

    DIRECT_READ: ClassVar[ReadingType]
    ESTIMATED: ClassVar[ReadingType]
    SUMMED: ClassVar[ReadingType]
    MEAN: ClassVar[ReadingType]
    PEAK: ClassVar[ReadingType]
    FORECAST: ClassVar[ReadingType]


class ProgramType(OpenEnum):
    what = "program type"

    PRICING_TARIFF: ClassVar[ProgramType]


class Currency(OpenEnum):
    """ISO 4217 code; treated as an opaque validated string."""

    what = "currency"

    USD: ClassVar[Currency]
    EUR: ClassVar[Currency]


class Country(OpenEnum):
    """ISO 3166-1 alpha-2 code; treated as an opaque validated string."""

    what = "country"

    US: ClassVar[Country]
    DE: ClassVar[Country]


class AuthErrorType(OpenEnum):
    """OAuth 2.0 token endpoint error codes (RFC 6749)."""

    what = "auth error type"

    INVALID_REQUEST: ClassVar[AuthErrorType]
    INVALID_CLIENT: ClassVar[AuthErrorType]
    INVALID_GRANT: ClassVar[AuthErrorType]
    INVALID_SCOPE: ClassVar[AuthErrorType]
    UNAUTHORIZED_CLIENT: ClassVar[AuthErrorType]
    UNSUPPORTED_GRANT_TYPE: ClassVar[AuthErrorType]


def _predefine(cls: type[OpenEnum], **values: str) -> None:
    for attr, text in values.items():
        setattr(cls, attr, cls.register(text))


_predefine(
    ObjectType,
    PROGRAM="PROGRAM",
    EVENT="EVENT",
    REPORT="REPORT",
    SUBSCRIPTION="SUBSCRIPTION",
    VEN="VEN",
    RESOURCE="RESOURCE",
    EVENT_PAYLOAD_DESCRIPTOR="EVENT_PAYLOAD_DESCRIPTOR",
    REPORT_PAYLOAD_DESCRIPTOR="REPORT_PAYLOAD_DESCRIPTOR",
)
_predefine(Operation, GET="GET", POST="POST", PUT="PUT", DELETE="DELETE")
_predefine(
    PayloadType,
    **{
        name: name
        for name in (
            "SIMPLE",
            "PRICE",
            "EXPORT_PRICE",
            "GHG",
            "USAGE",
            "DEMAND",
            "READING",
            "BASELINE",
            "IMPORT_CAPACITY_LIMIT",
            "EXPORT_CAPACITY_LIMIT",
            "DISPATCH_SETPOINT",
            "CHARGE_STATE_SETPOINT",
            "STORAGE_CHARGE_LEVEL",
            "VEN_NAME",
            "RESOURCE_NAME",
            "GROUP",
            "LOCATION",
        )
    },
)
# kWh keeps its customary casing; "KWH" on the wire resolves to the same token
_predefine(
    UnitType,
    KWH="kWh",
    KW="kW",
    KVAH="kVAh",
    KVARH="kVARh",
    VOLTS="VOLTS",
    AMPS="AMPS",
    CELSIUS="CELSIUS",
    PERCENT="PERCENT",
)
_predefine(
    ReadingType,
    DIRECT_READ="DIRECT_READ",
    ESTIMATED="ESTIMATED",
    SUMMED="SUMMED",
    MEAN="MEAN",
    PEAK="PEAK",
    FORECAST="FORECAST",
)
_predefine(ProgramType, PRICING_TARIFF="PRICING_TARIFF")
_predefine(Currency, USD="USD", EUR="EUR")
_predefine(Country, US="US", DE="DE")
_predefine(
    AuthErrorType,
    INVALID_REQUEST="invalid_request",
    INVALID_CLIENT="invalid_client",
    INVALID_GRANT="invalid_grant",
    INVALID_SCOPE="invalid_scope",
    UNAUTHORIZED_CLIENT="unauthorized_client",
    UNSUPPORTED_GRANT_TYPE="unsupported_grant_type",
)
