"""
Canonical value model for OpenADR 3.0 objects.

Every model is an immutable pydantic model whose wire layout is declared
next to each field with a Wire marker (see fields.py). Equality is
structural: set-like fields are ValueSets and ignore element order,
list-like fields are tuples and respect it. Hashes are computed once, when
the instance is built.
"""

from datetime import datetime, timedelta
from typing import Annotated, Any, ClassVar, Optional, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    StrictBool,
    StrictInt,
    StrictStr,
    field_validator,
    model_validator,
)

from . import canon, codecs, equality, validate, values
from .dispatch import OBJECTS, PAYLOAD_DESCRIPTORS
from .enums import (
    Country,
    Currency,
    ObjectType,
    Operation,
    PayloadType,
    ProgramType,
    ReadingType,
    UnitType,
)
from .equality import ValueSet
from .exceptions import InvalidFieldError, UnknownObjectTypeError
from .fields import wire, wire_list, wire_set
from .ids import (
    EventId,
    IntervalId,
    ObjectId,
    ProgramId,
    ReportId,
    ResourceId,
    SubscriptionId,
    VirtualEndNodeId,
)

Int32 = Annotated[StrictInt, Field(ge=canon.INT32_MIN, le=canon.INT32_MAX)]
UInt32 = Annotated[StrictInt, Field(ge=0, le=canon.UINT32_MAX)]
Percentage = Annotated[StrictInt, Field(ge=0, le=canon.PERCENTAGE_MAX)]
Name = Annotated[StrictStr, AfterValidator(validate.check_name)]
Float32 = Annotated[float, AfterValidator(values.to_float32)]
Timestamp = Annotated[datetime, AfterValidator(values.normalize_timestamp)]
Url = Annotated[StrictStr, AfterValidator(values.parse_url)]


class WireModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    # Discriminator emitted as objectType; None for untagged models
    OBJECT_TYPE: ClassVar[Optional[ObjectType]] = None

    _hash: int = PrivateAttr(default=0)

    def model_post_init(self, __context: Any) -> None:
        self._hash = equality.structural_hash(self)

    def _structural_key(self) -> tuple:
        return tuple(getattr(self, name) for name in type(self).model_fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WireModel):
            return NotImplemented
        return equality.structural_equals(self, other)

    def __hash__(self) -> int:
        return self._hash

    @classmethod
    def _check_discriminator(cls, doc: Any) -> None:
        """An objectType key is optional on input but must name this model."""
        if cls.OBJECT_TYPE is None:
            return
        raw = doc.get(canon.OBJECT_TYPE_KEY)
        if raw is None:
            return
        tag = ObjectType.try_parse(raw)
        if tag is None:
            raise InvalidFieldError(canon.OBJECT_TYPE_KEY, "expected a non-empty string")
        if tag != cls.OBJECT_TYPE:
            raise UnknownObjectTypeError(str(tag), field=canon.OBJECT_TYPE_KEY)


# Value objects


class Point(WireModel):
    """A 2D coordinate, usable as a ValuesMap value."""

    x: Annotated[Float32, wire("x", codecs.FLOAT32)]
    y: Annotated[Float32, wire("y", codecs.FLOAT32)]

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


class ValuesMap(WireModel):
    """
    Values associated with a type, e.g. a PRICE carrying a single float.

    values is ordered: a [lat, long] pair is not a [long, lat] pair.
    """

    type: Annotated[PayloadType, wire("type", codecs.open_enum(PayloadType))]
    values: Annotated[
        tuple[Any, ...], wire_list("values", codecs.ScalarOrModelCodec(Point))
    ]

    @field_validator("values")
    @classmethod
    def _check_values(cls, items: tuple) -> tuple:
        for item in items:
            if not isinstance(item, Point):
                validate.check_scalar(item)
        return items

    def _structural_key(self) -> tuple:
        return (self.type, tuple(equality.tag_scalar(v) for v in self.values))

    def __str__(self) -> str:
        return f"{self.type}: ({', '.join(str(v) for v in self.values)})"


class IntervalPeriod(WireModel):
    """
    Start, duration and randomisation of an interval.

    A missing duration means instantaneous or infinite depending on
    context; a missing randomizeStart means no randomisation.
    """

    start: Annotated[Timestamp, wire("start", codecs.TIMESTAMP)]
    duration: Annotated[Optional[timedelta], wire("duration", codecs.DURATION)] = None
    randomize_start: Annotated[
        Optional[timedelta], wire("randomizeStart", codecs.DURATION)
    ] = None


class Interval(WireModel):
    id: Annotated[IntervalId, wire("id", codecs.INTERVAL_ID)]
    payloads: Annotated[
        tuple[ValuesMap, ...], wire_list("payloads", codecs.nested(ValuesMap))
    ]
    interval_period: Annotated[
        Optional[IntervalPeriod], wire("intervalPeriod", codecs.nested(IntervalPeriod))
    ] = None


@PAYLOAD_DESCRIPTORS.variant
class EventPayloadDescriptor(WireModel):
    OBJECT_TYPE = ObjectType.EVENT_PAYLOAD_DESCRIPTOR

    payload_type: Annotated[
        PayloadType, wire("payloadType", codecs.open_enum(PayloadType))
    ]
    units: Annotated[Optional[UnitType], wire("units", codecs.open_enum(UnitType))] = None
    currency: Annotated[
        Optional[Currency], wire("currency", codecs.open_enum(Currency))
    ] = None


@PAYLOAD_DESCRIPTORS.variant
class ReportPayloadDescriptor(WireModel):
    OBJECT_TYPE = ObjectType.REPORT_PAYLOAD_DESCRIPTOR

    payload_type: Annotated[
        PayloadType, wire("payloadType", codecs.open_enum(PayloadType))
    ]
    reading_type: Annotated[
        Optional[ReadingType], wire("readingType", codecs.open_enum(ReadingType))
    ] = None
    units: Annotated[Optional[UnitType], wire("units", codecs.open_enum(UnitType))] = None
    accuracy: Annotated[Optional[Float32], wire("accuracy", codecs.FLOAT32)] = None
    confidence: Annotated[Optional[Percentage], wire("confidence", codecs.PERCENTAGE)] = None


PayloadDescriptor = Union[EventPayloadDescriptor, ReportPayloadDescriptor]


class ReportDescriptor(WireModel):
    """
    A report request attached to an event.

    The integer fields use -1 for unspecified/all/indefinite rather than
    absence; values equal to the defaults are left off the wire.
    """

    payload_type: Annotated[
        PayloadType, wire("payloadType", codecs.open_enum(PayloadType))
    ]
    reading_type: Annotated[
        Optional[ReadingType], wire("readingType", codecs.open_enum(ReadingType))
    ] = None
    units: Annotated[Optional[UnitType], wire("units", codecs.open_enum(UnitType))] = None
    targets: Annotated[
        ValueSet[ValuesMap], wire_set("targets", codecs.nested(ValuesMap))
    ] = ValueSet()
    aggregate: Annotated[StrictBool, wire("aggregate", codecs.BOOL)] = canon.DEFAULT_AGGREGATE
    start_interval: Annotated[
        Int32, wire("startInterval", codecs.INT32)
    ] = canon.DEFAULT_START_INTERVAL
    num_intervals: Annotated[
        Int32, wire("numIntervals", codecs.INT32)
    ] = canon.DEFAULT_NUM_INTERVALS
    historical: Annotated[
        StrictBool, wire("historical", codecs.BOOL)
    ] = canon.DEFAULT_HISTORICAL
    frequency: Annotated[Int32, wire("frequency", codecs.INT32)] = canon.DEFAULT_FREQUENCY
    repeat: Annotated[Int32, wire("repeat", codecs.INT32)] = canon.DEFAULT_REPEAT


class ResourceReport(WireModel):
    resource_name: Annotated[Name, wire("resourceName", codecs.NAME)]
    interval_period: Annotated[
        Optional[IntervalPeriod], wire("intervalPeriod", codecs.nested(IntervalPeriod))
    ] = None
    intervals: Annotated[
        ValueSet[Interval], wire_set("intervals", codecs.nested(Interval))
    ]


class ObjectOperation(WireModel):
    """Subscription entry: which objects and operations to call back about, and where."""

    objects: Annotated[
        tuple[ObjectType, ...], wire_list("objects", codecs.open_enum(ObjectType))
    ]
    operations: Annotated[
        tuple[Operation, ...], wire_list("operations", codecs.open_enum(Operation))
    ]
    # Written as callbackUrl; older documents spell it callbackURL
    callback_url: Annotated[
        Url, wire("callbackUrl", codecs.URL, aliases=("callbackURL",))
    ]
    bearer_token: Annotated[Optional[StrictStr], wire("bearerToken", codecs.TEXT)] = None


# Top-level objects


class OpenADRObjectBase(WireModel):
    """
    Fields shared by every top-level object.

    id, createdDateTime and modificationDateTime are assigned by the server;
    objects submitted by a client leave them out.
    """

    id: Annotated[Optional[ObjectId], wire(canon.ID_KEY, codecs.identifier(ObjectId))] = None
    created: Annotated[
        Optional[Timestamp], wire(canon.CREATED_KEY, codecs.TIMESTAMP)
    ] = None
    last_modification: Annotated[
        Optional[Timestamp], wire(canon.MODIFIED_KEY, codecs.TIMESTAMP)
    ] = None

    @property
    def object_type(self) -> ObjectType:
        return type(self).OBJECT_TYPE


def _program_description(raw: Any) -> str:
    # {"URL": ...} on the wire; a bare string is accepted too
    if isinstance(raw, dict):
        if "URL" not in raw:
            raise ValueError("program description has no URL")
        raw = raw["URL"]
    return values.parse_url(raw)


PROGRAM_DESCRIPTION = codecs.FunctionCodec(
    _program_description,
    lambda url: {"URL": url},
    name="program description",
)


@OBJECTS.variant
class Program(OpenADRObjectBase):
    OBJECT_TYPE = ObjectType.PROGRAM

    id: Annotated[Optional[ProgramId], wire(canon.ID_KEY, codecs.identifier(ProgramId))] = None
    program_name: Annotated[Name, wire("programName", codecs.NAME)]
    program_long_name: Annotated[
        Optional[StrictStr], wire("programLongName", codecs.TEXT)
    ] = None
    retailer_name: Annotated[Optional[StrictStr], wire("retailerName", codecs.TEXT)] = None
    retailer_long_name: Annotated[
        Optional[StrictStr], wire("retailerLongName", codecs.TEXT)
    ] = None
    program_type: Annotated[
        Optional[ProgramType], wire("programType", codecs.open_enum(ProgramType))
    ] = None
    country: Annotated[Optional[Country], wire("country", codecs.open_enum(Country))] = None
    principal_subdivision: Annotated[
        Optional[StrictStr], wire("principalSubdivision", codecs.TEXT)
    ] = None
    time_zone_offset: Annotated[
        Optional[timedelta], wire("timeZoneOffset", codecs.DURATION)
    ] = None
    interval_period: Annotated[
        Optional[IntervalPeriod], wire("intervalPeriod", codecs.nested(IntervalPeriod))
    ] = None
    program_descriptions: Annotated[
        ValueSet[Url], wire_set("programDescriptions", PROGRAM_DESCRIPTION)
    ] = ValueSet()
    binding_events: Annotated[Optional[StrictBool], wire("bindingEvents", codecs.BOOL)] = None
    local_price: Annotated[Optional[StrictBool], wire("localPrice", codecs.BOOL)] = None
    payload_descriptors: Annotated[
        ValueSet[PayloadDescriptor],
        wire_set(
            "payloadDescriptors",
            codecs.VariantCodec(PAYLOAD_DESCRIPTORS, skippable=True),
        ),
    ] = ValueSet()
    targets: Annotated[
        ValueSet[ValuesMap], wire_set("targets", codecs.nested(ValuesMap))
    ] = ValueSet()


@OBJECTS.variant
class Event(OpenADRObjectBase):
    OBJECT_TYPE = ObjectType.EVENT

    id: Annotated[Optional[EventId], wire(canon.ID_KEY, codecs.identifier(EventId))] = None
    program_id: Annotated[ProgramId, wire("programID", codecs.identifier(ProgramId))]
    event_name: Annotated[Optional[StrictStr], wire("eventName", codecs.TEXT)] = None
    priority: Annotated[Optional[UInt32], wire("priority", codecs.UINT32)] = None
    targets: Annotated[
        ValueSet[ValuesMap], wire_set("targets", codecs.nested(ValuesMap))
    ] = ValueSet()
    report_descriptors: Annotated[
        ValueSet[ReportDescriptor],
        wire_set("reportDescriptors", codecs.nested(ReportDescriptor)),
    ] = ValueSet()
    payload_descriptors: Annotated[
        ValueSet[EventPayloadDescriptor],
        wire_set("payloadDescriptors", codecs.nested(EventPayloadDescriptor)),
    ] = ValueSet()
    interval_period: Annotated[
        Optional[IntervalPeriod], wire("intervalPeriod", codecs.nested(IntervalPeriod))
    ] = None
    intervals: Annotated[
        ValueSet[Interval], wire_set("intervals", codecs.nested(Interval))
    ]


@OBJECTS.variant
class Report(OpenADRObjectBase):
    OBJECT_TYPE = ObjectType.REPORT

    id: Annotated[Optional[ReportId], wire(canon.ID_KEY, codecs.identifier(ReportId))] = None
    program_id: Annotated[ProgramId, wire("programID", codecs.identifier(ProgramId))]
    event_id: Annotated[EventId, wire("eventID", codecs.identifier(EventId))]
    client_name: Annotated[Name, wire("clientName", codecs.NAME)]
    report_name: Annotated[Optional[StrictStr], wire("reportName", codecs.TEXT)] = None
    payload_descriptors: Annotated[
        ValueSet[ReportPayloadDescriptor],
        wire_set("payloadDescriptors", codecs.nested(ReportPayloadDescriptor)),
    ] = ValueSet()
    resources: Annotated[
        ValueSet[ResourceReport], wire_set("resources", codecs.nested(ResourceReport))
    ]


@OBJECTS.variant
class Subscription(OpenADRObjectBase):
    OBJECT_TYPE = ObjectType.SUBSCRIPTION

    id: Annotated[
        Optional[SubscriptionId], wire(canon.ID_KEY, codecs.identifier(SubscriptionId))
    ] = None
    client_name: Annotated[Name, wire("clientName", codecs.NAME)]
    program_id: Annotated[ProgramId, wire("programID", codecs.identifier(ProgramId))]
    object_operations: Annotated[
        ValueSet[ObjectOperation],
        wire_set("objectOperations", codecs.nested(ObjectOperation)),
    ]
    targets: Annotated[
        ValueSet[ValuesMap], wire_set("targets", codecs.nested(ValuesMap))
    ] = ValueSet()


@OBJECTS.variant
class Resource(OpenADRObjectBase):
    OBJECT_TYPE = ObjectType.RESOURCE

    id: Annotated[Optional[ResourceId], wire(canon.ID_KEY, codecs.identifier(ResourceId))] = None
    resource_name: Annotated[Name, wire("resourceName", codecs.NAME)]
    virtual_end_node_id: Annotated[
        Optional[VirtualEndNodeId], wire("venID", codecs.identifier(VirtualEndNodeId))
    ] = None
    attributes: Annotated[
        ValueSet[ValuesMap], wire_set("attributes", codecs.nested(ValuesMap))
    ] = ValueSet()
    targets: Annotated[
        ValueSet[ValuesMap], wire_set("targets", codecs.nested(ValuesMap))
    ] = ValueSet()


@OBJECTS.variant
class VirtualEndNode(OpenADRObjectBase):
    OBJECT_TYPE = ObjectType.VEN

    id: Annotated[
        Optional[VirtualEndNodeId], wire(canon.ID_KEY, codecs.identifier(VirtualEndNodeId))
    ] = None
    ven_name: Annotated[Name, wire("venName", codecs.NAME)]
    attributes: Annotated[
        ValueSet[ValuesMap], wire_set("attributes", codecs.nested(ValuesMap))
    ] = ValueSet()
    targets: Annotated[
        ValueSet[ValuesMap], wire_set("targets", codecs.nested(ValuesMap))
    ] = ValueSet()
    resources: Annotated[
        ValueSet[Resource], wire_set("resources", codecs.nested(Resource))
    ] = ValueSet()


OpenADRObject = Union[Program, Event, Report, Subscription, VirtualEndNode, Resource]


class Notification(WireModel):
    """A subscription callback body; object is decoded according to objectType."""

    object_type: Annotated[
        ObjectType, wire(canon.OBJECT_TYPE_KEY, codecs.open_enum(ObjectType))
    ]
    operation: Annotated[Operation, wire("operation", codecs.open_enum(Operation))]
    object: Annotated[
        OpenADRObject, wire("object", codecs.VariantCodec(OBJECTS, sibling="object_type"))
    ]
    targets: Annotated[
        ValueSet[ValuesMap], wire_set("targets", codecs.nested(ValuesMap))
    ] = ValueSet()

    @model_validator(mode="after")
    def _check_object_type(self):
        kind = OBJECTS.variant_of(self.object)
        if kind != self.object_type:
            raise ValueError(
                f"objectType {self.object_type} does not match a {type(self.object).__name__}"
            )
        return self
