"""Structural equality tests.

Covers:
- Every set-like field: permuted elements give equal, equal-hash values
- Every set-like field: duplicates collapse to the de-duplicated value
- List-like fields: permuting elements breaks equality
- JSON scalar kinds stay distinct inside ValuesMap.values
"""

from datetime import datetime

import pytest
import pytz

from openadrlogic import types
from openadrlogic.equality import ValueSet

T0 = datetime(2023, 6, 15, 12, 58, 8, tzinfo=pytz.utc)


def _vm(kind, *values):
    return types.ValuesMap(type=kind, values=list(values))


def _interval(i):
    return types.Interval(id=i, payloads=[_vm("PRICE", 0.1 * i)])


def _descriptor(kind):
    return types.ReportDescriptor(payload_type=kind)


def _resource(name):
    return types.Resource(resource_name=name)


def _operation(url):
    return types.ObjectOperation(objects=["EVENT"], operations=["POST"], callback_url=url)


A_TARGET, B_TARGET = _vm("GROUP", "a"), _vm("GROUP", "b")
PROGRAM = types.Program(program_name="p")

# (model, mandatory kwargs, set field, two distinct elements)
SET_FIELDS = [
    (types.ReportDescriptor, {"payload_type": "USAGE"}, "targets", (A_TARGET, B_TARGET)),
    (
        types.ResourceReport,
        {"resource_name": "r"},
        "intervals",
        (_interval(1), _interval(2)),
    ),
    (
        types.Program,
        {"program_name": "p"},
        "program_descriptions",
        ("https://example.com/a", "https://example.com/b"),
    ),
    (
        types.Program,
        {"program_name": "p"},
        "payload_descriptors",
        (
            types.EventPayloadDescriptor(payload_type="PRICE"),
            types.ReportPayloadDescriptor(payload_type="USAGE"),
        ),
    ),
    (types.Program, {"program_name": "p"}, "targets", (A_TARGET, B_TARGET)),
    (types.Event, {"program_id": "p", "intervals": []}, "targets", (A_TARGET, B_TARGET)),
    (
        types.Event,
        {"program_id": "p", "intervals": []},
        "report_descriptors",
        (_descriptor("USAGE"), _descriptor("DEMAND")),
    ),
    (
        types.Event,
        {"program_id": "p", "intervals": []},
        "payload_descriptors",
        (
            types.EventPayloadDescriptor(payload_type="PRICE"),
            types.EventPayloadDescriptor(payload_type="GHG"),
        ),
    ),
    (types.Event, {"program_id": "p"}, "intervals", (_interval(1), _interval(2))),
    (
        types.Report,
        {"program_id": "p", "event_id": "e", "client_name": "c", "resources": []},
        "payload_descriptors",
        (
            types.ReportPayloadDescriptor(payload_type="USAGE"),
            types.ReportPayloadDescriptor(payload_type="DEMAND"),
        ),
    ),
    (
        types.Report,
        {"program_id": "p", "event_id": "e", "client_name": "c"},
        "resources",
        (
            types.ResourceReport(resource_name="r1", intervals=[]),
            types.ResourceReport(resource_name="r2", intervals=[]),
        ),
    ),
    (
        types.Subscription,
        {"client_name": "c", "program_id": "p"},
        "object_operations",
        (_operation("https://ven.example.com/a"), _operation("https://ven.example.com/b")),
    ),
    (
        types.Subscription,
        {"client_name": "c", "program_id": "p", "object_operations": []},
        "targets",
        (A_TARGET, B_TARGET),
    ),
    (types.Resource, {"resource_name": "r"}, "attributes", (A_TARGET, B_TARGET)),
    (types.Resource, {"resource_name": "r"}, "targets", (A_TARGET, B_TARGET)),
    (types.VirtualEndNode, {"ven_name": "v"}, "attributes", (A_TARGET, B_TARGET)),
    (types.VirtualEndNode, {"ven_name": "v"}, "targets", (A_TARGET, B_TARGET)),
    (
        types.VirtualEndNode,
        {"ven_name": "v"},
        "resources",
        (_resource("r1"), _resource("r2")),
    ),
    (
        types.Notification,
        {"object_type": "PROGRAM", "operation": "POST", "object": PROGRAM},
        "targets",
        (A_TARGET, B_TARGET),
    ),
]
SET_IDS = [f"{cls.__name__}.{field}" for cls, _, field, _ in SET_FIELDS]


@pytest.mark.parametrize("cls, base, field, pair", SET_FIELDS, ids=SET_IDS)
def test_set_field_ignores_order(cls, base, field, pair):
    a, b = pair
    one = cls(**base, **{field: [a, b]})
    two = cls(**base, **{field: [b, a]})
    assert one == two
    assert hash(one) == hash(two)


@pytest.mark.parametrize("cls, base, field, pair", SET_FIELDS, ids=SET_IDS)
def test_set_field_drops_duplicates(cls, base, field, pair):
    a, b = pair
    dup = cls(**base, **{field: [a, b, a, b]})
    dedup = cls(**base, **{field: [a, b]})
    assert dup == dedup
    assert hash(dup) == hash(dedup)
    assert len(getattr(dup, field)) == 2


@pytest.mark.parametrize("cls, base, field, pair", SET_FIELDS, ids=SET_IDS)
def test_set_field_content_still_matters(cls, base, field, pair):
    a, b = pair
    assert cls(**base, **{field: [a]}) != cls(**base, **{field: [a, b]})


def test_values_map_values_are_ordered():
    assert _vm("LOCATION", 1.0, 2.0) != _vm("LOCATION", 2.0, 1.0)


def test_object_operation_lists_are_ordered():
    url = "https://ven.example.com/cb"
    one = types.ObjectOperation(objects=["PROGRAM", "EVENT"], operations=["GET"], callback_url=url)
    two = types.ObjectOperation(objects=["EVENT", "PROGRAM"], operations=["GET"], callback_url=url)
    assert one != two

    ops_a = types.ObjectOperation(objects=["EVENT"], operations=["GET", "PUT"], callback_url=url)
    ops_b = types.ObjectOperation(objects=["EVENT"], operations=["PUT", "GET"], callback_url=url)
    assert ops_a != ops_b


def test_interval_payloads_are_ordered():
    a, b = _vm("PRICE", 0.1), _vm("GHG", 5)
    assert types.Interval(id=1, payloads=[a, b]) != types.Interval(id=1, payloads=[b, a])


def test_scalar_kinds_stay_distinct():
    # JSON true, 1 and 1.0 are different wire values
    assert _vm("SIMPLE", True) != _vm("SIMPLE", 1)
    assert _vm("SIMPLE", 1) != _vm("SIMPLE", 1.0)
    assert len(ValueSet([_vm("SIMPLE", True), _vm("SIMPLE", 1), _vm("SIMPLE", 1.0)])) == 3


def test_equal_content_with_different_construction_inputs():
    # Enum and identifier text is case-insensitive; timestamps compare as instants
    one = types.Event(program_id="PROG-1", intervals=[], created=T0)
    two = types.Event(
        program_id="prog-1", intervals=[], created=T0.astimezone(pytz.timezone("Australia/Brisbane"))
    )
    assert one == two
    assert hash(one) == hash(two)


def test_different_kinds_never_equal():
    assert types.Resource(resource_name="x") != types.VirtualEndNode(ven_name="x")


def test_value_set_basics():
    s = ValueSet(["b", "a", "b"])
    assert list(s) == ["b", "a"]
    assert "a" in s
    assert s == ValueSet(["a", "b"])
    assert hash(s) == hash(ValueSet(["a", "b"]))
    assert s != frozenset(["a", "b"])
    assert hash(s) != hash(frozenset(["a", "b"]))
