"""Notification tests: the object field is decoded by the sibling objectType."""

import pytest

from openadrlogic import formats, types
from openadrlogic.enums import ObjectType, Operation
from openadrlogic.exceptions import InvalidFieldError, UnknownObjectTypeError


@pytest.fixture
def event_doc():
    return {
        "programID": "prog-1",
        "eventName": "Evening peak",
        "intervals": [{"id": 0, "payloads": [{"type": "PRICE", "values": [0.17]}]}],
    }


def test_event_notification(event_doc):
    doc = {"objectType": "EVENT", "operation": "POST", "object": event_doc}
    n = formats.decode(doc, types.Notification)
    assert n.object_type is ObjectType.EVENT
    assert n.operation is Operation.POST
    assert isinstance(n.object, types.Event)
    assert n.object.event_name == "Evening peak"
    assert str(n.object.program_id) == "prog-1"


def test_bogus_object_type(event_doc):
    doc = {"objectType": "BOGUS", "operation": "POST", "object": event_doc}
    with pytest.raises(UnknownObjectTypeError) as exc:
        formats.decode(doc, types.Notification)
    assert exc.value.discriminator == "BOGUS"
    assert exc.value.field == "object"
    assert exc.value.index is None


def test_object_must_match_notification_object_type(event_doc):
    # The object's own header names another kind
    doc = {
        "objectType": "EVENT",
        "operation": "PUT",
        "object": {**event_doc, "objectType": "PROGRAM"},
    }
    with pytest.raises(UnknownObjectTypeError):
        formats.decode(doc, types.Notification)


def test_object_is_decoded_as_named_kind(event_doc):
    # A valid Event document is not a valid Program
    doc = {"objectType": "PROGRAM", "operation": "DELETE", "object": event_doc}
    with pytest.raises(InvalidFieldError) as exc:
        formats.decode(doc, types.Notification)
    assert exc.value.field == "object"


def test_notification_construction_checks_object_kind(program_min):
    with pytest.raises(ValueError):
        types.Notification(object_type="EVENT", operation="POST", object=program_min)


@pytest.mark.parametrize(
    "fixture",
    ["program_max", "event_max", "report_max", "subscription_max", "ven_max", "resource_max"],
)
def test_every_kind_can_be_notified(request, fixture):
    obj = request.getfixturevalue(fixture)
    n = types.Notification(object_type=obj.object_type, operation="PUT", object=obj)
    back = formats.decode(formats.encode(n), types.Notification)
    assert back == n
    assert type(back.object) is type(obj)


def test_lowercase_operation_is_the_same_token(event_doc):
    doc = {"objectType": "event", "operation": "post", "object": event_doc}
    n = formats.decode(doc, types.Notification)
    assert n.operation is Operation.POST
    assert formats.encode(n)["operation"] == "POST"
