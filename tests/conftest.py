from datetime import datetime, timedelta

import pytest
import pytz

from openadrlogic import messages, types

T0 = datetime(2023, 6, 15, 12, 58, 8, tzinfo=pytz.utc)
T1 = datetime(2023, 6, 16, 0, 0, tzinfo=pytz.utc)


@pytest.fixture
def price():
    return types.ValuesMap(type="PRICE", values=[0.17])


@pytest.fixture
def targets():
    return [
        types.ValuesMap(type="GROUP", values=["north"]),
        types.ValuesMap(type="RESOURCE_NAME", values=["meter-1", "meter-2"]),
    ]


@pytest.fixture
def period():
    return types.IntervalPeriod(
        start=T0, duration=timedelta(hours=1), randomize_start=timedelta(minutes=5)
    )


@pytest.fixture
def intervals(price, period):
    return [
        types.Interval(id=0, payloads=[price], interval_period=period),
        types.Interval(
            id=1,
            payloads=[
                types.ValuesMap(type="PRICE", values=[0.21]),
                types.ValuesMap(type="GHG", values=[412, True, "kg"]),
            ],
        ),
    ]


# Minimal instances: mandatory fields only


@pytest.fixture
def program_min():
    return types.Program(program_name="Residential TOU")


@pytest.fixture
def event_min():
    return types.Event(program_id="prog-1", intervals=[])


@pytest.fixture
def report_min():
    return types.Report(
        program_id="prog-1", event_id="evt-1", client_name="ven-client", resources=[]
    )


@pytest.fixture
def subscription_min():
    return types.Subscription(
        client_name="ven-client", program_id="prog-1", object_operations=[]
    )


@pytest.fixture
def ven_min():
    return types.VirtualEndNode(ven_name="ven-1")


@pytest.fixture
def resource_min():
    return types.Resource(resource_name="battery-1")


@pytest.fixture
def notification_min(program_min):
    return types.Notification(
        object_type="PROGRAM", operation="POST", object=program_min
    )


# Maximal instances: every optional field set, collections with two elements


@pytest.fixture
def program_max(targets, period):
    return types.Program(
        id="prog-1",
        created=T0,
        last_modification=T1,
        program_name="Residential TOU",
        program_long_name="Residential time of use tariff",
        retailer_name="ACME",
        retailer_long_name="ACME Energy Retail",
        program_type="PRICING_TARIFF",
        country="US",
        principal_subdivision="CA",
        time_zone_offset=timedelta(hours=-8),
        interval_period=period,
        program_descriptions=[
            "https://example.com/tou",
            "https://example.com/tou/faq",
        ],
        binding_events=True,
        local_price=False,
        payload_descriptors=[
            types.EventPayloadDescriptor(payload_type="PRICE", units="kWh", currency="USD"),
            types.ReportPayloadDescriptor(
                payload_type="USAGE",
                reading_type="DIRECT_READ",
                units="kWh",
                accuracy=0.1,
                confidence=90,
            ),
        ],
        targets=targets,
    )


@pytest.fixture
def report_descriptors(targets):
    return [
        types.ReportDescriptor(
            payload_type="USAGE",
            reading_type="DIRECT_READ",
            units="kWh",
            targets=targets,
            aggregate=True,
            start_interval=0,
            num_intervals=4,
            historical=False,
            frequency=2,
            repeat=3,
        ),
        types.ReportDescriptor(payload_type="DEMAND"),
    ]


@pytest.fixture
def event_max(targets, period, intervals, report_descriptors):
    return types.Event(
        id="evt-1",
        created=T0,
        last_modification=T1,
        program_id="prog-1",
        event_name="Evening peak",
        priority=0,
        targets=targets,
        report_descriptors=report_descriptors,
        payload_descriptors=[
            types.EventPayloadDescriptor(payload_type="PRICE", units="kWh", currency="USD"),
            types.EventPayloadDescriptor(payload_type="GHG"),
        ],
        interval_period=period,
        intervals=intervals,
    )


@pytest.fixture
def report_max(period, intervals):
    return types.Report(
        id="rep-1",
        created=T0,
        last_modification=T1,
        program_id="prog-1",
        event_id="evt-1",
        client_name="ven-client",
        report_name="Hourly usage",
        payload_descriptors=[
            types.ReportPayloadDescriptor(payload_type="USAGE", units="kWh"),
            types.ReportPayloadDescriptor(
                payload_type="DEMAND", reading_type="PEAK", accuracy=0.5, confidence=100
            ),
        ],
        resources=[
            types.ResourceReport(
                resource_name="battery-1", interval_period=period, intervals=intervals
            ),
            types.ResourceReport(resource_name="battery-2", intervals=intervals[:1]),
        ],
    )


@pytest.fixture
def subscription_max(targets):
    return types.Subscription(
        id="sub-1",
        created=T0,
        last_modification=T1,
        client_name="ven-client",
        program_id="prog-1",
        object_operations=[
            types.ObjectOperation(
                objects=["PROGRAM", "EVENT"],
                operations=["POST", "PUT"],
                callback_url="https://ven.example.com/notify",
                bearer_token="secret-token",
            ),
            types.ObjectOperation(
                objects=["REPORT"],
                operations=["DELETE"],
                callback_url="https://ven.example.com/reports",
            ),
        ],
        targets=targets,
    )


@pytest.fixture
def resource_max(targets):
    return types.Resource(
        id="res-1",
        created=T0,
        last_modification=T1,
        resource_name="battery-1",
        virtual_end_node_id="ven-1",
        attributes=[
            types.ValuesMap(type="LOCATION", values=[types.Point(x=1.5, y=-2.25)]),
            types.ValuesMap(type="STORAGE_CHARGE_LEVEL", values=[80]),
        ],
        targets=targets,
    )


@pytest.fixture
def ven_max(targets, resource_max):
    return types.VirtualEndNode(
        id="ven-1",
        created=T0,
        last_modification=T1,
        ven_name="ven-1",
        attributes=[
            types.ValuesMap(type="VEN_NAME", values=["ven-1"]),
            types.ValuesMap(type="LOCATION", values=[types.Point(x=0.5, y=0.25)]),
        ],
        targets=targets,
        resources=[resource_max, types.Resource(resource_name="battery-2")],
    )


@pytest.fixture
def notification_max(event_max, targets):
    return types.Notification(
        object_type="EVENT", operation="PUT", object=event_max, targets=targets
    )


@pytest.fixture
def token_response():
    return messages.ClientCredentialResponse(
        access_token="abc.def.ghi",
        expires_in=timedelta(hours=1),
        refresh_token="refresh-me",
        scope="read_all",
    )
