from datetime import datetime, timedelta

import pytest

from warehouse_cell.enterprise.core import EventKind, WarehouseEvent, Zone
from warehouse_cell.services.events import InMemoryEventRecorder


def _event(kind: EventKind, robot_id: str = "robot-1", offset: int = 0) -> WarehouseEvent:
    return WarehouseEvent(
        timestamp=datetime(2024, 1, 1) + timedelta(seconds=offset),
        kind=kind,
        robot_id=robot_id,
        zone=Zone.ZONE_A,
    )


@pytest.mark.parametrize("missing", ["timestamp", "kind", "robot_id", "zone"])
def test_event_fields_cannot_be_null(missing):
    fields = {
        "timestamp": datetime(2024, 1, 1),
        "kind": EventKind.SYSTEM_ERROR,
        "robot_id": "robot-1",
        "zone": Zone.ZONE_B,
    }
    fields[missing] = None

    with pytest.raises(ValueError):
        WarehouseEvent(**fields)


def test_events_are_immutable():
    event = _event(EventKind.PRODUCT_PICKED_UP)
    with pytest.raises(ValueError):
        event.robot_id = "robot-2"


def test_recorder_filters_and_orders():
    recorder = InMemoryEventRecorder()
    recorder.record(_event(EventKind.PRODUCT_PICKED_UP, offset=0))
    recorder.record(_event(EventKind.ROBOT_CHARGING, offset=1))
    recorder.record(_event(EventKind.PRODUCT_DELIVERED, offset=2))

    assert len(recorder) == 3
    assert [e.kind for e in recorder.events(EventKind.ROBOT_CHARGING)] == [EventKind.ROBOT_CHARGING]
    assert [e.kind for e in recorder.recent(limit=2)] == [
        EventKind.PRODUCT_DELIVERED,
        EventKind.ROBOT_CHARGING,
    ]

    recorder.reset()
    assert recorder.events() == []


def test_recorder_rejects_missing_event():
    with pytest.raises(ValueError):
        InMemoryEventRecorder().record(None)
