"""Tests for the application event bus."""

import pytest

from stagegrid.application.event_bus import EventBus
from stagegrid.application.events import ScheduleLoadedEvent, ViewportChangedEvent
from stagegrid.data_model import ViewportState


def test_publish_reaches_subscribers_of_exact_type() -> None:
    bus = EventBus()
    loaded, changed = [], []
    bus.subscribe(ScheduleLoadedEvent, loaded.append)
    bus.subscribe(ViewportChangedEvent, changed.append)

    event = ScheduleLoadedEvent(source="festival.yaml", item_count=10, category_count=3)
    assert bus.publish(event) == 1

    assert loaded == [event]
    assert changed == []


def test_unsubscribe() -> None:
    bus = EventBus()
    received = []
    bus.subscribe(ScheduleLoadedEvent, received.append)
    assert bus.has_subscribers(ScheduleLoadedEvent)

    bus.unsubscribe(ScheduleLoadedEvent, received.append)
    assert bus.publish(ScheduleLoadedEvent(source="", item_count=0)) == 0

    assert received == []
    assert not bus.has_subscribers(ScheduleLoadedEvent)


def test_subscribe_during_publish_applies_next_time() -> None:
    bus = EventBus()
    late = []

    def add_late_handler(event):
        bus.subscribe(ScheduleLoadedEvent, late.append)

    bus.subscribe(ScheduleLoadedEvent, add_late_handler)
    bus.publish(ScheduleLoadedEvent(source="a", item_count=1))
    assert late == []
    assert bus.subscriber_count(ScheduleLoadedEvent) == 2


def test_clear() -> None:
    bus = EventBus()
    bus.subscribe(ScheduleLoadedEvent, lambda e: None)
    bus.subscribe(ViewportChangedEvent, lambda e: None)

    bus.clear(ScheduleLoadedEvent)
    assert not bus.has_subscribers(ScheduleLoadedEvent)
    assert bus.has_subscribers(ViewportChangedEvent)

    bus.clear()
    assert not bus.has_subscribers(ViewportChangedEvent)


def test_handler_error_propagates_in_debug() -> None:
    bus = EventBus()

    def failing(event):
        raise RuntimeError("boom")

    bus.subscribe(ViewportChangedEvent, failing)
    with pytest.raises(RuntimeError):
        bus.publish(ViewportChangedEvent(old_state=ViewportState(), new_state=ViewportState(zoom=2.0)))


def test_events_are_keyword_only_and_timestamped() -> None:
    event = ViewportChangedEvent(old_state=ViewportState(), new_state=ViewportState(zoom=2.0))
    assert event.timestamp > 0
    assert event.zoom_changed
    with pytest.raises(TypeError):
        ViewportChangedEvent(ViewportState(), ViewportState())  # type: ignore[misc]
