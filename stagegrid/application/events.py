"""Event classes published by the viewport transform and schedule host."""

from dataclasses import dataclass, field
import time

from stagegrid.data_model import ViewportState


@dataclass(frozen=True, kw_only=True)
class Event:
    """Base class for all events."""
    timestamp: float = field(default_factory=time.time)


@dataclass(frozen=True, kw_only=True)
class ViewportChangedEvent(Event):
    """Emitted when zoom or scroll offset change."""
    old_state: ViewportState
    new_state: ViewportState

    @property
    def zoom_changed(self) -> bool:
        return self.old_state.zoom != self.new_state.zoom


@dataclass(frozen=True, kw_only=True)
class ScheduleLoadedEvent(Event):
    """Emitted when a new schedule is shown."""
    source: str
    item_count: int
    category_count: int = 0
