"""ViewportTransform: the zoom/scroll state machine behind the schedule grid.

The transform owns the single authoritative ViewportState and applies one
gesture delta at a time. Every update re-establishes the invariants

    min_zoom <= zoom <= max_zoom
    min(0, container - content(zoom)) <= offset <= 0      (per axis)

so readers (the renderer) never observe a half-applied gesture.

It has no Qt dependencies and uses the same callback registry and EventBus as
the rest of the application layer, so hosts can subscribe to
"viewport_changed" and re-run the layout.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from .data_model import ViewportState, ContainerGeometry, LayoutConstants, Size
from .application.event_bus import EventBus
from .application.events import ViewportChangedEvent
from . import config

LAYOUT = config.LAYOUT

logger = logging.getLogger(__name__)

Callback = Callable[[], None]
PanDelta = Tuple[float, float]


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def _axis_offset(offset: float, delta: float, container: float, content: float) -> float:
    """Apply a pan delta on one axis and clamp it to the scroll range."""
    min_offset = min(0.0, container - content)
    max_offset = 0.0
    new_offset = offset + delta
    # Content smaller than the container anchors to the top-left edge
    if content < container:
        new_offset = 0.0
    return _clamp(new_offset, min_offset, max_offset)


@dataclass
class ViewportTransform:
    """Non-Qt owner of the (zoom, offset_x, offset_y) triple.

    Notes:
    - Zoom is uniform on both axes and not focal-point preserving: scaling
      keeps the current offset and only re-clamps it, so content stays
      anchored to the top-left edge.
    - There must be exactly one writer; all updates happen on the thread
      that delivers gestures.
    """

    min_zoom: float = LAYOUT.MIN_ZOOM
    max_zoom: float = LAYOUT.MAX_ZOOM
    state: ViewportState = field(default_factory=ViewportState)
    event_bus: EventBus = field(default_factory=EventBus)

    _callbacks: Dict[str, List[Callback]] = field(default_factory=lambda: {
        "viewport_changed": [],
    })

    def __post_init__(self) -> None:
        if not (math.isfinite(self.min_zoom) and math.isfinite(self.max_zoom)) \
                or not 0 < self.min_zoom <= self.max_zoom:
            raise ValueError(f"Invalid zoom range [{self.min_zoom}, {self.max_zoom}]")
        self.state = self._validated(self.state)

    @classmethod
    def from_layout(cls, layout: LayoutConstants) -> "ViewportTransform":
        return cls(min_zoom=layout.min_zoom, max_zoom=layout.max_zoom)

    # ---- Subscription API ----
    def on(self, event_name: str, callback: Callback) -> None:
        self._callbacks.setdefault(event_name, []).append(callback)

    def off(self, event_name: str, callback: Callback) -> None:
        callbacks = self._callbacks.get(event_name, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def _emit(self, event_name: str) -> None:
        for cb in list(self._callbacks.get(event_name, [])):
            cb()

    # ---- Read access ----
    @property
    def zoom(self) -> float:
        return self.state.zoom

    @property
    def offset_x(self) -> float:
        return self.state.offset_x

    @property
    def offset_y(self) -> float:
        return self.state.offset_y

    @property
    def zoom_percent(self) -> int:
        """Zoom rounded to 10% steps, as shown by the zoom indicator."""
        return int(round(self.state.zoom * 10)) * 10

    def snapshot(self) -> ViewportState:
        return self.state

    # ---- Gesture update ----
    def update(self,
               pan: PanDelta,
               zoom_factor: float,
               container: ContainerGeometry,
               unzoomed_content: Size) -> ViewportState:
        """Apply one gesture tick and return the committed state.

        Args:
            pan: (dx, dy) pan delta in pixels
            zoom_factor: Multiplicative zoom change (1.0 = no zoom)
            container: Size of the drawing surface
            unzoomed_content: Total grid size at zoom 1

        Non-finite input makes the tick a no-op, and so does finite input
        whose scaled content or new offsets overflow. A finite zoom factor
        <= 0 is treated as 1.0 while the pan delta still applies.
        """
        dx, dy = pan
        if not all(math.isfinite(v) for v in (dx, dy, zoom_factor)):
            logger.debug("Ignoring non-finite gesture: pan=%r zoom_factor=%r", pan, zoom_factor)
            return self.state
        if not (container.is_finite() and unzoomed_content.is_finite()):
            logger.debug("Ignoring gesture with non-finite geometry: container=%r content=%r",
                         container, unzoomed_content)
            return self.state
        if zoom_factor <= 0:
            logger.debug("Treating zoom factor %r as identity", zoom_factor)
            zoom_factor = 1.0

        old = self.state
        new_zoom = _clamp(old.zoom * zoom_factor, self.min_zoom, self.max_zoom)
        content = unzoomed_content.scaled(new_zoom)

        new_state = ViewportState(
            zoom=new_zoom,
            offset_x=_axis_offset(old.offset_x, dx, container.width, content.width),
            offset_y=_axis_offset(old.offset_y, dy, container.height, content.height),
        )
        if not (content.is_finite() and all(math.isfinite(v) for v in new_state.to_list())):
            logger.debug("Ignoring gesture that overflows: pan=%r zoom_factor=%r content=%r",
                         pan, zoom_factor, content)
            return self.state
        self._commit(new_state)
        return self.state

    def reclamp(self, container: ContainerGeometry, unzoomed_content: Size) -> ViewportState:
        """Re-establish offset bounds after the container changed size."""
        return self.update((0.0, 0.0), 1.0, container, unzoomed_content)

    def restore(self,
                state: ViewportState,
                container: Optional[ContainerGeometry] = None,
                unzoomed_content: Optional[Size] = None) -> ViewportState:
        """Swap in a previously saved state.

        Zoom is always range-checked. Offsets are clamped to the scroll range
        only when both container and unzoomed_content are given; otherwise
        the caller must call reclamp() before the state is laid out.

        Raises:
            ValueError: If the state holds non-finite values or positive offsets
        """
        restored = self._validated(state)
        if container is not None and unzoomed_content is not None \
                and container.is_finite() and unzoomed_content.is_finite():
            content = unzoomed_content.scaled(restored.zoom)
            if content.is_finite():
                restored = ViewportState(
                    zoom=restored.zoom,
                    offset_x=_axis_offset(restored.offset_x, 0.0, container.width, content.width),
                    offset_y=_axis_offset(restored.offset_y, 0.0, container.height, content.height),
                )
        self._commit(restored)
        return self.state

    def reset(self) -> None:
        self._commit(self._validated(ViewportState()))

    # ---- Helpers ----
    def _validated(self, state: ViewportState) -> ViewportState:
        values = state.to_list()
        if not all(math.isfinite(v) for v in values):
            raise ValueError(f"Viewport state must be finite, got {values}")
        if state.offset_x > 0 or state.offset_y > 0:
            raise ValueError(f"Viewport offsets must be <= 0, got {values}")
        return ViewportState(
            zoom=_clamp(state.zoom, self.min_zoom, self.max_zoom),
            offset_x=state.offset_x,
            offset_y=state.offset_y,
        )

    def _commit(self, new_state: ViewportState) -> None:
        old_state = self.state
        self.state = new_state
        if new_state != old_state:
            self.event_bus.publish(ViewportChangedEvent(
                old_state=old_state,
                new_state=new_state,
            ))
            self._emit("viewport_changed")

