"""Schedule canvas widget: Qt host for the viewport transform and grid renderer."""

import logging
from typing import List, Optional

from PySide6.QtWidgets import QWidget
from PySide6.QtCore import Qt, Signal, QEvent, QPointF, QRectF
from PySide6.QtGui import (
    QPainter, QColor, QBrush, QFontMetricsF, QPaintEvent, QResizeEvent, QWheelEvent,
    QMouseEvent, QKeyEvent
)

from .data_model import Schedule, Size, ViewportState
from .grid_renderer import GridRenderer
from .primitives import Primitive, replay
from .protocols import TextMeasurer, TextStyle
from .qt_painter import QtPainterSurface
from .sample_data import create_sample_schedule
from .text_measurer import QtTextMeasurer, font_for_style
from .viewport_transform import ViewportTransform
from .application.event_bus import EventBus
from .application.events import ScheduleLoadedEvent
from . import config

RENDERING = config.RENDERING
UI = config.UI

logger = logging.getLogger(__name__)

# Wheel angle delta of one notch
WHEEL_NOTCH = 120.0


class ScheduleCanvas(QWidget):
    """Widget that draws the zoomable schedule grid.

    Every input path (pinch gesture, wheel, drag, keys) ends in
    apply_gesture(), which feeds ViewportTransform.update(). The transform's
    "viewport_changed" callback marks the layout dirty; the next paintEvent
    re-runs GridRenderer.layout() and replays the primitives.
    """

    viewportChanged = Signal(object)  # ViewportState

    def __init__(self,
                 schedule: Optional[Schedule] = None,
                 measurer: Optional[TextMeasurer] = None,
                 parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._measurer: TextMeasurer = measurer or QtTextMeasurer()
        self._schedule = schedule or create_sample_schedule()
        self._renderer = GridRenderer(self._schedule.layout, self._measurer)
        self._transform = ViewportTransform.from_layout(self._schedule.layout)
        self._transform.on("viewport_changed", self._on_viewport_changed)

        # Layout cache, rebuilt when dirty
        self._primitives: List[Primitive] = []
        self._dirty = True
        self._layout_pass_counter = 0

        # Drag panning state
        self._drag_last_pos: Optional[QPointF] = None

        self.setAttribute(Qt.WidgetAttribute.WA_OpaquePaintEvent)
        self.setAttribute(Qt.WidgetAttribute.WA_AcceptTouchEvents)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setMinimumSize(RENDERING.MIN_CANVAS_WIDTH, RENDERING.MIN_CANVAS_HEIGHT)
        self.grabGesture(Qt.GestureType.PinchGesture)

    # ---- Accessors ----
    @property
    def transform(self) -> ViewportTransform:
        return self._transform

    @property
    def event_bus(self) -> EventBus:
        """Bus shared by every transform this canvas creates."""
        return self._transform.event_bus

    @property
    def renderer(self) -> GridRenderer:
        return self._renderer

    @property
    def schedule(self) -> Schedule:
        return self._schedule

    @property
    def layout_pass_count(self) -> int:
        return self._layout_pass_counter

    def container_size(self) -> Size:
        return Size(float(self.width()), float(self.height()))

    def content_size(self) -> Size:
        return self._renderer.unzoomed_content_size(self.container_size(), self._schedule.categories)

    def setSchedule(self, schedule: Schedule, source: str = "") -> None:
        """Show a different schedule; the view returns to zoom 1, top-left."""
        logger.info("Showing schedule %s: %d categories, %d items",
                    source or "<memory>", len(schedule.categories), len(schedule.items))
        self._schedule = schedule
        self._renderer = GridRenderer(schedule.layout, self._measurer)
        old_transform = self._transform
        old_transform.off("viewport_changed", self._on_viewport_changed)
        self._transform = ViewportTransform(
            min_zoom=schedule.layout.min_zoom,
            max_zoom=schedule.layout.max_zoom,
            event_bus=old_transform.event_bus,
        )
        self._transform.on("viewport_changed", self._on_viewport_changed)
        self._transform.event_bus.publish(ScheduleLoadedEvent(
            source=source,
            item_count=len(schedule.items),
            category_count=len(schedule.categories),
        ))
        self.mark_dirty()
        self.viewportChanged.emit(self._transform.state)

    # ---- Gesture entry point ----
    def apply_gesture(self, dx: float, dy: float, zoom_factor: float = 1.0) -> ViewportState:
        """Apply one pan/zoom tick against the current container size."""
        return self._transform.update((dx, dy), zoom_factor, self.container_size(), self.content_size())

    def reset_view(self) -> None:
        self._transform.reset()
        self._transform.reclamp(self.container_size(), self.content_size())

    def restore_view(self, state: ViewportState) -> ViewportState:
        """Restore a saved [zoom, offset_x, offset_y] snapshot, clamped to this canvas."""
        return self._transform.restore(state, self.container_size(), self.content_size())

    # ---- Layout ----
    def primitives(self) -> List[Primitive]:
        """Primitives for the current state, re-laid out only when dirty."""
        if self._dirty:
            self._primitives = self._renderer.layout(
                self._transform.state,
                self.container_size(),
                self._schedule.categories,
                self._schedule.items,
            )
            self._dirty = False
            self._layout_pass_counter += 1
        return self._primitives

    def mark_dirty(self) -> None:
        self._dirty = True
        self.update()

    def _on_viewport_changed(self) -> None:
        self.mark_dirty()
        self.viewportChanged.emit(self._transform.state)

    # ---- Qt events ----
    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        # Re-clamp rather than reset: orientation changes keep zoom and position
        self._transform.reclamp(self.container_size(), self.content_size())
        self.mark_dirty()

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        painter.setRenderHint(QPainter.RenderHint.TextAntialiasing, True)
        painter.fillRect(self.rect(), QColor(config.COLORS.SURFACE))

        replay(self.primitives(), QtPainterSurface(painter))
        self._paint_zoom_indicator(painter)
        painter.end()

    def _paint_zoom_indicator(self, painter: QPainter) -> None:
        """Draw the "Zoom: N%" pill centered at the bottom edge."""
        width, height = UI.INDICATOR_WIDTH, UI.INDICATOR_HEIGHT
        rect = QRectF((self.width() - width) / 2.0,
                      self.height() - UI.INDICATOR_BOTTOM_MARGIN - height,
                      width, height)
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(QColor(config.COLORS.INDICATOR_BACKGROUND)))
        painter.drawRoundedRect(rect, UI.INDICATOR_RADIUS, UI.INDICATOR_RADIUS)

        label = self.zoom_indicator_text()
        font = font_for_style(TextStyle(size_px=UI.INDICATOR_FONT_SIZE, bold=True))
        fm = QFontMetricsF(font)
        painter.setFont(font)
        painter.setPen(QColor(config.COLORS.INDICATOR_TEXT))
        text_x = rect.center().x() - fm.horizontalAdvance(label) / 2.0
        text_y = rect.center().y() - fm.height() / 2.0 + fm.ascent()
        painter.drawText(QPointF(text_x, text_y), label)

    def zoom_indicator_text(self) -> str:
        return f"Zoom: {self._transform.zoom_percent}%"

    def event(self, event: QEvent) -> bool:
        if event.type() == QEvent.Type.Gesture:
            return self._gesture_event(event)
        return super().event(event)

    def _gesture_event(self, event: QEvent) -> bool:
        pinch = event.gesture(Qt.GestureType.PinchGesture)  # type: ignore[attr-defined]
        if pinch is None:
            return False
        center = pinch.centerPoint()
        last_center = pinch.lastCenterPoint()
        self.apply_gesture(center.x() - last_center.x(),
                           center.y() - last_center.y(),
                           pinch.scaleFactor())
        event.accept()
        return True

    def wheelEvent(self, event: QWheelEvent) -> None:
        """Ctrl+Wheel zooms; wheel pans vertically, Shift+Wheel horizontally."""
        delta = event.angleDelta()
        if delta.x() == 0 and delta.y() == 0:
            return super().wheelEvent(event)

        modifiers = event.modifiers()
        if modifiers & Qt.KeyboardModifier.ControlModifier:
            factor = UI.ZOOM_WHEEL_FACTOR if delta.y() > 0 else 1.0 / UI.ZOOM_WHEEL_FACTOR
            self.apply_gesture(0.0, 0.0, factor)
        else:
            dx = delta.x() / WHEEL_NOTCH * UI.SCROLL_STEP_PX
            dy = delta.y() / WHEEL_NOTCH * UI.SCROLL_STEP_PX
            if modifiers & Qt.KeyboardModifier.ShiftModifier:
                dx, dy = dy, dx
            self.apply_gesture(dx, dy)
        event.accept()

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self._drag_last_pos = event.position()
            self.setCursor(Qt.CursorShape.ClosedHandCursor)
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        if self._drag_last_pos is not None:
            pos = event.position()
            self.apply_gesture(pos.x() - self._drag_last_pos.x(), pos.y() - self._drag_last_pos.y())
            self._drag_last_pos = pos
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton and self._drag_last_pos is not None:
            self._drag_last_pos = None
            self.unsetCursor()
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def keyPressEvent(self, event: QKeyEvent) -> None:
        key = event.key()
        if key in (Qt.Key.Key_Plus, Qt.Key.Key_Equal):
            self.apply_gesture(0.0, 0.0, UI.ZOOM_KEY_FACTOR)
        elif key == Qt.Key.Key_Minus:
            self.apply_gesture(0.0, 0.0, 1.0 / UI.ZOOM_KEY_FACTOR)
        elif key == Qt.Key.Key_0:
            self.reset_view()
        else:
            super().keyPressEvent(event)
            return
        event.accept()
