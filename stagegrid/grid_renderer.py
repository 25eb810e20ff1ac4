"""Schedule grid layout module.

This module maps time-and-category coordinates to pixel geometry at an
arbitrary zoom level and composes the sticky bands. The result of a layout
pass is a flat list of draw primitives, painted back to front:

1. Scrollable content, translated by (offset_x, offset_y): column
   backgrounds, gridlines, event cards and their clipped text.
2. Header band, translated by offset_x only: category labels.
3. Time column, translated by offset_y only: hour labels.
4. Corner patch where both sticky bands meet.

Layout is a pure function of its inputs. The renderer holds only immutable
configuration and the injected text measurer.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .clock_utils import format_hour_label, format_time_range
from .config import ColorScheme, RenderingConfig
from .data_model import (
    Category, ScheduleItem, ViewportState, ContainerGeometry, LayoutConstants, Size, Minutes,
    category_indices
)
from .primitives import (
    Point, ClipRect, MeasuredText, Primitive,
    RectPrimitive, RoundedRectPrimitive, LinePrimitive, TextPrimitive
)
from .protocols import TextMeasurer, TextStyle
from . import config

# (left, top, width, height) in unscrolled content coordinates
RectGeometry = Tuple[float, float, float, float]


@dataclass(frozen=True)
class GridGeometry:
    """Coordinate mapping for one zoom level, in unscrolled content coordinates."""
    layout: LayoutConstants
    zoom: float
    base_column_width: float
    category_count: int

    @classmethod
    def compute(cls,
                layout: LayoutConstants,
                container: ContainerGeometry,
                category_count: int,
                zoom: float) -> "GridGeometry":
        return cls(
            layout=layout,
            zoom=zoom,
            base_column_width=layout.base_column_width(container, category_count),
            category_count=category_count,
        )

    @property
    def column_width(self) -> float:
        return self.base_column_width * self.zoom

    @property
    def hour_height(self) -> float:
        return self.layout.base_hour_height * self.zoom

    @property
    def padding(self) -> float:
        return self.layout.event_padding * self.zoom

    @property
    def corner_radius(self) -> float:
        return self.layout.corner_radius * self.zoom

    @property
    def grid_top(self) -> float:
        """Y of the start_hour gridline."""
        return self.layout.header_height + self.layout.grid_top_margin

    @property
    def grid_bottom(self) -> float:
        """Y of the end_hour gridline."""
        return self.hour_line_y(self.layout.total_hours)

    @property
    def grid_right(self) -> float:
        return self.column_left(self.category_count)

    def column_left(self, index: int) -> float:
        return self.layout.time_column_width + index * self.column_width

    def hour_line_y(self, hour_index: int) -> float:
        """Y of the gridline hour_index hours after start_hour."""
        return self.grid_top + hour_index * self.hour_height

    def row_top(self, start: Minutes) -> float:
        return self.grid_top + (start / 60.0 - self.layout.start_hour) * self.hour_height

    def row_height(self, start: Minutes, end: Minutes) -> float:
        """Height of a time span; never negative, even for malformed items."""
        return max(0.0, (end - start) / 60.0 * self.hour_height)

    def event_rect(self, column_index: int, start: Minutes, end: Minutes) -> Optional[RectGeometry]:
        """Padded card rectangle, or None if padding leaves nothing to draw."""
        pad = self.padding
        width = self.column_width - 2 * pad
        height = self.row_height(start, end) - 2 * pad
        if width <= 0 or height <= 0:
            return None
        return (self.column_left(column_index) + pad, self.row_top(start) + pad, width, height)


class GridRenderer:
    """Lays out the schedule grid as an ordered list of draw primitives.

    The renderer is re-evaluated whenever the viewport state or container
    size changes; calling layout() twice with the same inputs yields equal
    lists.
    """

    def __init__(self,
                 layout: LayoutConstants,
                 measurer: TextMeasurer,
                 colors: Optional[ColorScheme] = None,
                 rendering: Optional[RenderingConfig] = None) -> None:
        """Initialize the renderer.

        Args:
            layout: Fixed geometry of the rendering session
            measurer: Text measurement capability
            colors: Color tokens. Uses config.COLORS if None.
            rendering: Font sizes and text insets. Uses config.RENDERING if None.
        """
        self._layout = layout
        self._measurer = measurer
        self._colors = colors or config.COLORS
        self._rendering = rendering or config.RENDERING

    @property
    def layout_constants(self) -> LayoutConstants:
        return self._layout

    def unzoomed_content_size(self, container: ContainerGeometry, categories: Sequence[Category]) -> Size:
        return self._layout.unzoomed_content_size(container, len(categories))

    def geometry(self, state: ViewportState, container: ContainerGeometry,
                 categories: Sequence[Category]) -> GridGeometry:
        return GridGeometry.compute(self._layout, container, len(categories), state.zoom)

    def layout(self,
               state: ViewportState,
               container: ContainerGeometry,
               categories: Sequence[Category],
               items: Sequence[ScheduleItem]) -> List[Primitive]:
        """Produce the primitives for one frame.

        Args:
            state: Current zoom and scroll offset
            container: Size of the drawing surface
            categories: Column order; items in other categories are skipped
            items: Scheduled items, drawn in list order

        Returns:
            Primitives in paint order, or an empty list for degenerate
            geometry (empty container, no categories, no room for columns)
        """
        if container.is_empty() or not categories:
            return []
        if not all(math.isfinite(v) for v in state.to_list()) or state.zoom <= 0:
            return []

        geometry = self.geometry(state, container, categories)
        if geometry.base_column_width <= 0:
            return []

        primitives: List[Primitive] = [
            RectPrimitive(Point(0.0, 0.0), container.width, container.height, self._colors.SURFACE)
        ]
        self._layout_content(primitives, geometry, state, categories, items)
        self._layout_header_band(primitives, geometry, state, container, categories)
        self._layout_time_column(primitives, geometry, state, container)

        # Corner patch hides anything both partial transforms drew there
        primitives.append(RectPrimitive(
            Point(0.0, 0.0),
            self._layout.time_column_width,
            self._layout.header_height,
            self._colors.SURFACE,
        ))
        return primitives

    # ---- Layers ----
    def _layout_content(self,
                        out: List[Primitive],
                        geometry: GridGeometry,
                        state: ViewportState,
                        categories: Sequence[Category],
                        items: Sequence[ScheduleItem]) -> None:
        ox, oy = state.offset_x, state.offset_y
        header = self._layout.header_height
        grid_left = geometry.column_left(0) + ox
        grid_right = geometry.grid_right + ox

        # Column backgrounds
        for index in range(len(categories)):
            color = self._colors.COLUMN_BACKGROUND if index % 2 == 0 else self._colors.COLUMN_BACKGROUND_ALT
            out.append(RectPrimitive(
                Point(geometry.column_left(index) + ox, header + oy),
                geometry.column_width,
                geometry.grid_bottom - header,
                color,
            ))

        # Horizontal gridlines at the configured granularity
        step_minutes = self._layout.gridline_minutes
        line_count = self._layout.total_hours * 60 // step_minutes
        step_px = geometry.hour_height * step_minutes / 60.0
        for i in range(line_count + 1):
            y = geometry.grid_top + i * step_px + oy
            out.append(LinePrimitive(Point(grid_left, y), Point(grid_right, y), self._colors.GRID))

        # Vertical gridlines, one per category boundary
        for index in range(len(categories) + 1):
            x = geometry.column_left(index) + ox
            out.append(LinePrimitive(
                Point(x, header + oy),
                Point(x, geometry.grid_bottom + oy),
                self._colors.GRID,
            ))

        indices = category_indices(categories)
        for item in items:
            column = indices.get(item.category)
            if column is None:
                continue
            rect = geometry.event_rect(column, item.start_minutes, item.end_minutes)
            if rect is None:
                continue
            self._layout_event(out, geometry, item, rect, ox, oy)

    def _layout_event(self,
                      out: List[Primitive],
                      geometry: GridGeometry,
                      item: ScheduleItem,
                      rect: RectGeometry,
                      ox: float,
                      oy: float) -> None:
        left, top, width, height = rect
        top_left = Point(left + ox, top + oy)
        out.append(RoundedRectPrimitive(top_left, width, height, geometry.corner_radius, item.color))

        clip = ClipRect(top_left.x, top_left.y, width, height)
        inset = self._rendering.EVENT_TEXT_INSET
        time_text = self._measure(
            format_time_range(item.start_minutes, item.end_minutes),
            TextStyle(size_px=self._rendering.EVENT_TIME_FONT_SIZE * geometry.zoom, color=self._colors.TEXT),
        )
        label_text = self._measure(
            item.label,
            TextStyle(size_px=self._rendering.EVENT_LABEL_FONT_SIZE * geometry.zoom, bold=True,
                      color=self._colors.TEXT),
        )
        out.append(TextPrimitive(top_left.translated(inset, inset), time_text, self._colors.TEXT, clip))
        out.append(TextPrimitive(top_left.translated(inset, inset + time_text.height),
                                 label_text, self._colors.TEXT, clip))

    def _layout_header_band(self,
                            out: List[Primitive],
                            geometry: GridGeometry,
                            state: ViewportState,
                            container: ContainerGeometry,
                            categories: Sequence[Category]) -> None:
        header = self._layout.header_height
        band = ClipRect(0.0, 0.0, container.width, header)
        out.append(RectPrimitive(Point(0.0, 0.0), container.width, header, self._colors.SURFACE))

        style = TextStyle(size_px=self._rendering.HEADER_FONT_SIZE * geometry.zoom, bold=True,
                          color=self._colors.TEXT)
        column_width = geometry.column_width
        for index, category in enumerate(categories):
            x = geometry.column_left(index) + state.offset_x
            text = self._measure(category.label, style)
            top_left = Point(x + (column_width - text.width) / 2, (header - text.height) / 2)
            clip = ClipRect(x, 0.0, column_width, header).intersected(band)
            out.append(TextPrimitive(top_left, text, self._colors.TEXT, clip))

    def _layout_time_column(self,
                            out: List[Primitive],
                            geometry: GridGeometry,
                            state: ViewportState,
                            container: ContainerGeometry) -> None:
        header = self._layout.header_height
        column_width = self._layout.time_column_width
        band_height = max(0.0, container.height - header)
        band = ClipRect(0.0, header, column_width, band_height)
        out.append(RectPrimitive(Point(0.0, header), column_width, band_height, self._colors.SURFACE))

        style = TextStyle(size_px=self._rendering.TIME_LABEL_FONT_SIZE * geometry.zoom,
                          color=self._colors.TEXT_MUTED)
        left = self._layout.time_column_left_padding
        for hour_index in range(self._layout.total_hours + 1):
            y = geometry.hour_line_y(hour_index) + state.offset_y
            text = self._measure(format_hour_label(self._layout.start_hour + hour_index), style)
            out.append(TextPrimitive(Point(left, y - text.height / 2), text, self._colors.TEXT_MUTED, band))

    # ---- Helpers ----
    def _measure(self, text: str, style: TextStyle) -> MeasuredText:
        size = self._measurer.measure(text, style)
        return MeasuredText(text=text, style=style, width=size.width, height=size.height)
