"""Core data structures for the StageGrid schedule viewer.

This module defines the inputs of the layout engine (categories, scheduled
items, layout constants, container size) and the view state owned by the
viewport transform. Don't confuse the Schedule, which is the full data set,
with the ViewportState, which only describes what part of the grid is visible.

    Schedule
    ├── categories: [Category]      (Column order, left to right)
    │   ├── Category(key="main",    label="Main Stage")     index 0
    │   ├── Category(key="rock",    label="Rock Stage")     index 1
    │   └── Category(key="electro", label="Electro Stage")  index 2
    ├── items: [ScheduleItem]
    │   └── ScheduleItem
    │       ├── label: "Band X"
    │       ├── category: "main"
    │       ├── start_minutes: 780   (13:00)
    │       ├── end_minutes: 870     (14:30)
    │       └── color: "#81C784"
    └── layout: LayoutConstants
        ├── start_hour: 12
        ├── end_hour: 23
        └── base_hour_height: 100.0

    ViewportState
    ├── zoom: 1.0       (min_zoom..max_zoom)
    ├── offset_x: 0.0   (<= 0, content scrolled left)
    └── offset_y: 0.0   (<= 0, content scrolled up)
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from . import config

LAYOUT = config.LAYOUT

# Minutes from midnight. Items in the festival sample start at 12:00 (720).
Minutes = int

# CategoryKey identifies a column. Items reference categories by key so that
# schedule data can mention categories outside the configured (visible) set.
CategoryKey = str


@dataclass(frozen=True)
class Category:
    """A schedule column. Its display index is its position in the ordering."""
    key: CategoryKey
    label: str


@dataclass(frozen=True)
class ScheduleItem:
    """A single block on the grid, e.g. one act on one stage."""
    label: str
    category: CategoryKey
    start_minutes: Minutes
    end_minutes: Minutes
    color: str = config.COLORS.DEFAULT_EVENT

    @property
    def duration_minutes(self) -> Minutes:
        return self.end_minutes - self.start_minutes


@dataclass(frozen=True)
class Size:
    """Width/height pair in pixels."""
    width: float
    height: float

    def scaled(self, factor: float) -> "Size":
        return Size(self.width * factor, self.height * factor)

    def is_finite(self) -> bool:
        return math.isfinite(self.width) and math.isfinite(self.height)

    def is_empty(self) -> bool:
        """True for zero, negative or non-finite sizes."""
        return not self.is_finite() or self.width <= 0 or self.height <= 0


# The drawing surface handed to each layout pass.
ContainerGeometry = Size


@dataclass(frozen=True)
class ViewportState:
    """Zoom and scroll offset of the grid.

    Offsets are translations applied to the scrollable content, so they are
    always <= 0: a negative offset_x means the content moved left.
    """
    zoom: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0

    def to_list(self) -> List[float]:
        """Opaque snapshot for an external save/restore mechanism."""
        return [self.zoom, self.offset_x, self.offset_y]

    @classmethod
    def from_list(cls, values: Sequence[float]) -> "ViewportState":
        if len(values) != 3:
            raise ValueError(f"Expected [zoom, offset_x, offset_y], got {list(values)!r}")
        zoom, offset_x, offset_y = (float(v) for v in values)
        return cls(zoom=zoom, offset_x=offset_x, offset_y=offset_y)


@dataclass(frozen=True)
class LayoutConstants:
    """Fixed geometry of a rendering session. All lengths are unzoomed pixels."""
    start_hour: int = LAYOUT.START_HOUR
    end_hour: int = LAYOUT.END_HOUR
    base_hour_height: float = LAYOUT.BASE_HOUR_HEIGHT
    header_height: float = LAYOUT.HEADER_HEIGHT
    # Gap between header band and first gridline. 0 maps start_hour straight
    # onto header_height: row_top = header + (hour - start_hour) * hour_height
    grid_top_margin: float = LAYOUT.GRID_TOP_MARGIN
    time_column_width: float = LAYOUT.TIME_COLUMN_WIDTH
    time_column_left_padding: float = LAYOUT.TIME_COLUMN_LEFT_PADDING
    event_padding: float = LAYOUT.EVENT_PADDING
    corner_radius: float = LAYOUT.CORNER_RADIUS
    gridline_minutes: int = LAYOUT.GRIDLINE_MINUTES   # Horizontal gridline granularity
    bottom_margin: float = LAYOUT.BOTTOM_MARGIN        # Extra scroll space below the last hour
    min_zoom: float = LAYOUT.MIN_ZOOM
    max_zoom: float = LAYOUT.MAX_ZOOM

    def __post_init__(self) -> None:
        if self.end_hour <= self.start_hour:
            raise ValueError(f"end_hour ({self.end_hour}) must be after start_hour ({self.start_hour})")
        if self.gridline_minutes <= 0:
            raise ValueError(f"gridline_minutes must be positive, got {self.gridline_minutes}")
        if not 0 < self.min_zoom <= self.max_zoom:
            raise ValueError(f"Invalid zoom range [{self.min_zoom}, {self.max_zoom}]")
        if self.base_hour_height <= 0:
            raise ValueError(f"base_hour_height must be positive, got {self.base_hour_height}")

    @property
    def total_hours(self) -> int:
        return self.end_hour - self.start_hour

    def base_column_width(self, container: ContainerGeometry, category_count: int) -> float:
        """Unzoomed column width: the container minus the time column, split evenly."""
        if category_count <= 0:
            return 0.0
        return (container.width - self.time_column_width) / category_count

    def unzoomed_content_size(self, container: ContainerGeometry, category_count: int) -> Size:
        """Total grid extent at zoom 1, the basis for zoom scaling and scroll bounds."""
        width = self.time_column_width + self.base_column_width(container, category_count) * category_count
        height = (self.header_height + self.grid_top_margin
                  + self.base_hour_height * self.total_hours + self.bottom_margin)
        return Size(width, height)


@dataclass
class Schedule:
    """Categories, items and the layout they are meant to be shown with."""
    categories: List[Category] = field(default_factory=list)
    items: List[ScheduleItem] = field(default_factory=list)
    layout: LayoutConstants = field(default_factory=LayoutConstants)

    def category_indices(self) -> Dict[CategoryKey, int]:
        return category_indices(self.categories)


def category_indices(categories: Sequence[Category]) -> Dict[CategoryKey, int]:
    """Map category key to display column index (first occurrence wins)."""
    indices: Dict[CategoryKey, int] = {}
    for index, category in enumerate(categories):
        indices.setdefault(category.key, index)
    return indices
