"""StageGrid - zoomable, pannable schedule grid with sticky headers (PySide6)."""

__version__ = "0.1.0"

from .data_model import (
    Category, ScheduleItem, Schedule, ViewportState, ContainerGeometry, Size, LayoutConstants
)
from .viewport_transform import ViewportTransform
from .grid_renderer import GridRenderer, GridGeometry
from .primitives import (
    Point, ClipRect, MeasuredText, RectPrimitive, RoundedRectPrimitive, LinePrimitive,
    TextPrimitive, replay
)
from .protocols import TextMeasurer, TextStyle, TextSize, Painter
from .validation import ScheduleValidationError, validate_schedule
from .sample_data import create_sample_schedule
from .persistence import load_schedule, save_schedule
from .config import RENDERING, COLORS, UI, LAYOUT

__all__ = [
    'Category', 'ScheduleItem', 'Schedule', 'ViewportState', 'ContainerGeometry', 'Size',
    'LayoutConstants', 'ViewportTransform', 'GridRenderer', 'GridGeometry',
    'Point', 'ClipRect', 'MeasuredText', 'RectPrimitive', 'RoundedRectPrimitive',
    'LinePrimitive', 'TextPrimitive', 'replay',
    'TextMeasurer', 'TextStyle', 'TextSize', 'Painter',
    'ScheduleValidationError', 'validate_schedule', 'create_sample_schedule',
    'load_schedule', 'save_schedule',
    'RENDERING', 'COLORS', 'UI', 'LAYOUT'
]
