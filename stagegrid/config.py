"""Centralized configuration for StageGrid.

This module contains all configuration constants, colors, and magic numbers
used by the schedule grid renderer and its Qt host.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class RenderingConfig:
    """Configuration for grid and event rendering."""
    # Base font sizes in pixels, scaled by the current zoom
    EVENT_TIME_FONT_SIZE: float = 12.0
    EVENT_LABEL_FONT_SIZE: float = 16.0
    HEADER_FONT_SIZE: float = 18.0
    TIME_LABEL_FONT_SIZE: float = 10.0
    FONT_FAMILY: str = "Sans Serif"

    # Event text inset inside the card (not zoomed)
    EVENT_TEXT_INSET: float = 8.0

    # Line settings
    GRID_LINE_WIDTH: float = 1.0

    # Text measurement cache
    TEXT_CACHE_MAX_ENTRIES: int = 2048

    # Canvas settings
    MIN_CANVAS_WIDTH: int = 200
    MIN_CANVAS_HEIGHT: int = 200


@dataclass(frozen=True)
class ColorScheme:
    """Color tokens for the cream schedule theme."""
    # Backgrounds
    SURFACE: str = "#FFFFF0"
    COLUMN_BACKGROUND: str = "#FFFFF0"
    COLUMN_BACKGROUND_ALT: str = "#FBF7E6"

    # Lines
    GRID: str = "#E8DBC3"

    # Text
    TEXT: str = "#421E17"
    TEXT_MUTED: str = "#786B68"

    # Zoom indicator
    INDICATOR_BACKGROUND: str = "#BF221513"  # #AARRGGBB, 75% alpha
    INDICATOR_TEXT: str = "#FFFFF0"

    # Fallback event color when an item carries none
    DEFAULT_EVENT: str = "#90A4AE"


@dataclass(frozen=True)
class UIConfig:
    """UI-related configuration for the Qt host."""
    # Wheel and keyboard zoom
    ZOOM_WHEEL_FACTOR: float = 1.1
    ZOOM_KEY_FACTOR: float = 1.25

    # Wheel panning in pixels per notch (120 angle delta units)
    SCROLL_STEP_PX: float = 40.0

    # Zoom indicator geometry
    INDICATOR_WIDTH: int = 108
    INDICATOR_HEIGHT: int = 32
    INDICATOR_BOTTOM_MARGIN: int = 12
    INDICATOR_RADIUS: int = 16
    INDICATOR_FONT_SIZE: float = 14.0

    # Main window
    WINDOW_TITLE: str = "Festival Schedule"
    WINDOW_SIZE: tuple[int, int] = (420, 760)


@dataclass(frozen=True)
class LayoutDefaults:
    """Default layout constants of the festival schedule."""
    START_HOUR: int = 12
    END_HOUR: int = 23
    BASE_HOUR_HEIGHT: float = 100.0
    HEADER_HEIGHT: float = 56.0
    GRID_TOP_MARGIN: float = 28.0  # 0 puts start_hour directly under the header
    TIME_COLUMN_WIDTH: float = 44.0
    TIME_COLUMN_LEFT_PADDING: float = 12.0
    EVENT_PADDING: float = 4.0
    CORNER_RADIUS: float = 6.0
    GRIDLINE_MINUTES: int = 30
    BOTTOM_MARGIN: float = 50.0
    MIN_ZOOM: float = 1.0
    MAX_ZOOM: float = 2.5


# Global instances for easy access
RENDERING = RenderingConfig()
COLORS = ColorScheme()
UI = UIConfig()
LAYOUT = LayoutDefaults()
