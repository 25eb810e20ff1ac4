"""Protocol definitions for the capabilities the layout engine consumes.

The renderer depends on two external capabilities: measuring text and,
for push-style hosts, a painter. Keeping them as protocols keeps the layout
code free of any toolkit dependency; the Qt implementations live in
text_measurer.py and qt_painter.py.
"""

from dataclasses import dataclass
from typing import Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from .primitives import ClipRect, MeasuredText, Point


@dataclass(frozen=True)
class TextStyle:
    """Style passed to the text measurer."""
    size_px: float
    bold: bool = False
    color: str = "#000000"


@dataclass(frozen=True)
class TextSize:
    width: float
    height: float


class TextMeasurer(Protocol):
    """Measures a string's extent.

    Implementations must be deterministic for fixed inputs within a
    rendering session, otherwise layout stops being idempotent.
    """

    def measure(self, text: str, style: TextStyle) -> TextSize:
        """Return the width and height the text occupies when painted.

        Args:
            text: The string to measure
            style: Font size, weight and color

        Returns:
            Measured size in pixels
        """
        ...


class Painter(Protocol):
    """Imperative 2D surface receiving replayed primitives."""

    def rect(self, top_left: "Point", width: float, height: float, color: str) -> None:
        ...

    def rounded_rect(self, top_left: "Point", width: float, height: float,
                     corner_radius: float, color: str) -> None:
        ...

    def line(self, start: "Point", end: "Point", color: str) -> None:
        ...

    def text(self, top_left: "Point", text: "MeasuredText", color: str) -> None:
        ...

    def set_clip(self, clip: Optional["ClipRect"]) -> None:
        """Restrict subsequent painting to clip, or remove the clip if None."""
        ...
