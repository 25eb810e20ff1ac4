"""Draw primitives produced by the grid renderer.

The renderer never paints. It returns a flat, ordered list of these immutable
records in screen coordinates (back to front). Any imperative 2D surface can
consume the list directly, or a push-style host can feed it through replay()
into an object implementing the Painter protocol.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Union

from .protocols import Painter, TextStyle


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def translated(self, dx: float, dy: float) -> "Point":
        return Point(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class ClipRect:
    """Axis-aligned clip region. Content outside it must not be painted."""
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def intersected(self, other: "ClipRect") -> "ClipRect":
        left = max(self.left, other.left)
        top = max(self.top, other.top)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        return ClipRect(left, top, max(0.0, right - left), max(0.0, bottom - top))

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom


@dataclass(frozen=True)
class MeasuredText:
    """A string together with its style and externally measured extent."""
    text: str
    style: TextStyle
    width: float
    height: float


@dataclass(frozen=True)
class RectPrimitive:
    top_left: Point
    width: float
    height: float
    color: str
    clip: Optional[ClipRect] = None


@dataclass(frozen=True)
class RoundedRectPrimitive:
    top_left: Point
    width: float
    height: float
    corner_radius: float
    color: str
    clip: Optional[ClipRect] = None


@dataclass(frozen=True)
class LinePrimitive:
    start: Point
    end: Point
    color: str
    clip: Optional[ClipRect] = None


@dataclass(frozen=True)
class TextPrimitive:
    top_left: Point
    text: MeasuredText
    color: str
    clip: Optional[ClipRect] = None


Primitive = Union[RectPrimitive, RoundedRectPrimitive, LinePrimitive, TextPrimitive]


def replay(primitives: Iterable[Primitive], painter: Painter) -> int:
    """Issue painter calls for each primitive in order.

    Clip changes are only sent when the clip differs from the previous
    primitive's, and the clip is always cleared at the end.

    Returns:
        Number of primitives painted
    """
    current_clip: Optional[ClipRect] = None
    count = 0
    for primitive in primitives:
        if primitive.clip != current_clip:
            painter.set_clip(primitive.clip)
            current_clip = primitive.clip

        if isinstance(primitive, RectPrimitive):
            painter.rect(primitive.top_left, primitive.width, primitive.height, primitive.color)
        elif isinstance(primitive, RoundedRectPrimitive):
            painter.rounded_rect(primitive.top_left, primitive.width, primitive.height,
                                 primitive.corner_radius, primitive.color)
        elif isinstance(primitive, LinePrimitive):
            painter.line(primitive.start, primitive.end, primitive.color)
        elif isinstance(primitive, TextPrimitive):
            painter.text(primitive.top_left, primitive.text, primitive.color)
        else:
            raise TypeError(f"Unknown primitive: {primitive!r}")
        count += 1

    if current_clip is not None:
        painter.set_clip(None)
    return count
