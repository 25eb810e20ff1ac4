"""Painter implementation that replays layout primitives onto a QPainter."""

from typing import Optional

from PySide6.QtCore import Qt, QPointF, QRectF
from PySide6.QtGui import QPainter, QPen, QColor, QBrush, QFontMetricsF

from .primitives import Point, ClipRect, MeasuredText
from .text_measurer import font_for_style
from . import config

RENDERING = config.RENDERING


class QtPainterSurface:
    """Adapts a QPainter to the five-operation Painter protocol.

    Each clip scope is wrapped in save()/restore(), so replayed primitives
    never leak a clip region into whatever the widget paints afterwards.
    """

    def __init__(self, painter: QPainter, font_family: Optional[str] = None) -> None:
        self._painter = painter
        self._font_family = font_family or RENDERING.FONT_FAMILY
        self._clipped = False

    def rect(self, top_left: Point, width: float, height: float, color: str) -> None:
        self._painter.fillRect(QRectF(top_left.x, top_left.y, width, height), QColor(color))

    def rounded_rect(self, top_left: Point, width: float, height: float,
                     corner_radius: float, color: str) -> None:
        self._painter.setPen(Qt.PenStyle.NoPen)
        self._painter.setBrush(QBrush(QColor(color)))
        self._painter.drawRoundedRect(QRectF(top_left.x, top_left.y, width, height),
                                      corner_radius, corner_radius)

    def line(self, start: Point, end: Point, color: str) -> None:
        pen = QPen(QColor(color))
        pen.setWidthF(RENDERING.GRID_LINE_WIDTH)
        self._painter.setPen(pen)
        self._painter.drawLine(QPointF(start.x, start.y), QPointF(end.x, end.y))

    def text(self, top_left: Point, text: MeasuredText, color: str) -> None:
        font = font_for_style(text.style, self._font_family)
        self._painter.setFont(font)
        self._painter.setPen(QColor(color))
        # Measured boxes are top-left anchored, drawText wants the baseline
        ascent = QFontMetricsF(font).ascent()
        self._painter.drawText(QPointF(top_left.x, top_left.y + ascent), text.text)

    def set_clip(self, clip: Optional[ClipRect]) -> None:
        if self._clipped:
            self._painter.restore()
            self._clipped = False
        if clip is not None:
            self._painter.save()
            self._painter.setClipRect(QRectF(clip.left, clip.top, clip.width, clip.height))
            self._clipped = True
