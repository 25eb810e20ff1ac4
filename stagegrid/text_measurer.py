"""Text measurement backed by Qt font metrics."""

from typing import Dict, Optional, Tuple

from PySide6.QtGui import QFont, QFontMetricsF

from .protocols import TextSize, TextStyle
from . import config

RENDERING = config.RENDERING


def font_for_style(style: TextStyle, family: Optional[str] = None) -> QFont:
    """Build the QFont used both for measuring and for painting a style."""
    font = QFont(family or RENDERING.FONT_FAMILY)
    font.setPixelSize(max(1, round(style.size_px)))
    font.setBold(style.bold)
    return font


class QtTextMeasurer:
    """TextMeasurer implementation using QFontMetricsF.

    Results are cached per (text, style) so a layout pass at a fixed zoom
    measures each distinct label once. The cache is bounded and cleared
    wholesale when full; measurements stay deterministic because the
    metrics of a font never change within a session.
    """

    def __init__(self, family: Optional[str] = None,
                 max_entries: int = RENDERING.TEXT_CACHE_MAX_ENTRIES) -> None:
        self._family = family or RENDERING.FONT_FAMILY
        self._max_entries = max_entries
        self._cache: Dict[Tuple[str, TextStyle], TextSize] = {}
        self._metrics: Dict[Tuple[int, bool], QFontMetricsF] = {}

    @property
    def family(self) -> str:
        return self._family

    def measure(self, text: str, style: TextStyle) -> TextSize:
        key = (text, style)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        metrics = self._metrics_for(style)
        size = TextSize(width=metrics.horizontalAdvance(text), height=metrics.height())

        if len(self._cache) >= self._max_entries:
            self._cache.clear()
        self._cache[key] = size
        return size

    def clear(self) -> None:
        self._cache.clear()
        self._metrics.clear()

    def _metrics_for(self, style: TextStyle) -> QFontMetricsF:
        font = font_for_style(style, self._family)
        metrics_key = (font.pixelSize(), style.bold)
        metrics = self._metrics.get(metrics_key)
        if metrics is None:
            metrics = QFontMetricsF(font)
            self._metrics[metrics_key] = metrics
        return metrics
