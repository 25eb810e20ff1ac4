"""Tests for the Qt font metrics text measurer."""

import pytest
from PySide6.QtWidgets import QApplication

from stagegrid.protocols import TextStyle
from stagegrid.text_measurer import QtTextMeasurer, font_for_style


@pytest.fixture(scope="module")
def qapp():
    """Create QApplication for tests."""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


def test_font_for_style(qapp) -> None:
    font = font_for_style(TextStyle(size_px=18.0, bold=True))
    assert font.pixelSize() == 18
    assert font.bold()

    tiny = font_for_style(TextStyle(size_px=0.2))
    assert tiny.pixelSize() == 1
    assert not tiny.bold()


def test_measure_grows_with_text_and_size(qapp) -> None:
    measurer = QtTextMeasurer()
    style = TextStyle(size_px=16.0)

    short = measurer.measure("M", style)
    long = measurer.measure("MMMMMMMM", style)
    large = measurer.measure("M", TextStyle(size_px=40.0))

    assert short.width > 0
    assert long.width > short.width
    assert large.height > short.height


def test_measure_is_deterministic_and_cached(qapp) -> None:
    measurer = QtTextMeasurer()
    style = TextStyle(size_px=12.0)

    first = measurer.measure("13:00-14:30", style)
    second = measurer.measure("13:00-14:30", style)

    assert first == second
    assert first is second


def test_cache_is_bounded(qapp) -> None:
    measurer = QtTextMeasurer(max_entries=2)
    style = TextStyle(size_px=12.0)
    for text in ("a", "b", "c"):
        measurer.measure(text, style)
    assert len(measurer._cache) == 1

    measurer.clear()
    assert measurer._cache == {}


def test_custom_family(qapp) -> None:
    assert QtTextMeasurer(family="Monospace").family == "Monospace"
