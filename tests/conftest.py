"""Common test fixtures and utilities for StageGrid tests."""

import os
from typing import List, Tuple

import pytest

# Run Qt headless when no display is configured.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from stagegrid.clock_utils import parse_clock
from stagegrid.data_model import Category, ScheduleItem, LayoutConstants, Size
from stagegrid.protocols import TextSize, TextStyle


class FakeTextMeasurer:
    """Deterministic measurer: half an em per character, 1.2 em line height."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, TextStyle]] = []

    def measure(self, text: str, style: TextStyle) -> TextSize:
        self.calls.append((text, style))
        return TextSize(width=len(text) * style.size_px * 0.5, height=style.size_px * 1.2)


def make_item(label: str, category: str, start: str, end: str, color: str = "#81C784") -> ScheduleItem:
    """Helper to build an item from clock strings."""
    return ScheduleItem(label=label, category=category,
                        start_minutes=parse_clock(start), end_minutes=parse_clock(end), color=color)


@pytest.fixture
def measurer():
    return FakeTextMeasurer()


@pytest.fixture
def categories():
    """Three festival stages in display order."""
    return [
        Category(key="main", label="Main Stage"),
        Category(key="rock", label="Rock Stage"),
        Category(key="electro", label="Electro Stage"),
    ]


@pytest.fixture
def plain_layout():
    """Layout without margins or padding, so rectangles map 1:1 onto hours."""
    return LayoutConstants(
        start_hour=12,
        end_hour=23,
        base_hour_height=100.0,
        header_height=80.0,
        grid_top_margin=0.0,
        time_column_width=60.0,
        event_padding=0.0,
        corner_radius=6.0,
        bottom_margin=0.0,
    )


@pytest.fixture
def plain_container():
    """Container giving three 100px columns next to the 60px time column."""
    return Size(360.0, 600.0)


@pytest.fixture
def item_factory():
    return make_item
