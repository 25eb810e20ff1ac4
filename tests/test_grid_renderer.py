"""Unit tests for the GridRenderer layout pass."""

import math
from typing import List

import pytest

from stagegrid.config import COLORS
from stagegrid.data_model import LayoutConstants, ScheduleItem, Size, ViewportState
from stagegrid.grid_renderer import GridGeometry, GridRenderer
from stagegrid.primitives import (
    ClipRect, LinePrimitive, Point, RectPrimitive, RoundedRectPrimitive, TextPrimitive
)
from stagegrid.sample_data import create_sample_schedule


def rounded_rects(primitives) -> List[RoundedRectPrimitive]:
    return [p for p in primitives if isinstance(p, RoundedRectPrimitive)]


def texts(primitives) -> List[TextPrimitive]:
    return [p for p in primitives if isinstance(p, TextPrimitive)]


def text_by_content(primitives, content: str) -> TextPrimitive:
    matches = [p for p in texts(primitives) if p.text.text == content]
    assert len(matches) == 1, f"expected one {content!r}, got {len(matches)}"
    return matches[0]


@pytest.fixture
def renderer(plain_layout, measurer):
    return GridRenderer(plain_layout, measurer)


@pytest.fixture
def band_x(item_factory):
    return item_factory("Band X", "main", "13:00", "14:30")


class TestGridGeometry:
    def test_mapping_at_zoom_1(self, plain_layout, plain_container) -> None:
        geometry = GridGeometry.compute(plain_layout, plain_container, 3, 1.0)
        assert geometry.base_column_width == 100.0
        assert geometry.column_left(0) == 60.0
        assert geometry.column_left(2) == 260.0
        assert geometry.grid_top == 80.0
        assert geometry.row_top(13 * 60) == 180.0
        assert geometry.row_height(13 * 60, 14 * 60 + 30) == 150.0
        assert geometry.grid_bottom == 80.0 + 11 * 100.0
        assert geometry.grid_right == 360.0

    def test_mapping_scales_with_zoom(self, plain_layout, plain_container) -> None:
        geometry = GridGeometry.compute(plain_layout, plain_container, 3, 2.0)
        assert geometry.column_width == 200.0
        assert geometry.hour_height == 200.0
        assert geometry.column_left(1) == 260.0
        assert geometry.row_top(13 * 60) == 280.0
        assert geometry.corner_radius == 12.0

    def test_grid_top_margin_shifts_rows(self, plain_container) -> None:
        layout = LayoutConstants(header_height=80.0, grid_top_margin=20.0, time_column_width=60.0)
        geometry = GridGeometry.compute(layout, plain_container, 3, 1.0)
        assert geometry.row_top(12 * 60) == 100.0

    def test_default_margin_sits_below_header(self, plain_container) -> None:
        geometry = GridGeometry.compute(LayoutConstants(), plain_container, 3, 1.0)
        assert geometry.row_top(12 * 60) == 56.0 + 28.0

        flush = LayoutConstants(grid_top_margin=0.0)
        geometry = GridGeometry.compute(flush, plain_container, 3, 1.0)
        assert geometry.row_top(13 * 60) == flush.header_height + flush.base_hour_height

    def test_event_rect_applies_padding(self, plain_container) -> None:
        layout = LayoutConstants(header_height=80.0, grid_top_margin=0.0, time_column_width=60.0,
                                 event_padding=4.0)
        geometry = GridGeometry.compute(layout, plain_container, 3, 1.0)
        assert geometry.event_rect(1, 13 * 60, 14 * 60) == (164.0, 184.0, 92.0, 92.0)

    def test_event_rect_empty_after_padding(self, plain_container) -> None:
        layout = LayoutConstants(header_height=80.0, grid_top_margin=0.0, time_column_width=60.0,
                                 event_padding=4.0)
        geometry = GridGeometry.compute(layout, plain_container, 3, 1.0)
        # 4 minutes is 6.7px tall, less than the padding on both sides
        assert geometry.event_rect(0, 13 * 60, 13 * 60 + 4) is None

    def test_row_height_never_negative(self, plain_layout, plain_container) -> None:
        geometry = GridGeometry.compute(plain_layout, plain_container, 3, 1.0)
        assert geometry.row_height(14 * 60, 13 * 60) == 0.0


class TestContentSize:
    def test_unzoomed_content_size(self, renderer, plain_container, categories) -> None:
        assert renderer.unzoomed_content_size(plain_container, categories) == Size(360.0, 1180.0)

    def test_default_layout_includes_margins(self, measurer, categories) -> None:
        renderer = GridRenderer(LayoutConstants(), measurer)
        size = renderer.unzoomed_content_size(Size(360.0, 600.0), categories)
        assert size.width == 360.0
        assert size.height == 56.0 + 28.0 + 11 * 100.0 + 50.0


class TestLayout:
    def test_coordinate_scenario(self, renderer, plain_container, categories, band_x) -> None:
        primitives = renderer.layout(ViewportState(), plain_container, categories, [band_x])

        cards = rounded_rects(primitives)
        assert len(cards) == 1
        card = cards[0]
        assert card.top_left == Point(60.0, 180.0)
        assert card.width == 100.0
        assert card.height == 150.0
        assert card.color == band_x.color

    def test_coordinate_scenario_scrolled(self, renderer, plain_container, categories, band_x) -> None:
        state = ViewportState(zoom=1.0, offset_x=-50.0, offset_y=-30.0)
        card = rounded_rects(renderer.layout(state, plain_container, categories, [band_x]))[0]
        assert card.top_left == Point(10.0, 150.0)

    def test_zoomed_layout(self, renderer, plain_container, categories, band_x) -> None:
        state = ViewportState(zoom=2.0)
        primitives = renderer.layout(state, plain_container, categories, [band_x])

        card = rounded_rects(primitives)[0]
        assert card.top_left == Point(60.0, 280.0)
        assert card.width == 200.0
        assert card.height == 300.0
        assert card.corner_radius == 12.0

        header = text_by_content(primitives, "Main Stage")
        assert header.text.style.size_px == 36.0
        assert header.text.style.bold

    def test_idempotent(self, renderer, plain_container, categories) -> None:
        schedule = create_sample_schedule()
        state = ViewportState(zoom=1.7, offset_x=-120.0, offset_y=-333.0)
        first = renderer.layout(state, plain_container, categories, schedule.items)
        second = renderer.layout(state, plain_container, categories, schedule.items)
        assert first == second
        assert first is not second

    def test_category_filter(self, renderer, plain_container, categories, item_factory, band_x) -> None:
        jazz = item_factory("Jazz Trio", "jazz", "15:00", "16:00")
        primitives = renderer.layout(ViewportState(), plain_container, categories, [band_x, jazz])

        assert len(rounded_rects(primitives)) == 1
        assert all(p.text.text != "Jazz Trio" for p in texts(primitives))
        assert all(p.text.text != "15:00-16:00" for p in texts(primitives))

    def test_filtered_category_set(self, renderer, plain_container, categories, band_x, item_factory) -> None:
        rock = item_factory("RockZ", "rock", "14:00", "15:00")
        primitives = renderer.layout(ViewportState(), plain_container, categories[1:], [band_x, rock])

        cards = rounded_rects(primitives)
        assert len(cards) == 1
        # Two visible columns share the 300px next to the time column
        assert cards[0].top_left == Point(60.0, 280.0)
        assert cards[0].width == 150.0

    def test_overlapping_items_drawn_in_list_order(self, renderer, plain_container, categories,
                                                   item_factory) -> None:
        first = item_factory("First", "main", "13:00", "14:00", color="#111111")
        second = item_factory("Second", "main", "13:30", "14:30", color="#222222")
        cards = rounded_rects(renderer.layout(ViewportState(), plain_container, categories, [first, second]))
        assert [c.color for c in cards] == ["#111111", "#222222"]

    def test_malformed_item_not_drawn(self, renderer, plain_container, categories) -> None:
        backwards = ScheduleItem(label="Backwards", category="main", start_minutes=900, end_minutes=840)
        empty = ScheduleItem(label="Empty", category="rock", start_minutes=900, end_minutes=900)
        primitives = renderer.layout(ViewportState(), plain_container, categories, [backwards, empty])

        assert rounded_rects(primitives) == []
        for p in primitives:
            if isinstance(p, (RectPrimitive, RoundedRectPrimitive)):
                assert p.width >= 0 and p.height >= 0


class TestLayers:
    def test_layer_order(self, renderer, plain_container, categories, band_x) -> None:
        primitives = renderer.layout(ViewportState(), plain_container, categories, [band_x])

        surface = primitives[0]
        assert surface == RectPrimitive(Point(0.0, 0.0), 360.0, 600.0, COLORS.SURFACE)

        corner = primitives[-1]
        assert corner == RectPrimitive(Point(0.0, 0.0), 60.0, 80.0, COLORS.SURFACE)

        header_band = RectPrimitive(Point(0.0, 0.0), 360.0, 80.0, COLORS.SURFACE)
        time_band = RectPrimitive(Point(0.0, 80.0), 60.0, 520.0, COLORS.SURFACE)
        header_index = primitives.index(header_band)
        time_index = primitives.index(time_band)
        card_index = primitives.index(rounded_rects(primitives)[0])
        assert card_index < header_index < time_index < len(primitives) - 1

        # Header labels come after the header band, hour labels after the time band
        header_label = primitives.index(text_by_content(primitives, "Main Stage"))
        hour_label = primitives.index(text_by_content(primitives, "12:00"))
        assert header_index < header_label < time_index < hour_label

    def test_gridlines(self, renderer, plain_container, categories) -> None:
        primitives = renderer.layout(ViewportState(), plain_container, categories, [])
        lines = [p for p in primitives if isinstance(p, LinePrimitive)]
        horizontal = [l for l in lines if l.start.y == l.end.y]
        vertical = [l for l in lines if l.start.x == l.end.x]

        # 11 hours at 30 minute granularity, both edges included
        assert len(horizontal) == 23
        assert horizontal[0].start == Point(60.0, 80.0)
        assert horizontal[0].end == Point(360.0, 80.0)
        assert horizontal[1].start.y == 130.0
        assert horizontal[-1].start.y == 1180.0

        assert len(vertical) == 4
        assert [l.start.x for l in vertical] == [60.0, 160.0, 260.0, 360.0]
        assert all(l.start.y == 80.0 and l.end.y == 1180.0 for l in vertical)

    def test_column_backgrounds_alternate(self, renderer, plain_container, categories) -> None:
        primitives = renderer.layout(ViewportState(), plain_container, categories, [])
        columns = [p for p in primitives[1:] if isinstance(p, RectPrimitive) and p.width == 100.0]
        assert [c.color for c in columns] == [
            COLORS.COLUMN_BACKGROUND, COLORS.COLUMN_BACKGROUND_ALT, COLORS.COLUMN_BACKGROUND
        ]
        assert columns[1].top_left == Point(160.0, 80.0)
        assert columns[1].height == 1100.0

    def test_header_sticks_vertically(self, renderer, plain_container, categories) -> None:
        state = ViewportState(zoom=1.0, offset_x=-50.0, offset_y=-300.0)
        label = text_by_content(renderer.layout(state, plain_container, categories, []), "Main Stage")

        # "Main Stage" is 90 x 21.6 at 18px
        assert label.top_left.x == pytest.approx(60.0 + (100.0 - 90.0) / 2 - 50.0)
        assert label.top_left.y == pytest.approx((80.0 - 21.6) / 2)
        assert label.clip == ClipRect(10.0, 0.0, 100.0, 80.0)

    def test_header_clip_stays_inside_band(self, renderer, plain_container, categories) -> None:
        state = ViewportState(zoom=1.0, offset_x=-100.0, offset_y=0.0)
        label = text_by_content(renderer.layout(state, plain_container, categories, []), "Main Stage")
        assert label.clip == ClipRect(0.0, 0.0, 60.0, 80.0)

    def test_time_column_sticks_horizontally(self, renderer, plain_container, categories) -> None:
        state = ViewportState(zoom=1.0, offset_x=-200.0, offset_y=-30.0)
        primitives = renderer.layout(state, plain_container, categories, [])

        label = text_by_content(primitives, "13:00")
        # 10px font, 12px line height
        assert label.top_left.x == 12.0
        assert label.top_left.y == pytest.approx(80.0 + 100.0 - 30.0 - 6.0)
        assert label.color == COLORS.TEXT_MUTED
        assert label.clip == ClipRect(0.0, 80.0, 60.0, 520.0)

        hour_labels = [p for p in texts(primitives) if p.clip == label.clip]
        assert [p.text.text for p in hour_labels][0] == "12:00"
        assert [p.text.text for p in hour_labels][-1] == "23:00"
        assert len(hour_labels) == 12


class TestEventText:
    def test_text_clipped_to_card(self, renderer, plain_container, categories, band_x) -> None:
        primitives = renderer.layout(ViewportState(), plain_container, categories, [band_x])
        card = rounded_rects(primitives)[0]
        card_clip = ClipRect(card.top_left.x, card.top_left.y, card.width, card.height)

        time_text = text_by_content(primitives, "13:00-14:30")
        label = text_by_content(primitives, "Band X")
        assert time_text.clip == card_clip
        assert label.clip == card_clip

        assert time_text.top_left == Point(68.0, 188.0)
        assert label.top_left.x == 68.0
        assert label.top_left.y == pytest.approx(188.0 + 12.0 * 1.2)
        assert not time_text.text.style.bold
        assert label.text.style.bold
        assert label.text.style.size_px == 16.0

    def test_long_label_measured_wider_than_card(self, renderer, plain_container, categories,
                                                 item_factory) -> None:
        long_item = item_factory("Florence + The Machine", "main", "16:30", "18:00")
        primitives = renderer.layout(ViewportState(), plain_container, categories, [long_item])
        label = text_by_content(primitives, "Florence + The Machine")
        assert label.top_left.x + label.text.width > label.clip.right

    def test_text_sizes_scale_with_zoom(self, renderer, plain_container, categories, band_x) -> None:
        primitives = renderer.layout(ViewportState(zoom=2.5), plain_container, categories, [band_x])
        assert text_by_content(primitives, "13:00-14:30").text.style.size_px == 30.0
        assert text_by_content(primitives, "Band X").text.style.size_px == 40.0
        assert text_by_content(primitives, "12:00").text.style.size_px == 25.0


class TestDegenerateInput:
    @pytest.mark.parametrize("container", [
        Size(0.0, 0.0), Size(0.0, 600.0), Size(360.0, -1.0), Size(math.nan, 600.0)
    ])
    def test_empty_container(self, renderer, categories, band_x, container) -> None:
        assert renderer.layout(ViewportState(), container, categories, [band_x]) == []

    def test_no_categories(self, renderer, plain_container, band_x) -> None:
        assert renderer.layout(ViewportState(), plain_container, [], [band_x]) == []

    def test_container_narrower_than_time_column(self, renderer, categories, band_x) -> None:
        assert renderer.layout(ViewportState(), Size(50.0, 600.0), categories, [band_x]) == []

    def test_non_finite_state(self, renderer, plain_container, categories, band_x) -> None:
        state = ViewportState(zoom=math.nan)
        assert renderer.layout(state, plain_container, categories, [band_x]) == []


class TestSampleSchedule:
    def test_all_acts_drawn(self, measurer) -> None:
        schedule = create_sample_schedule()
        renderer = GridRenderer(schedule.layout, measurer)
        primitives = renderer.layout(ViewportState(), Size(420.0, 760.0), schedule.categories, schedule.items)
        assert len(rounded_rects(primitives)) == len(schedule.items) == 10
