"""Built-in festival schedule used by the viewer when no file is given."""

from typing import List

from .clock_utils import parse_clock
from .data_model import Category, ScheduleItem, Schedule, LayoutConstants
from .validation import ensure_valid_schedule

FESTIVAL_STAGES: List[Category] = [
    Category(key="main", label="Main Stage"),
    Category(key="rock", label="Rock Stage"),
    Category(key="electro", label="Electro Stage"),
]

# (artist, stage, start, end, color)
_FESTIVAL_ACTS = [
    ("DJ A", "electro", "12:00", "13:00", "#E57373"),
    ("Band X", "main", "13:00", "14:30", "#81C784"),
    ("RockZ", "rock", "14:00", "15:00", "#64B5F6"),
    ("Ambient Line", "electro", "15:00", "16:30", "#BA68C8"),
    ("Florence + The Machine", "main", "16:30", "18:00", "#FFD54F"),
    ("The National", "rock", "17:00", "18:00", "#4DB6AC"),
    ("Jamie xx", "electro", "18:00", "19:00", "#A1887F"),
    ("Tame Impala", "main", "19:00", "20:30", "#90A4AE"),
    ("Arctic Monkeys", "rock", "20:00", "21:30", "#FF8A65"),
    ("Radiohead", "main", "21:30", "23:00", "#7986CB"),
]


def create_sample_schedule() -> Schedule:
    """Create the festival schedule: three stages, ten acts from 12:00 to 23:00."""
    items = [
        ScheduleItem(
            label=artist,
            category=stage,
            start_minutes=parse_clock(start),
            end_minutes=parse_clock(end),
            color=color,
        )
        for artist, stage, start, end, color in _FESTIVAL_ACTS
    ]
    categories = list(FESTIVAL_STAGES)
    ensure_valid_schedule(categories, items)
    return Schedule(categories=categories, items=items, layout=LayoutConstants())
