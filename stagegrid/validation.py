"""Ingestion-time validation of schedule data.

The renderer never validates items itself; malformed data is reported here,
when a schedule is built or loaded, so callers get every problem at once.
"""

from typing import List, Sequence

from .clock_utils import format_clock
from .data_model import Category, ScheduleItem


class ScheduleValidationError(ValueError):
    """Raised when schedule data fails validation. Carries every finding."""

    def __init__(self, problems: Sequence[str]) -> None:
        self.problems: List[str] = list(problems)
        summary = "; ".join(self.problems)
        super().__init__(f"Invalid schedule ({len(self.problems)} problem(s)): {summary}")


def validate_schedule(categories: Sequence[Category], items: Sequence[ScheduleItem]) -> List[str]:
    """Return a list of human-readable problems, empty when the data is valid.

    Items referencing categories outside the configured set are not problems:
    a filtered view may legitimately hide some categories.
    """
    problems: List[str] = []

    seen_keys = set()
    for category in categories:
        if category.key in seen_keys:
            problems.append(f"Duplicate category key {category.key!r}")
        seen_keys.add(category.key)

    for position, item in enumerate(items):
        if item.start_minutes < 0:
            problems.append(f"Item {position} ({item.label!r}) starts before midnight: {item.start_minutes} min")
        if item.end_minutes <= item.start_minutes:
            problems.append(
                f"Item {position} ({item.label!r}) ends at {format_clock(item.end_minutes)}, "
                f"not after its start {format_clock(item.start_minutes)}"
            )
    return problems


def ensure_valid_schedule(categories: Sequence[Category], items: Sequence[ScheduleItem]) -> None:
    """Raise ScheduleValidationError if validate_schedule finds anything."""
    problems = validate_schedule(categories, items)
    if problems:
        raise ScheduleValidationError(problems)
