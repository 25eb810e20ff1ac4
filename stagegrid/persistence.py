"""Persistence module for loading and saving schedules as YAML.

File layout:

    layout:                 # optional, any LayoutConstants field
      start_hour: 12
      end_hour: 23
    categories:
      - {key: main, label: Main Stage}
    items:
      - {label: Band X, category: main, start: "13:00", end: "14:30", color: "#81C784"}

Validation runs at load time, so malformed items are reported to the caller
here instead of being discovered during layout.
"""

import pathlib
from dataclasses import asdict, fields
from typing import Any, Dict, List, Union

import yaml

from .clock_utils import format_clock, parse_clock
from .data_model import Category, ScheduleItem, Schedule, LayoutConstants
from .validation import ScheduleValidationError, ensure_valid_schedule
from . import config

PathLike = Union[str, pathlib.Path]

_LAYOUT_FIELDS = {f.name for f in fields(LayoutConstants)}


def _serialize_item(item: ScheduleItem) -> Dict[str, Any]:
    return {
        'label': item.label,
        'category': item.category,
        'start': format_clock(item.start_minutes),
        'end': format_clock(item.end_minutes),
        'color': item.color,
    }


def _deserialize_item(data: Dict[str, Any], position: int) -> ScheduleItem:
    try:
        return ScheduleItem(
            label=str(data['label']),
            category=str(data['category']),
            start_minutes=parse_clock(data['start']),
            end_minutes=parse_clock(data['end']),
            color=str(data.get('color') or config.COLORS.DEFAULT_EVENT),
        )
    except KeyError as e:
        raise ScheduleValidationError([f"Item {position} is missing field {e.args[0]!r}"]) from e
    except (TypeError, ValueError) as e:
        raise ScheduleValidationError([f"Item {position}: {e}"]) from e


def _deserialize_layout(data: Dict[str, Any]) -> LayoutConstants:
    unknown = sorted(set(data) - _LAYOUT_FIELDS)
    if unknown:
        raise ScheduleValidationError([f"Unknown layout option(s): {', '.join(unknown)}"])
    try:
        return LayoutConstants(**data)
    except (TypeError, ValueError) as e:
        raise ScheduleValidationError([f"Invalid layout: {e}"]) from e


def schedule_from_dict(data: Dict[str, Any]) -> Schedule:
    """Build and validate a Schedule from parsed YAML data.

    Raises:
        ScheduleValidationError: If the structure or any item is invalid
    """
    if not isinstance(data, dict):
        raise ScheduleValidationError(["Schedule file must contain a mapping"])

    categories: List[Category] = []
    for position, category_data in enumerate(data.get('categories') or []):
        if not isinstance(category_data, dict) or 'key' not in category_data:
            raise ScheduleValidationError([f"Category {position} must be a mapping with a 'key'"])
        key = str(category_data['key'])
        categories.append(Category(key=key, label=str(category_data.get('label', key))))

    items = []
    for position, item_data in enumerate(data.get('items') or []):
        if not isinstance(item_data, dict):
            raise ScheduleValidationError([f"Item {position} must be a mapping"])
        items.append(_deserialize_item(item_data, position))

    layout = _deserialize_layout(data.get('layout') or {})

    ensure_valid_schedule(categories, items)
    return Schedule(categories=categories, items=items, layout=layout)


def schedule_to_dict(schedule: Schedule) -> Dict[str, Any]:
    return {
        'layout': asdict(schedule.layout),
        'categories': [{'key': c.key, 'label': c.label} for c in schedule.categories],
        'items': [_serialize_item(item) for item in schedule.items],
    }


def save_schedule(schedule: Schedule, path: PathLike) -> None:
    """Serialize a schedule to YAML."""
    with open(path, 'w', encoding='utf-8') as f:
        yaml.safe_dump(schedule_to_dict(schedule), f, default_flow_style=False, sort_keys=False,
                       allow_unicode=True)


def load_schedule(path: PathLike) -> Schedule:
    """Read and validate a YAML schedule.

    Raises:
        OSError: If the file cannot be read
        yaml.YAMLError: If the file is not valid YAML
        ScheduleValidationError: If the content is not a valid schedule
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)
    return schedule_from_dict(data)
