from __future__ import annotations

from datetime import date, timedelta

from cinema_scheduler.models.room import RoomSize

DAY_START_MINUTES = 10 * 60
DAY_END_MINUTES = 23 * 60 + 59
AVAILABLE_MINUTES = DAY_END_MINUTES - DAY_START_MINUTES
PREMIERE_CUTOFF_MINUTES = 14 * 60

LARGE_ROOM_CLEANUP_MINUTES = 20
DEFAULT_CLEANUP_MINUTES = 15

# 0=Sunday ... 6=Saturday
DAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)
WEEKEND_DAY_INDEXES = frozenset({5, 6, 0})


def time_to_minutes(value: str) -> int:
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time(value: int) -> str:
    hours = value // 60
    minutes = value % 60
    return f"{hours:02d}:{minutes:02d}"


def parse_date(value: str | date) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def weekday_index(value: str | date) -> int:
    # date.weekday() is Monday=0; shift so Sunday=0.
    return (parse_date(value).weekday() + 1) % 7


def day_name(value: str | date) -> str:
    return DAY_NAMES[weekday_index(value)]


def is_weekend(value: str | date) -> bool:
    """Friday, Saturday and Sunday count as the cinema weekend."""
    return weekday_index(value) in WEEKEND_DAY_INDEXES


def week_monday(reference: str | date) -> date:
    current = parse_date(reference)
    return current - timedelta(days=current.weekday())


def week_dates(reference: str | date) -> list[str]:
    monday = week_monday(reference)
    return [(monday + timedelta(days=offset)).isoformat() for offset in range(7)]


def shift_week(reference: str | date, weeks: int) -> str:
    return (week_monday(reference) + timedelta(weeks=weeks)).isoformat()


def cleanup_minutes(size: RoomSize) -> int:
    return LARGE_ROOM_CLEANUP_MINUTES if size == RoomSize.large else DEFAULT_CLEANUP_MINUTES


def occupied_minutes(runtime_min: int, size: RoomSize) -> int:
    return runtime_min + cleanup_minutes(size)


def calculate_end_time(start_time: str, runtime_min: int, size: RoomSize) -> str:
    return minutes_to_time(time_to_minutes(start_time) + occupied_minutes(runtime_min, size))
