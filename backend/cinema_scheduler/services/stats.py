from __future__ import annotations

from collections.abc import Iterable, Sequence

from cinema_scheduler.models.room import Room
from cinema_scheduler.models.screening import Screening
from cinema_scheduler.schemas.stats import DayBreakdown, DayStats, RoomStats, WeekStats
from cinema_scheduler.services.time_utils import (
    AVAILABLE_MINUTES,
    DAY_END_MINUTES,
    DAY_START_MINUTES,
    day_name,
    shift_week,
    time_to_minutes,
    week_dates,
)


def _round_percentage(used: int, available: int) -> float:
    if available <= 0:
        return 0.0
    return round(used / available * 100, 2)


def _used_and_dead_minutes(screenings: Sequence[Screening]) -> tuple[int, int]:
    """Return (used, dead) minutes for one room's screenings on one day."""
    if not screenings:
        return 0, AVAILABLE_MINUTES

    ordered = sorted(screenings, key=lambda item: item.start_time)
    used = 0
    dead = 0
    last_end = DAY_START_MINUTES
    for item in ordered:
        start = time_to_minutes(item.start_time)
        end = time_to_minutes(item.end_time)
        used += end - start
        if start > last_end:
            dead += start - last_end
        last_end = end
    if last_end < DAY_END_MINUTES:
        dead += DAY_END_MINUTES - last_end
    return used, dead


def day_stats(date: str, screenings: Iterable[Screening], rooms: Sequence[Room]) -> DayStats:
    day_items = [item for item in screenings if item.date == date]

    total_used = 0
    total_dead = 0
    capacity = 0
    for room in rooms:
        room_items = [item for item in day_items if item.room_id == room.id]
        used, dead = _used_and_dead_minutes(room_items)
        total_used += used
        total_dead += dead
        capacity += room.seats * len(room_items)

    return DayStats(
        date=date,
        usage_percentage=_round_percentage(total_used, AVAILABLE_MINUTES * len(rooms)),
        total_dead_time=total_dead,
        scheduled_shows=len(day_items),
        estimated_capacity=capacity,
    )


def room_stats(room_id: str, date: str, screenings: Iterable[Screening], room_name: str = "") -> RoomStats:
    room_items = [item for item in screenings if item.room_id == room_id and item.date == date]
    used, dead = _used_and_dead_minutes(room_items)
    return RoomStats(
        room_id=room_id,
        room_name=room_name,
        usage_percentage=_round_percentage(used, AVAILABLE_MINUTES),
        total_dead_time=dead,
        scheduled_shows=len(room_items),
    )


def week_stats(reference: str, screenings: Iterable[Screening], rooms: Sequence[Room]) -> WeekStats:
    screenings = list(screenings)
    dates = week_dates(reference)
    return WeekStats(
        week_start=dates[0],
        previous_week=shift_week(reference, -1),
        next_week=shift_week(reference, 1),
        days=[day_stats(date, screenings, rooms) for date in dates],
    )


def day_breakdown(date: str, screenings: Iterable[Screening], rooms: Sequence[Room]) -> DayBreakdown:
    screenings = list(screenings)
    return DayBreakdown(
        day_name=day_name(date),
        totals=day_stats(date, screenings, rooms),
        rooms=[room_stats(room.id, date, screenings, room_name=room.name) for room in rooms],
    )
