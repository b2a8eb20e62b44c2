from __future__ import annotations

from collections.abc import Iterable

from cinema_scheduler.models.movie import Movie
from cinema_scheduler.models.room import Room, RoomSize
from cinema_scheduler.models.screening import Screening, ScreeningCandidate
from cinema_scheduler.schemas.screening import ValidationError
from cinema_scheduler.services.time_utils import (
    DAY_END_MINUTES,
    DAY_START_MINUTES,
    PREMIERE_CUTOFF_MINUTES,
    cleanup_minutes,
    day_name,
    is_weekend,
    minutes_to_time,
    time_to_minutes,
)

PREMIERE_MIN_DEMAND = 70
PREMIERE_MIN_DAILY_SCREENINGS = 2
LONG_RUNTIME_MINUTES = 150


def intervals_overlap(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    # Half-open intervals: back-to-back screenings share an endpoint legally.
    return start_a < end_b and end_a > start_b


def is_first_premiere_screening(
    candidate: ScreeningCandidate,
    movie: Movie,
    existing: Iterable[Screening],
) -> bool:
    start = time_to_minutes(candidate.start_time)
    same_day = [
        time_to_minutes(item.start_time)
        for item in existing
        if item.movie_id == movie.id and item.date == candidate.date
    ]
    return not same_day or start < min(same_day)


def validate_screening(
    candidate: ScreeningCandidate,
    movie: Movie,
    room: Room,
    existing: Iterable[Screening],
) -> list[ValidationError]:
    existing = list(existing)
    errors: list[ValidationError] = []

    start = time_to_minutes(candidate.start_time)
    cleanup = cleanup_minutes(room.size)
    total = movie.runtime_min + cleanup
    end = start + total

    if start < DAY_START_MINUTES or start > DAY_END_MINUTES:
        errors.append(
            ValidationError(
                rule="operating_window",
                field="start_time",
                message=(
                    f"Invalid start time {candidate.start_time}: screenings must start between "
                    f"{minutes_to_time(DAY_START_MINUTES)} and {minutes_to_time(DAY_END_MINUTES)}."
                ),
            )
        )

    if end > DAY_END_MINUTES:
        latest_start = DAY_END_MINUTES - total
        if latest_start >= DAY_START_MINUTES:
            hint = f"the latest start is {minutes_to_time(latest_start)}."
        else:
            hint = (
                f"no start time between {minutes_to_time(DAY_START_MINUTES)} and "
                f"{minutes_to_time(DAY_END_MINUTES)} fits in this room."
            )
        errors.append(
            ValidationError(
                rule="end_bound",
                field="start_time",
                message=(
                    f"Screening would end at {minutes_to_time(end)}, after closing time "
                    f"{minutes_to_time(DAY_END_MINUTES)}. With a runtime of {movie.runtime_min} min "
                    f"and {cleanup} min of cleanup {hint}"
                ),
            )
        )

    for item in existing:
        if item.room_id != candidate.room_id or item.date != candidate.date:
            continue
        if intervals_overlap(start, end, time_to_minutes(item.start_time), time_to_minutes(item.end_time)):
            errors.append(
                ValidationError(
                    rule="overlap",
                    field="start_time",
                    message=(
                        f"Schedule conflict in room {room.name}: the proposed screening "
                        f"{candidate.start_time}-{minutes_to_time(end)} overlaps the screening "
                        f"{item.start_time}-{item.end_time}."
                    ),
                )
            )
            break

    if movie.is_special and not is_weekend(candidate.date):
        errors.append(
            ValidationError(
                rule="special_day",
                field="date",
                message=(
                    f"SPECIAL movies can only be scheduled on Friday, Saturday or Sunday; "
                    f"{candidate.date} is a {day_name(candidate.date)}."
                ),
            )
        )

    if movie.is_premiere:
        if movie.demand_score < PREMIERE_MIN_DEMAND:
            errors.append(
                ValidationError(
                    rule="premiere_demand",
                    field="movie_id",
                    message=(
                        f"PREMIERE movies need a demand score of at least {PREMIERE_MIN_DEMAND}; "
                        f'"{movie.title}" has {movie.demand_score}.'
                    ),
                )
            )
        if is_first_premiere_screening(candidate, movie, existing) and start >= PREMIERE_CUTOFF_MINUTES:
            errors.append(
                ValidationError(
                    rule="premiere_first_show",
                    field="start_time",
                    message=(
                        f"The first PREMIERE screening of the day must start before "
                        f"{minutes_to_time(PREMIERE_CUTOFF_MINUTES)}; got {candidate.start_time}."
                    ),
                )
            )

    if movie.runtime_min > LONG_RUNTIME_MINUTES and room.size == RoomSize.small:
        errors.append(
            ValidationError(
                rule="room_size",
                field="room_id",
                message=(
                    f'"{movie.title}" runs {movie.runtime_min} min; movies longer than '
                    f"{LONG_RUNTIME_MINUTES} min need a MEDIUM or LARGE room."
                ),
            )
        )

    return errors


def premiere_advisory(candidate: ScreeningCandidate, movie: Movie, existing: Iterable[Screening]) -> str | None:
    if not movie.is_premiere:
        return None
    if any(item.movie_id == movie.id and item.date == candidate.date for item in existing):
        return None
    return (
        f'First PREMIERE screening of "{movie.title}" on {candidate.date}: '
        f"at least {PREMIERE_MIN_DAILY_SCREENINGS} screenings are required that day."
    )


def find_overlaps(screenings: Iterable[Screening]) -> list[tuple[str, str]]:
    by_room_day: dict[tuple[str, str], list[Screening]] = {}
    for item in screenings:
        by_room_day.setdefault((item.room_id, item.date), []).append(item)

    pairs: list[tuple[str, str]] = []
    for day_items in by_room_day.values():
        ordered = sorted(day_items, key=lambda item: item.start_time)
        for i, first in enumerate(ordered):
            first_start, first_end = time_to_minutes(first.start_time), time_to_minutes(first.end_time)
            for second in ordered[i + 1:]:
                if intervals_overlap(
                    first_start,
                    first_end,
                    time_to_minutes(second.start_time),
                    time_to_minutes(second.end_time),
                ):
                    pairs.append((first.id, second.id))
    return pairs
