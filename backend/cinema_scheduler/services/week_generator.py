from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
import logging
import random
import uuid

from cinema_scheduler.models.movie import Movie
from cinema_scheduler.models.room import Room, RoomSize
from cinema_scheduler.models.screening import Screening, ScreeningCandidate
from cinema_scheduler.schemas.generator import GenerationSettingsBase
from cinema_scheduler.services.time_utils import (
    DAY_END_MINUTES,
    DAY_START_MINUTES,
    PREMIERE_CUTOFF_MINUTES,
    calculate_end_time,
    is_weekend,
    minutes_to_time,
    occupied_minutes,
    time_to_minutes,
    week_dates,
)
from cinema_scheduler.services.validator import (
    LONG_RUNTIME_MINUTES,
    PREMIERE_MIN_DAILY_SCREENINGS,
    validate_screening,
)

QUARTER_HOURS = (0, 15, 30, 45)
LAST_HOUR = DAY_END_MINUTES // 60

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    week_dates: list[str]
    screenings: list[Screening] = field(default_factory=list)
    attempts: int = 0
    budget_exhausted: bool = False

    @property
    def created(self) -> int:
        return len(self.screenings)


def movie_fits_room(movie: Movie, room: Room) -> bool:
    return not (movie.runtime_min > LONG_RUNTIME_MINUTES and room.size == RoomSize.small)


def eligible_movies(movies: Iterable[Movie], date: str) -> list[Movie]:
    weekend = is_weekend(date)
    return [movie for movie in movies if weekend or not movie.is_special]


def fits_free_gap(start: int, duration: int, room_screenings: Sequence[Screening]) -> bool:
    """Check a start against the gaps of a room's screenings sorted by start time."""
    end = start + duration
    if not room_screenings:
        return DAY_START_MINUTES <= start and end <= DAY_END_MINUTES

    first_start = time_to_minutes(room_screenings[0].start_time)
    if start >= DAY_START_MINUTES and end <= first_start:
        return True

    for current, following in zip(room_screenings, room_screenings[1:]):
        if start >= time_to_minutes(current.end_time) and end <= time_to_minutes(following.start_time):
            return True

    last_end = time_to_minutes(room_screenings[-1].end_time)
    return start >= last_end and end <= DAY_END_MINUTES


class WeekGenerator:
    """Best-effort randomized filler for one week of screenings.

    Every accepted screening passes the full validator against the committed
    screenings plus everything generated earlier in the same run. Work is
    bounded by a global attempt budget shared across the whole week and a
    per-slot sampling limit, so a run always terminates.
    """

    def __init__(
        self,
        *,
        movies: Sequence[Movie],
        rooms: Sequence[Room],
        settings: GenerationSettingsBase,
        rng: random.Random | None = None,
    ) -> None:
        self.movies = list(movies)
        self.rooms = list(rooms)
        self.settings = settings
        self.random = rng if rng is not None else random.Random(settings.random_seed)
        self.attempts = 0
        self.budget_exhausted = False

    def generate(self, reference: str, existing: Iterable[Screening]) -> GenerationResult:
        self.attempts = 0
        self.budget_exhausted = False
        committed = list(existing)
        created: list[Screening] = []
        dates = week_dates(reference)

        for date in dates:
            movies = eligible_movies(self.movies, date)
            if not movies:
                continue
            for room in self.rooms:
                self._fill_room(date, room, movies, committed, created)
            self._ensure_premiere_minimum(date, movies, committed, created)

        exhausted = self.budget_exhausted
        if exhausted:
            logger.warning(
                "Week generation for %s exhausted its attempt budget (%d) after creating %d screening(s)",
                dates[0],
                self.settings.max_attempts,
                len(created),
            )
        logger.info(
            "Generated %d screening(s) for week %s in %d attempt(s)",
            len(created),
            dates[0],
            self.attempts,
        )
        return GenerationResult(
            week_dates=dates,
            screenings=created,
            attempts=self.attempts,
            budget_exhausted=exhausted,
        )

    def _budget_left(self) -> int:
        return self.settings.max_attempts - self.attempts

    def _sample_start(self) -> int:
        hour = self.random.randint(DAY_START_MINUTES // 60, LAST_HOUR)
        if hour == LAST_HOUR:
            minute = self.random.randint(0, 59)
        else:
            minute = self.random.choice(QUARTER_HOURS)
        return hour * 60 + minute

    def _sample_early_start(self) -> int:
        hour = self.random.randint(DAY_START_MINUTES // 60, PREMIERE_CUTOFF_MINUTES // 60 - 1)
        return hour * 60 + self.random.choice(QUARTER_HOURS)

    def _new_id(self) -> str:
        return str(uuid.UUID(int=self.random.getrandbits(128), version=4))

    def _accept(self, candidate: ScreeningCandidate, movie: Movie, room: Room) -> Screening:
        return Screening(
            id=self._new_id(),
            movie_id=candidate.movie_id,
            room_id=candidate.room_id,
            date=candidate.date,
            start_time=candidate.start_time,
            end_time=calculate_end_time(candidate.start_time, movie.runtime_min, room.size),
        )

    @staticmethod
    def _has_screening_on(movie: Movie, date: str, screenings: Iterable[Screening]) -> bool:
        return any(item.movie_id == movie.id and item.date == date for item in screenings)

    def _fill_room(
        self,
        date: str,
        room: Room,
        movies: Sequence[Movie],
        committed: list[Screening],
        created: list[Screening],
    ) -> None:
        room_movies = [movie for movie in movies if movie_fits_room(movie, room)]
        target = self.random.randint(self.settings.min_shows_per_room, self.settings.max_shows_per_room)

        for _ in range(target):
            if self._budget_left() <= 0:
                self.budget_exhausted = True
                return
            self.attempts += 1
            if not room_movies:
                continue
            movie = self.random.choice(room_movies)
            screening = self._place_in_room(date, room, movie, committed, created)
            if screening is not None:
                created.append(screening)

    def _place_in_room(
        self,
        date: str,
        room: Room,
        movie: Movie,
        committed: list[Screening],
        created: list[Screening],
    ) -> Screening | None:
        pool = committed + created
        room_screenings = sorted(
            (item for item in pool if item.room_id == room.id and item.date == date),
            key=lambda item: item.start_time,
        )
        duration = occupied_minutes(movie.runtime_min, room.size)

        for _ in range(self.settings.slot_attempts):
            start = self._sample_start()
            if room_screenings and not fits_free_gap(start, duration, room_screenings):
                continue
            if (
                movie.is_premiere
                and start >= PREMIERE_CUTOFF_MINUTES
                and not self._has_screening_on(movie, date, pool)
            ):
                start = self._sample_early_start()

            candidate = ScreeningCandidate(
                movie_id=movie.id,
                room_id=room.id,
                date=date,
                start_time=minutes_to_time(start),
            )
            errors = validate_screening(candidate, movie, room, pool)
            if errors:
                logger.debug(
                    "Rejected %s in %s on %s at %s: %s",
                    movie.id,
                    room.id,
                    date,
                    candidate.start_time,
                    errors[0].rule,
                )
                continue
            return self._accept(candidate, movie, room)
        return None

    def _ensure_premiere_minimum(
        self,
        date: str,
        movies: Sequence[Movie],
        committed: list[Screening],
        created: list[Screening],
    ) -> None:
        for movie in movies:
            if not movie.is_premiere:
                continue
            rooms = [room for room in self.rooms if movie_fits_room(movie, room)]
            if not rooms:
                continue

            tries = 0
            while tries < self.settings.slot_attempts:
                pool = committed + created
                count = sum(1 for item in pool if item.movie_id == movie.id and item.date == date)
                if count >= PREMIERE_MIN_DAILY_SCREENINGS:
                    break
                if self._budget_left() <= 0:
                    self.budget_exhausted = True
                    return
                self.attempts += 1
                tries += 1

                room = self.random.choice(rooms)
                start = self._sample_early_start() if count == 0 else self._sample_start()
                candidate = ScreeningCandidate(
                    movie_id=movie.id,
                    room_id=room.id,
                    date=date,
                    start_time=minutes_to_time(start),
                )
                if validate_screening(candidate, movie, room, pool):
                    continue
                created.append(self._accept(candidate, movie, room))
