from __future__ import annotations

from dataclasses import dataclass, field
import logging
import random
from threading import Lock

from cinema_scheduler.core.exceptions import ProtectedDeletionError, ResourceNotFoundError, ScheduleValidationError
from cinema_scheduler.db.catalog import Catalog
from cinema_scheduler.db.store import ScreeningStore, new_screening_id
from cinema_scheduler.models.movie import Movie
from cinema_scheduler.models.room import Room
from cinema_scheduler.models.screening import Screening, ScreeningCandidate
from cinema_scheduler.schemas.generator import GenerationSettingsBase
from cinema_scheduler.schemas.screening import ValidationError
from cinema_scheduler.services.time_utils import calculate_end_time, week_dates
from cinema_scheduler.services.validator import (
    PREMIERE_MIN_DAILY_SCREENINGS,
    find_overlaps,
    premiere_advisory,
    validate_screening,
)
from cinema_scheduler.services.week_generator import GenerationResult, WeekGenerator

logger = logging.getLogger(__name__)


@dataclass
class ScheduleOutcome:
    screening: Screening
    advisories: list[str] = field(default_factory=list)


@dataclass
class ValidationOutcome:
    errors: list[ValidationError]
    end_time: str
    advisories: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


class SchedulingService:
    def __init__(
        self,
        *,
        catalog: Catalog,
        store: ScreeningStore,
        generation_settings: GenerationSettingsBase | None = None,
        lock: Lock | None = None,
    ) -> None:
        self.catalog = catalog
        self.store = store
        self.generation_settings = generation_settings or GenerationSettingsBase()
        # Held from validation to commit so concurrent mutations see each other.
        self._lock = lock if lock is not None else Lock()

    def _resolve(self, candidate: ScreeningCandidate) -> tuple[Movie, Room]:
        movie = self.catalog.movie(candidate.movie_id)
        if movie is None:
            raise ResourceNotFoundError("Movie", candidate.movie_id)
        room = self.catalog.room(candidate.room_id)
        if room is None:
            raise ResourceNotFoundError("Room", candidate.room_id)
        return movie, room

    def _existing(self, exclude_id: str | None = None) -> list[Screening]:
        return [item for item in self.store.all() if item.id != exclude_id]

    def check(self, candidate: ScreeningCandidate, exclude_id: str | None = None) -> ValidationOutcome:
        movie, room = self._resolve(candidate)
        existing = self._existing(exclude_id)
        errors = validate_screening(candidate, movie, room, existing)
        advisory = premiere_advisory(candidate, movie, existing) if exclude_id is None else None
        return ValidationOutcome(
            errors=errors,
            end_time=calculate_end_time(candidate.start_time, movie.runtime_min, room.size),
            advisories=[advisory] if advisory else [],
        )

    def create(self, candidate: ScreeningCandidate) -> ScheduleOutcome:
        with self._lock:
            outcome = self.check(candidate)
            if not outcome.valid:
                raise ScheduleValidationError(outcome.errors)
            screening = Screening(
                id=new_screening_id(),
                movie_id=candidate.movie_id,
                room_id=candidate.room_id,
                date=candidate.date,
                start_time=candidate.start_time,
                end_time=outcome.end_time,
            )
            self.store.add(screening)
        logger.debug(
            "Created screening %s for %s in %s on %s",
            screening.id,
            screening.movie_id,
            screening.room_id,
            screening.date,
        )
        return ScheduleOutcome(screening=screening, advisories=outcome.advisories)

    def update(self, screening_id: str, changes: dict) -> ScheduleOutcome:
        with self._lock:
            current = self.store.get(screening_id)
            if current is None:
                raise ResourceNotFoundError("Screening", screening_id)
            merged = {
                "movie_id": current.movie_id,
                "room_id": current.room_id,
                "date": current.date,
                "start_time": current.start_time,
            }
            merged.update({key: value for key, value in changes.items() if value is not None})
            candidate = ScreeningCandidate(**merged)

            outcome = self.check(candidate, exclude_id=screening_id)
            if not outcome.valid:
                raise ScheduleValidationError(outcome.errors)
            updated = self.store.update(screening_id, {**merged, "end_time": outcome.end_time})
            if updated is None:
                raise ResourceNotFoundError("Screening", screening_id)
        return ScheduleOutcome(screening=updated)

    def ensure_deletable(self, screening: Screening) -> None:
        movie = self.catalog.movie(screening.movie_id)
        if movie is None or not movie.is_premiere:
            return
        same_day = [
            item
            for item in self.store.by_movie(screening.movie_id)
            if item.date == screening.date
        ]
        if len(same_day) <= PREMIERE_MIN_DAILY_SCREENINGS:
            raise ProtectedDeletionError(
                f'PREMIERE movie "{movie.title}" needs at least {PREMIERE_MIN_DAILY_SCREENINGS} screenings '
                f"on {screening.date}; it currently has {len(same_day)}, so this screening cannot be deleted.",
                details={"movie_id": movie.id, "date": screening.date, "screenings": len(same_day)},
            )

    def delete(self, screening_id: str) -> Screening:
        with self._lock:
            screening = self.store.get(screening_id)
            if screening is None:
                raise ResourceNotFoundError("Screening", screening_id)
            self.ensure_deletable(screening)
            self.store.delete(screening_id)
        logger.debug("Deleted screening %s", screening_id)
        return screening

    def clear_week(self, reference: str) -> int:
        with self._lock:
            ids = [item.id for item in self.store.by_dates(week_dates(reference))]
            if not ids:
                return 0
            removed = self.store.delete_batch(ids)
        logger.info("Cleared %d screening(s) from week of %s", removed, reference)
        return removed

    def generate_week(self, reference: str, random_seed: int | None = None) -> GenerationResult:
        settings = self.generation_settings
        seed = random_seed if random_seed is not None else settings.random_seed
        generator = WeekGenerator(
            movies=self.catalog.movies,
            rooms=self.catalog.rooms,
            settings=settings,
            rng=random.Random(seed),
        )
        with self._lock:
            result = generator.generate(reference, self.store.all())
            if result.screenings:
                self.store.add_batch(result.screenings)
        if result.screenings:
            logger.info("Committed %d generated screening(s)", result.created)
        return result

    def check_overlaps(self) -> list[tuple[str, str]]:
        return find_overlaps(self.store.all())
