from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from threading import Lock
from typing import Protocol
import uuid

from cinema_scheduler.models.screening import Screening

UPDATABLE_FIELDS = frozenset({"movie_id", "room_id", "date", "start_time", "end_time"})


def new_screening_id() -> str:
    return str(uuid.uuid4())


class ScreeningStore(Protocol):
    def add(self, screening: Screening) -> Screening: ...

    def add_batch(self, screenings: Iterable[Screening]) -> list[Screening]: ...

    def update(self, screening_id: str, fields: dict) -> Screening | None: ...

    def delete(self, screening_id: str) -> bool: ...

    def delete_batch(self, screening_ids: Iterable[str]) -> int: ...

    def get(self, screening_id: str) -> Screening | None: ...

    def all(self) -> list[Screening]: ...

    def by_movie(self, movie_id: str) -> list[Screening]: ...

    def by_room_and_date(self, room_id: str, date: str) -> list[Screening]: ...

    def by_dates(self, dates: Iterable[str]) -> list[Screening]: ...

    def clear(self) -> None: ...


class InMemoryScreeningStore:
    """Screening collection where every mutation swaps in a new tuple."""

    def __init__(self, screenings: Iterable[Screening] = ()) -> None:
        self._items: tuple[Screening, ...] = tuple(screenings)
        self._lock = Lock()

    def add(self, screening: Screening) -> Screening:
        return self.add_batch([screening])[0]

    def add_batch(self, screenings: Iterable[Screening]) -> list[Screening]:
        batch = list(screenings)
        with self._lock:
            taken = {item.id for item in self._items}
            for item in batch:
                if item.id in taken:
                    raise ValueError(f"Duplicate screening id {item.id}")
                taken.add(item.id)
            self._items = self._items + tuple(batch)
        return batch

    def update(self, screening_id: str, fields: dict) -> Screening | None:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown screening field(s): {', '.join(sorted(unknown))}")
        with self._lock:
            updated: Screening | None = None
            items = []
            for item in self._items:
                if item.id == screening_id:
                    updated = replace(item, **fields)
                    items.append(updated)
                else:
                    items.append(item)
            if updated is not None:
                self._items = tuple(items)
        return updated

    def delete(self, screening_id: str) -> bool:
        return self.delete_batch([screening_id]) == 1

    def delete_batch(self, screening_ids: Iterable[str]) -> int:
        ids = set(screening_ids)
        with self._lock:
            remaining = tuple(item for item in self._items if item.id not in ids)
            removed = len(self._items) - len(remaining)
            self._items = remaining
        return removed

    def get(self, screening_id: str) -> Screening | None:
        return next((item for item in self._items if item.id == screening_id), None)

    def all(self) -> list[Screening]:
        return list(self._items)

    def by_movie(self, movie_id: str) -> list[Screening]:
        return sorted((item for item in self._items if item.movie_id == movie_id), key=lambda item: item.sort_key)

    def by_room_and_date(self, room_id: str, date: str) -> list[Screening]:
        return sorted(
            (item for item in self._items if item.room_id == room_id and item.date == date),
            key=lambda item: item.start_time,
        )

    def by_dates(self, dates: Iterable[str]) -> list[Screening]:
        wanted = set(dates)
        return sorted((item for item in self._items if item.date in wanted), key=lambda item: item.sort_key)

    def clear(self) -> None:
        with self._lock:
            self._items = ()
