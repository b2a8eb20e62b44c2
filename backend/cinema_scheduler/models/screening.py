from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScreeningCandidate:
    """A screening before acceptance: no id and no end time yet."""

    movie_id: str
    room_id: str
    date: str
    start_time: str


@dataclass(frozen=True)
class Screening:
    id: str
    movie_id: str
    room_id: str
    date: str
    start_time: str
    end_time: str

    @property
    def sort_key(self) -> tuple[str, str]:
        # Zero-padded ISO dates and HH:MM times sort chronologically as strings.
        return (self.date, self.start_time)

    def as_candidate(self) -> ScreeningCandidate:
        return ScreeningCandidate(
            movie_id=self.movie_id,
            room_id=self.room_id,
            date=self.date,
            start_time=self.start_time,
        )
