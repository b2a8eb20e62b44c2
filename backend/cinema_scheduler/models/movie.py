from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AgeRating(str, Enum):
    A = "A"
    B = "B"
    B15 = "B15"
    C = "C"


class MovieCategory(str, Enum):
    regular = "REGULAR"
    special = "SPECIAL"
    premiere = "PREMIERE"


@dataclass(frozen=True)
class Movie:
    id: str
    title: str
    runtime_min: int
    rating: AgeRating
    category: MovieCategory
    demand_score: int
    trailer_url: str | None = None

    def __post_init__(self) -> None:
        if self.runtime_min <= 0:
            raise ValueError(f"Movie {self.id} runtime must be positive")
        if not 0 <= self.demand_score <= 100:
            raise ValueError(f"Movie {self.id} demand score must be between 0 and 100")

    @property
    def is_premiere(self) -> bool:
        return self.category == MovieCategory.premiere

    @property
    def is_special(self) -> bool:
        return self.category == MovieCategory.special
