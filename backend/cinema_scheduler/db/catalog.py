from __future__ import annotations

from collections.abc import Sequence
from functools import lru_cache

from cinema_scheduler.models.movie import AgeRating, Movie, MovieCategory
from cinema_scheduler.models.room import Room, RoomSize

DEFAULT_MOVIES: tuple[Movie, ...] = (
    Movie(
        id="m1",
        title="Medianoche",
        runtime_min=105,
        rating=AgeRating.B15,
        category=MovieCategory.regular,
        demand_score=62,
        trailer_url="https://www.youtube.com/embed/7wWEvqjsvxE",
    ),
    Movie(
        id="m2",
        title="Zombies vs Robots",
        runtime_min=128,
        rating=AgeRating.A,
        category=MovieCategory.special,
        demand_score=75,
        trailer_url="https://www.youtube.com/embed/8Qn_spdM5Zg",
    ),
    Movie(
        id="m3",
        title="Avenida 28",
        runtime_min=142,
        rating=AgeRating.B,
        category=MovieCategory.premiere,
        demand_score=81,
        trailer_url="https://www.youtube.com/embed/0WWzgGyAH6Y",
    ),
    Movie(
        id="m4",
        title="Sombras del Norte",
        runtime_min=156,
        rating=AgeRating.C,
        category=MovieCategory.regular,
        demand_score=55,
        trailer_url="https://www.youtube.com/embed/zHhR3daI3bY",
    ),
    Movie(
        id="m5",
        title="El regreso",
        runtime_min=98,
        rating=AgeRating.A,
        category=MovieCategory.regular,
        demand_score=34,
        trailer_url="https://www.youtube.com/embed/AzBSsKqvXdI",
    ),
)

DEFAULT_ROOMS: tuple[Room, ...] = (
    Room(id="S1", name="Sala 1", size=RoomSize.large, seats=200),
    Room(id="S2", name="Sala 2", size=RoomSize.medium, seats=120),
    Room(id="S3", name="Sala 3", size=RoomSize.small, seats=80),
)


class Catalog:
    """Read-only movies and rooms, in display order."""

    def __init__(self, movies: Sequence[Movie], rooms: Sequence[Room]) -> None:
        self.movies: tuple[Movie, ...] = tuple(movies)
        self.rooms: tuple[Room, ...] = tuple(rooms)
        self._movies_by_id = {movie.id: movie for movie in self.movies}
        self._rooms_by_id = {room.id: room for room in self.rooms}
        if len(self._movies_by_id) != len(self.movies):
            raise ValueError("Duplicate movie ids in catalog")
        if len(self._rooms_by_id) != len(self.rooms):
            raise ValueError("Duplicate room ids in catalog")

    def movie(self, movie_id: str) -> Movie | None:
        return self._movies_by_id.get(movie_id)

    def room(self, room_id: str) -> Room | None:
        return self._rooms_by_id.get(room_id)

    def search_movies(
        self,
        *,
        text: str | None = None,
        category: MovieCategory | None = None,
        rating: AgeRating | None = None,
        min_demand: int = 0,
    ) -> list[Movie]:
        needle = (text or "").strip().lower()
        return [
            movie
            for movie in self.movies
            if (not needle or needle in movie.title.lower())
            and (category is None or movie.category == category)
            and (rating is None or movie.rating == rating)
            and movie.demand_score >= min_demand
        ]


@lru_cache
def default_catalog() -> Catalog:
    return Catalog(DEFAULT_MOVIES, DEFAULT_ROOMS)
