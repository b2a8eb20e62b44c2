from fastapi import APIRouter, Depends, HTTPException, Query, status

from cinema_scheduler.api.deps import get_catalog, get_store
from cinema_scheduler.db.catalog import Catalog
from cinema_scheduler.db.store import ScreeningStore
from cinema_scheduler.models.movie import AgeRating, MovieCategory
from cinema_scheduler.schemas.catalog import MovieOut, RoomOut
from cinema_scheduler.schemas.screening import ScreeningOut

router = APIRouter()


@router.get("/movies", response_model=list[MovieOut])
def list_movies(
    q: str | None = Query(default=None, max_length=200),
    category: MovieCategory | None = None,
    rating: AgeRating | None = None,
    min_demand: int = Query(default=0, ge=0, le=100),
    catalog: Catalog = Depends(get_catalog),
) -> list[MovieOut]:
    return catalog.search_movies(text=q, category=category, rating=rating, min_demand=min_demand)


@router.get("/movies/{movie_id}", response_model=MovieOut)
def get_movie(movie_id: str, catalog: Catalog = Depends(get_catalog)) -> MovieOut:
    movie = catalog.movie(movie_id)
    if movie is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movie not found")
    return movie


@router.get("/movies/{movie_id}/screenings", response_model=list[ScreeningOut])
def list_movie_screenings(
    movie_id: str,
    catalog: Catalog = Depends(get_catalog),
    store: ScreeningStore = Depends(get_store),
) -> list[ScreeningOut]:
    if catalog.movie(movie_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movie not found")
    return store.by_movie(movie_id)


@router.get("/rooms", response_model=list[RoomOut])
def list_rooms(catalog: Catalog = Depends(get_catalog)) -> list[RoomOut]:
    return list(catalog.rooms)
