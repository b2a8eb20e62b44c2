from fastapi import APIRouter, Depends, HTTPException, Query, status

from cinema_scheduler.api.deps import get_catalog, get_store
from cinema_scheduler.db.catalog import Catalog
from cinema_scheduler.db.store import ScreeningStore
from cinema_scheduler.schemas.screening import validate_date_value
from cinema_scheduler.schemas.stats import DayBreakdown, RoomStats, WeekStats
from cinema_scheduler.services.stats import day_breakdown, room_stats, week_stats
from cinema_scheduler.services.time_utils import week_dates

router = APIRouter()


def _parse_date(value: str) -> str:
    try:
        return validate_date_value(value)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.get("/stats/week", response_model=WeekStats)
def get_week_stats(
    reference_date: str = Query(...),
    catalog: Catalog = Depends(get_catalog),
    store: ScreeningStore = Depends(get_store),
) -> WeekStats:
    reference_date = _parse_date(reference_date)
    return week_stats(reference_date, store.by_dates(week_dates(reference_date)), catalog.rooms)


@router.get("/stats/day/{date}", response_model=DayBreakdown)
def get_day_stats(
    date: str,
    catalog: Catalog = Depends(get_catalog),
    store: ScreeningStore = Depends(get_store),
) -> DayBreakdown:
    date = _parse_date(date)
    return day_breakdown(date, store.by_dates([date]), catalog.rooms)


@router.get("/stats/rooms/{room_id}", response_model=RoomStats)
def get_room_stats(
    room_id: str,
    date: str = Query(...),
    catalog: Catalog = Depends(get_catalog),
    store: ScreeningStore = Depends(get_store),
) -> RoomStats:
    room = catalog.room(room_id)
    if room is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Room not found")
    date = _parse_date(date)
    return room_stats(room.id, date, store.by_room_and_date(room.id, date), room_name=room.name)
