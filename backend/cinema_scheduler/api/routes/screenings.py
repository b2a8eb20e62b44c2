from fastapi import APIRouter, Depends, HTTPException, Query, status

from cinema_scheduler.api.deps import get_scheduling_service, get_store
from cinema_scheduler.db.store import ScreeningStore
from cinema_scheduler.models.screening import ScreeningCandidate
from cinema_scheduler.schemas.screening import (
    OverlapReport,
    ScreeningCreate,
    ScreeningMutationOut,
    ScreeningOut,
    ScreeningUpdate,
    ScreeningValidationOut,
    validate_date_value,
)
from cinema_scheduler.services.scheduling import SchedulingService
from cinema_scheduler.services.time_utils import week_dates

router = APIRouter()


def _checked_date(value: str | None, name: str) -> str | None:
    if value is None:
        return None
    try:
        return validate_date_value(value)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=f"{name}: {exc}") from exc


def _candidate(payload: ScreeningCreate) -> ScreeningCandidate:
    return ScreeningCandidate(
        movie_id=payload.movie_id,
        room_id=payload.room_id,
        date=payload.date,
        start_time=payload.start_time,
    )


@router.get("/", response_model=list[ScreeningOut])
def list_screenings(
    week: str | None = Query(default=None, description="Any date inside the week to list"),
    room_id: str | None = None,
    date: str | None = None,
    store: ScreeningStore = Depends(get_store),
) -> list[ScreeningOut]:
    week = _checked_date(week, "week")
    date = _checked_date(date, "date")
    if room_id is not None and date is not None:
        return store.by_room_and_date(room_id, date)
    if week is not None:
        items = store.by_dates(week_dates(week))
    elif date is not None:
        items = store.by_dates([date])
    else:
        items = sorted(store.all(), key=lambda item: item.sort_key)
    if room_id is not None:
        items = [item for item in items if item.room_id == room_id]
    return items


@router.get("/overlaps", response_model=OverlapReport)
def audit_overlaps(service: SchedulingService = Depends(get_scheduling_service)) -> OverlapReport:
    return OverlapReport(overlapping_pairs=service.check_overlaps())


@router.post("/validate", response_model=ScreeningValidationOut)
def validate_screening(
    payload: ScreeningCreate,
    service: SchedulingService = Depends(get_scheduling_service),
) -> ScreeningValidationOut:
    outcome = service.check(_candidate(payload))
    return ScreeningValidationOut(
        valid=outcome.valid,
        end_time=outcome.end_time,
        errors=outcome.errors,
        advisories=outcome.advisories,
    )


@router.post("/", response_model=ScreeningMutationOut, status_code=status.HTTP_201_CREATED)
def create_screening(
    payload: ScreeningCreate,
    service: SchedulingService = Depends(get_scheduling_service),
) -> ScreeningMutationOut:
    outcome = service.create(_candidate(payload))
    return ScreeningMutationOut(
        screening=ScreeningOut.model_validate(outcome.screening),
        advisories=outcome.advisories,
    )


@router.get("/{screening_id}", response_model=ScreeningOut)
def get_screening(screening_id: str, store: ScreeningStore = Depends(get_store)) -> ScreeningOut:
    screening = store.get(screening_id)
    if screening is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Screening not found")
    return screening


@router.put("/{screening_id}", response_model=ScreeningMutationOut)
def update_screening(
    screening_id: str,
    payload: ScreeningUpdate,
    service: SchedulingService = Depends(get_scheduling_service),
) -> ScreeningMutationOut:
    outcome = service.update(screening_id, payload.model_dump(exclude_unset=True))
    return ScreeningMutationOut(screening=ScreeningOut.model_validate(outcome.screening))


@router.delete("/{screening_id}")
def delete_screening(
    screening_id: str,
    service: SchedulingService = Depends(get_scheduling_service),
) -> dict:
    service.delete(screening_id)
    return {"message": "Screening deleted", "id": screening_id}
