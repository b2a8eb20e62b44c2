import logging
from time import perf_counter

from fastapi import APIRouter, Depends, HTTPException, Query

from cinema_scheduler.api.deps import get_scheduling_service
from cinema_scheduler.schemas.generator import ClearWeekResponse, GenerateWeekRequest, GenerateWeekResponse
from cinema_scheduler.schemas.screening import ScreeningOut, validate_date_value
from cinema_scheduler.services.scheduling import SchedulingService
from cinema_scheduler.services.time_utils import week_dates

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/generator/week", response_model=GenerateWeekResponse)
def generate_week(
    payload: GenerateWeekRequest,
    service: SchedulingService = Depends(get_scheduling_service),
) -> GenerateWeekResponse:
    started = perf_counter()
    result = service.generate_week(payload.reference_date, random_seed=payload.random_seed)
    logger.info(
        "Week generation for %s finished in %.3fs (%d created)",
        payload.reference_date,
        perf_counter() - started,
        result.created,
    )
    if result.created:
        message = f"Generated {result.created} screening(s) following every scheduling rule."
    else:
        message = "No screenings could be generated: there may be no free time left or the rules are too restrictive."
    return GenerateWeekResponse(
        week_dates=result.week_dates,
        created=result.created,
        attempts=result.attempts,
        budget_exhausted=result.budget_exhausted,
        message=message,
        screenings=[ScreeningOut.model_validate(item) for item in result.screenings],
    )


@router.delete("/generator/week", response_model=ClearWeekResponse)
def clear_week(
    reference_date: str = Query(...),
    service: SchedulingService = Depends(get_scheduling_service),
) -> ClearWeekResponse:
    try:
        reference_date = validate_date_value(reference_date)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    deleted = service.clear_week(reference_date)
    message = f"Deleted {deleted} screening(s)." if deleted else "No screenings scheduled in this week."
    return ClearWeekResponse(week_dates=week_dates(reference_date), deleted=deleted, message=message)
