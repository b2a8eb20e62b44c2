from threading import Lock

from fastapi import Depends
from pydantic import ValidationError as PydanticValidationError

from cinema_scheduler.core.config import Settings, get_settings
from cinema_scheduler.core.exceptions import ConfigurationError
from cinema_scheduler.db.catalog import Catalog, default_catalog
from cinema_scheduler.db.store import InMemoryScreeningStore, ScreeningStore
from cinema_scheduler.schemas.generator import GenerationSettingsBase
from cinema_scheduler.services.scheduling import SchedulingService

_store = InMemoryScreeningStore()
_schedule_lock = Lock()


def get_catalog() -> Catalog:
    return default_catalog()


def get_store() -> ScreeningStore:
    return _store


def get_generation_settings(settings: Settings = Depends(get_settings)) -> GenerationSettingsBase:
    try:
        return GenerationSettingsBase(
            max_attempts=settings.generator_max_attempts,
            slot_attempts=settings.generator_slot_attempts,
            min_shows_per_room=settings.generator_min_shows,
            max_shows_per_room=settings.generator_max_shows,
            random_seed=settings.generator_random_seed,
        )
    except PydanticValidationError as exc:
        raise ConfigurationError(f"Invalid generator settings: {exc.errors()[0]['msg']}") from exc


def get_scheduling_service(
    catalog: Catalog = Depends(get_catalog),
    store: ScreeningStore = Depends(get_store),
    generation_settings: GenerationSettingsBase = Depends(get_generation_settings),
) -> SchedulingService:
    return SchedulingService(
        catalog=catalog,
        store=store,
        generation_settings=generation_settings,
        lock=_schedule_lock,
    )
