from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from cinema_scheduler.api.deps import get_catalog, get_store
from cinema_scheduler.db.catalog import Catalog
from cinema_scheduler.db.store import ScreeningStore

router = APIRouter()


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}


@router.get("/health/live")
def health_live(
    catalog: Catalog = Depends(get_catalog),
    store: ScreeningStore = Depends(get_store),
) -> dict:
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "catalog": {"movies": len(catalog.movies), "rooms": len(catalog.rooms)},
        "screenings": len(store.all()),
    }
