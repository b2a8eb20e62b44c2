import pytest
from fastapi.testclient import TestClient  # calls the FastAPI routes without running a real server

from cinema_scheduler.api.deps import get_store
from cinema_scheduler.db.catalog import default_catalog
from cinema_scheduler.db.store import InMemoryScreeningStore
from cinema_scheduler.main import app
from cinema_scheduler.schemas.generator import GenerationSettingsBase
from cinema_scheduler.services.scheduling import SchedulingService


@pytest.fixture()
def catalog():
    return default_catalog()


@pytest.fixture()
def store():
    return InMemoryScreeningStore()


@pytest.fixture()
def service(catalog, store):
    return SchedulingService(
        catalog=catalog,
        store=store,
        generation_settings=GenerationSettingsBase(random_seed=7),
    )


@pytest.fixture()
def client(store):
    # Each test gets an isolated, empty screening collection.
    app.dependency_overrides[get_store] = lambda: store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
