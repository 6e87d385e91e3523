"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Generator, Iterator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from src.application.services import reset_services
from src.config import InventorySettings, reset_settings
from src.core.services import InventoryService
from src.infrastructure.storage.memory import InMemoryKeyValueStore


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Each test starts from default settings on the in-memory backend."""
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    reset_settings()
    reset_services()
    yield
    reset_settings()
    reset_services()


@pytest.fixture
def inventory_settings() -> InventorySettings:
    return InventorySettings()


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def service(kv_store: InMemoryKeyValueStore, inventory_settings: InventorySettings) -> InventoryService:
    """Inventory service over an empty in-memory store, no catalog."""
    return InventoryService(kv_store, settings=inventory_settings)


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Synchronous test client with the application lifespan."""
    from src.api.main import app

    with TestClient(app) as c:
        yield c


@pytest_asyncio.fixture
async def async_client(service: InventoryService) -> AsyncGenerator[AsyncClient, None]:
    """Async test client whose routes all share the ``service`` fixture."""
    from src.api.dependencies import get_inventory
    from src.api.main import app

    app.dependency_overrides[get_inventory] = lambda: service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def api_prefix() -> str:
    return "/api"
