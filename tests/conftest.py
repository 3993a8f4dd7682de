# tests/conftest.py
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from stocksync.core.config import MarketplaceConfig, Settings, get_settings
from stocksync.database import create_all, create_engine_and_sessionmaker
from stocksync.main import create_app
from stocksync.services.sync_service import SyncService
from tests.mocks import InMemoryCredentialStore, InMemoryProductStore, MockMarketplaceClient

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def settings():
    """Provide test settings"""
    return Settings(
        DATABASE_URL=TEST_DATABASE_URL,
        PUBLIC_BASE_URL="https://shop.example.com",
        BASIC_AUTH_USERNAME="admin",
        BASIC_AUTH_PASSWORD="test_pass",
    )


@pytest.fixture
def marketplace_config(settings):
    return MarketplaceConfig.from_settings(settings)


@pytest.fixture
def credential_store():
    return InMemoryCredentialStore({"client_id": "app-id", "client_secret": "app-secret"})


@pytest.fixture
def connected_credential_store():
    return InMemoryCredentialStore({
        "client_id": "app-id",
        "client_secret": "app-secret",
        "access_token": "APP_USR-access",
        "refresh_token": "TG-refresh",
        "remote_account_id": "123456",
    })


@pytest.fixture
def product_store():
    return InMemoryProductStore()


@pytest.fixture
def mock_marketplace():
    return MockMarketplaceClient()


@pytest.fixture
def sync_service(marketplace_config, connected_credential_store, product_store, mock_marketplace):
    """SyncService over in-memory stores, already connected"""
    return SyncService(
        config=marketplace_config,
        credentials=connected_credential_store,
        products=product_store,
        client=mock_marketplace,
    )


@pytest.fixture
async def session_factory():
    """In-memory SQLite session factory with all tables created"""
    engine, factory = create_engine_and_sessionmaker(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_all(engine)
    yield factory
    await engine.dispose()


@pytest.fixture
def test_client(settings, sync_service):
    """Provide a test client wired to the in-memory sync service"""
    app = create_app(service=sync_service, settings=settings)
    app.dependency_overrides[get_settings] = lambda: settings
    with TestClient(app) as client:
        yield client


@pytest.fixture
def auth():
    return ("admin", "test_pass")
