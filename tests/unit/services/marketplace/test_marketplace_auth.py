# tests/unit/services/marketplace/test_marketplace_auth.py
from urllib.parse import parse_qs, urlparse

import pytest

from stocksync.core.exceptions import AuthFailed, ConfigurationError
from stocksync.services.marketplace.auth import MarketplaceAuthManager
from tests.mocks import InMemoryCredentialStore, MockMarketplaceClient


@pytest.fixture
def auth_manager(marketplace_config, credential_store, mock_marketplace):
    return MarketplaceAuthManager(marketplace_config, credential_store, mock_marketplace)


"""
1. Authorization URL and status
"""

@pytest.mark.asyncio
async def test_authorization_url(auth_manager):
    url = await auth_manager.authorization_url()

    parsed = urlparse(url)
    assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == "https://auth.mercadolibre.com/authorization"
    params = parse_qs(parsed.query)
    assert params["response_type"] == ["code"]
    assert params["client_id"] == ["app-id"]
    assert params["redirect_uri"] == ["https://shop.example.com/?rx_ml_oauth=1"]


@pytest.mark.asyncio
async def test_authorization_url_requires_client_id(marketplace_config, mock_marketplace):
    manager = MarketplaceAuthManager(marketplace_config, InMemoryCredentialStore(), mock_marketplace)
    assert await manager.authorization_url() is None


@pytest.mark.asyncio
async def test_status_when_disconnected(auth_manager):
    status = await auth_manager.status()

    assert status.connected is False
    assert status.client_configured is True
    assert status.remote_account_id is None
    assert status.authorize_url.startswith("https://auth.mercadolibre.com/authorization?")


"""
2. Connect flow
"""

@pytest.mark.asyncio
async def test_connect_persists_tokens_and_subscribes(auth_manager, credential_store, mock_marketplace):
    record = await auth_manager.connect("TG-code")

    assert record.access_token == "APP_USR-access"
    assert record.refresh_token == "TG-refresh"
    assert record.remote_account_id == "123456"
    assert record.client_id == "app-id"
    assert await credential_store.is_connected() is True

    assert mock_marketplace.calls_to("exchange_code") == [
        ("exchange_code", "TG-code", "https://shop.example.com/?rx_ml_oauth=1")
    ]
    assert mock_marketplace.calls_to("subscribe_webhook") == [
        ("subscribe_webhook", "APP_USR-access", "123456", "https://shop.example.com/rx-ml/v1/webhook")
    ]

    status = await auth_manager.status()
    assert status.connected is True
    assert status.remote_account_id == "123456"
    assert status.authorize_url is None


@pytest.mark.asyncio
async def test_connect_failure_persists_nothing(auth_manager, credential_store, mock_marketplace):
    mock_marketplace.grant = None

    with pytest.raises(AuthFailed):
        await auth_manager.connect("bad-code")

    assert await credential_store.is_connected() is False
    assert credential_store.values.get("refresh_token") is None
    assert mock_marketplace.calls_to("subscribe_webhook") == []


@pytest.mark.asyncio
async def test_connect_without_app_credentials(marketplace_config):
    client = MockMarketplaceClient()
    manager = MarketplaceAuthManager(marketplace_config, InMemoryCredentialStore(), client)

    with pytest.raises(ConfigurationError):
        await manager.connect("TG-code")

    assert client.calls == []


@pytest.mark.asyncio
async def test_save_app_credentials_strips_whitespace(marketplace_config, mock_marketplace):
    store = InMemoryCredentialStore()
    manager = MarketplaceAuthManager(marketplace_config, store, mock_marketplace)

    await manager.save_app_credentials(" app-id ", "secret\n")

    assert store.values == {"client_id": "app-id", "client_secret": "secret"}


"""
3. Disconnect / uninstall round trip
"""

@pytest.mark.asyncio
async def test_connect_then_disconnect_leaves_store_empty(auth_manager, credential_store):
    await auth_manager.connect("TG-code")
    await auth_manager.disconnect()

    snapshot = await credential_store.snapshot()
    assert snapshot.is_empty()
    assert await credential_store.is_connected() is False


@pytest.mark.asyncio
async def test_disconnect_when_never_connected(marketplace_config, mock_marketplace):
    store = InMemoryCredentialStore()
    manager = MarketplaceAuthManager(marketplace_config, store, mock_marketplace)

    await manager.disconnect()

    assert (await store.snapshot()).is_empty()
