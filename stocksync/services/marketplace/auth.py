"""
Marketplace OAuth session manager.

Two states: disconnected (no access token) and connected. The only
transition modelled is disconnected -> connected via an authorization code.
The refresh token is stored but never used; there is no renewal of an
expired access token.
"""

import logging
from typing import Optional
from urllib.parse import urlencode

from stocksync.core.config import MarketplaceConfig
from stocksync.core.enums import CredentialKey
from stocksync.core.exceptions import ConfigurationError
from stocksync.integrations.base import CredentialStore
from stocksync.schemas.sync import ConnectionStatus, CredentialRecord
from .client import MarketplaceClient

logger = logging.getLogger(__name__)


class MarketplaceAuthManager:

    def __init__(self, config: MarketplaceConfig, credentials: CredentialStore, client: MarketplaceClient):
        self.config = config
        self.credentials = credentials
        self.client = client

    async def save_app_credentials(self, client_id: str, client_secret: str) -> None:
        await self.credentials.set(CredentialKey.CLIENT_ID, client_id.strip())
        await self.credentials.set(CredentialKey.CLIENT_SECRET, client_secret.strip())
        logger.info("Saved marketplace app credentials")

    async def authorization_url(self) -> Optional[str]:
        """URL the operator follows to grant access; None until a client id is saved"""
        client_id = await self.credentials.get(CredentialKey.CLIENT_ID)
        if not client_id:
            return None

        auth_params = {
            "response_type": "code",
            "client_id": client_id,
            "redirect_uri": self.config.redirect_uri,
        }
        return f"{self.config.auth_url}?{urlencode(auth_params)}"

    async def connect(self, code: str) -> CredentialRecord:
        """
        Exchange the authorization code, persist the tokens and subscribe the webhook.

        Raises:
            ConfigurationError: client id/secret have not been saved
            AuthFailed: the exchange failed; nothing is persisted
        """
        if not await self.credentials.get(CredentialKey.CLIENT_ID) or \
                not await self.credentials.get(CredentialKey.CLIENT_SECRET):
            raise ConfigurationError("Marketplace app id and secret must be saved before connecting.")

        grant = await self.client.exchange_code(code, self.config.redirect_uri)

        await self.credentials.set(CredentialKey.ACCESS_TOKEN, grant.access_token)
        await self.credentials.set(CredentialKey.REFRESH_TOKEN, grant.refresh_token)
        await self.credentials.set(CredentialKey.REMOTE_ACCOUNT_ID, grant.remote_account_id)
        logger.info(f"Connected to marketplace account {grant.remote_account_id}")

        await self.client.subscribe_webhook(grant.access_token, grant.remote_account_id, self.config.webhook_url)

        return await self.credentials.snapshot()

    async def status(self) -> ConnectionStatus:
        connected = await self.credentials.is_connected()
        client_id = await self.credentials.get(CredentialKey.CLIENT_ID)
        return ConnectionStatus(
            connected=connected,
            remote_account_id=await self.credentials.get(CredentialKey.REMOTE_ACCOUNT_ID) if connected else None,
            client_configured=bool(client_id),
            authorize_url=None if connected else await self.authorization_url(),
        )

    async def disconnect(self) -> None:
        """Forget every stored credential field, app id and secret included"""
        await self.credentials.clear()
        logger.info("Cleared all marketplace credentials")
