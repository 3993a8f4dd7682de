"""
Wires the sync engine together from explicitly injected collaborators.
"""

import logging
from typing import Optional

from stocksync.core.config import MarketplaceConfig
from stocksync.core.enums import CredentialKey
from stocksync.integrations.base import CredentialStore, ProductStore
from stocksync.integrations.events import CatalogEvents
from stocksync.services.identity import IdentityResolver
from stocksync.services.marketplace.auth import MarketplaceAuthManager
from stocksync.services.marketplace.client import MarketplaceClient
from stocksync.services.outbound_sync import OutboundSyncHandler
from stocksync.services.webhook_processor import WebhookProcessor

logger = logging.getLogger(__name__)


class SyncService:

    def __init__(
        self,
        config: MarketplaceConfig,
        credentials: CredentialStore,
        products: ProductStore,
        client: Optional[MarketplaceClient] = None,
        events: Optional[CatalogEvents] = None,
    ):
        self.config = config
        self.credentials = credentials
        self.products = products
        self.client = client or MarketplaceClient(config, credentials)
        self.events = events or CatalogEvents()

        self.resolver = IdentityResolver(products)
        self.auth = MarketplaceAuthManager(config, credentials, self.client)
        self.outbound = OutboundSyncHandler(products, credentials, self.resolver, self.client)
        self.webhooks = WebhookProcessor(products, credentials, self.resolver, self.client)

        self.events.on_stock_set(self.outbound.handle_stock_set)
        self.events.on_order_reduced(self.outbound.on_order_stock_reduced)

    async def seed_app_credentials(self, client_id: Optional[str], client_secret: Optional[str]) -> None:
        """Fill client id/secret from configuration, never overwriting stored values"""
        if client_id and not await self.credentials.get(CredentialKey.CLIENT_ID):
            await self.credentials.set(CredentialKey.CLIENT_ID, client_id)
            logger.info("Seeded marketplace client id from settings")
        if client_secret and not await self.credentials.get(CredentialKey.CLIENT_SECRET):
            await self.credentials.set(CredentialKey.CLIENT_SECRET, client_secret)
