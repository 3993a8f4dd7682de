"""
Local -> marketplace stock push.

Synchronous, at-most-once per triggering event: no retry and no queue. A
push lost to a network error is corrected by the next stock event for the
same product.
"""

import logging
from typing import Union

from stocksync.core.utils import coerce_quantity
from stocksync.integrations.base import CredentialStore, ProductStore
from stocksync.integrations.events import OrderStockReducedEvent, StockChangedEvent
from stocksync.schemas.sync import ProductRecord
from stocksync.services.identity import IdentityResolver
from stocksync.services.marketplace.client import MarketplaceClient

logger = logging.getLogger(__name__)


class OutboundSyncHandler:

    def __init__(
        self,
        products: ProductStore,
        credentials: CredentialStore,
        resolver: IdentityResolver,
        client: MarketplaceClient,
    ):
        self.products = products
        self.credentials = credentials
        self.resolver = resolver
        self.client = client

    async def on_stock_changed(self, product: Union[int, ProductRecord]) -> bool:
        """Push the product's current stock as available_quantity. Returns True if a push was issued."""
        if not isinstance(product, ProductRecord):
            product = await self.products.get_product(int(product))
            if product is None:
                return False

        remote_item_id = await self.resolver.remote_id_for(product)
        if not remote_item_id:
            # Not linked to the marketplace
            return False

        if not await self.credentials.is_connected():
            logger.debug(f"Marketplace not connected, skipping push for product {product.id}")
            return False

        quantity = coerce_quantity(product.stock_quantity)
        await self.client.put_item(remote_item_id, {"available_quantity": quantity})
        logger.info(f"Pushed available_quantity={quantity} for product {product.id} to item {remote_item_id}")
        return True

    async def on_order_stock_reduced(self, event: OrderStockReducedEvent) -> int:
        """Delegate each product of an order-driven reduction; returns the number of pushes"""
        pushed = 0
        for product_id in event.product_ids:
            if await self.on_stock_changed(product_id):
                pushed += 1
        return pushed

    async def handle_stock_set(self, event: StockChangedEvent) -> None:
        await self.on_stock_changed(event.product_id)
