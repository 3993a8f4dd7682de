"""
Marketplace -> local stock decrement driven by order notifications.

The marketplace posts {resource, topic, ...} with only a reference to the
order. The order is fetched, and every line item linked to a local product
decrements that product's stock, clamped at zero.

The endpoint is unauthenticated: the marketplace cannot sign its
deliveries. A forged notification can only make us fetch an order id of
the caller's choosing with our own token; an unknown order comes back
empty and nothing is decremented. Oversell (quantity above on-hand) is
clamped, not flagged.
"""

import logging
from typing import Any, Dict, List, Optional

from stocksync.core.enums import CredentialKey, WebhookStatus
from stocksync.core.exceptions import ProductNotFoundError, WebhookValidationError
from stocksync.core.utils import KeyedLock, coerce_quantity
from stocksync.integrations.base import CredentialStore, ProductStore
from stocksync.schemas.sync import OrderLine, WebhookResult
from stocksync.services.identity import IdentityResolver
from stocksync.services.marketplace.client import MarketplaceClient

logger = logging.getLogger(__name__)

ORDER_SEGMENT = "orders/"


def validate_notification(payload: Any) -> str:
    """Return the notification's resource path or raise WebhookValidationError"""
    if not isinstance(payload, dict):
        raise WebhookValidationError("Body is not a JSON object")
    resource = payload.get("resource")
    if not resource or not isinstance(resource, str):
        raise WebhookValidationError("Missing resource")
    return resource


def order_id_from_resource(resource: str) -> Optional[str]:
    """'/orders/2000003508419013' -> '2000003508419013'; None for non-order resources"""
    if ORDER_SEGMENT not in resource:
        return None
    order_id = resource.rstrip('/').rsplit('/', 1)[-1]
    return order_id or None


def parse_order_lines(order: Dict[str, Any]) -> List[OrderLine]:
    lines = []
    for entry in order.get("order_items") or []:
        if not isinstance(entry, dict):
            continue
        item = entry.get("item") or {}
        item_id = item.get("id") if isinstance(item, dict) else None
        if not item_id:
            logger.warning(f"Skipping order line without item id: {entry}")
            continue
        lines.append(OrderLine(remote_item_id=str(item_id), quantity=coerce_quantity(entry.get("quantity"))))
    return lines


class WebhookProcessor:

    def __init__(
        self,
        products: ProductStore,
        credentials: CredentialStore,
        resolver: IdentityResolver,
        client: MarketplaceClient,
        locks: Optional[KeyedLock] = None,
    ):
        self.products = products
        self.credentials = credentials
        self.resolver = resolver
        self.client = client
        self.locks = locks or KeyedLock()

    async def on_notification(self, payload: Any) -> WebhookResult:
        try:
            resource = validate_notification(payload)
        except WebhookValidationError as e:
            logger.warning(f"Rejected webhook body: {e}")
            return WebhookResult(status_code=400, body={"error": "Invalid body"})

        logger.info(f"Webhook received for {resource} (topic={payload.get('topic')})")

        order_id = order_id_from_resource(resource)
        if order_id is None:
            return WebhookResult(body={"status": WebhookStatus.IGNORED.value})

        token = await self.credentials.get(CredentialKey.ACCESS_TOKEN)
        if not token:
            logger.warning(f"Fetching order {order_id} without an access token")
        order = await self.client.get_order(order_id, token)

        lines = parse_order_lines(order)
        if not lines:
            return WebhookResult(body={"status": WebhookStatus.NO_ITEMS.value})

        for line in lines:
            await self._apply_line(order_id, line)

        return WebhookResult(body={"status": WebhookStatus.SYNCED.value})

    async def _apply_line(self, order_id: str, line: OrderLine) -> None:
        product_id = await self.resolver.local_id_for(line.remote_item_id)
        if product_id is None:
            logger.info(f"Order {order_id}: item {line.remote_item_id} is not linked, skipping")
            return

        async with self.locks.hold(product_id):
            product = await self.products.get_product(product_id)
            if product is None:
                logger.info(f"Order {order_id}: product {product_id} no longer exists, skipping")
                return

            current = coerce_quantity(product.stock_quantity)
            new_stock = max(0, current - line.quantity)
            try:
                await self.products.set_stock(product_id, new_stock)
            except ProductNotFoundError:
                logger.info(f"Order {order_id}: product {product_id} vanished before update, skipping")
                return

        logger.info(
            f"Order {order_id}: product {product_id} stock {current} -> {new_stock} "
            f"(item {line.remote_item_id}, qty {line.quantity})"
        )
