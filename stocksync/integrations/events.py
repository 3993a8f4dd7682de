"""
Catalog events the host catalog fires and the sync engine subscribes to.

CatalogEvents is the explicit callback interface: the host calls
publish_stock_set() whenever a product's stock is set, and
publish_order_reduced() after an order has reduced stock for a set of
products.
"""

import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable, List, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


def _utc_now():
    return datetime.now(timezone.utc)


class StockChangedEvent(BaseModel):
    product_id: int
    timestamp: datetime = Field(default_factory=_utc_now)


class OrderStockReducedEvent(BaseModel):
    product_ids: List[int]
    order_reference: Optional[str] = None
    timestamp: datetime = Field(default_factory=_utc_now)


StockSetCallback = Callable[[StockChangedEvent], Awaitable[None]]
OrderReducedCallback = Callable[[OrderStockReducedEvent], Awaitable[None]]


class CatalogEvents:

    def __init__(self):
        self._stock_set: List[StockSetCallback] = []
        self._order_reduced: List[OrderReducedCallback] = []

    def on_stock_set(self, callback: StockSetCallback) -> None:
        self._stock_set.append(callback)

    def on_order_reduced(self, callback: OrderReducedCallback) -> None:
        self._order_reduced.append(callback)

    async def publish_stock_set(self, product_id: int) -> None:
        event = StockChangedEvent(product_id=product_id)
        for callback in self._stock_set:
            await self._dispatch(callback, event)

    async def publish_order_reduced(self, product_ids: List[int], order_reference: Optional[str] = None) -> None:
        event = OrderStockReducedEvent(product_ids=list(product_ids), order_reference=order_reference)
        for callback in self._order_reduced:
            await self._dispatch(callback, event)

    async def _dispatch(self, callback, event) -> None:
        # A broken subscriber must not take the host catalog down with it
        try:
            await callback(event)
        except Exception:
            logger.exception(f"Catalog event subscriber {getattr(callback, '__qualname__', callback)} failed")
