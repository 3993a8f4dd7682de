"""
SQLAlchemy-backed credential and product stores.

Each call opens its own short-lived session, matching the request-per-call
execution model of the handlers.
"""

import logging
from typing import Optional

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import async_sessionmaker

from stocksync.core.enums import CredentialKey
from stocksync.core.exceptions import ProductNotFoundError
from stocksync.integrations.base import CredentialStore, ProductStore
from stocksync.models.credential import MarketplaceCredential
from stocksync.models.product import Product
from stocksync.schemas.sync import ProductRecord

logger = logging.getLogger(__name__)


class SqlCredentialStore(CredentialStore):

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def get(self, key: CredentialKey) -> Optional[str]:
        async with self.session_factory() as session:
            row = await session.get(MarketplaceCredential, CredentialKey(key).value)
            return row.value if row else None

    async def set(self, key: CredentialKey, value: Optional[str]) -> None:
        key = CredentialKey(key).value
        async with self.session_factory() as session:
            row = await session.get(MarketplaceCredential, key)
            if row is None:
                session.add(MarketplaceCredential(key=key, value=value))
            else:
                row.value = value
            await session.commit()

    async def delete(self, key: CredentialKey) -> None:
        async with self.session_factory() as session:
            await session.execute(
                delete(MarketplaceCredential).where(MarketplaceCredential.key == CredentialKey(key).value)
            )
            await session.commit()


class SqlProductStore(ProductStore):

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def get_product(self, product_id: int) -> Optional[ProductRecord]:
        async with self.session_factory() as session:
            product = await session.get(Product, product_id)
            if product is None:
                return None
            return ProductRecord.model_validate(product, from_attributes=True)

    async def set_stock(self, product_id: int, quantity: int) -> None:
        async with self.session_factory() as session:
            product = await session.get(Product, product_id)
            if product is None:
                raise ProductNotFoundError(f"Product {product_id} not found")
            product.stock_quantity = quantity
            await session.commit()
        logger.debug(f"Product {product_id} stock set to {quantity}")

    async def get_linked_id(self, product_id: int) -> Optional[str]:
        async with self.session_factory() as session:
            product = await session.get(Product, product_id)
            return product.remote_item_id if product else None

    async def set_linked_id(self, product_id: int, remote_item_id: Optional[str]) -> None:
        async with self.session_factory() as session:
            product = await session.get(Product, product_id)
            if product is None:
                raise ProductNotFoundError(f"Product {product_id} not found")
            product.remote_item_id = remote_item_id or None
            await session.commit()

    async def find_by_linked_id(self, remote_item_id: str) -> Optional[int]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(Product.id)
                .where(Product.remote_item_id == remote_item_id)
                .order_by(Product.id)
                .limit(1)
            )
            return result.scalar_one_or_none()
