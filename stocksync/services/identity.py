import logging
from typing import Optional, Union

from stocksync.integrations.base import ProductStore
from stocksync.schemas.sync import ProductRecord

logger = logging.getLogger(__name__)


class IdentityResolver:
    """
    Maps local product ids to marketplace item ids and back.

    The link lives on the local product (its remote_item_id attribute). The
    reverse lookup returns the first linked product; duplicate links are not
    detected.
    """

    def __init__(self, products: ProductStore):
        self.products = products

    async def remote_id_for(self, product: Union[int, ProductRecord]) -> Optional[str]:
        if isinstance(product, ProductRecord):
            return product.remote_item_id or None
        return await self.products.get_linked_id(int(product)) or None

    async def local_id_for(self, remote_item_id: str) -> Optional[int]:
        if not remote_item_id:
            return None
        return await self.products.find_by_linked_id(str(remote_item_id))

    async def link(self, product_id: int, remote_item_id: str) -> None:
        await self.products.set_linked_id(product_id, remote_item_id.strip())
        logger.info(f"Linked product {product_id} to marketplace item {remote_item_id}")

    async def unlink(self, product_id: int) -> None:
        await self.products.set_linked_id(product_id, None)
        logger.info(f"Unlinked product {product_id}")
