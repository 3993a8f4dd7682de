from abc import ABC, abstractmethod
from typing import Optional

from stocksync.core.enums import CredentialKey
from stocksync.schemas.sync import CredentialRecord, ProductRecord


class CredentialStore(ABC):
    """Key-value store for the marketplace OAuth credentials"""

    @abstractmethod
    async def get(self, key: CredentialKey) -> Optional[str]:
        """Return the stored value, or None if absent"""
        pass

    @abstractmethod
    async def set(self, key: CredentialKey, value: Optional[str]) -> None:
        """Persist a value"""
        pass

    @abstractmethod
    async def delete(self, key: CredentialKey) -> None:
        """Remove a value; missing keys are ignored"""
        pass

    async def is_connected(self) -> bool:
        return bool(await self.get(CredentialKey.ACCESS_TOKEN))

    async def clear(self) -> None:
        for key in CredentialKey:
            await self.delete(key)

    async def snapshot(self) -> CredentialRecord:
        values = {key.value: await self.get(key) for key in CredentialKey}
        return CredentialRecord(**values)


class ProductStore(ABC):
    """The local catalog as seen by the sync engine"""

    @abstractmethod
    async def get_product(self, product_id: int) -> Optional[ProductRecord]:
        pass

    @abstractmethod
    async def set_stock(self, product_id: int, quantity: int) -> None:
        pass

    @abstractmethod
    async def get_linked_id(self, product_id: int) -> Optional[str]:
        pass

    @abstractmethod
    async def set_linked_id(self, product_id: int, remote_item_id: Optional[str]) -> None:
        pass

    @abstractmethod
    async def find_by_linked_id(self, remote_item_id: str) -> Optional[int]:
        """Id of the first product linked to remote_item_id, or None"""
        pass
