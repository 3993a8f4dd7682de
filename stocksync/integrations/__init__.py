from .base import CredentialStore, ProductStore
from .events import CatalogEvents, StockChangedEvent, OrderStockReducedEvent
from .stores import SqlCredentialStore, SqlProductStore
