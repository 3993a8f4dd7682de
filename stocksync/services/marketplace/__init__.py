from .client import MarketplaceClient
from .auth import MarketplaceAuthManager
