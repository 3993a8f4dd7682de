from .product import Product
from .credential import MarketplaceCredential
