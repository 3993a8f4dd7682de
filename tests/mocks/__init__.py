from .mock_stores import InMemoryCredentialStore, InMemoryProductStore
from .mock_marketplace import MockMarketplaceClient
