"""
Core module exports.
"""
from .enums import (
    CredentialKey,
    WebhookStatus
)

from .exceptions import (
    BaseServiceError,
    ConfigurationError,
    ProductNotFoundError,
    MarketplaceServiceError,
    AuthFailed,
    TransportError,
    WebhookValidationError
)

from .utils import (
    coerce_quantity,
    KeyedLock
)
