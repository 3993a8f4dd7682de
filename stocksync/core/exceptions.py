class BaseServiceError(Exception):
    """Base exception for all service-related errors."""
    pass

class ConfigurationError(BaseServiceError):
    """Raised when required marketplace app credentials are missing."""
    pass

class ProductNotFoundError(BaseServiceError):
    """Raised when a local product is not found."""
    pass

class MarketplaceServiceError(BaseServiceError):
    """Base exception for marketplace errors."""
    pass

class AuthFailed(MarketplaceServiceError):
    """Raised when the authorization code could not be exchanged for tokens."""
    pass

class TransportError(MarketplaceServiceError):
    """Raised inside the marketplace client when a call fails at the transport level.

    Never propagates past MarketplaceClient; callers receive an empty result.
    """
    pass

class WebhookValidationError(BaseServiceError):
    """Raised when a webhook body is malformed."""
    pass
