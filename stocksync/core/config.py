# stocksync/core/config.py

import os
from functools import lru_cache
from typing import Optional
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings

OAUTH_CALLBACK_FLAG = "rx_ml_oauth"
WEBHOOK_PATH = "/rx-ml/v1/webhook"
SETTINGS_PAGE_PATH = "/settings/marketplace"


class Settings(BaseSettings):
    """
    Application settings.
    Loads values from environment variables (.env file)
    """
    # Database settings
    DATABASE_URL: str = "sqlite+aiosqlite:///./stocksync.db"

    # Marketplace API
    MARKETPLACE_API_BASE: str = "https://api.mercadolibre.com"
    MARKETPLACE_AUTH_URL: str = "https://auth.mercadolibre.com/authorization"
    MARKETPLACE_WEBHOOK_TOPIC: str = "orders_v2"

    # Marketplace OAuth app (optional, only seeds an empty credential store)
    MARKETPLACE_CLIENT_ID: Optional[str] = None
    MARKETPLACE_CLIENT_SECRET: Optional[str] = None

    # Public URL the marketplace redirects to and posts webhooks to
    PUBLIC_BASE_URL: str = "http://localhost:8000"

    HTTP_TIMEOUT: float = 30.0

    # Basic Auth for operator endpoints
    BASIC_AUTH_USERNAME: str = "admin"
    BASIC_AUTH_PASSWORD: Optional[str] = None

    # Environment
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    model_config = ConfigDict(
        env_file=os.environ.get('ENV_FILE', '.env') if os.path.exists('.env') else None,
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def async_database_url(self) -> str:
        """DATABASE_URL with an async driver"""
        url = self.DATABASE_URL
        if url.startswith('postgresql://'):
            url = url.replace('postgresql://', 'postgresql+asyncpg://', 1)
        elif url.startswith('sqlite:///'):
            url = url.replace('sqlite:///', 'sqlite+aiosqlite:///', 1)
        return url


class MarketplaceConfig(BaseModel):
    """Explicit configuration handed to the sync services."""
    api_base: str
    auth_url: str
    redirect_uri: str
    webhook_url: str
    webhook_topic: str = "orders_v2"
    timeout: float = 30.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "MarketplaceConfig":
        base = settings.PUBLIC_BASE_URL.rstrip('/')
        return cls(
            api_base=settings.MARKETPLACE_API_BASE.rstrip('/'),
            auth_url=settings.MARKETPLACE_AUTH_URL,
            redirect_uri=f"{base}/?{urlencode({OAUTH_CALLBACK_FLAG: 1})}",
            webhook_url=f"{base}{WEBHOOK_PATH}",
            webhook_topic=settings.MARKETPLACE_WEBHOOK_TOPIC,
            timeout=settings.HTTP_TIMEOUT,
        )


@lru_cache()
def get_settings():
    """Cached settings to avoid loading .env file for every request"""
    return Settings()

def clear_settings_cache():
    """Clear the settings cache - useful when switching between environments"""
    get_settings.cache_clear()
