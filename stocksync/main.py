# stocksync/main.py

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from stocksync.core.config import MarketplaceConfig, Settings, get_settings
from stocksync.core.logging_config import configure_logging
from stocksync.core.security import require_auth
from stocksync.database import create_all, create_engine_and_sessionmaker
from stocksync.integrations.stores import SqlCredentialStore, SqlProductStore
from stocksync.routes import health, inventory, oauth, settings as settings_routes, webhooks
from stocksync.services.sync_service import SyncService

logger = logging.getLogger(__name__)


async def build_default_service(settings: Settings):
    """SQL-backed SyncService for the configured database. Returns (service, engine)."""
    engine, session_factory = create_engine_and_sessionmaker(settings.async_database_url)
    await create_all(engine)

    service = SyncService(
        config=MarketplaceConfig.from_settings(settings),
        credentials=SqlCredentialStore(session_factory),
        products=SqlProductStore(session_factory),
    )
    await service.seed_app_credentials(settings.MARKETPLACE_CLIENT_ID, settings.MARKETPLACE_CLIENT_SECRET)
    return service, engine


def create_app(service: Optional[SyncService] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory.

    Pass a ready SyncService to run against other stores (tests do this);
    otherwise the lifespan builds the SQL-backed one from settings.
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = None
        if app.state.sync_service is None:
            app.state.sync_service, engine = await build_default_service(settings)
            logger.info("Sync service started with SQL-backed stores")
        try:
            yield
        finally:
            if engine is not None:
                await engine.dispose()

    app = FastAPI(title="Marketplace Stock Sync", lifespan=lifespan)
    app.state.sync_service = service

    # The marketplace can't authenticate on these two
    app.include_router(webhooks.router)
    app.include_router(oauth.router)
    app.include_router(health.router)

    app.include_router(settings_routes.router, dependencies=[require_auth()])
    app.include_router(inventory.router, dependencies=[require_auth()])

    return app


app = create_app()
