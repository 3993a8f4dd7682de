import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse, RedirectResponse

from stocksync.core.config import SETTINGS_PAGE_PATH
from stocksync.core.exceptions import AuthFailed, ConfigurationError
from stocksync.dependencies import get_sync_service
from stocksync.services.sync_service import SyncService

router = APIRouter(tags=["oauth"])

logger = logging.getLogger(__name__)


@router.get("/")
async def oauth_callback(
    rx_ml_oauth: Optional[str] = Query(None),
    code: Optional[str] = Query(None),
    service: SyncService = Depends(get_sync_service),
):
    """Where the marketplace redirects after the operator grants access."""
    if not (rx_ml_oauth and code):
        return RedirectResponse(url=SETTINGS_PAGE_PATH, status_code=302)

    try:
        await service.auth.connect(code.strip())
    except AuthFailed as e:
        logger.error(f"Marketplace connection failed: {e}")
        return PlainTextResponse(f"Marketplace connection failed: {e}", status_code=500)
    except ConfigurationError as e:
        logger.error("Marketplace connection attempted without app credentials")
        return PlainTextResponse(f"Marketplace connection failed: {e}", status_code=500)

    return RedirectResponse(url=SETTINGS_PAGE_PATH, status_code=302)
