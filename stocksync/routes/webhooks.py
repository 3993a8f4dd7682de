import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from stocksync.core.config import WEBHOOK_PATH
from stocksync.dependencies import get_sync_service
from stocksync.services.sync_service import SyncService

router = APIRouter(tags=["webhooks"])

logger = logging.getLogger(__name__)


@router.post(WEBHOOK_PATH)
async def marketplace_webhook(request: Request, service: SyncService = Depends(get_sync_service)):
    """Order notifications from the marketplace. No authentication: the marketplace cannot sign."""
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        payload = None

    result = await service.webhooks.on_notification(payload)
    return JSONResponse(status_code=result.status_code, content=result.body)
