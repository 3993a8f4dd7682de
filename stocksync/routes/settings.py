from fastapi import APIRouter, Depends

from stocksync.core.config import SETTINGS_PAGE_PATH
from stocksync.dependencies import get_sync_service
from stocksync.schemas.requests import AppCredentialsUpdate
from stocksync.schemas.sync import ConnectionStatus
from stocksync.services.sync_service import SyncService

router = APIRouter(prefix=SETTINGS_PAGE_PATH, tags=["settings"])


@router.get("", response_model=ConnectionStatus)
async def connection_status(service: SyncService = Depends(get_sync_service)):
    return await service.auth.status()


@router.post("", response_model=ConnectionStatus)
async def save_app_credentials(body: AppCredentialsUpdate, service: SyncService = Depends(get_sync_service)):
    await service.auth.save_app_credentials(body.client_id, body.client_secret)
    return await service.auth.status()


@router.post("/disconnect", response_model=ConnectionStatus)
async def disconnect(service: SyncService = Depends(get_sync_service)):
    await service.auth.disconnect()
    return await service.auth.status()
