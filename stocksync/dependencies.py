from fastapi import HTTPException, Request

from stocksync.services.sync_service import SyncService


def get_sync_service(request: Request) -> SyncService:
    """Dependency returning the SyncService attached to the running app."""
    service = getattr(request.app.state, "sync_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Sync service not initialised")
    return service
