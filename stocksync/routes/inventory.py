"""
Minimal host-catalog endpoints: set a product's stock (firing the catalog's
"stock set" event) and manage its marketplace link.
"""

from fastapi import APIRouter, Depends, HTTPException

from stocksync.core.exceptions import ProductNotFoundError
from stocksync.dependencies import get_sync_service
from stocksync.schemas.requests import LinkUpdate, StockUpdate
from stocksync.schemas.sync import ProductRecord
from stocksync.services.sync_service import SyncService

router = APIRouter(prefix="/inventory", tags=["inventory"])


async def _load(service: SyncService, product_id: int) -> ProductRecord:
    product = await service.products.get_product(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail=f"Product {product_id} not found")
    return product


@router.get("/{product_id}", response_model=ProductRecord)
async def get_product(product_id: int, service: SyncService = Depends(get_sync_service)):
    return await _load(service, product_id)


@router.put("/{product_id}/stock", response_model=ProductRecord)
async def set_stock(product_id: int, body: StockUpdate, service: SyncService = Depends(get_sync_service)):
    try:
        await service.products.set_stock(product_id, body.quantity)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    await service.events.publish_stock_set(product_id)
    return await _load(service, product_id)


@router.put("/{product_id}/link", response_model=ProductRecord)
async def link_product(product_id: int, body: LinkUpdate, service: SyncService = Depends(get_sync_service)):
    if not body.remote_item_id or not body.remote_item_id.strip():
        raise HTTPException(status_code=422, detail="remote_item_id is required")
    try:
        await service.resolver.link(product_id, body.remote_item_id)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return await _load(service, product_id)


@router.delete("/{product_id}/link", response_model=ProductRecord)
async def unlink_product(product_id: int, service: SyncService = Depends(get_sync_service)):
    try:
        await service.resolver.unlink(product_id)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return await _load(service, product_id)
