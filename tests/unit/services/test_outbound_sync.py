# tests/unit/services/test_outbound_sync.py
import pytest

from stocksync.integrations.events import OrderStockReducedEvent
from tests.mocks import InMemoryCredentialStore


@pytest.mark.asyncio
async def test_unlinked_product_makes_no_calls(sync_service, product_store, mock_marketplace):
    product_store.add(1, stock=10)

    assert await sync_service.outbound.on_stock_changed(1) is False
    assert mock_marketplace.calls == []


@pytest.mark.asyncio
async def test_unknown_product_makes_no_calls(sync_service, mock_marketplace):
    assert await sync_service.outbound.on_stock_changed(404) is False
    assert mock_marketplace.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("stock", [0, 1, 7, 250])
async def test_linked_product_pushes_current_stock_once(sync_service, product_store, mock_marketplace, stock):
    product_store.add(1, stock=stock, remote_item_id="MLA111")

    assert await sync_service.outbound.on_stock_changed(1) is True
    assert mock_marketplace.calls == [("put_item", "MLA111", {"available_quantity": stock})]


@pytest.mark.asyncio
async def test_accepts_product_record(sync_service, product_store, mock_marketplace):
    record = product_store.add(1, stock=3, remote_item_id="MLA111")

    await sync_service.outbound.on_stock_changed(record)

    assert mock_marketplace.calls_to("put_item") == [("put_item", "MLA111", {"available_quantity": 3})]


@pytest.mark.asyncio
@pytest.mark.parametrize("raw, pushed", [(-4, 0), (None, 0)])
async def test_stock_is_coerced_to_non_negative(sync_service, product_store, mock_marketplace, raw, pushed):
    product = product_store.add(1, remote_item_id="MLA111")
    product.stock_quantity = raw

    await sync_service.outbound.on_stock_changed(1)

    assert mock_marketplace.calls_to("put_item") == [("put_item", "MLA111", {"available_quantity": pushed})]


@pytest.mark.asyncio
async def test_disconnected_makes_no_calls(sync_service, product_store, mock_marketplace):
    sync_service.outbound.credentials = InMemoryCredentialStore({"client_id": "app-id", "access_token": ""})
    product_store.add(1, stock=5, remote_item_id="MLA111")

    assert await sync_service.outbound.on_stock_changed(1) is False
    assert mock_marketplace.calls == []


@pytest.mark.asyncio
async def test_order_reduction_delegates_per_product(sync_service, product_store, mock_marketplace):
    product_store.add(1, stock=4, remote_item_id="MLA111")
    product_store.add(2, stock=9)
    product_store.add(3, stock=0, remote_item_id="MLA333")

    pushed = await sync_service.outbound.on_order_stock_reduced(
        OrderStockReducedEvent(product_ids=[1, 2, 3], order_reference="WC-1001")
    )

    assert pushed == 2
    assert mock_marketplace.calls_to("put_item") == [
        ("put_item", "MLA111", {"available_quantity": 4}),
        ("put_item", "MLA333", {"available_quantity": 0}),
    ]


@pytest.mark.asyncio
async def test_catalog_events_drive_outbound_push(sync_service, product_store, mock_marketplace):
    """The service subscribes the outbound handler to the host catalog's events"""
    product_store.add(1, stock=6, remote_item_id="MLA111")
    product_store.add(2, stock=2, remote_item_id="MLA222")

    await sync_service.events.publish_stock_set(1)
    await sync_service.events.publish_order_reduced([2], order_reference="WC-1002")

    assert mock_marketplace.calls_to("put_item") == [
        ("put_item", "MLA111", {"available_quantity": 6}),
        ("put_item", "MLA222", {"available_quantity": 2}),
    ]
