"""HTTP layer over the inventory service, backed by the in-memory store."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from glamping_inventory.routers.inventory import get_inventory_service, router
from glamping_inventory.services.inventory_service import InventoryService


@pytest.fixture
def client(service):
    app = FastAPI()
    app.include_router(router, prefix="/inventory")
    app.dependency_overrides[get_inventory_service] = lambda: service
    return TestClient(app)


def _post(client, **body):
    return client.post("/inventory/transactions", json=body)


def test_create_transaction_returns_201_with_stock(client):
    res = _post(client, product_id=1, type="IN", quantity=50, note="  Welcome baskets ", reference="", created_by_id=7)

    assert res.status_code == 201
    data = res.json()
    assert data["message"] == "message.inventoryTransactionCreated"
    assert data["stock"] == 50
    assert data["transaction"]["note"] == "Welcome baskets"
    assert data["transaction"]["reference"] is None
    assert data["transaction"]["created_by"]["last_name"] == "Quispe"


def test_insufficient_stock_maps_to_400(client):
    _post(client, product_id=1, type="IN", quantity=2)

    res = _post(client, product_id=1, type="OUT", quantity=3)

    assert res.status_code == 400
    assert res.json()["detail"] == "error.noProductsFoundInStock"


@pytest.mark.parametrize(
    "body",
    [
        {"product_id": 0, "type": "IN", "quantity": 1},
        {"product_id": 1, "type": "TRANSFER", "quantity": 1},
        {"product_id": 1, "type": "IN", "quantity": 0},
        {"product_id": 1, "type": "IN", "quantity": 1, "note": "x" * 256},
    ],
)
def test_invalid_payload_is_rejected(client, store, body):
    res = _post(client, **body)

    assert res.status_code == 422
    assert store.rows == []


def test_unexpected_failure_maps_to_500(client, monkeypatch):
    async def boom(self, *args, **kwargs):
        raise RuntimeError("database went away")

    monkeypatch.setattr(InventoryService, "create_transaction", boom)

    res = _post(client, product_id=1, type="IN", quantity=1)

    assert res.status_code == 500
    assert res.json()["detail"] == "error.failedToCreateInventoryTransaction"


def test_list_transactions_paginates(client):
    for qty in range(1, 26):
        _post(client, product_id=4, type="IN", quantity=qty)

    res = client.get("/inventory/4/transactions", params={"page": 5, "page_size": 10})

    assert res.status_code == 200
    data = res.json()
    assert data["total_pages"] == 3
    assert data["current_page"] == 3
    assert [item["quantity"] for item in data["items"]] == [5, 4, 3, 2, 1]


def test_list_transactions_filters(client):
    _post(client, product_id=4, type="IN", quantity=5, note="Lanterns")
    _post(client, product_id=4, type="OUT", quantity=1, note="Broken lantern")

    out_only = client.get("/inventory/4/transactions", params={"type": "OUT"}).json()
    unknown_type = client.get("/inventory/4/transactions", params={"type": "BOGUS"}).json()
    searched = client.get("/inventory/4/transactions", params={"search": "broken"}).json()

    assert [i["type"] for i in out_only["items"]] == ["OUT"]
    assert len(unknown_type["items"]) == 2
    assert [i["note"] for i in searched["items"]] == ["Broken lantern"]


def test_list_transactions_validates_query(client):
    assert client.get("/inventory/0/transactions").status_code == 422
    assert client.get("/inventory/1/transactions", params={"page": 0}).status_code == 422
    assert client.get("/inventory/1/transactions", params={"page_size": 1000}).status_code == 422


def test_empty_ledger_listing(client):
    data = client.get("/inventory/1/transactions").json()

    assert data == {"items": [], "total_pages": 0, "current_page": 0}


def test_stock_endpoints(client):
    _post(client, product_id=1, type="IN", quantity=9)
    _post(client, product_id=1, type="OUT", quantity=4)

    single = client.get("/inventory/1/stock").json()
    many = client.get("/inventory/stock", params=[("product_ids", 1), ("product_ids", 2)]).json()

    assert single == {"product_id": 1, "stock": 5}
    assert many == {"stocks": {"1": 5, "2": 0}}
