# tests/test_products_api.py
import pytest
from fastapi.testclient import TestClient

from catalog.config import Settings
from catalog.database import CatalogStore
from catalog.exceptions import StoreFailure
from catalog.main import create_app
from catalog.seeder import CATEGORIES, SEED_COUNT

PEN = {"img": "u", "name": "Pen", "description": "A pen", "price": 10, "initialQuantity": 20, "category": "Office"}


def make_client(store=None, **overrides):
    settings = Settings(**dict({"seed_on_startup": False}, **overrides))
    store = store if store is not None else CatalogStore()
    return TestClient(create_app(settings, store)), store


def test_pen_scenario():
    client, _ = make_client()

    r = client.post("/products", json=PEN)
    assert r.status_code == 201
    pen = r.json()
    assert set(pen) == {"id", "img", "name", "description", "price", "quantity", "category"}

    listed = client.get("/products").json()
    assert len(listed) == 1
    assert listed[0]["category"] == "office"
    assert listed[0]["quantity"] == 20

    assert client.get("/products", params={"category": "OFFICE"}).json() == listed
    assert client.get("/products", params={"category": "books"}).json() == []
    assert client.get(f"/products/{pen['id']}").json() == pen

    r = client.get("/products/nonexistent")
    assert r.status_code == 404
    body = r.json()
    assert body["success"] is False
    assert body["error"]["code"] == "PRODUCT_NOT_FOUND"


def test_empty_category_param_matches_nothing():
    client, _ = make_client()
    client.post("/products", json=PEN)
    assert client.get("/products?category=").json() == []


def test_create_missing_price_is_rejected():
    client, store = make_client()
    payload = {k: v for k, v in PEN.items() if k != "price"}
    r = client.post("/products", json=payload)
    assert r.status_code == 422
    body = r.json()
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert any(e["field"].endswith("price") for e in body["error"]["details"]["errors"])
    assert store.count() == 0


def test_create_wrong_type_is_rejected():
    client, store = make_client()
    r = client.post("/products", json=dict(PEN, initialQuantity="lots"))
    assert r.status_code == 422
    assert store.count() == 0


class _FailingStore(CatalogStore):
    async def create(self, fields):
        raise RuntimeError("constraint violated")


def test_store_failure_on_create_is_one_clean_500():
    client, _ = make_client(store=_FailingStore())
    r = client.post("/products", json=PEN)
    assert r.status_code == 500
    body = r.json()
    assert body["error"]["code"] == "STORE_FAILURE"
    assert "constraint" not in body["error"]["message"]


def test_startup_seeds_catalog():
    settings = Settings(seed_on_startup=True, seed_random_seed=5)
    store = CatalogStore()
    store_app = create_app(settings, store)
    with TestClient(store_app) as client:
        products = client.get("/products").json()
        assert len(products) == SEED_COUNT
        assert all(p["category"] in CATEGORIES for p in products)
        assert client.get("/health").json() == {"status": "ok", "products": SEED_COUNT}


def test_reseed_endpoint_wipes_user_products():
    client, store = make_client(seed_count=12)
    pen = client.post("/products", json=PEN).json()

    r = client.post("/seed")
    assert r.status_code == 200
    assert r.json() == {"status": "seeded", "count": 12}
    assert store.count() == 12
    assert client.get(f"/products/{pen['id']}").status_code == 404


class _UnseedableStore(CatalogStore):
    async def replace_all(self, records):
        raise RuntimeError("disk full")


def test_failed_startup_seed_aborts_startup():
    broken_app = create_app(Settings(seed_on_startup=True), _UnseedableStore())
    with pytest.raises(StoreFailure):
        with TestClient(broken_app):
            pass


class _UnreadableStore(CatalogStore):
    async def find_all(self, category=None):
        raise RuntimeError("index corrupted")


def test_unexpected_read_failure_uses_error_envelope():
    settings = Settings(seed_on_startup=False)
    client = TestClient(create_app(settings, _UnreadableStore()), raise_server_exceptions=False)
    r = client.get("/products")
    assert r.status_code == 500
    assert r.headers["content-type"].startswith("application/json")
    body = r.json()
    assert body["success"] is False
    assert body["error"]["code"] == "STORE_FAILURE"
    assert "corrupted" not in body["error"]["message"]


def test_reseed_with_fixed_seed_is_reproducible():
    client, _ = make_client(seed_count=10, seed_random_seed=21)
    client.post("/seed")
    first = [(p["name"], p["price"], p["category"]) for p in client.get("/products").json()]
    client.post("/seed")
    second = [(p["name"], p["price"], p["category"]) for p in client.get("/products").json()]
    assert len(first) == 10
    assert first == second


def test_cors_allows_configured_origin():
    client, _ = make_client(cors_origins="http://shop.example, http://admin.example")

    r = client.get("/products", headers={"Origin": "http://shop.example"})
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "http://shop.example"

    r = client.get("/products", headers={"Origin": "http://evil.example"})
    assert "access-control-allow-origin" not in r.headers
