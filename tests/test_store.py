# tests/test_store.py
import asyncio

import pytest

from catalog.database import CatalogStore
from catalog.exceptions import ValidationError

PEN = {"img": "u", "name": "Pen", "description": "A pen", "price": 10, "initialQuantity": 20, "category": "Office"}


def _descriptor(i, category="books"):
    return {"img": "u", "name": f"Item {i}", "description": "d", "price": 5 + i, "quantity": i, "category": category}


def run(coro):
    return asyncio.run(coro)


def test_create_assigns_id_and_normalizes():
    store = CatalogStore()
    p = run(store.create(PEN))
    assert p.id
    assert p.category == "office"
    assert p.quantity == 20
    assert p.price == 10
    assert run(store.find_by_id(p.id)) == p


def test_create_electronics_is_lowercased():
    store = CatalogStore()
    p = run(store.create(dict(PEN, category="Electronics")))
    assert p.category == "electronics"


@pytest.mark.parametrize("missing", ["img", "name", "description", "price", "initialQuantity", "category"])
def test_create_missing_field_leaves_store_unchanged(missing):
    store = CatalogStore()
    run(store.create(PEN))
    payload = {k: v for k, v in PEN.items() if k != missing}
    with pytest.raises(ValidationError):
        run(store.create(payload))
    assert store.count() == 1


@pytest.mark.parametrize("field,value", [
    ("price", "10"),
    ("initialQuantity", -1),
    ("name", ""),
    ("category", 3),
])
def test_create_rejects_wrong_shape(field, value):
    store = CatalogStore()
    with pytest.raises(ValidationError):
        run(store.create(dict(PEN, **{field: value})))
    assert store.count() == 0


def test_concrete_scenario():
    store = CatalogStore()
    pen = run(store.create(PEN))

    everything = run(store.find_all())
    assert len(everything) == 1
    assert everything[0].category == "office"
    assert everything[0].quantity == 20

    assert run(store.find_all("OFFICE")) == [pen]
    assert run(store.find_all("books")) == []
    assert run(store.find_by_id(pen.id)) == pen
    assert run(store.find_by_id("nonexistent")) is None


def test_find_all_keeps_insertion_order_and_filters():
    store = CatalogStore()
    run(store.bulk_insert([_descriptor(1, "Books"), _descriptor(2, "home"), _descriptor(3, "books")]))
    assert [p.name for p in run(store.find_all())] == ["Item 1", "Item 2", "Item 3"]
    assert [p.name for p in run(store.find_all("BOOKS"))] == ["Item 1", "Item 3"]
    assert run(store.find_all("toys")) == []
    assert run(store.find_all("book")) == []


def test_empty_filter_matches_nothing():
    store = CatalogStore()
    run(store.create(PEN))
    assert run(store.find_all("")) == []


def test_delete_all_then_bulk_insert():
    store = CatalogStore()
    run(store.create(PEN))
    assert run(store.delete_all()) == 1
    assert run(store.delete_all()) == 0

    inserted = run(store.bulk_insert([_descriptor(i) for i in range(7)]))
    stored = run(store.find_all())
    assert len(stored) == 7
    assert stored == inserted
    assert len({p.id for p in stored}) == 7
    for p in stored:
        assert run(store.find_by_id(p.id)) == p


def test_bulk_insert_with_bad_record_inserts_nothing():
    store = CatalogStore()
    bad = _descriptor(2)
    del bad["price"]
    with pytest.raises(ValidationError):
        run(store.bulk_insert([_descriptor(1), bad]))
    assert store.count() == 0


def test_ids_are_never_reused():
    ids = iter(["a", "a", "b", "a", "c"])
    store = CatalogStore(id_factory=lambda: next(ids))
    first = run(store.create(PEN))
    second = run(store.create(PEN))
    third = run(store.create(PEN))
    assert [first.id, second.id, third.id] == ["a", "b", "c"]


def test_replace_all_swaps_in_new_batch():
    store = CatalogStore()
    old = run(store.create(PEN))
    new = run(store.replace_all([_descriptor(i) for i in range(3)]))
    assert run(store.find_all()) == new
    assert run(store.find_by_id(old.id)) is None


def test_failed_replace_all_keeps_previous_snapshot():
    store = CatalogStore()
    pen = run(store.create(PEN))
    with pytest.raises(ValidationError):
        run(store.replace_all([_descriptor(1), {"name": "broken"}]))
    assert run(store.find_all()) == [pen]


def test_products_are_immutable():
    store = CatalogStore()
    p = run(store.create(PEN))
    with pytest.raises(Exception):
        p.quantity = 0
    assert run(store.find_by_id(p.id)).quantity == 20


@pytest.mark.parametrize("field", ["price", "quantity"])
def test_bulk_insert_rejects_numeric_strings(field):
    store = CatalogStore()
    record = dict(_descriptor(1), **{field: "10"})
    with pytest.raises(ValidationError):
        run(store.bulk_insert([record]))
    assert store.count() == 0
