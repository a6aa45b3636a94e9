# catalog/database.py
import asyncio
import logging
import uuid
from typing import Any, Callable, Dict, Iterable, List, Mapping, NamedTuple, Optional, Tuple, Union

from .core import ProductIn, _make_product, parse_descriptor, parse_product_in
from .models import Descriptor, Product

# The store keeps a reference to an immutable snapshot. Writers build a new
# snapshot under the lock and swap the reference; readers never take the lock.

logger = logging.getLogger(__name__)


class _Snapshot(NamedTuple):
    products: Tuple[Product, ...]
    by_id: Dict[str, Product]


_EMPTY = _Snapshot((), {})


def _uuid_hex() -> str:
    return uuid.uuid4().hex


class CatalogStore:
    def __init__(self, id_factory: Callable[[], str] = _uuid_hex):
        self._snapshot = _EMPTY
        self._lock = asyncio.Lock()
        self._id_factory = id_factory

    # ---------------------------
    # Helpers
    # ---------------------------
    def _new_id(self, taken: Mapping[str, Any]) -> str:
        pid = self._id_factory()
        while pid in taken:
            pid = self._id_factory()
        return pid

    def _extend(self, base: _Snapshot, descriptors: List[Descriptor]) -> _Snapshot:
        by_id = dict(base.by_id)
        added = []
        for d in descriptors:
            product = _make_product(self._new_id(by_id), d)
            by_id[product.id] = product
            added.append(product)
        return _Snapshot(base.products + tuple(added), by_id)

    # ---------------------------
    # Writes
    # ---------------------------
    async def create(self, fields: Union[ProductIn, Mapping[str, Any]]) -> Product:
        descriptor = parse_product_in(fields).to_descriptor()
        async with self._lock:
            snapshot = self._extend(self._snapshot, [descriptor])
            self._snapshot = snapshot
        return snapshot.products[-1]

    async def bulk_insert(self, records: Iterable[Union[Descriptor, Mapping[str, Any]]]) -> List[Product]:
        descriptors = [parse_descriptor(r) for r in records]
        async with self._lock:
            before = len(self._snapshot.products)
            snapshot = self._extend(self._snapshot, descriptors)
            self._snapshot = snapshot
        return list(snapshot.products[before:])

    async def delete_all(self) -> int:
        async with self._lock:
            removed = len(self._snapshot.products)
            self._snapshot = _EMPTY
        return removed

    async def replace_all(self, records: Iterable[Union[Descriptor, Mapping[str, Any]]]) -> List[Product]:
        descriptors = [parse_descriptor(r) for r in records]
        async with self._lock:
            snapshot = self._extend(_EMPTY, descriptors)
            self._snapshot = snapshot
        return list(snapshot.products)

    # ---------------------------
    # Reads
    # ---------------------------
    async def find_all(self, category: Optional[str] = None) -> List[Product]:
        products = self._snapshot.products
        if category is None:
            return list(products)
        key = category.lower()
        return [p for p in products if p.category == key]

    async def find_by_id(self, product_id: str) -> Optional[Product]:
        return self._snapshot.by_id.get(product_id)

    def count(self) -> int:
        return len(self._snapshot.products)
