import logging
from typing import Any, Dict, List, Optional

from .core import ProductIn
from .database import CatalogStore
from .exceptions import CatalogError, NotFoundError, StoreFailure
from .models import Product
from .seeder import seed_catalog

# Logic behind each endpoint; handlers only translate HTTP to these calls.

logger = logging.getLogger(__name__)


# Product endpoints
async def list_products_logic(store: CatalogStore, category: Optional[str] = None) -> List[Product]:
    return await store.find_all(category)


async def get_product_logic(store: CatalogStore, product_id: str) -> Product:
    p = await store.find_by_id(product_id)
    if p is None:
        raise NotFoundError("product not found", details={"id": product_id})
    return p


async def create_product_logic(store: CatalogStore, payload: ProductIn) -> Product:
    try:
        product = await store.create(payload)
    except CatalogError:
        raise
    except Exception as e:
        logger.exception("Failed to create product %r", payload.name)
        raise StoreFailure("failed to create product") from e
    logger.info("Created product %s in category %r", product.id, product.category)
    return product


# Utility: reseed (for demos)
async def reseed_logic(store: CatalogStore, count: int, atomic: bool = True,
                       seed: Optional[int] = None) -> Dict[str, Any]:
    products = await seed_catalog(store, count=count, atomic=atomic, seed=seed)
    return {"status": "seeded", "count": len(products)}
