# catalog/main.py
import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, get_settings
from .core import ProductIn
from .database import CatalogStore
from .exceptions import register_exception_handlers
from .models import Product
from .sdk import create_product_logic, get_product_logic, list_products_logic, reseed_logic
from .seeder import seed_catalog

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def get_store(request: Request) -> CatalogStore:
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def create_app(settings: Optional[Settings] = None, store: Optional[CatalogStore] = None) -> FastAPI:
    settings = settings or get_settings()
    store = store if store is not None else CatalogStore()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting %s", settings.app_name)
        if settings.seed_on_startup:
            # a failed seed aborts startup
            await seed_catalog(
                store,
                count=settings.seed_count,
                atomic=settings.seed_atomic,
                seed=settings.seed_random_seed,
            )
        logger.info("%s ready with %d product(s)", settings.app_name, store.count())
        yield
        logger.info("Shutting down %s", settings.app_name)

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.store = store
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # ---------------------------
    # Product endpoints
    # ---------------------------
    @app.get("/products", response_model=List[Product])
    async def list_products(category: Optional[str] = None, store: CatalogStore = Depends(get_store)):
        return await list_products_logic(store, category)

    @app.get("/products/{product_id}", response_model=Product)
    async def get_product(product_id: str, store: CatalogStore = Depends(get_store)):
        return await get_product_logic(store, product_id)

    @app.post("/products", response_model=Product, status_code=201)
    async def create_product(payload: ProductIn, store: CatalogStore = Depends(get_store)):
        return await create_product_logic(store, payload)

    # ---------------------------
    # Utility: reseed and health
    # ---------------------------
    @app.post("/seed")
    async def reseed(store: CatalogStore = Depends(get_store), cfg: Settings = Depends(get_app_settings)):
        return await reseed_logic(store, cfg.seed_count, atomic=cfg.seed_atomic, seed=cfg.seed_random_seed)

    @app.get("/health")
    async def health(store: CatalogStore = Depends(get_store)):
        return {"status": "ok", "products": store.count()}

    return app


settings = get_settings()
configure_logging(settings)
app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port, log_level="debug" if settings.debug else "info")
