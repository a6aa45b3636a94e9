"""
Catalog service settings.

Values come from ``CATALOG_*`` environment variables, then a local ``.env``
file, then the defaults below.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .seeder import SEED_COUNT


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CATALOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "catalog-api"
    host: str = "0.0.0.0"
    port: int = Field(default=8085, ge=1, le=65535)
    debug: bool = False
    log_level: str = "INFO"

    # comma separated, "*" allows any origin
    cors_origins: str = "*"

    seed_on_startup: bool = True
    seed_count: int = Field(default=SEED_COUNT, ge=0)
    seed_atomic: bool = True
    # same seed, same demo data on startup and on every /seed call
    seed_random_seed: Optional[int] = None

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    return Settings()
