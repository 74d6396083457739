"""Storefront configuration.

Loads settings from environment variables (prefixed STOREFRONT_) with
sensible defaults.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    # Catalog
    catalog_url: str = Field(
        default="./data/products.json",
        description="Catalog document URL (http/https) or local file path",
    )
    catalog_timeout: float = Field(default=10.0, gt=0, description="Catalog fetch timeout in seconds")

    # Wishlist
    wishlist_path: Path = Field(
        default=Path.home() / ".storefront" / "storage.json",
        description="File backing the durable key-value storage",
    )
    wishlist_key: str = "lm_wishlist"

    # Search
    search_debounce_ms: int = Field(default=300, ge=0)

    # Outbound
    whatsapp_base_url: str = "https://wa.me"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def search_debounce_seconds(self) -> float:
        return self.search_debounce_ms / 1000


settings = Settings()
