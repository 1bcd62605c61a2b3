"""
Configuration settings for the application.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # Hosted backend (Supabase REST)
    SUPABASE_URL: str | None = os.getenv("SUPABASE_URL")
    SUPABASE_KEY: str | None = os.getenv("SUPABASE_KEY")
    SUPABASE_TIMEOUT_SECONDS: float = float(os.getenv("SUPABASE_TIMEOUT_SECONDS", "30"))
    PRODUCTS_TABLE: str = os.getenv("PRODUCTS_TABLE", "store_products")
    CATEGORIES_TABLE: str = os.getenv("CATEGORIES_TABLE", "store_categories")
    CART_TABLE: str = os.getenv("CART_TABLE", "cart_items")
    WISHLIST_TABLE: str = os.getenv("WISHLIST_TABLE", "wishlist_items")

    # Redis cache settings
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    CATALOG_SNAPSHOT_KEY: str = os.getenv("CATALOG_SNAPSHOT_KEY", "catalog:snapshot")
    CATALOG_SNAPSHOT_TTL_SECONDS: int = int(
        os.getenv("CATALOG_SNAPSHOT_TTL_SECONDS", "300")
    )
    FILTER_STATE_KEY_PREFIX: str = os.getenv("FILTER_STATE_KEY_PREFIX", "filters:")
    FILTER_STATE_TTL_SECONDS: int = int(
        os.getenv("FILTER_STATE_TTL_SECONDS", str(60 * 60 * 24 * 30))
    )

    # Storefront browsing
    STORE_PAGE_SIZE: int = int(os.getenv("STORE_PAGE_SIZE", "12"))
    MAX_PAGE_SIZE: int = int(os.getenv("MAX_PAGE_SIZE", "100"))
    SEARCH_SUGGESTION_LIMIT: int = int(os.getenv("SEARCH_SUGGESTION_LIMIT", "5"))

    @property
    def is_production(self) -> bool:
        """
        Check if running in production environment.
        """
        return self.ENVIRONMENT.lower() == "production"

    @property
    def backend_configured(self) -> bool:
        """Return True when the hosted backend credentials are present."""
        return bool(self.SUPABASE_URL and self.SUPABASE_KEY)

    def __init__(self):
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        logging.basicConfig(level=self.log_level)
        self.logger = logging.getLogger(__name__)

        self.logger.debug(f"Config initialized with log_level={self.log_level}")


# Create a global settings instance for import
settings = Settings()
