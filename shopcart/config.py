"""
Configuration management for the cart service
"""
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Service configuration loaded from environment variables"""
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Service
    service_name: str = "shopcart"
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Pricing
    default_currency: Literal["USD", "EUR", "GBP"] = "USD"
    default_tax_rate: float = 0.0

    # Storage: "memory" or "mongo"
    cart_store: Literal["memory", "mongo"] = "memory"
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db: str = "cartdb"
    mongo_timeout_ms: int = 5000

    # Catalog
    seed_sample_products: bool = True


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create configuration singleton"""
    global _config
    if _config is None:
        _config = Config()
    return _config


def load_config() -> Config:
    """Load configuration from environment"""
    return get_config()
