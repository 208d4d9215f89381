"""
Wiring of the cart service from configuration
"""
from typing import Optional

from shopcart.clients.catalog_client import InMemoryProductRepository
from shopcart.config import Config, load_config
from shopcart.db import CartRepository, InMemoryCartRepository, MongoCartRepository, MongoDB
from shopcart.logging import configure_logging
from shopcart.service import CartService


def create_cart_repository(config: Config) -> CartRepository:
    """Build the cart store selected by ``config.cart_store``"""
    if config.cart_store == "mongo":
        mongodb = MongoDB(config)
        mongodb.connect()
        return MongoCartRepository(mongodb)
    return InMemoryCartRepository()


def create_cart_service(config: Optional[Config] = None) -> CartService:
    """Configure logging, initialize repositories and the cart service"""
    config = config or load_config()
    logger = configure_logging(config.service_name, config.log_level, config.log_format)

    logger.info("Starting cart service", store=config.cart_store)
    repository = create_cart_repository(config)
    products = InMemoryProductRepository(with_sample_data=config.seed_sample_products)
    service = CartService(
        repository,
        products,
        default_currency=config.default_currency,
        default_tax_rate=config.default_tax_rate,
    )
    logger.info(
        "Cart service initialized",
        default_currency=config.default_currency,
        default_tax_rate=config.default_tax_rate,
    )
    return service
