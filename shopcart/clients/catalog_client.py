"""
Product catalog access

The cart reads product name, price and stock from here when an item is added.
"""
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from shopcart.logging import get_logger
from shopcart.models import Product


SAMPLE_PRODUCTS = [
    {
        "id": "prod-001",
        "name": "Wireless Bluetooth Headphones",
        "description": "High-quality wireless headphones with noise cancellation",
        "price_minor": 9999,
        "sku": "WBH-001",
        "in_stock": True,
    },
    {
        "id": "prod-002",
        "name": "USB-C Charging Cable",
        "description": "Fast charging USB-C cable, 2 meters",
        "price_minor": 1499,
        "sku": "USB-002",
        "in_stock": True,
    },
    {
        "id": "prod-003",
        "name": "Laptop Stand",
        "description": "Adjustable aluminum laptop stand",
        "price_minor": 4999,
        "sku": "LS-003",
        "in_stock": True,
    },
    {
        "id": "prod-004",
        "name": "Mechanical Keyboard",
        "description": "RGB mechanical keyboard with Cherry MX switches",
        "price_minor": 12999,
        "sku": "MK-004",
        "in_stock": True,
    },
    {
        "id": "prod-005",
        "name": "Wireless Mouse",
        "description": "Ergonomic wireless mouse with precision tracking",
        "price_minor": 3999,
        "sku": "WM-005",
        "in_stock": True,
    },
    {
        "id": "prod-006",
        "name": "Monitor Light Bar",
        "description": "LED monitor light bar with adjustable brightness",
        "price_minor": 5999,
        "sku": "MLB-006",
        "in_stock": False,
    },
]


class ProductRepository(ABC):
    """Read access to the product catalog"""

    @abstractmethod
    def find_by_id(self, product_id: str) -> Optional[Product]:
        pass

    @abstractmethod
    def find_by_ids(self, product_ids: Iterable[str]) -> List[Product]:
        """Products found for the ids, in request order; unknown ids are skipped"""
        pass

    @abstractmethod
    def exists(self, product_id: str) -> bool:
        pass

    @abstractmethod
    def find_all(self) -> List[Product]:
        pass


class InMemoryProductRepository(ProductRepository):
    """Catalog held in memory, optionally seeded with demo products"""

    def __init__(self, with_sample_data: bool = True):
        self._products: Dict[str, Product] = {}
        self.logger = get_logger("product_repository")
        if with_sample_data:
            for data in SAMPLE_PRODUCTS:
                self.add_product(Product.create(**data))
            self.logger.info("Sample products loaded", count=len(self._products))

    def find_by_id(self, product_id: str) -> Optional[Product]:
        product = self._products.get(product_id)
        if product is None:
            self.logger.debug("Product not found", product_id=product_id)
        return product

    def find_by_ids(self, product_ids: Iterable[str]) -> List[Product]:
        return [self._products[pid] for pid in product_ids if pid in self._products]

    def exists(self, product_id: str) -> bool:
        return product_id in self._products

    def find_all(self) -> List[Product]:
        return list(self._products.values())

    def add_product(self, product: Product) -> None:
        self._products[product.id.value] = product

    def clear(self) -> None:
        self._products.clear()

    def size(self) -> int:
        return len(self._products)
