"""
Unit tests for the product catalog
"""
import pytest

from shopcart.clients.catalog_client import SAMPLE_PRODUCTS, InMemoryProductRepository
from shopcart.errors import DomainError, ErrorKind
from shopcart.models import Money, Product


class TestInMemoryProductRepository:
    """Test catalog lookups"""

    @pytest.fixture
    def catalog(self):
        return InMemoryProductRepository()

    def test_sample_data(self, catalog):
        """Test the catalog is seeded"""
        assert catalog.size() == len(SAMPLE_PRODUCTS)
        assert catalog.find_by_id("prod-001").price.currency.value == "USD"
        assert catalog.find_by_id("prod-006").can_add_to_cart() is False

    def test_empty_catalog(self):
        """Test seeding can be disabled"""
        assert InMemoryProductRepository(with_sample_data=False).find_all() == []

    def test_find_by_ids_skips_unknown(self, catalog):
        """Test batch lookups ignore missing ids"""
        found = catalog.find_by_ids(["prod-001", "missing", "prod-002"])
        assert [product.id.value for product in found] == ["prod-001", "prod-002"]

    def test_exists_and_clear(self, catalog):
        """Test existence checks and clearing"""
        assert catalog.exists("prod-001") is True
        catalog.clear()
        assert catalog.exists("prod-001") is False
        assert catalog.find_by_id("prod-001") is None

    def test_add_product(self, catalog):
        """Test adding replaces by id"""
        catalog.add_product(Product.create(id="prod-001", name="Renamed", price_minor=100, sku="R-1"))
        assert catalog.find_by_id("prod-001").name == "Renamed"


class TestProduct:
    """Test product validation"""

    def test_create(self):
        """Test fields are normalised"""
        product = Product.create(id=" p1 ", name=" Book ", price_minor=999, sku=" SKU-1 ")

        assert product.id.value == "p1"
        assert product.name == "Book"
        assert product.sku == "SKU-1"
        assert product.description == ""
        assert product.price == Money.create(999)

    @pytest.mark.parametrize("kwargs,kind", [
        ({"name": " "}, ErrorKind.EMPTY_NAME),
        ({"name": "x" * 201}, ErrorKind.INVALID_PRODUCT),
        ({"sku": ""}, ErrorKind.INVALID_PRODUCT),
        ({"price_minor": -1}, ErrorKind.INVALID_AMOUNT),
    ])
    def test_invalid(self, kwargs, kind):
        """Test invalid products are rejected"""
        data = {"id": "p1", "name": "Book", "price_minor": 100, "sku": "SKU-1"}
        data.update(kwargs)
        with pytest.raises(DomainError) as exc:
            Product.create(**data)
        assert exc.value.kind == kind
