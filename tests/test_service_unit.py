"""
Unit tests for cart service business logic
"""
from unittest.mock import Mock

import pytest

from shopcart.clients.catalog_client import InMemoryProductRepository, ProductRepository
from shopcart.db import CartRepository, InMemoryCartRepository
from shopcart.errors import DomainError, ErrorKind
from shopcart.models import Cart, CartItemInput, CartStatus, Currency, Money, Product
from shopcart.service import CartService

from tests.conftest import SequentialIds


@pytest.fixture
def products():
    catalog = InMemoryProductRepository(with_sample_data=False)
    catalog.add_product(Product.create(id="p1", name="Example Book", price_minor=1000, sku="BOOK-001"))
    catalog.add_product(Product.create(id="p2", name="Second Book", price_minor=500, sku="BOOK-002"))
    catalog.add_product(Product.create(id="gone", name="Sold Out", price_minor=700, sku="BOOK-003", in_stock=False))
    catalog.add_product(Product.create(id="euro", name="Euro Book", price_minor=900, sku="BOOK-004", currency="EUR"))
    return catalog


@pytest.fixture
def repository():
    return InMemoryCartRepository()


@pytest.fixture
def cart_service(repository, products, clock):
    return CartService(repository, products, clock=clock, id_factory=SequentialIds("id"))


class TestCartServiceAddItem:
    """Test adding catalog products"""

    def test_add_creates_cart(self, cart_service, repository):
        """Test the first add creates and saves the cart"""
        cart = cart_service.add_item("s1", "p1", 2)

        assert cart.session_id.value == "s1"
        assert cart.items[0].product_name == "Example Book"
        assert cart.items[0].unit_price == Money.create(1000)
        assert repository.load("s1") == cart

    def test_add_merges(self, cart_service):
        """Test adding the same product twice merges the line"""
        cart_service.add_item("s1", "p1", 2)
        cart = cart_service.add_item("s1", "p1", 3)

        assert len(cart.items) == 1
        assert cart.items[0].quantity.value == 5
        assert cart.items[0].line_total() == Money.create(5000)

    def test_add_unknown_product(self, cart_service, repository):
        """Test an unknown product is rejected before any cart is created"""
        with pytest.raises(DomainError) as exc:
            cart_service.add_item("s1", "missing", 1)

        assert exc.value.kind == ErrorKind.PRODUCT_NOT_FOUND
        assert repository.exists("s1") is False

    def test_add_out_of_stock(self, cart_service):
        """Test an out of stock product is rejected"""
        with pytest.raises(DomainError) as exc:
            cart_service.add_item("s1", "gone", 1)
        assert exc.value.kind == ErrorKind.PRODUCT_OUT_OF_STOCK

    def test_add_currency_mismatch(self, cart_service):
        """Test a product in another currency than the cart is rejected"""
        with pytest.raises(DomainError) as exc:
            cart_service.add_item("s1", "euro", 1)
        assert exc.value.kind == ErrorKind.CURRENCY_MISMATCH

    def test_default_currency(self, repository, products, clock):
        """Test new carts use the configured currency"""
        service = CartService(repository, products, clock=clock, default_currency="EUR")
        cart = service.add_item("s1", "euro", 1)
        assert cart.currency == Currency.EUR

    def test_add_invalid_session(self, cart_service):
        """Test the session id is validated"""
        with pytest.raises(DomainError) as exc:
            cart_service.add_item("bad session", "p1", 1)
        assert exc.value.kind == ErrorKind.INVALID_FORMAT

    def test_add_to_checked_out_cart(self, cart_service):
        """Test a checked out cart cannot receive items"""
        cart_service.add_item("s1", "p1", 1)
        cart_service.checkout("s1")

        with pytest.raises(DomainError) as exc:
            cart_service.add_item("s1", "p2", 1)
        assert exc.value.kind == ErrorKind.CART_NOT_ACTIVE


class TestCartServiceMutations:
    """Test remove, update and clear"""

    def test_get_cart(self, cart_service):
        """Test getting a missing and an existing cart"""
        assert cart_service.get_cart("s1") is None
        cart_service.add_item("s1", "p1", 1)
        assert cart_service.get_cart("s1").total_item_count() == 1

    def test_remove_item(self, cart_service, repository):
        """Test removing a line saves the cart"""
        cart = cart_service.add_item("s1", "p1", 1)
        item_id = cart.items[0].item_id

        updated = cart_service.remove_item("s1", item_id)

        assert updated.is_empty()
        assert repository.load("s1").is_empty()

    def test_remove_from_missing_cart(self, cart_service):
        """Test operations on an unknown session fail with CART_NOT_FOUND"""
        with pytest.raises(DomainError) as exc:
            cart_service.remove_item("s1", "id-1")
        assert exc.value.kind == ErrorKind.CART_NOT_FOUND
        assert exc.value.context == {"session_id": "s1"}

    def test_remove_missing_item(self, cart_service):
        """Test removing an unknown item fails"""
        cart_service.add_item("s1", "p1", 1)
        with pytest.raises(DomainError) as exc:
            cart_service.remove_item("s1", "nope")
        assert exc.value.kind == ErrorKind.ITEM_NOT_FOUND

    def test_update_item_quantity(self, cart_service, repository):
        """Test updating a line quantity saves the cart"""
        cart = cart_service.add_item("s1", "p1", 1)

        cart_service.update_item_quantity("s1", cart.items[0].item_id, 4)

        assert repository.load("s1").items[0].quantity.value == 4

    def test_update_item_quantity_invalid(self, cart_service, repository):
        """Test an invalid quantity leaves the stored cart unchanged"""
        cart = cart_service.add_item("s1", "p1", 1)

        with pytest.raises(DomainError) as exc:
            cart_service.update_item_quantity("s1", cart.items[0].item_id, 100)

        assert exc.value.kind == ErrorKind.ABOVE_MAXIMUM
        assert repository.load("s1") == cart

    def test_clear_cart(self, cart_service, repository):
        """Test clearing saves an empty active cart"""
        cart_service.add_item("s1", "p1", 1)
        cart_service.add_item("s1", "p2", 1)

        cart = cart_service.clear_cart("s1")

        assert cart.is_empty()
        assert repository.load("s1").status == CartStatus.ACTIVE

    def test_delete_and_exists(self, cart_service):
        """Test storage pass-throughs"""
        cart_service.add_item("s1", "p1", 1)
        assert cart_service.exists("s1") is True
        assert cart_service.delete_cart("s1") is True
        assert cart_service.exists("s1") is False

    def test_padded_session_id(self, cart_service, repository):
        """Test every operation trims the session id the same way"""
        cart_service.add_item(" s1 ", "p1", 1)

        assert repository.exists("s1") is True
        assert cart_service.get_cart(" s1 ") is not None
        assert cart_service.exists(" s1 ") is True
        assert cart_service.delete_cart(" s1 ") is True
        assert cart_service.exists("s1") is False

    def test_exists_invalid_session(self, cart_service):
        """Test exists validates the session id"""
        with pytest.raises(DomainError) as exc:
            cart_service.exists("bad session")
        assert exc.value.kind == ErrorKind.INVALID_FORMAT


class TestCartServiceCheckout:
    """Test checkout orchestration"""

    def test_end_to_end(self, cart_service, repository):
        """Test add, merge and checkout with tax"""
        cart_service.add_item("s1", "p1", 2)
        cart = cart_service.add_item("s1", "p1", 3)
        assert len(cart.items) == 1
        assert cart.items[0].quantity.value == 5
        assert cart.items[0].line_total().amount == 5000

        result = cart_service.checkout("s1", tax_rate=0.08)

        assert result.subtotal.amount == 5000
        assert result.tax.amount == 400
        assert result.total.amount == 5400
        assert result.item_count == 5
        assert result.order_id == "id-2"
        assert repository.load("s1").status == CartStatus.CHECKED_OUT

    def test_default_tax_rate(self, repository, products, clock):
        """Test the service default tax rate applies when none is given"""
        service = CartService(repository, products, clock=clock, default_tax_rate=0.1)
        service.add_item("s1", "p1", 1)

        assert service.checkout("s1").tax.amount == 100

    def test_checkout_twice(self, cart_service):
        """Test a second checkout fails"""
        cart_service.add_item("s1", "p1", 1)
        cart_service.checkout("s1")

        with pytest.raises(DomainError) as exc:
            cart_service.checkout("s1")
        assert exc.value.kind == ErrorKind.CART_ALREADY_CHECKED_OUT

    def test_checkout_empty(self, cart_service):
        """Test checking out an emptied cart fails"""
        cart = cart_service.add_item("s1", "p1", 1)
        cart_service.remove_item("s1", cart.items[0].item_id)

        with pytest.raises(DomainError) as exc:
            cart_service.checkout("s1")
        assert exc.value.kind == ErrorKind.EMPTY_CART

    def test_checkout_missing_cart(self, cart_service):
        """Test checking out an unknown session fails"""
        with pytest.raises(DomainError) as exc:
            cart_service.checkout("s1")
        assert exc.value.kind == ErrorKind.CART_NOT_FOUND

    def test_invalid_tax_rate_does_not_save(self, cart_service, repository):
        """Test a rejected tax rate leaves the cart active"""
        cart_service.add_item("s1", "p1", 1)

        with pytest.raises(DomainError) as exc:
            cart_service.checkout("s1", tax_rate=-1)

        assert exc.value.kind == ErrorKind.INVALID_TAX_RATE
        assert repository.load("s1").status == CartStatus.ACTIVE


class TestCartServiceWithMocks:
    """Test collaborator calls with mocked repositories"""

    @pytest.fixture
    def mock_repo(self):
        return Mock(spec=CartRepository)

    @pytest.fixture
    def mock_products(self):
        catalog = Mock(spec=ProductRepository)
        catalog.find_by_id.return_value = Product.create(id="p1", name="Book", price_minor=1000, sku="B-1")
        return catalog

    def test_add_item_saves(self, mock_repo, mock_products, clock):
        """Test the new cart is saved once"""
        mock_repo.load.return_value = None
        service = CartService(mock_repo, mock_products, clock=clock)

        cart = service.add_item("user123", "p1", 2)

        mock_repo.load.assert_called_once_with("user123")
        mock_repo.save.assert_called_once_with(cart)
        mock_products.find_by_id.assert_called_once_with("p1")

    def test_loaded_cart_is_used(self, mock_repo, mock_products, clock):
        """Test an existing cart is loaded and extended"""
        existing = Cart.create("user123", clock=clock).add_item(
            CartItemInput(product_id="p1", product_name="Book", unit_price_minor=1000, quantity=1),
            clock=clock,
        )
        mock_repo.load.return_value = existing
        service = CartService(mock_repo, mock_products, clock=clock)

        cart = service.add_item("user123", "p1", 1)

        assert cart.items[0].quantity.value == 2
        assert existing.items[0].quantity.value == 1

    def test_storage_errors_propagate(self, mock_repo, mock_products, clock):
        """Test repository failures are re-raised"""
        mock_repo.load.return_value = None
        mock_repo.save.side_effect = RuntimeError("storage down")
        service = CartService(mock_repo, mock_products, clock=clock)

        with pytest.raises(RuntimeError, match="storage down"):
            service.add_item("user123", "p1", 1)

    def test_checkout_not_saved_when_rejected(self, mock_repo, mock_products, clock):
        """Test nothing is saved when the domain rejects checkout"""
        mock_repo.load.return_value = Cart.create("user123", clock=clock)
        service = CartService(mock_repo, mock_products, clock=clock)

        with pytest.raises(DomainError):
            service.checkout("user123")
        mock_repo.save.assert_not_called()
