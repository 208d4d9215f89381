"""
Business logic for cart operations

Each use case loads the cart, applies one aggregate operation and saves the
returned cart. Errors are logged and re-raised unchanged.
"""
from typing import Optional, Union

from shopcart.clients.catalog_client import ProductRepository
from shopcart.clock import Clock, IdFactory, utc_now, uuid4_str
from shopcart.db import CartRepository
from shopcart.errors import DomainError, ErrorKind
from shopcart.logging import get_logger
from shopcart.models import Cart, CartItemInput, CheckoutResult, Currency, SessionId


class CartService:
    """Service layer for cart use cases"""

    def __init__(
        self,
        repository: CartRepository,
        products: ProductRepository,
        clock: Clock = utc_now,
        id_factory: IdFactory = uuid4_str,
        default_currency: Union[str, Currency] = Currency.USD,
        default_tax_rate: float = 0.0,
    ):
        self.repo = repository
        self.products = products
        self.clock = clock
        self.id_factory = id_factory
        self.default_currency = Currency.parse(default_currency)
        self.default_tax_rate = default_tax_rate
        self.logger = get_logger("cart_service")

    def get_cart(self, session_id: str) -> Optional[Cart]:
        """
        Get the cart of a session.

        Args:
            session_id: Session identifier

        Returns:
            Cart instance, or None if the session has no cart
        """
        sid = SessionId.create(session_id)
        return self.repo.load(sid.value)

    def add_item(self, session_id: str, product_id: str, quantity: int) -> Cart:
        """
        Add a catalog product to the session's cart, creating the cart if needed.

        Name and price are taken from the catalog at this moment. Adding a product
        already in the cart increases that line's quantity.

        Raises:
            DomainError: PRODUCT_NOT_FOUND, PRODUCT_OUT_OF_STOCK, CURRENCY_MISMATCH
                or any cart error
        """
        try:
            product = self.products.find_by_id(product_id)
            if product is None:
                raise DomainError(
                    ErrorKind.PRODUCT_NOT_FOUND,
                    f"Product not found: {product_id}",
                    product_id=product_id,
                )
            if not product.can_add_to_cart():
                raise DomainError(
                    ErrorKind.PRODUCT_OUT_OF_STOCK,
                    f"Product is out of stock: {product_id}",
                    product_id=product_id,
                )

            cart = self.get_cart(session_id)
            if cart is None:
                cart = Cart.create(session_id, self.default_currency, clock=self.clock)

            if product.price.currency != cart.currency:
                raise DomainError(
                    ErrorKind.CURRENCY_MISMATCH,
                    f"Product is priced in {product.price.currency.value}, cart uses {cart.currency.value}",
                    left=cart.currency.value,
                    right=product.price.currency.value,
                )

            was_new_item = cart.find_item_by_product_id(product.id) is None
            cart = cart.add_item(
                CartItemInput(
                    product_id=product.id.value,
                    product_name=product.name,
                    unit_price_minor=product.price.amount,
                    quantity=quantity,
                ),
                clock=self.clock,
                id_factory=self.id_factory,
            )
            self.repo.save(cart)

            self.logger.info(
                "Item added to cart",
                session_id=cart.session_id.value,
                product_id=product.id.value,
                quantity=quantity,
                new_item=was_new_item,
            )
            return cart

        except DomainError as e:
            self._log_rejection("add_item", session_id, e)
            raise
        except Exception as e:
            self.logger.error("Error adding item to cart", session_id=session_id, error=str(e))
            raise

    def remove_item(self, session_id: str, item_id: str) -> Cart:
        """
        Remove a line from the session's cart.

        Raises:
            DomainError: CART_NOT_FOUND, ITEM_NOT_FOUND or CART_NOT_ACTIVE
        """
        try:
            cart = self._require_cart(session_id)
            cart = cart.remove_item(item_id, clock=self.clock)
            self.repo.save(cart)

            self.logger.info("Item removed from cart", session_id=cart.session_id.value, item_id=item_id)
            return cart

        except DomainError as e:
            self._log_rejection("remove_item", session_id, e)
            raise
        except Exception as e:
            self.logger.error("Error removing item from cart", session_id=session_id, error=str(e))
            raise

    def update_item_quantity(self, session_id: str, item_id: str, quantity: int) -> Cart:
        """
        Set the quantity of a line in the session's cart.

        Raises:
            DomainError: CART_NOT_FOUND, ITEM_NOT_FOUND, CART_NOT_ACTIVE or a Quantity error
        """
        try:
            cart = self._require_cart(session_id)
            cart = cart.update_item_quantity(item_id, quantity, clock=self.clock)
            self.repo.save(cart)

            self.logger.info(
                "Item quantity updated",
                session_id=cart.session_id.value,
                item_id=item_id,
                quantity=quantity,
            )
            return cart

        except DomainError as e:
            self._log_rejection("update_item_quantity", session_id, e)
            raise
        except Exception as e:
            self.logger.error("Error updating item quantity", session_id=session_id, error=str(e))
            raise

    def clear_cart(self, session_id: str) -> Cart:
        """Remove every line from the session's cart and save the empty cart"""
        try:
            cart = self._require_cart(session_id)
            cart = cart.clear(clock=self.clock)
            self.repo.save(cart)

            self.logger.info("Cart cleared", session_id=cart.session_id.value)
            return cart

        except DomainError as e:
            self._log_rejection("clear_cart", session_id, e)
            raise
        except Exception as e:
            self.logger.error("Error clearing cart", session_id=session_id, error=str(e))
            raise

    def checkout(self, session_id: str, tax_rate: Optional[float] = None) -> CheckoutResult:
        """
        Check out the session's cart.

        The checked out cart is saved only once its summary has been built. A
        second checkout of the same cart fails.

        Args:
            session_id: Session identifier
            tax_rate: Decimal fraction; the service default when None

        Returns:
            CheckoutResult with a fresh order id

        Raises:
            DomainError: CART_NOT_FOUND, CART_ALREADY_CHECKED_OUT, EMPTY_CART or INVALID_TAX_RATE
        """
        rate = self.default_tax_rate if tax_rate is None else tax_rate
        try:
            cart = self._require_cart(session_id)
            cart = cart.checkout(clock=self.clock)
            result = CheckoutResult.create(self.id_factory(), cart, rate, clock=self.clock)
            self.repo.save(cart)

            self.logger.info(
                "Cart checked out",
                session_id=cart.session_id.value,
                order_id=result.order_id,
                item_count=result.item_count,
                total=result.total.amount,
                currency=result.total.currency.value,
            )
            return result

        except DomainError as e:
            self._log_rejection("checkout", session_id, e)
            raise
        except Exception as e:
            self.logger.error("Error checking out cart", session_id=session_id, error=str(e))
            raise

    def exists(self, session_id: str) -> bool:
        return self.repo.exists(SessionId.create(session_id).value)

    def delete_cart(self, session_id: str) -> bool:
        """Delete the session's cart from storage"""
        sid = SessionId.create(session_id)
        deleted = self.repo.delete(sid.value)
        self.logger.info("Cart deleted", session_id=sid.value, deleted=deleted)
        return deleted

    def _require_cart(self, session_id: str) -> Cart:
        cart = self.get_cart(session_id)
        if cart is None:
            raise DomainError(
                ErrorKind.CART_NOT_FOUND,
                f"Cart not found for session: {session_id}",
                session_id=session_id,
            )
        return cart

    def _log_rejection(self, operation: str, session_id: str, error: DomainError) -> None:
        self.logger.warning(
            "Cart operation rejected",
            operation=operation,
            session_id=session_id,
            kind=error.kind.value,
            error=error.message,
            context=error.context,
        )
