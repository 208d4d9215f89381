"""
CheckoutResult value object

Read-only order summary derived once from a checked out cart.
"""
from datetime import datetime
from decimal import Decimal
from typing import Any, Tuple

from pydantic import BaseModel, ConfigDict

from shopcart.clock import Clock, utc_now
from shopcart.errors import DomainError, ErrorKind
from shopcart.models.cart import Cart, CartStatus
from shopcart.models.coerce import round_half_up, to_decimal
from shopcart.models.money import Money


class CheckoutLineItem(BaseModel):
    """One ordered product with amounts in minor units"""
    model_config = ConfigDict(frozen=True)

    product_id: str
    product_name: str
    quantity: int
    unit_price_minor: int
    line_total_minor: int


class CheckoutResult(BaseModel):
    """Summary of a completed checkout"""
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "order_id": "o1",
                "session_id": "s1",
                "items": [
                    {
                        "product_id": "p1",
                        "product_name": "Example Book",
                        "quantity": 5,
                        "unit_price_minor": 1000,
                        "line_total_minor": 5000,
                    }
                ],
                "subtotal": {"amount": 5000, "currency": "USD"},
                "tax": {"amount": 400, "currency": "USD"},
                "total": {"amount": 5400, "currency": "USD"},
                "item_count": 5,
                "checkout_at": "2025-10-25T10:00:00Z",
            }
        },
    )

    order_id: str
    session_id: str
    items: Tuple[CheckoutLineItem, ...]
    subtotal: Money
    tax: Money
    total: Money
    item_count: int
    checkout_at: datetime

    @classmethod
    def create(
        cls,
        order_id: str,
        cart: Cart,
        tax_rate: Any = 0,
        *,
        clock: Clock = utc_now,
    ) -> "CheckoutResult":
        """
        Derive the checkout summary of a checked out cart.

        Args:
            order_id: Identifier of the order being created
            cart: Cart whose status is checked_out
            tax_rate: Decimal fraction, e.g. 0.08 for 8%
            clock: Source for ``checkout_at``

        Raises:
            DomainError: CART_NOT_CHECKED_OUT or INVALID_TAX_RATE
        """
        if cart.status != CartStatus.CHECKED_OUT:
            raise DomainError(
                ErrorKind.CART_NOT_CHECKED_OUT,
                "Cannot create checkout result from a cart that is not checked out",
                session_id=cart.session_id.value,
                status=cart.status.value,
            )

        rate = to_decimal(tax_rate)
        if rate is None or rate < 0:
            raise DomainError(
                ErrorKind.INVALID_TAX_RATE,
                "Tax rate must be a non-negative number",
                tax_rate=tax_rate,
            )

        line_items = tuple(
            CheckoutLineItem(
                product_id=item.product_id.value,
                product_name=item.product_name,
                quantity=item.quantity.value,
                unit_price_minor=item.unit_price.amount,
                line_total_minor=item.line_total().amount,
            )
            for item in cart.items
        )

        subtotal = sum(line.line_total_minor for line in line_items)
        tax = round_half_up(Decimal(subtotal) * rate)

        return cls(
            order_id=order_id,
            session_id=cart.session_id.value,
            items=line_items,
            subtotal=Money(amount=subtotal, currency=cart.currency),
            tax=Money(amount=tax, currency=cart.currency),
            total=Money(amount=subtotal + tax, currency=cart.currency),
            item_count=sum(line.quantity for line in line_items),
            checkout_at=clock(),
        )
