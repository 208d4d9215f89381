"""
CartItem entity

A line in a cart. Name and unit price are a snapshot taken when the product
was added, so later catalog changes do not alter the line.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict

from shopcart.clock import Clock, IdFactory, utc_now, uuid4_str
from shopcart.errors import DomainError, ErrorKind
from shopcart.models.identifiers import ProductId
from shopcart.models.money import Currency, Money
from shopcart.models.quantity import Quantity


@dataclass(frozen=True)
class CartItemInput:
    """Raw values for a new cart line"""
    product_id: str
    product_name: str
    unit_price_minor: Any
    quantity: Any
    currency: Optional[Union[str, Currency]] = None
    item_id: Optional[str] = None


class CartItem(BaseModel):
    """Represents an item in the shopping cart"""
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "item_id": "3f1c0f5e-7c1e-4f0e-9d5e-0a4b2b8f6c11",
                "product_id": {"value": "prod-001"},
                "product_name": "Wireless Bluetooth Headphones",
                "unit_price": {"amount": 9999, "currency": "USD"},
                "quantity": {"value": 2},
                "added_at": "2025-10-25T10:00:00Z",
            }
        },
    )

    item_id: str
    product_id: ProductId
    product_name: str
    unit_price: Money
    quantity: Quantity
    added_at: datetime

    @classmethod
    def create(
        cls,
        data: CartItemInput,
        *,
        clock: Clock = utc_now,
        id_factory: IdFactory = uuid4_str,
    ) -> "CartItem":
        """
        Build a new cart line, validating every field.

        Args:
            data: Raw line values; currency defaults to USD
            clock: Source for ``added_at``
            id_factory: Used when ``data.item_id`` is not given

        Raises:
            DomainError: EMPTY_NAME, or any ProductId/Money/Quantity error
        """
        name = data.product_name.strip() if isinstance(data.product_name, str) else ""
        if not name:
            raise DomainError(ErrorKind.EMPTY_NAME, "Product name cannot be empty")

        return cls(
            item_id=data.item_id or id_factory(),
            product_id=ProductId.create(data.product_id),
            product_name=name,
            unit_price=Money.create(data.unit_price_minor, data.currency or Currency.USD),
            quantity=Quantity.create(data.quantity),
            added_at=clock(),
        )

    def update_quantity(self, quantity: Quantity) -> "CartItem":
        """Copy with a new quantity; identity and price snapshot are kept"""
        return self.model_copy(update={"quantity": quantity})

    def increase_quantity(self, delta: Quantity) -> "CartItem":
        return self.update_quantity(self.quantity.add(delta))

    def line_total(self) -> Money:
        return self.unit_price.multiply(self.quantity.value)

    def is_same_product(self, other: "CartItem") -> bool:
        return self.product_id.equals(other.product_id)

    def matches_product_id(self, product_id: Union[str, ProductId]) -> bool:
        if isinstance(product_id, ProductId):
            return self.product_id.equals(product_id)
        return self.product_id.value == product_id
