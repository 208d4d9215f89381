"""
Cart aggregate root

All changes to cart lines go through the Cart. Business rules:
- a cart belongs to a session
- items for the same product are merged (quantity increased)
- at most MAX_UNIQUE_ITEMS lines per cart
- only a non-empty active cart can be checked out
- once checked out (or abandoned) the cart cannot be modified

Carts are frozen: every mutator returns a new Cart and leaves the receiver as it was.
"""
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict

from shopcart.clock import Clock, IdFactory, utc_now, uuid4_str
from shopcart.errors import DomainError, ErrorKind
from shopcart.models.cart_item import CartItem, CartItemInput
from shopcart.models.identifiers import ProductId, SessionId
from shopcart.models.money import Currency, Money
from shopcart.models.quantity import Quantity


class CartStatus(str, Enum):
    """Cart lifecycle status"""
    ACTIVE = "active"
    CHECKED_OUT = "checked_out"
    # Set by an external cleanup process; the aggregate never moves a cart here itself
    ABANDONED = "abandoned"


class Cart(BaseModel):
    """Represents a session's shopping cart"""
    model_config = ConfigDict(frozen=True)

    MAX_UNIQUE_ITEMS: ClassVar[int] = 20

    session_id: SessionId
    items: Tuple[CartItem, ...] = ()
    status: CartStatus = CartStatus.ACTIVE
    currency: Currency = Currency.USD
    created_at: datetime
    updated_at: datetime

    @classmethod
    def create(
        cls,
        session_id: str,
        currency: Union[str, Currency] = Currency.USD,
        *,
        clock: Clock = utc_now,
    ) -> "Cart":
        """Create a new empty, active cart"""
        sid = SessionId.create(session_id)
        now = clock()
        return cls(
            session_id=sid,
            items=(),
            status=CartStatus.ACTIVE,
            currency=Currency.parse(currency),
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def reconstitute(cls, data: Mapping[str, Any]) -> "Cart":
        """
        Rebuild a cart from persisted fields.

        The session id is validated again; items are trusted as already valid.
        """
        session_id = data["session_id"]
        if isinstance(session_id, SessionId):
            session_id = session_id.value
        return cls(
            session_id=SessionId.create(session_id),
            items=tuple(data.get("items", ())),
            status=CartStatus(data.get("status", CartStatus.ACTIVE)),
            currency=Currency.parse(data.get("currency", Currency.USD)),
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )

    @classmethod
    def max_unique_items(cls) -> int:
        return cls.MAX_UNIQUE_ITEMS

    # Mutators

    def add_item(
        self,
        data: CartItemInput,
        *,
        clock: Clock = utc_now,
        id_factory: IdFactory = uuid4_str,
    ) -> "Cart":
        """
        Add a product to the cart, merging with an existing line for the same product.

        A merged line keeps its item id, name and price snapshot; only the quantity grows.

        Raises:
            DomainError: CART_NOT_ACTIVE, MAX_ITEMS_EXCEEDED, ABOVE_MAXIMUM,
                or any CartItem validation error
        """
        self._assert_active()

        index = self._index_of_product(data.product_id)
        if index is not None:
            additional = Quantity.create(data.quantity)
            items = list(self.items)
            items[index] = items[index].increase_quantity(additional)
        else:
            if len(self.items) >= self.MAX_UNIQUE_ITEMS:
                raise DomainError(
                    ErrorKind.MAX_ITEMS_EXCEEDED,
                    f"Cart cannot have more than {self.MAX_UNIQUE_ITEMS} unique items",
                    session_id=self.session_id.value,
                    limit=self.MAX_UNIQUE_ITEMS,
                )
            new_item = CartItem.create(
                CartItemInput(
                    product_id=data.product_id,
                    product_name=data.product_name,
                    unit_price_minor=data.unit_price_minor,
                    quantity=data.quantity,
                    currency=self.currency,
                    item_id=data.item_id,
                ),
                clock=clock,
                id_factory=id_factory,
            )
            items = [*self.items, new_item]

        return self._with_items(items, clock)

    def remove_item(self, item_id: str, *, clock: Clock = utc_now) -> "Cart":
        """
        Raises:
            DomainError: CART_NOT_ACTIVE or ITEM_NOT_FOUND
        """
        self._assert_active()
        self._require_index(item_id)
        return self._with_items([item for item in self.items if item.item_id != item_id], clock)

    def update_item_quantity(self, item_id: str, quantity: Any, *, clock: Clock = utc_now) -> "Cart":
        """
        Replace the quantity of a line in place.

        Raises:
            DomainError: CART_NOT_ACTIVE, ITEM_NOT_FOUND or any Quantity error
        """
        self._assert_active()
        index = self._require_index(item_id)
        new_quantity = Quantity.create(quantity)

        items = list(self.items)
        items[index] = items[index].update_quantity(new_quantity)
        return self._with_items(items, clock)

    def clear(self, *, clock: Clock = utc_now) -> "Cart":
        self._assert_active()
        return self._with_items([], clock)

    def checkout(self, *, clock: Clock = utc_now) -> "Cart":
        """
        Mark the cart as checked out. Not idempotent: a second call fails.

        Raises:
            DomainError: CART_ALREADY_CHECKED_OUT if the cart is not active,
                EMPTY_CART if it has no items
        """
        if self.status != CartStatus.ACTIVE:
            raise DomainError(
                ErrorKind.CART_ALREADY_CHECKED_OUT,
                f"Cart is no longer active ({self.status.value}): {self.session_id.value}",
                session_id=self.session_id.value,
                status=self.status.value,
            )
        if self.is_empty():
            raise DomainError(
                ErrorKind.EMPTY_CART,
                "Cannot checkout an empty cart",
                session_id=self.session_id.value,
            )
        return self.model_copy(update={"status": CartStatus.CHECKED_OUT, "updated_at": clock()})

    # Queries

    def calculate_total(self) -> Money:
        total = Money.zero(self.currency)
        for item in self.items:
            total = total.add(item.line_total())
        return total

    def total_item_count(self) -> int:
        return sum(item.quantity.value for item in self.items)

    def is_empty(self) -> bool:
        return len(self.items) == 0

    def is_active(self) -> bool:
        return self.status == CartStatus.ACTIVE

    def can_checkout(self) -> bool:
        return self.is_active() and not self.is_empty()

    def find_item_by_product_id(self, product_id: Union[str, ProductId]) -> Optional[CartItem]:
        for item in self.items:
            if item.matches_product_id(product_id):
                return item
        return None

    def find_item_by_id(self, item_id: str) -> Optional[CartItem]:
        for item in self.items:
            if item.item_id == item_id:
                return item
        return None

    # Storage mapping

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary of primitives for storage"""
        return {
            "session_id": self.session_id.value,
            "items": [
                {
                    "item_id": item.item_id,
                    "product_id": item.product_id.value,
                    "product_name": item.product_name,
                    "unit_price_amount": item.unit_price.amount,
                    "unit_price_currency": item.unit_price.currency.value,
                    "quantity": item.quantity.value,
                    "added_at": item.added_at,
                }
                for item in self.items
            ],
            "status": self.status.value,
            "currency": self.currency.value,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> Optional["Cart"]:
        """Create a Cart from a stored document"""
        if data is None:
            return None

        items = [
            CartItem(
                item_id=item["item_id"],
                product_id=ProductId(value=item["product_id"]),
                product_name=item["product_name"],
                unit_price=Money(
                    amount=item["unit_price_amount"],
                    currency=Currency(item["unit_price_currency"]),
                ),
                quantity=Quantity(value=item["quantity"]),
                added_at=_as_datetime(item["added_at"]),
            )
            for item in data.get("items", [])
        ]
        return cls.reconstitute({
            "session_id": data["session_id"],
            "items": items,
            "status": data.get("status", CartStatus.ACTIVE.value),
            "currency": data.get("currency", Currency.USD.value),
            "created_at": _as_datetime(data["created_at"]),
            "updated_at": _as_datetime(data["updated_at"]),
        })

    # Helpers

    def _assert_active(self) -> None:
        if self.status != CartStatus.ACTIVE:
            raise DomainError(
                ErrorKind.CART_NOT_ACTIVE,
                f"Cannot modify a cart that is {self.status.value.replace('_', ' ')}",
                session_id=self.session_id.value,
                status=self.status.value,
            )

    def _index_of_product(self, product_id: str) -> Optional[int]:
        wanted = product_id.strip() if isinstance(product_id, str) else product_id
        for index, item in enumerate(self.items):
            if item.product_id.value == wanted:
                return index
        return None

    def _require_index(self, item_id: str) -> int:
        for index, item in enumerate(self.items):
            if item.item_id == item_id:
                return index
        raise DomainError(
            ErrorKind.ITEM_NOT_FOUND,
            f"Item not found: {item_id}",
            session_id=self.session_id.value,
            item_id=item_id,
        )

    def _with_items(self, items, clock: Clock) -> "Cart":
        return self.model_copy(update={"items": tuple(items), "updated_at": clock()})


def _as_datetime(value: Union[str, datetime]) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)
