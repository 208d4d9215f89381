"""
Product entity

Reference data from the catalog; the cart only reads it.
"""
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict

from shopcart.errors import DomainError, ErrorKind
from shopcart.models.identifiers import ProductId
from shopcart.models.money import Currency, Money


MAX_NAME_LENGTH = 200


class Product(BaseModel):
    """Catalog product that can be added to a cart"""
    model_config = ConfigDict(frozen=True)

    id: ProductId
    name: str
    description: str = ""
    price: Money
    sku: str
    in_stock: bool = True

    @classmethod
    def create(
        cls,
        id: str,
        name: str,
        price_minor: Any,
        sku: str,
        description: Optional[str] = None,
        currency: Union[str, Currency] = Currency.USD,
        in_stock: bool = True,
    ) -> "Product":
        name = name.strip() if isinstance(name, str) else ""
        if not name:
            raise DomainError(ErrorKind.EMPTY_NAME, "Product name cannot be empty")
        if len(name) > MAX_NAME_LENGTH:
            raise DomainError(
                ErrorKind.INVALID_PRODUCT,
                f"Product name cannot exceed {MAX_NAME_LENGTH} characters",
                field="name",
            )
        sku = sku.strip() if isinstance(sku, str) else ""
        if not sku:
            raise DomainError(ErrorKind.INVALID_PRODUCT, "Product SKU cannot be empty", field="sku")

        return cls(
            id=ProductId.create(id),
            name=name,
            description=(description or "").strip(),
            price=Money.create(price_minor, currency),
            sku=sku,
            in_stock=in_stock,
        )

    def can_add_to_cart(self) -> bool:
        return self.in_stock
