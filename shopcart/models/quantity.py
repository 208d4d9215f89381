"""
Quantity value object
"""
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from shopcart.errors import DomainError, ErrorKind
from shopcart.models.coerce import as_integer


class Quantity(BaseModel):
    """Number of units of a product in a cart line, between MIN and MAX"""
    model_config = ConfigDict(frozen=True)

    MIN: ClassVar[int] = 1
    MAX: ClassVar[int] = 99

    value: int = Field(..., ge=MIN, le=MAX)

    @classmethod
    def create(cls, value: Any) -> "Quantity":
        """
        Create a Quantity

        Raises:
            DomainError: NOT_INTEGER, BELOW_MINIMUM or ABOVE_MAXIMUM
        """
        number = as_integer(value)
        if number is None:
            raise DomainError(ErrorKind.NOT_INTEGER, "Quantity must be an integer", quantity=value)
        if number < cls.MIN:
            raise DomainError(
                ErrorKind.BELOW_MINIMUM,
                f"Quantity must be at least {cls.MIN}",
                quantity=number,
                minimum=cls.MIN,
            )
        if number > cls.MAX:
            raise DomainError(
                ErrorKind.ABOVE_MAXIMUM,
                f"Quantity cannot exceed {cls.MAX}",
                quantity=number,
                maximum=cls.MAX,
            )
        return cls(value=number)

    @classmethod
    def min_value(cls) -> int:
        return cls.MIN

    @classmethod
    def max_value(cls) -> int:
        return cls.MAX

    def add(self, other: "Quantity") -> "Quantity":
        """Sum of two quantities. Fails instead of clamping when the sum is above MAX."""
        total = self.value + other.value
        if total > self.MAX:
            raise DomainError(
                ErrorKind.ABOVE_MAXIMUM,
                f"Combined quantity cannot exceed {self.MAX}",
                quantity=total,
                maximum=self.MAX,
            )
        return Quantity.create(total)

    def equals(self, other: "Quantity") -> bool:
        return self.value == other.value

    def __int__(self) -> int:
        return self.value
