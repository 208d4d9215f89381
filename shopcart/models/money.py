"""
Money value object

Amounts are kept as integer minor units (cents) so arithmetic never
goes through floats.
"""
from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field

from shopcart.errors import DomainError, ErrorKind
from shopcart.models.coerce import as_integer, round_half_up, to_decimal


class Currency(str, Enum):
    """Supported ISO 4217 currencies"""
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"

    @classmethod
    def parse(cls, value: Union[str, "Currency"]) -> "Currency":
        """Parse a currency code, failing with UNSUPPORTED_CURRENCY"""
        if isinstance(value, Currency):
            return value
        code = value.strip().upper() if isinstance(value, str) else value
        try:
            return cls(code)
        except ValueError:
            raise DomainError(
                ErrorKind.UNSUPPORTED_CURRENCY,
                f"Unsupported currency: {value}",
                currency=value,
            ) from None


_SYMBOLS = {
    Currency.USD: "$",
    Currency.EUR: "€",
    Currency.GBP: "£",
}


class Money(BaseModel):
    """Non-negative amount of a single currency"""
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={"example": {"amount": 1999, "currency": "USD"}},
    )

    amount: int = Field(..., ge=0, description="Amount in minor units")
    currency: Currency = Currency.USD

    @classmethod
    def create(cls, amount_minor: Any, currency: Union[str, Currency] = Currency.USD) -> "Money":
        """
        Create Money from minor units

        Args:
            amount_minor: Amount in cents, a non-negative integer
            currency: Currency code

        Raises:
            DomainError: INVALID_AMOUNT or UNSUPPORTED_CURRENCY
        """
        amount = as_integer(amount_minor)
        if amount is None:
            raise DomainError(
                ErrorKind.INVALID_AMOUNT,
                "Money amount must be an integer (minor units)",
                amount=amount_minor,
            )
        if amount < 0:
            raise DomainError(
                ErrorKind.INVALID_AMOUNT,
                "Money amount cannot be negative",
                amount=amount_minor,
            )
        return cls(amount=amount, currency=Currency.parse(currency))

    @classmethod
    def create_from_major(cls, amount_major: Any, currency: Union[str, Currency] = Currency.USD) -> "Money":
        """Create Money from major units (dollars), rounding half-up to the nearest cent"""
        major = to_decimal(amount_major)
        if major is None:
            raise DomainError(
                ErrorKind.INVALID_AMOUNT,
                "Money amount must be a number",
                amount=amount_major,
            )
        return cls.create(round_half_up(major * 100), currency)

    @classmethod
    def zero(cls, currency: Union[str, Currency] = Currency.USD) -> "Money":
        return cls.create(0, currency)

    def _check_currency(self, other: "Money", verb: str) -> None:
        if self.currency != other.currency:
            raise DomainError(
                ErrorKind.CURRENCY_MISMATCH,
                f"Currency mismatch: cannot {verb} {self.currency.value} and {other.currency.value}",
                left=self.currency.value,
                right=other.currency.value,
            )

    def add(self, other: "Money") -> "Money":
        self._check_currency(other, "add")
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def subtract(self, other: "Money") -> "Money":
        self._check_currency(other, "subtract")
        if self.amount < other.amount:
            raise DomainError(
                ErrorKind.NEGATIVE_RESULT,
                "Subtraction would result in negative money",
                minuend=self.amount,
                subtrahend=other.amount,
            )
        return Money(amount=self.amount - other.amount, currency=self.currency)

    def multiply(self, quantity: Any) -> "Money":
        factor = as_integer(quantity)
        if factor is None:
            raise DomainError(
                ErrorKind.INVALID_QUANTITY,
                "Cannot multiply money by a non-integer quantity",
                quantity=quantity,
            )
        if factor < 0:
            raise DomainError(
                ErrorKind.INVALID_QUANTITY,
                "Cannot multiply money by a negative quantity",
                quantity=quantity,
            )
        return Money(amount=self.amount * factor, currency=self.currency)

    def equals(self, other: "Money") -> bool:
        return self.amount == other.amount and self.currency == other.currency

    def to_major_units(self) -> float:
        """Amount in major units, for display and serialization only"""
        return self.amount / 100

    def format(self) -> str:
        """Format for display, e.g. $1,234.50"""
        return f"{_SYMBOLS[self.currency]}{self.amount // 100:,}.{self.amount % 100:02d}"

    def __str__(self) -> str:
        return self.format()
