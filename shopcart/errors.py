"""
Domain errors for the shopping cart

Every failure raised by the domain is a DomainError tagged with an ErrorKind.
Callers branch on ``error.kind`` instead of on exception subclasses.
"""
from enum import Enum
from typing import Any, Dict


class ErrorCategory(str, Enum):
    """Broad family an error kind belongs to"""
    VALIDATION = "validation"
    INVARIANT = "invariant"
    ARITHMETIC = "arithmetic"
    NOT_FOUND = "not_found"


class ErrorKind(str, Enum):
    """Closed set of domain error kinds. The value doubles as the error code."""
    # Value object validation
    INVALID_AMOUNT = "INVALID_AMOUNT"
    UNSUPPORTED_CURRENCY = "UNSUPPORTED_CURRENCY"
    NOT_INTEGER = "NOT_INTEGER"
    BELOW_MINIMUM = "BELOW_MINIMUM"
    EMPTY = "EMPTY"
    INVALID_FORMAT = "INVALID_FORMAT"
    EMPTY_NAME = "EMPTY_NAME"
    INVALID_PRODUCT = "INVALID_PRODUCT"
    INVALID_TAX_RATE = "INVALID_TAX_RATE"

    # Arithmetic
    CURRENCY_MISMATCH = "CURRENCY_MISMATCH"
    NEGATIVE_RESULT = "NEGATIVE_RESULT"
    INVALID_QUANTITY = "INVALID_QUANTITY"
    ABOVE_MAXIMUM = "ABOVE_MAXIMUM"

    # Aggregate invariants
    CART_NOT_ACTIVE = "CART_NOT_ACTIVE"
    CART_ALREADY_CHECKED_OUT = "CART_ALREADY_CHECKED_OUT"
    CART_NOT_CHECKED_OUT = "CART_NOT_CHECKED_OUT"
    EMPTY_CART = "EMPTY_CART"
    MAX_ITEMS_EXCEEDED = "MAX_ITEMS_EXCEEDED"
    PRODUCT_OUT_OF_STOCK = "PRODUCT_OUT_OF_STOCK"

    # Lookups
    ITEM_NOT_FOUND = "ITEM_NOT_FOUND"
    CART_NOT_FOUND = "CART_NOT_FOUND"
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"

    @property
    def category(self) -> ErrorCategory:
        return _CATEGORIES[self]


_CATEGORIES = {
    ErrorKind.INVALID_AMOUNT: ErrorCategory.VALIDATION,
    ErrorKind.UNSUPPORTED_CURRENCY: ErrorCategory.VALIDATION,
    ErrorKind.NOT_INTEGER: ErrorCategory.VALIDATION,
    ErrorKind.BELOW_MINIMUM: ErrorCategory.VALIDATION,
    ErrorKind.EMPTY: ErrorCategory.VALIDATION,
    ErrorKind.INVALID_FORMAT: ErrorCategory.VALIDATION,
    ErrorKind.EMPTY_NAME: ErrorCategory.VALIDATION,
    ErrorKind.INVALID_PRODUCT: ErrorCategory.VALIDATION,
    ErrorKind.INVALID_TAX_RATE: ErrorCategory.VALIDATION,
    ErrorKind.CURRENCY_MISMATCH: ErrorCategory.ARITHMETIC,
    ErrorKind.NEGATIVE_RESULT: ErrorCategory.ARITHMETIC,
    ErrorKind.INVALID_QUANTITY: ErrorCategory.ARITHMETIC,
    ErrorKind.ABOVE_MAXIMUM: ErrorCategory.ARITHMETIC,
    ErrorKind.CART_NOT_ACTIVE: ErrorCategory.INVARIANT,
    ErrorKind.CART_ALREADY_CHECKED_OUT: ErrorCategory.INVARIANT,
    ErrorKind.CART_NOT_CHECKED_OUT: ErrorCategory.INVARIANT,
    ErrorKind.EMPTY_CART: ErrorCategory.INVARIANT,
    ErrorKind.MAX_ITEMS_EXCEEDED: ErrorCategory.INVARIANT,
    ErrorKind.PRODUCT_OUT_OF_STOCK: ErrorCategory.INVARIANT,
    ErrorKind.ITEM_NOT_FOUND: ErrorCategory.NOT_FOUND,
    ErrorKind.CART_NOT_FOUND: ErrorCategory.NOT_FOUND,
    ErrorKind.PRODUCT_NOT_FOUND: ErrorCategory.NOT_FOUND,
}


class DomainError(ValueError):
    """
    Error raised by value objects, the cart aggregate and the cart service.

    Args:
        kind: What went wrong
        message: Human readable description
        **context: Values needed to report the error (session id, item id, limit...)
    """

    def __init__(self, kind: ErrorKind, message: str, **context: Any):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.context: Dict[str, Any] = context

    @property
    def code(self) -> str:
        return self.kind.value

    @property
    def category(self) -> ErrorCategory:
        return self.kind.category

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for responses and log records"""
        return {"code": self.code, "message": self.message, **self.context}

    def __repr__(self) -> str:
        return f"DomainError({self.kind.value}, {self.message!r})"
