"""
Identifier value objects

ProductId and SessionId only validate and compare; they make malformed
identifiers unrepresentable.
"""
import re
from typing import Any, ClassVar, Pattern

from pydantic import BaseModel, ConfigDict, field_validator

from shopcart.errors import DomainError, ErrorKind


class _Identifier(BaseModel):
    model_config = ConfigDict(frozen=True)

    PATTERN: ClassVar[Pattern[str]]
    FORMAT_HINT: ClassVar[str]

    value: str

    @field_validator("value")
    @classmethod
    def validate_format(cls, value: str) -> str:
        if not cls.PATTERN.fullmatch(value):
            raise ValueError(f"{cls.__name__} must be {cls.FORMAT_HINT}")
        return value

    @classmethod
    def create(cls, raw: Any):
        """
        Trim and validate a raw identifier

        Raises:
            DomainError: EMPTY or INVALID_FORMAT
        """
        label = cls.__name__
        if not raw or (isinstance(raw, str) and raw.strip() == ""):
            raise DomainError(ErrorKind.EMPTY, f"{label} cannot be empty", field=label)
        if not isinstance(raw, str):
            raise DomainError(
                ErrorKind.INVALID_FORMAT,
                f"{label} must be a string",
                field=label,
            )
        trimmed = raw.strip()
        if not cls.PATTERN.fullmatch(trimmed):
            raise DomainError(
                ErrorKind.INVALID_FORMAT,
                f"{label} must be {cls.FORMAT_HINT}",
                field=label,
                value=trimmed,
            )
        return cls(value=trimmed)

    def equals(self, other: "_Identifier") -> bool:
        return type(self) is type(other) and self.value == other.value

    def __str__(self) -> str:
        return self.value


class ProductId(_Identifier):
    """Catalog product identifier"""
    PATTERN: ClassVar[Pattern[str]] = re.compile(r"[A-Za-z0-9_-]{1,50}")
    FORMAT_HINT: ClassVar[str] = "1-50 alphanumeric characters, hyphens, or underscores"


class SessionId(_Identifier):
    """Shopper session identifier, typically a UUID"""
    PATTERN: ClassVar[Pattern[str]] = re.compile(r"[A-Za-z0-9-]{1,100}")
    FORMAT_HINT: ClassVar[str] = "1-100 alphanumeric characters or hyphens"
