"""
Shopping cart domain: value objects, the cart aggregate and its use cases
"""
from shopcart.errors import DomainError, ErrorCategory, ErrorKind

__version__ = "1.0.0"

__all__ = ["DomainError", "ErrorCategory", "ErrorKind", "__version__"]
