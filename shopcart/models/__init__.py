"""
Domain models: value objects, the cart aggregate and checkout results
"""
from shopcart.models.money import Currency, Money
from shopcart.models.quantity import Quantity
from shopcart.models.identifiers import ProductId, SessionId
from shopcart.models.cart_item import CartItem, CartItemInput
from shopcart.models.cart import Cart, CartStatus
from shopcart.models.checkout import CheckoutLineItem, CheckoutResult
from shopcart.models.product import Product

__all__ = [
    "Currency",
    "Money",
    "Quantity",
    "ProductId",
    "SessionId",
    "CartItem",
    "CartItemInput",
    "Cart",
    "CartStatus",
    "CheckoutLineItem",
    "CheckoutResult",
    "Product",
]
