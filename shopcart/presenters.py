"""
Response shaping for carts, checkouts and errors

Turns domain values into plain dictionaries for whatever transport sits on top.
"""
from typing import Any, Dict, Tuple, Union

from shopcart.clock import Clock, utc_now
from shopcart.errors import DomainError, ErrorKind
from shopcart.models import Cart, CartItem, CheckoutResult, Currency


_STATUS_BY_KIND = {
    ErrorKind.CART_NOT_FOUND: 404,
    ErrorKind.ITEM_NOT_FOUND: 404,
    ErrorKind.PRODUCT_NOT_FOUND: 404,
    ErrorKind.PRODUCT_OUT_OF_STOCK: 422,
    ErrorKind.EMPTY_CART: 422,
    ErrorKind.CART_ALREADY_CHECKED_OUT: 409,
    ErrorKind.CART_NOT_ACTIVE: 409,
}


def present_cart_item(item: CartItem) -> Dict[str, Any]:
    return {
        "itemId": item.item_id,
        "productId": item.product_id.value,
        "productName": item.product_name,
        "unitPrice": item.unit_price.to_major_units(),
        "currency": item.unit_price.currency.value,
        "quantity": item.quantity.value,
        "lineTotal": item.line_total().to_major_units(),
        "addedAt": item.added_at.isoformat(),
    }


def present_cart(cart: Cart) -> Dict[str, Any]:
    """Cart with totals in major units"""
    return {
        "sessionId": cart.session_id.value,
        "items": [present_cart_item(item) for item in cart.items],
        "itemCount": cart.total_item_count(),
        "uniqueItemCount": len(cart.items),
        "subtotal": cart.calculate_total().to_major_units(),
        "currency": cart.currency.value,
        "status": cart.status.value,
        "createdAt": cart.created_at.isoformat(),
        "updatedAt": cart.updated_at.isoformat(),
    }


def present_empty_cart(
    session_id: str,
    currency: Union[str, Currency] = Currency.USD,
    *,
    clock: Clock = utc_now,
) -> Dict[str, Any]:
    """Response for a session that has no stored cart yet"""
    now = clock().isoformat()
    return {
        "sessionId": session_id,
        "items": [],
        "itemCount": 0,
        "uniqueItemCount": 0,
        "subtotal": 0,
        "currency": Currency.parse(currency).value,
        "status": "active",
        "createdAt": now,
        "updatedAt": now,
    }


def present_checkout(result: CheckoutResult) -> Dict[str, Any]:
    return {
        "orderId": result.order_id,
        "sessionId": result.session_id,
        "items": [
            {
                "productId": line.product_id,
                "productName": line.product_name,
                "quantity": line.quantity,
                "unitPrice": line.unit_price_minor / 100,
                "lineTotal": line.line_total_minor / 100,
            }
            for line in result.items
        ],
        "itemCount": result.item_count,
        "subtotal": result.subtotal.to_major_units(),
        "tax": result.tax.to_major_units(),
        "total": result.total.to_major_units(),
        "currency": result.total.currency.value,
        "checkoutAt": result.checkout_at.isoformat(),
    }


def present_error(error: BaseException) -> Tuple[int, Dict[str, Any]]:
    """
    Map an error to a status code and body.

    Domain errors are mapped by kind; anything else becomes a 500 whose
    body does not leak the original message.
    """
    if isinstance(error, DomainError):
        body: Dict[str, Any] = {"code": error.code, "message": error.message}
        if "field" in error.context:
            body["field"] = error.context["field"]
        return _STATUS_BY_KIND.get(error.kind, 400), {"error": body}

    return 500, {
        "error": {
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
        }
    }
