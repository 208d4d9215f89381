"""
Shared fixtures: deterministic clock and id factory
"""
from datetime import datetime, timedelta, timezone

import pytest

from shopcart.models import Cart, CartItemInput


START = datetime(2025, 10, 25, 10, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Clock that moves one second forward on every call"""

    def __init__(self, start: datetime = START):
        self.current = start

    def __call__(self) -> datetime:
        now = self.current
        self.current = now + timedelta(seconds=1)
        return now


class SequentialIds:
    """Id factory returning prefix-1, prefix-2, ..."""

    def __init__(self, prefix: str = "id"):
        self.prefix = prefix
        self.count = 0

    def __call__(self) -> str:
        self.count += 1
        return f"{self.prefix}-{self.count}"


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def ids():
    return SequentialIds("item")


@pytest.fixture
def cart(clock):
    """Empty active USD cart for session s1"""
    return Cart.create("s1", clock=clock)


@pytest.fixture
def make_input():
    """Factory for cart line inputs with sensible defaults"""
    def _make(product_id="p1", product_name="Example Book", unit_price_minor=1000, quantity=1, **kwargs):
        return CartItemInput(
            product_id=product_id,
            product_name=product_name,
            unit_price_minor=unit_price_minor,
            quantity=quantity,
            **kwargs,
        )
    return _make
