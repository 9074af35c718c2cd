"""Pytest fixtures for storefront tests."""

import random
from datetime import date, datetime, timedelta

import pytest

from storefront.application.cart_engine import Cart
from storefront.application.checkout import CheckoutStateMachine
from storefront.application.delivery import DeliveryForm
from storefront.application.order_finalizer import OrderFinalizer
from storefront.domain.entities import Product

TODAY = date(2026, 10, 19)
NOW = datetime(2026, 10, 19, 14, 5, 9)


class FakeResponse:
    def __init__(self, status_code=200, data=None, reason="OK", raise_json=False):
        self.status_code = status_code
        self.reason = reason
        self._data = data
        self._raise_json = raise_json

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._raise_json:
            raise ValueError("Expecting value")
        return self._data

    def raise_for_status(self):
        import requests

        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} {self.reason}")


@pytest.fixture
def product_a():
    return Product(id="A", name="Café de Olla", description="Molido", category="Abarrotes", price=10.0, stock=5)


@pytest.fixture
def product_b():
    return Product(id="B", name="Salsa", description="Picante", category="Salsas", price=4.0, stock=2)


@pytest.fixture
def sold_out():
    return Product(id="Z", name="Tortillas", description="", category="Panadería", price=30.0, stock=0)


@pytest.fixture
def cart():
    return Cart(shipping_cost=20)


@pytest.fixture
def finalizer():
    return OrderFinalizer(
        recipient="5215512345678",
        base_url="https://wa.me",
        max_length=4096,
        clock=lambda: NOW,
        rng=random.Random(7),
    )


@pytest.fixture
def checkout(cart, finalizer):
    return CheckoutStateMachine(cart=cart, finalizer=finalizer, today=lambda: TODAY)


@pytest.fixture
def delivery_form():
    return DeliveryForm(
        recipient_name="Ana López",
        delivery_address="Av. Reforma 222, Juárez, 06600 CDMX",
        delivery_date=(TODAY + timedelta(days=1)).isoformat(),
        delivery_time="09:00 - 11:00",
    )
