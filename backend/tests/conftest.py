"""
Pytest fixtures and configuration for Storefront Checkout tests

This file provides shared fixtures that can be used across all test modules.

Author: TM3
Date: 2025-10-17
"""
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from storefront.core.database import reset_store
from storefront.domain.cart import Cart
from storefront.domain.catalog import BISCUITS, CHEESE, SCRATCH_CARD, TV, build_sample_catalog
from storefront.domain.customer import CustomerAccount
from storefront.domain.product import ExpiryPolicy, Product, ShippingProfile


@pytest.fixture
def now():
    """
    Fixed reference time for expiry checks
    """
    return datetime(2025, 10, 17, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def catalog(now):
    """
    Provides a fresh sample catalog keyed by SKU

    Scope: function (stock changes never leak between tests)
    """
    return build_sample_catalog(now)


@pytest.fixture
def cheese(catalog):
    return catalog[CHEESE]


@pytest.fixture
def biscuits(catalog):
    return catalog[BISCUITS]


@pytest.fixture
def tv(catalog):
    return catalog[TV]


@pytest.fixture
def scratch_card(catalog):
    return catalog[SCRATCH_CARD]


@pytest.fixture
def expired_milk(now):
    """
    Perishable, shippable product that expired yesterday
    """
    return Product(
        sku="MILK",
        name="Milk",
        unit_price=Decimal("30"),
        stock_quantity=20,
        expiry=ExpiryPolicy(expires_at=now - timedelta(days=1)),
        shipping=ShippingProfile(weight_kg=Decimal("1")),
    )


@pytest.fixture
def make_customer():
    """
    Factory for customer accounts with a given balance
    """
    def _make(balance="2000", name="Alice"):
        return CustomerAccount(name=name, balance=Decimal(balance))
    return _make


@pytest.fixture
def make_cart():
    """
    Factory for carts pre-filled with (product, quantity) lines
    """
    def _make(*lines, customer_id=None):
        cart = Cart(customer_id=customer_id)
        for product, quantity in lines:
            cart.add_item(product, quantity)
        return cart
    return _make


@pytest.fixture
def store():
    """
    Provides an empty in-memory store installed as the shared store
    """
    return reset_store()


@pytest.fixture
def seeded_store(store):
    """
    Shared store seeded with the sample catalog and two customers

    Uses the real clock: the API checks expiry against the current time
    """
    store.seed(
        build_sample_catalog().values(),
        [
            CustomerAccount(name="Alice", balance=Decimal("2000")),
            CustomerAccount(name="Bob", balance=Decimal("1000")),
        ]
    )
    return store


@pytest.fixture
def client(seeded_store):
    """
    Provides a TestClient for the API backed by the seeded store

    The lifespan does not run (no `with` block), so no sample data is
    added on top of the fixture's.
    """
    from storefront.main import app

    return TestClient(app)
