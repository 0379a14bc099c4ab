"""
Unit tests for the Product domain model and its capabilities

Author: TM3
Date: 2025-10-17
"""
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from storefront.domain.errors import OutOfStockError
from storefront.domain.product import ExpiryPolicy, Product, ProductCreate, ShippingProfile


class TestProductCapabilities:
    """Capability queries never depend on what kind of product it is"""

    def test_perishable_shippable_product(self, cheese):
        assert cheese.is_expirable
        assert cheese.is_shippable
        assert not cheese.is_digital
        assert cheese.shippable_weight() == Decimal("0.2")

    def test_shippable_only_product(self, tv):
        assert not tv.is_expirable
        assert tv.is_shippable
        assert tv.shippable_weight() == Decimal("10")

    def test_digital_product_has_no_weight(self, scratch_card):
        assert scratch_card.is_digital
        assert scratch_card.shippable_weight() is None

    def test_expirable_only_product(self, now):
        """Perishable but not shipped, e.g. food picked up in store"""
        bread = Product(
            sku="BREAD",
            name="Bread",
            unit_price=Decimal("5"),
            stock_quantity=3,
            expiry=ExpiryPolicy(expires_at=now + timedelta(hours=2)),
        )

        assert bread.is_expirable
        assert not bread.is_shippable
        assert not bread.is_digital
        assert bread.shippable_weight() is None


class TestProductExpiry:
    """Test is_expired"""

    def test_not_expired_before_expiry(self, cheese, now):
        assert not cheese.is_expired(now)

    def test_expired_after_expiry(self, cheese, now):
        assert cheese.is_expired(now + timedelta(days=2))

    def test_not_expired_exactly_at_expiry(self, now):
        """Expired only once the current time is strictly after expires_at"""
        policy = ExpiryPolicy(expires_at=now)
        assert not policy.is_expired(now)
        assert policy.is_expired(now + timedelta(seconds=1))

    def test_product_without_expiry_never_expires(self, tv, now):
        assert not tv.is_expired(now + timedelta(days=10000))

    def test_naive_timestamps_are_utc(self):
        policy = ExpiryPolicy(expires_at=datetime(2025, 1, 1, 12, 0))
        assert policy.is_expired(datetime(2025, 1, 1, 12, 1, tzinfo=timezone.utc))
        assert not policy.is_expired(datetime(2025, 1, 1, 11, 59))


class TestProductStock:
    """Test reduce_stock and restock"""

    def test_reduce_stock(self, cheese):
        cheese.reduce_stock(3)
        assert cheese.stock_quantity == 7
        assert cheese.updated_at is not None

    def test_reduce_stock_to_zero(self, tv):
        tv.reduce_stock(3)
        assert tv.stock_quantity == 0
        assert tv.is_out_of_stock

    def test_reduce_stock_beyond_available_raises(self, biscuits):
        with pytest.raises(OutOfStockError) as exc_info:
            biscuits.reduce_stock(6)

        assert exc_info.value.requested == 6
        assert exc_info.value.available == 5
        assert biscuits.stock_quantity == 5

    def test_reduce_stock_rejects_non_positive(self, cheese):
        with pytest.raises(ValueError):
            cheese.reduce_stock(0)

    def test_restock(self, tv):
        tv.restock(2)
        assert tv.stock_quantity == 5

    def test_restock_rejects_non_positive(self, tv):
        with pytest.raises(ValueError):
            tv.restock(-1)

    def test_stock_cannot_be_set_negative(self, tv):
        with pytest.raises(ValidationError):
            tv.stock_quantity = -1


class TestProductValidation:
    """Test field validation"""

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            Product(sku="X", name="X", unit_price=Decimal("-1"))

    def test_negative_weight_rejected(self):
        with pytest.raises(ValidationError):
            ShippingProfile(weight_kg=Decimal("-0.1"))

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            Product(sku="X", name="", unit_price=Decimal("1"))


class TestProductSerialization:
    """Test to_dict and ProductCreate"""

    def test_to_dict_flattens_capabilities(self, cheese):
        data = cheese.to_dict()

        assert data['unit_price'] == 100.0
        assert data['weight_kg'] == 0.2
        assert data['expires_at'] is not None
        assert data['is_expirable'] is True
        assert data['is_shippable'] is True
        assert data['is_digital'] is False
        assert 'expiry' not in data
        assert 'shipping' not in data

    def test_to_dict_digital(self, scratch_card):
        data = scratch_card.to_dict()

        assert data['weight_kg'] is None
        assert data['expires_at'] is None
        assert data['is_digital'] is True

    def test_product_create_builds_capabilities(self, now):
        payload = ProductCreate(
            sku="YOGURT",
            name="Yogurt",
            unit_price=Decimal("12.50"),
            stock_quantity=8,
            expires_at=now,
            weight_kg=Decimal("0.15"),
        )

        product = payload.to_product(default_min_stock=5)

        assert product.is_expirable
        assert product.shippable_weight() == Decimal("0.15")
        assert product.min_stock == 5

    def test_product_create_without_capabilities_is_digital(self):
        product = ProductCreate(sku="GIFT", name="Gift Card", unit_price=Decimal("25")).to_product()

        assert product.is_digital
        assert product.min_stock == 0
