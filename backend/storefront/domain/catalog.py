"""
Sample Storefront Catalog
Demo products and customers used by the CLI demo and to seed the API

The catalog is built on demand so expiry dates are relative to `now`;
nothing in the checkout core depends on these values.

Author: TM3
Date: 2025-10-17
"""
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Dict, List, Optional

from storefront.domain.customer import CustomerAccount
from storefront.domain.product import ExpiryPolicy, Product, ShippingProfile, utcnow


# ================================================================================
# SAMPLE CATALOG
# ================================================================================
# Covers every capability combination the checkout has to handle:
#   CHEESE, BISCUITS -> perishable and shippable
#   TV               -> shippable only
#   SCRATCH_CARD     -> digital (neither)
# ================================================================================

CHEESE = "CHEESE"
BISCUITS = "BISCUITS"
TV = "TV"
SCRATCH_CARD = "SCRATCH_CARD"


def build_sample_catalog(now: Optional[datetime] = None) -> Dict[str, Product]:
    """
    Build a fresh sample catalog keyed by SKU

    Args:
        now: Reference time; perishables expire one day after it

    Returns:
        Dictionary mapping SKU -> Product
    """
    now = now or utcnow()
    tomorrow = ExpiryPolicy(expires_at=now + timedelta(days=1))

    products = [
        Product(
            sku=CHEESE,
            name="Cheese",
            unit_price=Decimal("100"),
            stock_quantity=10,
            expiry=tomorrow,
            shipping=ShippingProfile(weight_kg=Decimal("0.2")),
        ),
        Product(
            sku=BISCUITS,
            name="Biscuits",
            unit_price=Decimal("150"),
            stock_quantity=5,
            expiry=tomorrow,
            shipping=ShippingProfile(weight_kg=Decimal("0.7")),
        ),
        Product(
            sku=TV,
            name="TV",
            unit_price=Decimal("1000"),
            stock_quantity=3,
            shipping=ShippingProfile(weight_kg=Decimal("10")),
        ),
        Product(
            sku=SCRATCH_CARD,
            name="Scratch Card",
            unit_price=Decimal("50"),
            stock_quantity=100,
        ),
    ]
    return {product.sku: product for product in products}


def build_sample_customers() -> List[CustomerAccount]:
    """One customer who can afford the demo order and one who cannot"""
    return [
        CustomerAccount(name="Alice", balance=Decimal("2000")),
        CustomerAccount(name="Bob", balance=Decimal("1000")),
    ]
