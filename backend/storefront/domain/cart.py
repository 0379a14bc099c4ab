"""
Cart Domain Models

A cart is an ordered list of purchase intents (product, quantity) for one
customer session. Items reference catalog products, they never copy them, so
prices, weights and stock are always read from the live product.

Author: TM3
Date: 2025-10-17
"""
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, List, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field

from storefront.domain.errors import CartClosedError, OutOfStockError
from storefront.domain.product import Product, new_id, utcnow

DEFAULT_SHIPPING_RATE_PER_KG = Decimal("10")


class CartStatus(str, Enum):
    """Cart lifecycle statuses"""
    OPEN = "open"
    CHECKED_OUT = "checked_out"
    ABANDONED = "abandoned"


class ShippableLine(NamedTuple):
    """Entry of the shippable manifest handed to the shipment notifier"""
    product: Product
    quantity: int


class CartItem(BaseModel):
    """
    Cart item - one line of the cart

    Fields:
        id: Line ID (used to remove the line)
        product: Reference to the catalog product
        quantity: Requested units (> 0)
        added_at: When the line was added
    """

    id: str = Field(default_factory=new_id, description="Cart item ID")
    product: Product = Field(..., description="Catalog product")
    quantity: int = Field(..., description="Requested quantity", ge=1)
    added_at: datetime = Field(default_factory=utcnow, description="Added timestamp")

    @property
    def line_total(self) -> Decimal:
        return self.product.unit_price * self.quantity

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'product_id': self.product.id,
            'sku': self.product.sku,
            'name': self.product.name,
            'quantity': self.quantity,
            'unit_price': float(self.product.unit_price),
            'line_total': float(self.line_total),
            'is_shippable': self.product.is_shippable,
        }


class Cart(BaseModel):
    """
    Cart domain model

    Fields:
        id: Cart ID
        customer_id: Owner of the session
        items: Cart lines in insertion order
        status: open, checked_out or abandoned
    """

    id: str = Field(default_factory=new_id, description="Cart ID")
    customer_id: Optional[str] = Field(None, description="Customer ID")
    items: List[CartItem] = Field(default_factory=list, description="Cart items")
    status: CartStatus = Field(CartStatus.OPEN, description="Cart status")
    created_at: datetime = Field(default_factory=utcnow, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(validate_assignment=True)

    @property
    def is_open(self) -> bool:
        return self.status == CartStatus.OPEN

    def _ensure_open(self) -> None:
        if not self.is_open:
            raise CartClosedError(f"Cart {self.id} is {self.status.value}")

    # Item management
    def add_item(self, product: Product, quantity: int) -> CartItem:
        """
        Append a line for `product`.

        The stock check here is a soft pre-check: stock can still change before
        checkout, which checks again. Stock is not reserved or reduced.
        """
        self._ensure_open()
        if quantity <= 0:
            raise ValueError("The quantity must be a positive number.")
        if not product.has_stock_for(quantity):
            raise OutOfStockError(product.name, quantity, product.stock_quantity)

        item = CartItem(product=product, quantity=quantity)
        self.items.append(item)
        self.updated_at = utcnow()
        return item

    def remove_item(self, item_id: str) -> CartItem:
        self._ensure_open()
        item = next((i for i in self.items if i.id == item_id), None)
        if item is None:
            raise KeyError(f"Item not found in cart: {item_id}")

        self.items.remove(item)
        self.updated_at = utcnow()
        return item

    def is_empty(self) -> bool:
        return not self.items

    # Pricing
    def subtotal(self) -> Decimal:
        return sum((item.line_total for item in self.items), Decimal("0"))

    def shipping_fee(self, rate_per_kg: Decimal = DEFAULT_SHIPPING_RATE_PER_KG) -> Decimal:
        """Weight-based fee; items without a shipping profile add nothing"""
        fee = Decimal("0")
        for item in self.items:
            weight = item.product.shippable_weight()
            if weight is not None:
                fee += weight * item.quantity * rate_per_kg
        return fee

    def shippable_manifest(self) -> List[ShippableLine]:
        """Shippable lines only, in the order they were added"""
        return [
            ShippableLine(item.product, item.quantity)
            for item in self.items
            if item.product.shippable_weight() is not None
        ]

    def requested_quantities(self) -> Dict[str, int]:
        """Total requested units per product id, across duplicate lines"""
        totals: Dict[str, int] = {}
        for item in self.items:
            totals[item.product.id] = totals.get(item.product.id, 0) + item.quantity
        return totals

    # Lifecycle
    def mark_checked_out(self) -> None:
        self._ensure_open()
        self.status = CartStatus.CHECKED_OUT
        self.updated_at = utcnow()

    def abandon(self) -> None:
        self._ensure_open()
        self.status = CartStatus.ABANDONED
        self.updated_at = utcnow()

    def to_dict(self, rate_per_kg: Decimal = DEFAULT_SHIPPING_RATE_PER_KG) -> dict:
        """Convert to dictionary with computed totals, Decimals as floats"""
        subtotal = self.subtotal()
        shipping_fee = self.shipping_fee(rate_per_kg)

        return {
            'id': self.id,
            'customer_id': self.customer_id,
            'status': self.status.value,
            'items': [item.to_dict() for item in self.items],
            'item_count': len(self.items),
            'subtotal': float(subtotal),
            'shipping_fee': float(shipping_fee),
            'total': float(subtotal + shipping_fee),
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }
