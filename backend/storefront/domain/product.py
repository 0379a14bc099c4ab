"""
Product Domain Model

Represents a stock-keeping unit in the storefront catalog.

A product carries two independent, optional capabilities:
    expiry:   ExpiryPolicy    -> the product is perishable
    shipping: ShippingProfile -> the product is physical and has a weight

Every combination is valid (perishable + shippable, shippable only,
perishable only, or neither for digital goods). Checkout code asks the
product about its capabilities instead of checking what kind of product it is.

Author: TM3
Date: 2025-10-17
"""
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from storefront.domain.errors import OutOfStockError


def new_id() -> str:
    return str(uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Naive timestamps are treated as UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class ExpiryPolicy(BaseModel):
    """Perishable capability: the product can no longer be sold after expires_at"""

    expires_at: datetime = Field(..., description="Expiry timestamp")

    model_config = ConfigDict(frozen=True)

    def is_expired(self, as_of: Optional[datetime] = None) -> bool:
        now = as_utc(as_of) if as_of else utcnow()
        return now > as_utc(self.expires_at)


class ShippingProfile(BaseModel):
    """Shippable capability: physical goods with a per-unit weight"""

    weight_kg: Decimal = Field(..., description="Weight per unit in kg", ge=0)

    model_config = ConfigDict(frozen=True)


class Product(BaseModel):
    """
    Product domain model

    Fields:
        id: Internal product ID
        sku: Stock Keeping Unit (unique in the catalog)
        name: Product name
        unit_price: Price per unit
        stock_quantity: Units currently on hand (never negative)
        min_stock: Low stock alert threshold
        expiry: Optional perishable capability
        shipping: Optional shippable capability
        created_at: When product was created
        updated_at: When stock last changed
    """

    id: str = Field(default_factory=new_id, description="Internal product ID")
    sku: str = Field(..., description="Stock Keeping Unit", min_length=1)
    name: str = Field(..., description="Product name", min_length=1)
    unit_price: Decimal = Field(..., description="Price per unit", ge=0)
    stock_quantity: int = Field(0, description="Units on hand", ge=0)
    min_stock: int = Field(0, description="Minimum stock threshold", ge=0)

    # Capabilities
    expiry: Optional[ExpiryPolicy] = Field(None, description="Perishable capability")
    shipping: Optional[ShippingProfile] = Field(None, description="Shippable capability")

    # Metadata
    created_at: datetime = Field(default_factory=utcnow, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(validate_assignment=True)

    # Capability queries
    @property
    def is_expirable(self) -> bool:
        return self.expiry is not None

    @property
    def is_shippable(self) -> bool:
        return self.shipping is not None

    @property
    def is_digital(self) -> bool:
        """Neither perishable nor physically shipped"""
        return not self.is_expirable and not self.is_shippable

    def is_expired(self, as_of: Optional[datetime] = None) -> bool:
        """Products without an expiry policy never expire"""
        if self.expiry is None:
            return False
        return self.expiry.is_expired(as_of)

    def shippable_weight(self) -> Optional[Decimal]:
        """Per-unit weight in kg, or None when the product is not shippable"""
        if self.shipping is None:
            return None
        return self.shipping.weight_kg

    # Stock
    @property
    def is_low_stock(self) -> bool:
        return self.stock_quantity <= self.min_stock

    @property
    def is_out_of_stock(self) -> bool:
        return self.stock_quantity <= 0

    def has_stock_for(self, quantity: int) -> bool:
        return quantity <= self.stock_quantity

    def reduce_stock(self, amount: int) -> None:
        """
        Take `amount` units out of stock.

        Raises:
            ValueError: amount is not positive
            OutOfStockError: amount exceeds the units on hand (stock unchanged)
        """
        if amount <= 0:
            raise ValueError("Amount must be a positive number")
        if not self.has_stock_for(amount):
            raise OutOfStockError(self.name, amount, self.stock_quantity)

        self.stock_quantity = self.stock_quantity - amount
        self.updated_at = utcnow()

    def restock(self, amount: int) -> None:
        if amount <= 0:
            raise ValueError("New inventory must be a positive number")

        self.stock_quantity = self.stock_quantity + amount
        self.updated_at = utcnow()

    def to_dict(self) -> dict:
        """
        Convert to dictionary with computed fields

        Returns dict with all fields plus capability flags, Decimals as floats
        """
        data = self.model_dump()

        data['unit_price'] = float(self.unit_price)
        data['expires_at'] = self.expiry.expires_at.isoformat() if self.expiry else None
        weight = self.shippable_weight()
        data['weight_kg'] = float(weight) if weight is not None else None
        del data['expiry']
        del data['shipping']

        data['is_expirable'] = self.is_expirable
        data['is_shippable'] = self.is_shippable
        data['is_digital'] = self.is_digital
        data['is_expired'] = self.is_expired()
        data['is_low_stock'] = self.is_low_stock
        data['is_out_of_stock'] = self.is_out_of_stock

        data['created_at'] = self.created_at.isoformat()
        if self.updated_at:
            data['updated_at'] = self.updated_at.isoformat()

        return data


class ProductCreate(BaseModel):
    """Schema for creating a new product"""
    sku: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    unit_price: Decimal = Field(..., ge=0)
    stock_quantity: int = Field(0, ge=0)
    min_stock: Optional[int] = Field(None, ge=0)
    expires_at: Optional[datetime] = None
    weight_kg: Optional[Decimal] = Field(None, ge=0)

    def to_product(self, default_min_stock: int = 0) -> Product:
        return Product(
            sku=self.sku,
            name=self.name,
            unit_price=self.unit_price,
            stock_quantity=self.stock_quantity,
            min_stock=self.min_stock if self.min_stock is not None else default_min_stock,
            expiry=ExpiryPolicy(expires_at=self.expires_at) if self.expires_at else None,
            shipping=ShippingProfile(weight_kg=self.weight_kg) if self.weight_kg is not None else None,
        )
