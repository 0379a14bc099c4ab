"""
Domain models for Storefront Checkout

Business entities with their rules; no storage or transport concerns here.
"""
from storefront.domain.product import Product, ProductCreate, ExpiryPolicy, ShippingProfile
from storefront.domain.cart import Cart, CartItem, CartStatus, ShippableLine
from storefront.domain.customer import CustomerAccount
from storefront.domain.receipt import (
    CheckoutFailure,
    CheckoutResult,
    CheckoutStage,
    Receipt,
    ReceiptLine,
)
from storefront.domain.errors import (
    CartClosedError,
    InsufficientFundsError,
    NotFoundError,
    OutOfStockError,
    StorefrontError,
)

__all__ = [
    'Product',
    'ProductCreate',
    'ExpiryPolicy',
    'ShippingProfile',
    'Cart',
    'CartItem',
    'CartStatus',
    'ShippableLine',
    'CustomerAccount',
    'CheckoutFailure',
    'CheckoutResult',
    'CheckoutStage',
    'Receipt',
    'ReceiptLine',
    'CartClosedError',
    'InsufficientFundsError',
    'NotFoundError',
    'OutOfStockError',
    'StorefrontError',
]
