"""
Service Layer - Business workflows

Author: TM3
Date: 2025-10-17
"""
from storefront.services.checkout_service import CheckoutService
from storefront.services.shipping_service import (
    ConsoleShipmentNotifier,
    LoggingShipmentNotifier,
    ShipmentNotice,
    ShipmentNotifier,
    ShippingService,
)

__all__ = [
    'CheckoutService',
    'ConsoleShipmentNotifier',
    'LoggingShipmentNotifier',
    'ShipmentNotice',
    'ShipmentNotifier',
    'ShippingService',
]
