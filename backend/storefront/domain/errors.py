"""
Domain errors raised by products, carts, customer accounts and repositories
"""
from decimal import Decimal


class StorefrontError(Exception):
    """Base class for every storefront domain error"""


class OutOfStockError(StorefrontError):
    """Requested quantity is larger than the product's current stock"""

    def __init__(self, product_name: str, requested: int, available: int):
        self.product_name = product_name
        self.requested = requested
        self.available = available
        super().__init__(
            f"{product_name} is out of stock (requested {requested}, available {available})"
        )


class InsufficientFundsError(StorefrontError):
    """Customer balance does not cover the amount to debit"""

    def __init__(self, balance: Decimal, amount: Decimal):
        self.balance = balance
        self.amount = amount
        super().__init__(f"Insufficient balance: {balance} available, {amount} required")


class CartClosedError(StorefrontError):
    """Cart is no longer open for changes"""


class NotFoundError(StorefrontError):
    """Entity lookup by id failed"""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")
