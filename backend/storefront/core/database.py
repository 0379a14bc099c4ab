"""
In-memory data store

Holds the catalog, customer accounts and carts for the life of the process.
There is no persistence across runs.

The store carries one re-entrant lock. The API serves sync endpoints from a
thread pool, so anything that reads and then writes stock or balances
(checkout, restock, credit) must hold `store.lock`.

Author: TM3
Updated: 2025-10-17
"""
import logging
import threading
from typing import Dict, Iterable, Optional

from storefront.domain.cart import Cart
from storefront.domain.customer import CustomerAccount
from storefront.domain.product import Product

logger = logging.getLogger(__name__)


class InMemoryStore:
    """Process-wide tables keyed by entity id"""

    def __init__(self):
        self.products: Dict[str, Product] = {}
        self.customers: Dict[str, CustomerAccount] = {}
        self.carts: Dict[str, Cart] = {}
        self.lock = threading.RLock()

    def seed(
        self,
        products: Iterable[Product] = (),
        customers: Iterable[CustomerAccount] = ()
    ) -> None:
        """Load initial products and customers (used by the demo and tests)"""
        with self.lock:
            for product in products:
                self.products[product.id] = product
            for customer in customers:
                self.customers[customer.id] = customer
        logger.info(
            "Store seeded: %d products, %d customers",
            len(self.products), len(self.customers)
        )

    def clear(self) -> None:
        with self.lock:
            self.products.clear()
            self.customers.clear()
            self.carts.clear()


_store: Optional[InMemoryStore] = None


def get_store() -> InMemoryStore:
    """
    FastAPI dependency returning the shared store

    Usage:
        @router.get("/items")
        def read_items(store: InMemoryStore = Depends(get_store)):
            ...
    """
    global _store
    if _store is None:
        _store = InMemoryStore()
    return _store


def reset_store() -> InMemoryStore:
    """Replace the shared store with an empty one"""
    global _store
    _store = InMemoryStore()
    return _store
