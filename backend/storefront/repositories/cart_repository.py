"""
Cart Repository - Data Access Layer for Carts

Author: TM3
Date: 2025-10-17
"""
from typing import List, Optional

from storefront.core.database import InMemoryStore, get_store
from storefront.domain.cart import Cart, CartStatus
from storefront.domain.errors import NotFoundError


class CartRepository:
    """Repository for Cart data access"""

    def __init__(self, store: Optional[InMemoryStore] = None):
        self.store = store or get_store()

    def find_by_id(self, cart_id: str) -> Optional[Cart]:
        return self.store.carts.get(cart_id)

    def get(self, cart_id: str) -> Cart:
        """Like find_by_id, but raises NotFoundError"""
        cart = self.find_by_id(cart_id)
        if cart is None:
            raise NotFoundError("Cart", cart_id)
        return cart

    def find_by_customer(
        self,
        customer_id: str,
        status: Optional[CartStatus] = None
    ) -> List[Cart]:
        """
        Find carts of one customer, oldest first

        Args:
            customer_id: Owner of the carts
            status: Optional status filter
        """
        carts = [
            c for c in self.store.carts.values()
            if c.customer_id == customer_id
            and (status is None or c.status == status)
        ]
        return sorted(carts, key=lambda c: c.created_at)

    def add(self, cart: Cart) -> Cart:
        with self.store.lock:
            self.store.carts[cart.id] = cart
        return cart
