"""
Customer Repository - Data Access Layer for Customer Accounts

Author: TM3
Date: 2025-10-17
"""
from typing import List, Optional

from storefront.core.database import InMemoryStore, get_store
from storefront.domain.customer import CustomerAccount
from storefront.domain.errors import NotFoundError


class CustomerRepository:
    """Repository for CustomerAccount data access"""

    def __init__(self, store: Optional[InMemoryStore] = None):
        self.store = store or get_store()

    def find_by_id(self, customer_id: str) -> Optional[CustomerAccount]:
        return self.store.customers.get(customer_id)

    def get(self, customer_id: str) -> CustomerAccount:
        """Like find_by_id, but raises NotFoundError"""
        customer = self.find_by_id(customer_id)
        if customer is None:
            raise NotFoundError("Customer", customer_id)
        return customer

    def find_all(self) -> List[CustomerAccount]:
        return sorted(self.store.customers.values(), key=lambda c: c.name)

    def add(self, customer: CustomerAccount) -> CustomerAccount:
        with self.store.lock:
            self.store.customers[customer.id] = customer
        return customer
