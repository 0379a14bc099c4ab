"""
Repository Layer - Data Access

This layer handles all store lookups and returns domain models.
Repositories hide the storage details from business logic.

Author: TM3
Date: 2025-10-17
"""
from storefront.repositories.product_repository import ProductRepository
from storefront.repositories.customer_repository import CustomerRepository
from storefront.repositories.cart_repository import CartRepository

__all__ = [
    'ProductRepository',
    'CustomerRepository',
    'CartRepository'
]
