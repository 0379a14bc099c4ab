"""
Product Repository - Data Access Layer for Products

Handles all catalog lookups against the in-memory store and returns Product
domain models.

Author: TM3
Date: 2025-10-17
"""
from typing import List, Optional, Tuple

from storefront.core.database import InMemoryStore, get_store
from storefront.domain.errors import NotFoundError
from storefront.domain.product import Product


class ProductRepository:
    """
    Repository for Product data access

    All catalog queries are centralized here.
    Returns the live Product instances held by the store, so carts that
    reference them always see current stock.
    """

    def __init__(self, store: Optional[InMemoryStore] = None):
        self.store = store or get_store()

    def find_by_id(self, product_id: str) -> Optional[Product]:
        """
        Find product by ID

        Args:
            product_id: Internal product ID

        Returns:
            Product or None if not found
        """
        return self.store.products.get(product_id)

    def get(self, product_id: str) -> Product:
        """Like find_by_id, but raises NotFoundError"""
        product = self.find_by_id(product_id)
        if product is None:
            raise NotFoundError("Product", product_id)
        return product

    def find_by_sku(self, sku: str) -> Optional[Product]:
        """
        Find product by SKU

        Args:
            sku: Product SKU

        Returns:
            Product or None if not found
        """
        return next(
            (p for p in self.store.products.values() if p.sku == sku),
            None
        )

    def find_all(
        self,
        search: Optional[str] = None,
        shippable: Optional[bool] = None,
        expirable: Optional[bool] = None,
        in_stock: Optional[bool] = None,
        limit: int = 100,
        offset: int = 0
    ) -> Tuple[List[Product], int]:
        """
        Find products with filters

        Args:
            search: Search in name or SKU (case-insensitive)
            shippable: Filter by shipping capability
            expirable: Filter by expiry capability
            in_stock: Filter by stock_quantity > 0
            limit: Maximum results to return
            offset: Number of results to skip

        Returns:
            Tuple of (list of products, total count)
        """
        products = list(self.store.products.values())

        if search:
            term = search.lower()
            products = [
                p for p in products
                if term in p.name.lower() or term in p.sku.lower()
            ]

        if shippable is not None:
            products = [p for p in products if p.is_shippable == shippable]

        if expirable is not None:
            products = [p for p in products if p.is_expirable == expirable]

        if in_stock is not None:
            products = [p for p in products if (not p.is_out_of_stock) == in_stock]

        products.sort(key=lambda p: p.name)
        total = len(products)

        return products[offset:offset + limit], total

    def find_low_stock(self, threshold: Optional[int] = None) -> List[Product]:
        """
        Find products with low stock

        Args:
            threshold: Custom threshold (if None, uses each product's min_stock)

        Returns:
            List of products with low stock, lowest first
        """
        if threshold is not None:
            products = [
                p for p in self.store.products.values()
                if p.stock_quantity <= threshold
            ]
        else:
            products = [p for p in self.store.products.values() if p.is_low_stock]

        return sorted(products, key=lambda p: p.stock_quantity)

    def add(self, product: Product) -> Product:
        """
        Register a new product in the catalog

        Raises:
            ValueError: SKU already present
        """
        with self.store.lock:
            if self.find_by_sku(product.sku) is not None:
                raise ValueError(f"SKU already exists: {product.sku}")
            self.store.products[product.id] = product
        return product

    def get_stats(self) -> dict:
        """
        Get catalog statistics

        Returns:
            Dict with totals by capability and stock levels
        """
        products = list(self.store.products.values())

        return {
            'totals': {
                'all': len(products),
                'shippable': sum(1 for p in products if p.is_shippable),
                'expirable': sum(1 for p in products if p.is_expirable),
                'digital': sum(1 for p in products if p.is_digital),
            },
            'stock_levels': {
                'out_of_stock': sum(1 for p in products if p.is_out_of_stock),
                'low_stock': sum(
                    1 for p in products if not p.is_out_of_stock and p.is_low_stock
                ),
                'in_stock': sum(1 for p in products if not p.is_low_stock),
            },
        }
