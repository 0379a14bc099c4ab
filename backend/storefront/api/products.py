"""
Products API Endpoints
Handles catalog management and queries

Author: TM3
Date: 2025-10-17
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from storefront.core.config import settings
from storefront.core.database import InMemoryStore, get_store
from storefront.domain.errors import NotFoundError
from storefront.domain.product import ProductCreate
from storefront.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)

router = APIRouter()


# Request models
class RestockRequest(BaseModel):
    quantity: int = Field(..., ge=1)


@router.get("/")
def get_products(
    search: Optional[str] = Query(None, description="Search by name or SKU"),
    shippable: Optional[bool] = Query(None, description="Filter by shipping capability"),
    expirable: Optional[bool] = Query(None, description="Filter by expiry capability"),
    in_stock: Optional[bool] = Query(None, description="Filter by stock availability"),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    store: InMemoryStore = Depends(get_store)
):
    """
    Get all products with optional filters

    Returns products with capability and stock flags included
    """
    try:
        repo = ProductRepository(store)

        products, total = repo.find_all(
            search=search,
            shippable=shippable,
            expirable=expirable,
            in_stock=in_stock,
            limit=limit,
            offset=offset
        )

        return {
            "status": "success",
            "total": total,
            "limit": limit,
            "offset": offset,
            "count": len(products),
            "data": [product.to_dict() for product in products]
        }

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching products: {str(e)}")


@router.get("/stats")
def get_product_stats(store: InMemoryStore = Depends(get_store)):
    """
    Get catalog statistics

    Returns:
    - Products by capability
    - Stock levels
    """
    try:
        repo = ProductRepository(store)

        return {
            "status": "success",
            "data": repo.get_stats()
        }

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching stats: {str(e)}")


@router.get("/low-stock")
def get_low_stock_products(
    threshold: Optional[int] = Query(None, ge=0, description="Override each product's min_stock"),
    store: InMemoryStore = Depends(get_store)
):
    """Products at or below their restock threshold, lowest stock first"""
    try:
        products = ProductRepository(store).find_low_stock(threshold)

        return {
            "status": "success",
            "count": len(products),
            "data": [product.to_dict() for product in products]
        }

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching low stock products: {str(e)}")


@router.get("/{product_id}")
def get_product(product_id: str, store: InMemoryStore = Depends(get_store)):
    """Get a single product by ID"""
    try:
        repo = ProductRepository(store)
        product = repo.get(product_id)

        return {
            "status": "success",
            "data": product.to_dict()
        }

    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching product: {str(e)}")


@router.post("/", status_code=201)
def create_product(payload: ProductCreate, store: InMemoryStore = Depends(get_store)):
    """
    Add a product to the catalog

    expires_at makes it perishable, weight_kg makes it shippable;
    with neither it is a digital product.
    """
    try:
        repo = ProductRepository(store)
        product = repo.add(payload.to_product(default_min_stock=settings.LOW_STOCK_THRESHOLD))
        logger.info("Product created: %s (%s)", product.sku, product.id)

        return {
            "status": "success",
            "data": product.to_dict()
        }

    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error creating product: {str(e)}")


@router.post("/{product_id}/restock")
def restock_product(
    product_id: str,
    payload: RestockRequest,
    store: InMemoryStore = Depends(get_store)
):
    """Add units to a product's stock"""
    try:
        repo = ProductRepository(store)
        with store.lock:
            product = repo.get(product_id)
            product.restock(payload.quantity)
        logger.info("Product %s restocked by %d", product.sku, payload.quantity)

        return {
            "status": "success",
            "data": product.to_dict()
        }

    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error restocking product: {str(e)}")
