"""
Carts API Endpoints
Cart management and checkout

Author: TM3
Date: 2025-10-17
"""
import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from storefront.core.config import settings
from storefront.core.database import InMemoryStore, get_store
from storefront.domain.cart import Cart
from storefront.domain.errors import CartClosedError, NotFoundError, OutOfStockError
from storefront.domain.receipt import CheckoutFailure
from storefront.repositories.cart_repository import CartRepository
from storefront.repositories.customer_repository import CustomerRepository
from storefront.repositories.product_repository import ProductRepository
from storefront.services.checkout_service import CheckoutService
from storefront.services.shipping_service import LoggingShipmentNotifier

logger = logging.getLogger(__name__)

router = APIRouter()

# Shared by every checkout served by this process
shipment_notifier = LoggingShipmentNotifier()

FAILURE_STATUS_CODES = {
    CheckoutFailure.EMPTY_CART: 422,
    CheckoutFailure.EXPIRED_PRODUCT: 409,
    CheckoutFailure.OUT_OF_STOCK: 409,
    CheckoutFailure.INSUFFICIENT_FUNDS: 402,
}


# Request models
class CartCreate(BaseModel):
    customer_id: str


class CartItemCreate(BaseModel):
    product_id: str
    quantity: int = Field(..., ge=1)


def get_checkout_service(store: InMemoryStore = Depends(get_store)) -> CheckoutService:
    """FastAPI dependency: checkout pipeline bound to the store lock"""
    return CheckoutService(
        notifier=shipment_notifier,
        rate_per_kg=settings.SHIPPING_RATE_PER_KG,
        lock=store.lock
    )


def _cart_response(cart: Cart) -> dict:
    return {
        "status": "success",
        "data": cart.to_dict(settings.SHIPPING_RATE_PER_KG)
    }


@router.post("/", status_code=201)
def create_cart(payload: CartCreate, store: InMemoryStore = Depends(get_store)):
    """Open an empty cart for an existing customer"""
    try:
        customer = CustomerRepository(store).get(payload.customer_id)
        cart = CartRepository(store).add(Cart(customer_id=customer.id))
        logger.info("Cart %s opened for customer %s", cart.id, customer.id)

        return _cart_response(cart)

    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{cart_id}")
def get_cart(cart_id: str, store: InMemoryStore = Depends(get_store)):
    """Get a cart with its items, subtotal and shipping fee"""
    try:
        return _cart_response(CartRepository(store).get(cart_id))

    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{cart_id}/items", status_code=201)
def add_cart_item(
    cart_id: str,
    payload: CartItemCreate,
    store: InMemoryStore = Depends(get_store)
):
    """
    Add a product to the cart

    Stock is only checked here, not reserved: checkout checks it again.
    """
    try:
        with store.lock:
            cart = CartRepository(store).get(cart_id)
            product = ProductRepository(store).get(payload.product_id)
            cart.add_item(product, payload.quantity)

        return _cart_response(cart)

    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (OutOfStockError, CartClosedError) as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.delete("/{cart_id}/items/{item_id}")
def remove_cart_item(cart_id: str, item_id: str, store: InMemoryStore = Depends(get_store)):
    """Remove one line from an open cart"""
    try:
        with store.lock:
            cart = CartRepository(store).get(cart_id)
            cart.remove_item(item_id)

        return _cart_response(cart)

    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Item not found in cart: {item_id}")
    except CartClosedError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/{cart_id}/checkout")
def checkout_cart(
    cart_id: str,
    store: InMemoryStore = Depends(get_store),
    checkout_service: CheckoutService = Depends(get_checkout_service)
):
    """
    Check out a cart

    Returns the receipt, or an error status per failure kind:
    - empty_cart: 422
    - expired_product, out_of_stock: 409
    - insufficient_funds: 402
    """
    try:
        cart = CartRepository(store).get(cart_id)
        customer = CustomerRepository(store).get(cart.customer_id)
        result = checkout_service.checkout(cart, customer)

    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CartClosedError as e:
        raise HTTPException(status_code=409, detail=str(e))

    if not result.succeeded:
        raise HTTPException(
            status_code=FAILURE_STATUS_CODES[result.failure],
            detail={
                "failure": result.failure.value,
                "reason": result.reason,
                "product_name": result.product_name,
            }
        )

    return {
        "status": "success",
        "data": result.receipt.to_dict()
    }


@router.post("/{cart_id}/abandon")
def abandon_cart(cart_id: str, store: InMemoryStore = Depends(get_store)):
    """Close an open cart without checking it out; stock and balance are untouched"""
    try:
        with store.lock:
            cart = CartRepository(store).get(cart_id)
            cart.abandon()
        logger.info("Cart %s abandoned", cart.id)

        return _cart_response(cart)

    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CartClosedError as e:
        raise HTTPException(status_code=409, detail=str(e))
