"""
Customers API Endpoints
Customer accounts and balance top-ups

Author: TM3
Date: 2025-10-17
"""
import logging
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from storefront.core.config import settings
from storefront.core.database import InMemoryStore, get_store
from storefront.domain.cart import CartStatus
from storefront.domain.customer import CustomerAccount
from storefront.domain.errors import NotFoundError
from storefront.repositories.cart_repository import CartRepository
from storefront.repositories.customer_repository import CustomerRepository

logger = logging.getLogger(__name__)

router = APIRouter()


# Request models
class CustomerCreate(BaseModel):
    name: str = Field(..., min_length=1)
    balance: Decimal = Field(Decimal("0"), ge=0)


class CreditRequest(BaseModel):
    amount: Decimal = Field(..., gt=0)


@router.get("/")
def get_customers(store: InMemoryStore = Depends(get_store)):
    """List customer accounts"""
    repo = CustomerRepository(store)
    customers = repo.find_all()

    return {
        "status": "success",
        "count": len(customers),
        "data": [customer.to_dict() for customer in customers]
    }


@router.post("/", status_code=201)
def create_customer(payload: CustomerCreate, store: InMemoryStore = Depends(get_store)):
    """Open a customer account with an initial balance"""
    repo = CustomerRepository(store)
    customer = repo.add(CustomerAccount(name=payload.name, balance=payload.balance))
    logger.info("Customer created: %s", customer.id)

    return {
        "status": "success",
        "data": customer.to_dict()
    }


@router.get("/{customer_id}")
def get_customer(customer_id: str, store: InMemoryStore = Depends(get_store)):
    """Get a customer account by ID"""
    try:
        customer = CustomerRepository(store).get(customer_id)

        return {
            "status": "success",
            "data": customer.to_dict()
        }

    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{customer_id}/credit")
def credit_customer(
    customer_id: str,
    payload: CreditRequest,
    store: InMemoryStore = Depends(get_store)
):
    """Top up a customer's balance"""
    try:
        repo = CustomerRepository(store)
        with store.lock:
            customer = repo.get(customer_id)
            customer.credit(payload.amount)
        logger.info("Customer %s credited %s", customer.id, payload.amount)

        return {
            "status": "success",
            "data": customer.to_dict()
        }

    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{customer_id}/carts")
def get_customer_carts(
    customer_id: str,
    status: Optional[CartStatus] = Query(None, description="Filter by cart status"),
    store: InMemoryStore = Depends(get_store)
):
    """List a customer's carts, oldest first"""
    try:
        customer = CustomerRepository(store).get(customer_id)
        carts = CartRepository(store).find_by_customer(customer.id, status)

        return {
            "status": "success",
            "count": len(carts),
            "data": [cart.to_dict(settings.SHIPPING_RATE_PER_KG) for cart in carts]
        }

    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
