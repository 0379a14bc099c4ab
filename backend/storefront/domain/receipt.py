"""
Checkout Result Domain Models

A checkout either produces a Receipt or is rejected with one of the
CheckoutFailure kinds. Both outcomes travel in a CheckoutResult so callers
branch on the value instead of catching exceptions.

Author: TM3
Date: 2025-10-17
"""
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from storefront.domain.product import utcnow


class CheckoutFailure(str, Enum):
    """Reasons a checkout is rejected before anything is mutated"""
    EMPTY_CART = "empty_cart"
    EXPIRED_PRODUCT = "expired_product"
    OUT_OF_STOCK = "out_of_stock"
    INSUFFICIENT_FUNDS = "insufficient_funds"


class CheckoutStage(str, Enum):
    """Pipeline stages; rejected is terminal and reachable from validating only"""
    VALIDATING = "validating"
    SETTLING = "settling"
    SHIPPING = "shipping"
    RECEIPT_READY = "receipt_ready"
    REJECTED = "rejected"


class ReceiptLine(BaseModel):
    name: str
    quantity: int = Field(..., ge=1)
    line_total: Decimal = Field(..., ge=0)


class Receipt(BaseModel):
    """
    Receipt of a settled checkout

    Fields:
        lines: One line per cart item, in cart order
        subtotal: Sum of line totals
        shipping_fee: Weight-based shipping fee
        total: subtotal + shipping_fee (the amount debited)
    """

    cart_id: Optional[str] = None
    customer_id: Optional[str] = None
    lines: List[ReceiptLine] = Field(default_factory=list)
    subtotal: Decimal = Field(..., ge=0)
    shipping_fee: Decimal = Field(..., ge=0)
    total: Decimal = Field(..., ge=0)
    issued_at: datetime = Field(default_factory=utcnow)

    def to_dict(self) -> dict:
        return {
            'cart_id': self.cart_id,
            'customer_id': self.customer_id,
            'lines': [
                {
                    'name': line.name,
                    'quantity': line.quantity,
                    'line_total': float(line.line_total),
                }
                for line in self.lines
            ],
            'subtotal': float(self.subtotal),
            'shipping_fee': float(self.shipping_fee),
            'total': float(self.total),
            'issued_at': self.issued_at.isoformat(),
        }


class CheckoutResult(BaseModel):
    """Either a receipt (stage receipt_ready) or a failure (stage rejected)"""

    stage: CheckoutStage
    receipt: Optional[Receipt] = None
    failure: Optional[CheckoutFailure] = None
    reason: Optional[str] = None
    product_name: Optional[str] = None

    @classmethod
    def accepted(cls, receipt: Receipt) -> "CheckoutResult":
        return cls(stage=CheckoutStage.RECEIPT_READY, receipt=receipt)

    @classmethod
    def rejected(
        cls,
        failure: CheckoutFailure,
        reason: str,
        product_name: Optional[str] = None
    ) -> "CheckoutResult":
        return cls(
            stage=CheckoutStage.REJECTED,
            failure=failure,
            reason=reason,
            product_name=product_name,
        )

    @property
    def succeeded(self) -> bool:
        return self.receipt is not None

    def to_dict(self) -> dict:
        return {
            'stage': self.stage.value,
            'succeeded': self.succeeded,
            'receipt': self.receipt.to_dict() if self.receipt else None,
            'failure': self.failure.value if self.failure else None,
            'reason': self.reason,
            'product_name': self.product_name,
        }
