"""
Checkout Service
Validates, prices and settles a cart for one customer

Pipeline (strict order):
1. Empty cart                -> rejected (empty_cart)
2. Validate every item       -> rejected (expired_product / out_of_stock)
3. Price: subtotal + weight-based shipping fee
4. Funds                     -> rejected (insufficient_funds)
5. Commit stock              (reduce every product's stock)
6. Commit funds              (debit the customer by the total)
7. Ship                      (notifier gets the shippable manifest, if any)
8. Receipt                   (cart is checked out, receipt returned)

Nothing is mutated before step 5, so a rejected checkout leaves stock,
balance and cart exactly as they were. Steps 1-6 hold the store lock.

Author: TM3
Date: 2025-10-17
"""
import logging
import threading
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

from storefront.domain.cart import DEFAULT_SHIPPING_RATE_PER_KG, Cart
from storefront.domain.customer import CustomerAccount
from storefront.domain.errors import CartClosedError
from storefront.domain.product import utcnow
from storefront.domain.receipt import (
    CheckoutFailure,
    CheckoutResult,
    CheckoutStage,
    Receipt,
    ReceiptLine,
)
from storefront.services.shipping_service import LoggingShipmentNotifier, ShipmentNotifier

logger = logging.getLogger(__name__)


class CheckoutService:
    """
    Service running the checkout pipeline

    Handles:
    - Expiry and stock validation (stock summed per product across lines)
    - Pricing (subtotal + shipping)
    - Stock and balance settlement
    - Shipment dispatch and receipt
    """

    def __init__(
        self,
        notifier: Optional[ShipmentNotifier] = None,
        rate_per_kg: Decimal = DEFAULT_SHIPPING_RATE_PER_KG,
        lock=None,
        clock: Callable[[], datetime] = utcnow
    ):
        self.notifier = notifier or LoggingShipmentNotifier()
        self.rate_per_kg = rate_per_kg
        self.lock = lock or threading.RLock()
        self.clock = clock

    def _reject(
        self,
        cart: Cart,
        failure: CheckoutFailure,
        reason: str,
        product_name: Optional[str] = None
    ) -> CheckoutResult:
        logger.warning("Checkout of cart %s rejected (%s): %s", cart.id, failure.value, reason)
        return CheckoutResult.rejected(failure, reason, product_name)

    def _validate_items(self, cart: Cart) -> Optional[CheckoutResult]:
        """First failing item wins; expiry is checked before stock"""
        now = self.clock()
        requested = cart.requested_quantities()

        for item in cart.items:
            product = item.product
            if product.is_expired(now):
                return self._reject(
                    cart, CheckoutFailure.EXPIRED_PRODUCT,
                    f"{product.name} is expired.", product.name
                )
            if requested[product.id] > product.stock_quantity:
                return self._reject(
                    cart, CheckoutFailure.OUT_OF_STOCK,
                    f"{product.name} is out of stock.", product.name
                )

        return None

    def checkout(self, cart: Cart, customer: CustomerAccount) -> CheckoutResult:
        """
        Run the checkout pipeline

        Args:
            cart: Open cart to settle
            customer: Account to debit

        Returns:
            CheckoutResult with a receipt, or the failure kind and reason

        Raises:
            CartClosedError: cart was already checked out or abandoned
            OutOfStockError, InsufficientFundsError: only if stock or balance
                changed between validation and commit, which the lock prevents
        """
        logger.debug("Checkout of cart %s: %s", cart.id, CheckoutStage.VALIDATING.value)

        with self.lock:
            if not cart.is_open:
                raise CartClosedError(f"Cart {cart.id} is {cart.status.value}")

            if cart.is_empty():
                return self._reject(cart, CheckoutFailure.EMPTY_CART, "Cart is empty.")

            rejection = self._validate_items(cart)
            if rejection is not None:
                return rejection

            subtotal = cart.subtotal()
            shipping_fee = cart.shipping_fee(self.rate_per_kg)
            total = subtotal + shipping_fee

            if not customer.can_afford(total):
                return self._reject(
                    cart, CheckoutFailure.INSUFFICIENT_FUNDS,
                    "Insufficient customer balance."
                )

            logger.debug("Checkout of cart %s: %s", cart.id, CheckoutStage.SETTLING.value)
            for item in cart.items:
                item.product.reduce_stock(item.quantity)
            customer.debit(total)
            cart.mark_checked_out()

        manifest = cart.shippable_manifest()
        if manifest:
            logger.debug("Checkout of cart %s: %s", cart.id, CheckoutStage.SHIPPING.value)
            try:
                self.notifier.notify(manifest)
            except Exception:
                # Settlement is final; a failed notice does not undo it
                logger.exception("Shipment notice for cart %s failed", cart.id)

        receipt = Receipt(
            cart_id=cart.id,
            customer_id=customer.id,
            lines=[
                ReceiptLine(
                    name=item.product.name,
                    quantity=item.quantity,
                    line_total=item.line_total
                )
                for item in cart.items
            ],
            subtotal=subtotal,
            shipping_fee=shipping_fee,
            total=total,
            issued_at=self.clock()
        )

        logger.info(
            "Checkout of cart %s completed: total %s, customer %s balance %s",
            cart.id, total, customer.id, customer.balance
        )
        return CheckoutResult.accepted(receipt)
