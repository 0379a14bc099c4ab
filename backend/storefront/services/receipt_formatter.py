"""
Plain-text rendering of receipts

Shipment notices are rendered by shipping_service.format_shipment_notice.

Author: TM3
Date: 2025-10-17
"""
from decimal import ROUND_HALF_UP, Decimal

from storefront.domain.receipt import Receipt

SEPARATOR = "----------------------"


def format_amount(amount: Decimal) -> str:
    """Two decimal places, no currency symbol"""
    return str(Decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def format_receipt(receipt: Receipt) -> str:
    lines = ["** Checkout receipt **"]
    for line in receipt.lines:
        lines.append(f"{line.quantity}x {line.name}\t{format_amount(line.line_total)}")
    lines.append(SEPARATOR)
    lines.append(f"Subtotal\t{format_amount(receipt.subtotal)}")
    lines.append(f"Shipping\t{format_amount(receipt.shipping_fee)}")
    lines.append(f"Amount\t{format_amount(receipt.total)}")
    return "\n".join(lines)
