"""
Shipping Service
Builds shipment notices for the shippable part of a checked-out cart and
hands them to a notifier

Author: TM3
Date: 2025-10-17
"""
import logging
import sys
from collections import deque
from decimal import ROUND_HALF_UP, Decimal
from typing import Deque, List, Optional, Protocol, Sequence, TextIO

from pydantic import BaseModel, Field

from storefront.domain.cart import ShippableLine

logger = logging.getLogger(__name__)

GRAMS_PER_KG = Decimal("1000")

# Notices kept by LoggingShipmentNotifier for inspection
RECENT_NOTICES = 100


class PackedLine(BaseModel):
    """One line of a shipment notice"""
    name: str
    quantity: int = Field(..., ge=1)
    weight_grams: int = Field(..., ge=0)


class ShipmentNotice(BaseModel):
    """
    Shipment notice

    Fields:
        lines: Packed lines in cart order
        total_weight_kg: Package weight, rounded to one decimal
    """
    lines: List[PackedLine] = Field(default_factory=list)
    total_weight_kg: Decimal = Field(..., ge=0)

    def to_dict(self) -> dict:
        return {
            'lines': [line.model_dump() for line in self.lines],
            'total_weight_kg': float(self.total_weight_kg),
        }


def format_shipment_notice(notice: ShipmentNotice) -> str:
    lines = ["** Shipment notice **"]
    for line in notice.lines:
        lines.append(f"{line.quantity}x {line.name}\t{line.weight_grams}g")
    lines.append(f"Total package weight {notice.total_weight_kg}kg")
    return "\n".join(lines)


class ShipmentNotifier(Protocol):
    """Anything that accepts the shippable manifest of a checkout"""

    def notify(self, manifest: Sequence[ShippableLine]) -> None:
        ...


class ShippingService:
    """Turns a shippable manifest into a ShipmentNotice"""

    @staticmethod
    def build_notice(manifest: Sequence[ShippableLine]) -> ShipmentNotice:
        """
        Build the notice for a manifest

        Per line the packed weight is weight_kg x quantity, in grams rounded
        half-up. The total is the exact sum in kg rounded to one decimal.

        Raises:
            ValueError: a line has no shipping capability
        """
        lines = []
        total_kg = Decimal("0")

        for product, quantity in manifest:
            weight = product.shippable_weight()
            if weight is None:
                raise ValueError(f"{product.name} is not shippable")

            packed_kg = weight * quantity
            total_kg += packed_kg
            grams = (packed_kg * GRAMS_PER_KG).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
            lines.append(PackedLine(
                name=product.name,
                quantity=quantity,
                weight_grams=int(grams)
            ))

        return ShipmentNotice(
            lines=lines,
            total_weight_kg=total_kg.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        )


class LoggingShipmentNotifier:
    """Logs every notice and keeps the most recent ones (default for the API)"""

    def __init__(self, keep: int = RECENT_NOTICES):
        self.sent: Deque[ShipmentNotice] = deque(maxlen=keep)

    def notify(self, manifest: Sequence[ShippableLine]) -> None:
        notice = ShippingService.build_notice(manifest)
        self.sent.append(notice)
        logger.info(
            "Shipment dispatched: %d line(s), %skg",
            len(notice.lines), notice.total_weight_kg
        )


class ConsoleShipmentNotifier:
    """Prints the rendered notice to a text stream (used by the CLI)"""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout

    def notify(self, manifest: Sequence[ShippableLine]) -> None:
        notice = ShippingService.build_notice(manifest)
        print(format_shipment_notice(notice), file=self.stream)
