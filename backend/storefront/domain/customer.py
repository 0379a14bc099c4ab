"""
Customer Account Domain Model

Holds the spendable balance of a customer. The balance only goes down
through debit(), which refuses to overdraw.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from storefront.domain.errors import InsufficientFundsError
from storefront.domain.product import new_id, utcnow


class CustomerAccount(BaseModel):
    """
    Customer account domain model

    Fields:
        id: Customer ID
        name: Customer name
        balance: Spendable balance (never negative)
    """

    id: str = Field(default_factory=new_id, description="Customer ID")
    name: str = Field(..., description="Customer name", min_length=1)
    balance: Decimal = Field(Decimal("0"), description="Available balance", ge=0)
    created_at: datetime = Field(default_factory=utcnow, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(validate_assignment=True)

    def can_afford(self, amount: Decimal) -> bool:
        return amount <= self.balance

    def debit(self, amount: Decimal) -> None:
        """Take the whole amount or nothing"""
        if amount < 0:
            raise ValueError("Debit amount cannot be negative")
        if not self.can_afford(amount):
            raise InsufficientFundsError(self.balance, amount)

        self.balance = self.balance - amount
        self.updated_at = utcnow()

    def credit(self, amount: Decimal) -> None:
        if amount <= 0:
            raise ValueError("Credit amount must be a positive number")

        self.balance = self.balance + amount
        self.updated_at = utcnow()

    def to_dict(self) -> dict:
        data = self.model_dump()
        data['balance'] = float(self.balance)
        data['created_at'] = self.created_at.isoformat()
        if self.updated_at:
            data['updated_at'] = self.updated_at.isoformat()
        return data
