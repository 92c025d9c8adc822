"""Payment schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

PaymentMethod = Literal["card", "transfer", "cash"]


class PaymentCreate(BaseModel):
    invoice_id: str
    payment_date: date
    paid_amount: Decimal = Field(gt=0)
    payment_method: PaymentMethod
    reference_number: Optional[str] = None
    notes: Optional[str] = None


class PaymentRead(BaseModel):
    id: str
    invoice_id: str
    payment_date: date
    paid_amount: Decimal
    payment_method: str
    reference_number: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PaymentDashboardStats(BaseModel):
    totalBilled: Decimal
    totalCollected: Decimal
    totalUnpaid: Decimal
    unpaidCount: int
    overdueCount: int
    collectionRate: float
