"""Invoice schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from hagwon.app.schemas.payment import PaymentRead

InvoiceItemType = Literal["tuition", "material", "extra", "discount"]
InvoiceStatus = Literal["unpaid", "partially_paid", "paid", "overdue"]


class InvoiceItemCreate(BaseModel):
    description: str = Field(min_length=1)
    amount: Decimal = Field(ge=0)
    item_type: InvoiceItemType = "tuition"


class InvoiceItemRead(InvoiceItemCreate):
    id: str

    model_config = ConfigDict(from_attributes=True)


class InvoiceCreate(BaseModel):
    student_id: str
    billing_month: str = Field(pattern=r"^\d{4}-(0[1-9]|1[0-2])$")
    issue_date: date
    due_date: date
    items: list[InvoiceItemCreate] = Field(min_length=1)
    notes: Optional[str] = None


class InvoiceRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    student_id: str
    billing_month: str
    issue_date: date
    due_date: date
    total_amount: Decimal
    paid_amount: Decimal
    status: InvoiceStatus
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class InvoiceDetail(InvoiceRead):
    student_code: Optional[str] = None
    student_name: str
    remaining_amount: Decimal
    days_overdue: int
    items: list[InvoiceItemRead]
    payments: list[PaymentRead]
