"""Invoice model for billing."""

from decimal import Decimal

from sqlalchemy import Column, Date, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import relationship

from hagwon.app.db.base_class import Base
from hagwon.app.models.mixins import TenantScopedMixin


class Invoice(TenantScopedMixin, Base):
    __tablename__ = "invoices"

    student_id = Column(String(36), ForeignKey("students.id"), nullable=False, index=True)
    billing_month = Column(String(7), nullable=False)
    issue_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False, default=Decimal("0.00"))
    paid_amount = Column(Numeric(12, 2), nullable=False, default=Decimal("0.00"))
    status = Column(String(20), nullable=False, default="unpaid")
    notes = Column(Text, nullable=True)

    student = relationship("Student", back_populates="invoices")
    items = relationship("InvoiceItem", back_populates="invoice", cascade="all, delete-orphan")
    payments = relationship("Payment", back_populates="invoice", cascade="all, delete-orphan")
