"""Payment model for invoice receipts."""

from sqlalchemy import Column, Date, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import relationship

from hagwon.app.db.base_class import Base
from hagwon.app.models.mixins import TenantScopedMixin


class Payment(TenantScopedMixin, Base):
    __tablename__ = "payments"

    invoice_id = Column(String(36), ForeignKey("invoices.id"), nullable=False, index=True)
    payment_date = Column(Date, nullable=False)
    paid_amount = Column(Numeric(12, 2), nullable=False)
    payment_method = Column(String(20), nullable=False)
    reference_number = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)

    invoice = relationship("Invoice", back_populates="payments")
