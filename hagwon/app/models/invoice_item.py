"""Invoice line items."""

from sqlalchemy import Column, ForeignKey, Numeric, String
from sqlalchemy.orm import relationship

from hagwon.app.db.base_class import Base
from hagwon.app.models.mixins import TenantScopedMixin


class InvoiceItem(TenantScopedMixin, Base):
    __tablename__ = "invoice_items"

    invoice_id = Column(String(36), ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, index=True)
    description = Column(String(255), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    item_type = Column(String(20), nullable=False, default="tuition")

    invoice = relationship("Invoice", back_populates="items")
