"""Billing service utilities: invoices, payments and collection stats."""

import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from sqlalchemy.orm import Session

from hagwon.app.core.errors import ConflictError, NotFoundError
from hagwon.app.core.pagination import PageMeta
from hagwon.app.core.time import utc_today
from hagwon.app.dependencies.auth import RequestContext
from hagwon.app.models.invoice import Invoice
from hagwon.app.models.invoice_item import InvoiceItem
from hagwon.app.models.payment import Payment
from hagwon.app.repositories.query import paginate_query
from hagwon.app.schemas.invoice import InvoiceCreate, InvoiceDetail, InvoiceItemRead
from hagwon.app.schemas.payment import PaymentCreate, PaymentDashboardStats, PaymentRead
from hagwon.app.services.students import get_student

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")
CENT = Decimal("0.01")


def derive_invoice_status(total: Decimal, paid: Decimal, due_date: date, today: Optional[date] = None) -> str:
    """paid > overdue > partially_paid > unpaid, in that order of precedence."""
    today = today or utc_today()
    if paid >= total:
        return "paid"
    if due_date < today:
        return "overdue"
    if paid > ZERO:
        return "partially_paid"
    return "unpaid"


def days_overdue(invoice: Invoice, today: Optional[date] = None) -> int:
    if Decimal(invoice.paid_amount) >= Decimal(invoice.total_amount):
        return 0
    return max(0, ((today or utc_today()) - invoice.due_date).days)


def calculate_total(items) -> Decimal:
    total = ZERO
    for item in items:
        amount = Decimal(str(item.amount))
        total += -amount if item.item_type == "discount" else amount
    if total < ZERO:
        total = ZERO
    return total.quantize(CENT, rounding=ROUND_HALF_UP)


def refresh_status(invoice: Invoice, today: Optional[date] = None) -> Invoice:
    invoice.status = derive_invoice_status(
        Decimal(invoice.total_amount), Decimal(invoice.paid_amount), invoice.due_date, today
    )
    return invoice


def get_invoice(db: Session, context: RequestContext, invoice_id: str) -> Invoice:
    invoice = (
        db.query(Invoice)
        .filter(Invoice.id == invoice_id, Invoice.tenant_id == context.tenant_id, Invoice.deleted_at.is_(None))
        .first()
    )
    if not invoice:
        raise NotFoundError("Invoice", invoice_id)
    return invoice


def create_invoice(db: Session, context: RequestContext, invoice_in: InvoiceCreate) -> Invoice:
    student = get_student(db, context, invoice_in.student_id)
    invoice = Invoice(
        tenant_id=context.tenant_id,
        student_id=student.id,
        billing_month=invoice_in.billing_month,
        issue_date=invoice_in.issue_date,
        due_date=invoice_in.due_date,
        total_amount=calculate_total(invoice_in.items),
        paid_amount=ZERO,
        notes=invoice_in.notes,
    )
    for item in invoice_in.items:
        invoice.items.append(
            InvoiceItem(
                tenant_id=context.tenant_id,
                description=item.description,
                amount=item.amount,
                item_type=item.item_type,
            )
        )
    refresh_status(invoice)
    db.add(invoice)
    db.commit()
    db.refresh(invoice)
    logger.info("Issued invoice %s for student %s (%s)", invoice.id, student.id, invoice.total_amount)
    return invoice


def list_invoices(
    db: Session,
    context: RequestContext,
    *,
    page: int,
    limit: int,
    status: Optional[str] = None,
    student_id: Optional[str] = None,
    billing_month: Optional[str] = None,
) -> tuple[list[Invoice], PageMeta]:
    # Refresh derived statuses first so "overdue" reflects today's date.
    base = db.query(Invoice).filter(Invoice.tenant_id == context.tenant_id, Invoice.deleted_at.is_(None))
    for invoice in base.filter(Invoice.status != "paid").all():
        refresh_status(invoice)
    db.commit()

    query = base
    if status:
        query = query.filter(Invoice.status == status)
    if student_id:
        query = query.filter(Invoice.student_id == student_id)
    if billing_month:
        query = query.filter(Invoice.billing_month == billing_month)
    query = query.order_by(Invoice.due_date.desc(), Invoice.created_at.desc())
    return paginate_query(query, page=page, limit=limit)


def to_detail(invoice: Invoice, today: Optional[date] = None) -> InvoiceDetail:
    remaining = Decimal(invoice.total_amount) - Decimal(invoice.paid_amount)
    payments = sorted((p for p in invoice.payments if p.deleted_at is None), key=lambda p: p.payment_date)
    return InvoiceDetail(
        id=invoice.id,
        student_id=invoice.student_id,
        billing_month=invoice.billing_month,
        issue_date=invoice.issue_date,
        due_date=invoice.due_date,
        total_amount=invoice.total_amount,
        paid_amount=invoice.paid_amount,
        status=invoice.status,
        notes=invoice.notes,
        created_at=invoice.created_at,
        updated_at=invoice.updated_at,
        student_code=invoice.student.student_code,
        student_name=invoice.student.name,
        remaining_amount=max(remaining, ZERO),
        days_overdue=days_overdue(invoice, today),
        items=[InvoiceItemRead.model_validate(item) for item in invoice.items if item.deleted_at is None],
        payments=[PaymentRead.model_validate(p) for p in payments],
    )


def apply_payment(db: Session, context: RequestContext, payment_in: PaymentCreate) -> Payment:
    invoice = get_invoice(db, context, payment_in.invoice_id)
    remaining = Decimal(invoice.total_amount) - Decimal(invoice.paid_amount)
    amount = Decimal(payment_in.paid_amount).quantize(CENT, rounding=ROUND_HALF_UP)
    if amount > remaining:
        raise ConflictError(
            "Payment exceeds the remaining balance",
            details={"remaining_amount": str(max(remaining, ZERO))},
        )

    payment = Payment(tenant_id=context.tenant_id, **payment_in.model_dump())
    payment.paid_amount = amount
    invoice.payments.append(payment)
    invoice.paid_amount = Decimal(invoice.paid_amount) + amount
    refresh_status(invoice)
    db.commit()
    db.refresh(payment)
    logger.info("Applied payment %s of %s to invoice %s (now %s)", payment.id, amount, invoice.id, invoice.status)
    return payment


def get_payment_stats(
    db: Session, context: RequestContext, billing_month: Optional[str] = None, today: Optional[date] = None
) -> PaymentDashboardStats:
    query = db.query(Invoice).filter(Invoice.tenant_id == context.tenant_id, Invoice.deleted_at.is_(None))
    if billing_month:
        query = query.filter(Invoice.billing_month == billing_month)

    total_billed = ZERO
    total_collected = ZERO
    unpaid_count = 0
    overdue_count = 0
    for invoice in query.all():
        status = refresh_status(invoice, today).status
        total_billed += Decimal(invoice.total_amount)
        total_collected += Decimal(invoice.paid_amount)
        if status != "paid":
            unpaid_count += 1
        if status == "overdue":
            overdue_count += 1

    collection_rate = 0.0
    if total_billed > ZERO:
        collection_rate = round(float(total_collected / total_billed * 100), 1)
    return PaymentDashboardStats(
        totalBilled=total_billed,
        totalCollected=total_collected,
        totalUnpaid=total_billed - total_collected,
        unpaidCount=unpaid_count,
        overdueCount=overdue_count,
        collectionRate=collection_rate,
    )
