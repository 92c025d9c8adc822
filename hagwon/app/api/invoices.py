"""Invoice endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from hagwon.app.core.settings import get_settings
from hagwon.app.db.session import get_db
from hagwon.app.dependencies.auth import RequestContext, get_request_context
from hagwon.app.schemas.common import Page
from hagwon.app.schemas.invoice import InvoiceCreate, InvoiceDetail, InvoiceRead
from hagwon.app.services import billing

settings = get_settings()

router = APIRouter(prefix="/api/invoices", tags=["invoices"])


@router.post("", response_model=InvoiceDetail, status_code=status.HTTP_201_CREATED)
def create_invoice(
    invoice_in: InvoiceCreate,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    return billing.to_detail(billing.create_invoice(db, context, invoice_in))


@router.get("", response_model=Page[InvoiceRead])
def list_invoices(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_list_limit, ge=1, le=settings.max_list_limit),
    status: Optional[str] = None,
    student_id: Optional[str] = None,
    billing_month: Optional[str] = None,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    rows, meta = billing.list_invoices(
        db, context, page=page, limit=limit, status=status, student_id=student_id, billing_month=billing_month
    )
    return Page[InvoiceRead](data=[InvoiceRead.model_validate(row) for row in rows], meta=meta)


@router.get("/{invoice_id}", response_model=InvoiceDetail)
def get_invoice(
    invoice_id: str,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    return billing.to_detail(billing.get_invoice(db, context, invoice_id))
