"""Payment endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from hagwon.app.db.session import get_db
from hagwon.app.dependencies.auth import RequestContext, get_request_context
from hagwon.app.schemas.payment import PaymentCreate, PaymentDashboardStats, PaymentRead
from hagwon.app.services import billing

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.get("/stats", response_model=PaymentDashboardStats)
def payment_stats(
    billing_month: Optional[str] = None,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    return billing.get_payment_stats(db, context, billing_month=billing_month)


@router.post("", response_model=PaymentRead, status_code=status.HTTP_201_CREATED)
def create_payment(
    payment_in: PaymentCreate,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    return billing.apply_payment(db, context, payment_in)
