"""Guardian endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from hagwon.app.core.settings import get_settings
from hagwon.app.db.session import get_db
from hagwon.app.dependencies.auth import RequestContext, get_request_context, require_admin
from hagwon.app.schemas.common import Page, SuccessResponse
from hagwon.app.schemas.guardian import GuardianCreate, GuardianRead, GuardianUpdate
from hagwon.app.services import guardians as guardian_service

settings = get_settings()

router = APIRouter(prefix="/api/guardians", tags=["guardians"])


@router.get("", response_model=Page[GuardianRead])
def list_guardians(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_list_limit, ge=1, le=settings.max_list_limit),
    search: Optional[str] = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    rows, meta = guardian_service.list_guardians(
        db, context, page=page, limit=limit, search=search, sort_by=sort_by, sort_order=sort_order
    )
    return Page[GuardianRead](data=[GuardianRead.model_validate(row) for row in rows], meta=meta)


@router.post("", response_model=GuardianRead, status_code=status.HTTP_201_CREATED)
def create_guardian(
    guardian_in: GuardianCreate,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    return guardian_service.create_guardian(db, context, guardian_in)


@router.get("/{guardian_id}", response_model=GuardianRead)
def get_guardian(
    guardian_id: str,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    return guardian_service.get_guardian(db, context, guardian_id)


@router.patch("/{guardian_id}", response_model=GuardianRead)
def update_guardian(
    guardian_id: str,
    guardian_in: GuardianUpdate,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    return guardian_service.update_guardian(db, context, guardian_id, guardian_in)


@router.delete("/{guardian_id}", response_model=SuccessResponse)
def delete_guardian(
    guardian_id: str,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(require_admin),
):
    guardian_service.delete_guardian(db, context, guardian_id)
    return SuccessResponse()
