"""Class and enrollment endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from hagwon.app.core.settings import get_settings
from hagwon.app.db.session import get_db
from hagwon.app.dependencies.auth import RequestContext, get_request_context
from hagwon.app.schemas.academy_class import ClassCreate, ClassRead, EnrollmentCreate
from hagwon.app.schemas.common import Page
from hagwon.app.services import classes as class_service

settings = get_settings()

router = APIRouter(prefix="/api/classes", tags=["classes"])


@router.get("", response_model=Page[ClassRead])
def list_classes(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_list_limit, ge=1, le=settings.max_list_limit),
    capacity_status: Optional[str] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    data, meta = class_service.list_classes(db, context, page=page, limit=limit, capacity_status=capacity_status)
    return Page[ClassRead](data=data, meta=meta)


@router.post("", response_model=ClassRead, status_code=status.HTTP_201_CREATED)
def create_class(
    class_in: ClassCreate,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    return class_service.to_read(class_service.create_class(db, context, class_in))


@router.get("/{class_id}", response_model=ClassRead)
def get_class(
    class_id: str,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    return class_service.to_read(class_service.get_class(db, context, class_id))


@router.post("/{class_id}/enrollments", response_model=ClassRead, status_code=status.HTTP_201_CREATED)
def enroll_student(
    class_id: str,
    enrollment_in: EnrollmentCreate,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    return class_service.to_read(class_service.enroll_student(db, context, class_id, enrollment_in.student_id))


@router.delete("/{class_id}/enrollments/{student_id}", response_model=ClassRead)
def unenroll_student(
    class_id: str,
    student_id: str,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    return class_service.to_read(class_service.unenroll_student(db, context, class_id, student_id))
