"""Student endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from hagwon.app.core.settings import get_settings
from hagwon.app.db.session import get_db
from hagwon.app.dependencies.auth import RequestContext, get_request_context, require_admin
from hagwon.app.dependencies.use_cases import get_list_students_use_case
from hagwon.app.schemas.common import Page, SuccessResponse
from hagwon.app.schemas.student import (
    StudentCreate,
    StudentGuardianLink,
    StudentGuardianRead,
    StudentRead,
    StudentUpdate,
)
from hagwon.app.services import students as student_service
from hagwon.app.use_cases.list_students import ListStudentsInput, ListStudentsOutput, ListStudentsUseCase

settings = get_settings()

router = APIRouter(prefix="/api/students", tags=["students"])


@router.get("", response_model=Page[StudentRead])
def list_students(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_list_limit, ge=1, le=settings.max_list_limit),
    sort_by: str = "created_at",
    sort_order: str = "desc",
    search: Optional[str] = None,
    status: Optional[str] = None,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    data, meta = student_service.list_students(
        db,
        context,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
        search=search,
        status=status,
    )
    return Page[StudentRead](data=data, meta=meta)


@router.get("/overview", response_model=ListStudentsOutput)
def students_overview(
    page: Optional[int] = None,
    page_size: Optional[int] = None,
    status: Optional[list[str]] = Query(None),
    grade: Optional[list[str]] = Query(None),
    search: Optional[str] = None,
    context: RequestContext = Depends(get_request_context),
    use_case: ListStudentsUseCase = Depends(get_list_students_use_case),
):
    return use_case.execute(
        ListStudentsInput(
            tenant_id=context.tenant_id,
            status=status,
            grade=grade,
            search=search,
            page=page,
            page_size=page_size,
        )
    )


@router.post("", response_model=StudentRead, status_code=status.HTTP_201_CREATED)
def create_student(
    student_in: StudentCreate,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    return student_service.to_read(student_service.create_student(db, context, student_in))


@router.get("/{student_id}", response_model=StudentRead)
def get_student(
    student_id: str,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    return student_service.to_read(student_service.get_student(db, context, student_id))


@router.patch("/{student_id}", response_model=StudentRead)
def update_student(
    student_id: str,
    student_in: StudentUpdate,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    return student_service.to_read(student_service.update_student(db, context, student_id, student_in))


@router.delete("/{student_id}", response_model=SuccessResponse)
def delete_student(
    student_id: str,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(require_admin),
):
    student_service.delete_student(db, context, student_id)
    return SuccessResponse()


@router.get("/{student_id}/guardians", response_model=list[StudentGuardianRead])
def list_student_guardians(
    student_id: str,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    return student_service.list_student_guardians(db, context, student_id)


@router.post("/{student_id}/guardians", response_model=SuccessResponse, status_code=status.HTTP_201_CREATED)
def link_guardian(
    student_id: str,
    link_in: StudentGuardianLink,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    student_service.link_guardian(db, context, student_id, link_in)
    return SuccessResponse()


@router.delete("/{student_id}/guardians/{guardian_id}", response_model=SuccessResponse)
def unlink_guardian(
    student_id: str,
    guardian_id: str,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    student_service.unlink_guardian(db, context, student_id, guardian_id)
    return SuccessResponse()
