"""Attendance session and record endpoints."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from hagwon.app.db.session import get_db
from hagwon.app.dependencies.auth import RequestContext, get_request_context
from hagwon.app.schemas.attendance import (
    AttendanceRead,
    BulkAttendanceCreate,
    SessionCreate,
    SessionRead,
    SessionStatusUpdate,
)
from hagwon.app.schemas.common import SuccessResponse
from hagwon.app.services import attendance as attendance_service

router = APIRouter(prefix="/api/attendance", tags=["attendance"])


@router.get("/sessions", response_model=list[SessionRead])
def list_sessions(
    class_id: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    status: Optional[str] = None,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    return attendance_service.list_sessions(
        db, context, class_id=class_id, start_date=start_date, end_date=end_date, status=status
    )


@router.post("/sessions", response_model=SessionRead, status_code=status.HTTP_201_CREATED)
def create_session(
    session_in: SessionCreate,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    return attendance_service.create_session(db, context, session_in)


@router.get("/sessions/{session_id}", response_model=SessionRead)
def get_session(
    session_id: str,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    return attendance_service.get_session(db, context, session_id)


@router.patch("/sessions/{session_id}", response_model=SessionRead)
def update_session(
    session_id: str,
    update_in: SessionStatusUpdate,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    return attendance_service.update_session_status(
        db,
        context,
        session_id,
        update_in.status,
        actual_start_at=update_in.actual_start_at,
        actual_end_at=update_in.actual_end_at,
    )


@router.delete("/sessions/{session_id}", response_model=SuccessResponse)
def delete_session(
    session_id: str,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    attendance_service.delete_session(db, context, session_id)
    return SuccessResponse()


@router.get("/records", response_model=list[AttendanceRead])
def list_records(
    session_id: Optional[str] = None,
    student_id: Optional[str] = None,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    return attendance_service.list_records(db, context, session_id=session_id, student_id=student_id)


@router.post("/records", response_model=list[AttendanceRead], status_code=status.HTTP_201_CREATED)
def record_attendance(
    payload: BulkAttendanceCreate,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    return attendance_service.bulk_upsert_attendance(db, context, payload)
