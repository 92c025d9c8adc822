"""Attendance sessions and check-in records."""

import logging
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from hagwon.app.core.errors import NotFoundError, ValidationError
from hagwon.app.core.time import ensure_aware, utc_now, utc_today
from hagwon.app.dependencies.auth import RequestContext
from hagwon.app.models.attendance import SESSION_STATUSES, AttendanceRecord, AttendanceSession
from hagwon.app.schemas.attendance import BulkAttendanceCreate, SessionCreate
from hagwon.app.services.classes import get_class
from hagwon.app.services.students import get_student

logger = logging.getLogger(__name__)

MAX_DAYS_AHEAD = 92


def get_session(db: Session, context: RequestContext, session_id: str) -> AttendanceSession:
    if not session_id:
        raise ValidationError("Session ID is required")
    session_obj = (
        db.query(AttendanceSession)
        .filter(
            AttendanceSession.id == session_id,
            AttendanceSession.tenant_id == context.tenant_id,
            AttendanceSession.deleted_at.is_(None),
        )
        .first()
    )
    if not session_obj:
        raise NotFoundError("Attendance session", session_id)
    return session_obj


def list_sessions(
    db: Session,
    context: RequestContext,
    *,
    class_id: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    status: Optional[str] = None,
) -> list[AttendanceSession]:
    query = db.query(AttendanceSession).filter(
        AttendanceSession.tenant_id == context.tenant_id,
        AttendanceSession.deleted_at.is_(None),
    )
    if class_id:
        query = query.filter(AttendanceSession.class_id == class_id)
    if start_date:
        query = query.filter(AttendanceSession.session_date >= start_date)
    if end_date:
        query = query.filter(AttendanceSession.session_date <= end_date)
    if status:
        query = query.filter(AttendanceSession.status == status)
    return query.order_by(AttendanceSession.session_date.desc(), AttendanceSession.scheduled_start_at.desc()).all()


def create_session(db: Session, context: RequestContext, session_in: SessionCreate) -> AttendanceSession:
    academy_class = get_class(db, context, session_in.class_id)
    if session_in.session_date > utc_today() + timedelta(days=MAX_DAYS_AHEAD):
        raise ValidationError("Session date must be within 3 months from today")
    session_obj = AttendanceSession(
        tenant_id=context.tenant_id,
        class_id=academy_class.id,
        session_date=session_in.session_date,
        scheduled_start_at=session_in.scheduled_start_at,
        scheduled_end_at=session_in.scheduled_end_at,
        notes=session_in.notes,
        status="scheduled",
    )
    db.add(session_obj)
    db.commit()
    db.refresh(session_obj)
    return session_obj


def update_session_status(
    db: Session,
    context: RequestContext,
    session_id: str,
    status: str,
    actual_start_at: Optional[datetime] = None,
    actual_end_at: Optional[datetime] = None,
) -> AttendanceSession:
    """Move a session through scheduled -> in_progress -> completed/cancelled.

    Entering in_progress or completed without an explicit timestamp stamps the
    current time on the matching actual_* field.
    """
    if status not in SESSION_STATUSES:
        raise ValidationError("Invalid session status", details={"allowed": list(SESSION_STATUSES)})

    session_obj = get_session(db, context, session_id)
    previous = session_obj.status

    start = ensure_aware(actual_start_at) or ensure_aware(session_obj.actual_start_at)
    if start is None and status == "in_progress":
        start = utc_now()
    end = ensure_aware(actual_end_at) or ensure_aware(session_obj.actual_end_at)
    if end is None and status == "completed":
        end = utc_now()
    # Naive request times are read as UTC, same as stored values.
    if start and end and end <= start:
        raise ValidationError("actual_end_at must be later than actual_start_at")

    session_obj.actual_start_at = start
    session_obj.actual_end_at = end
    session_obj.status = status
    db.commit()
    db.refresh(session_obj)
    logger.info("Attendance session %s: %s -> %s", session_obj.id, previous, status)
    return session_obj


def delete_session(db: Session, context: RequestContext, session_id: str) -> None:
    session_obj = get_session(db, context, session_id)
    session_obj.deleted_at = utc_now()
    db.commit()
    logger.info("Soft-deleted attendance session %s", session_id)


def list_records(
    db: Session,
    context: RequestContext,
    *,
    session_id: Optional[str] = None,
    student_id: Optional[str] = None,
) -> list[AttendanceRecord]:
    if not session_id and not student_id:
        raise ValidationError("session_id or student_id is required")
    query = db.query(AttendanceRecord).filter(
        AttendanceRecord.tenant_id == context.tenant_id,
        AttendanceRecord.deleted_at.is_(None),
    )
    if session_id:
        query = query.filter(AttendanceRecord.session_id == session_id)
    if student_id:
        query = query.filter(AttendanceRecord.student_id == student_id)
    return query.order_by(AttendanceRecord.created_at.asc()).all()


def _refresh_attendance_rate(db: Session, student) -> None:
    statuses = [
        status
        for (status,) in db.query(AttendanceRecord.status)
        .join(AttendanceSession, AttendanceRecord.session_id == AttendanceSession.id)
        .filter(
            AttendanceRecord.student_id == student.id,
            AttendanceRecord.deleted_at.is_(None),
            AttendanceSession.deleted_at.is_(None),
        )
        .all()
    ]
    if not statuses:
        return
    attended = sum(1 for status in statuses if status in ("present", "late"))
    rate = Decimal(attended * 100) / Decimal(len(statuses))
    student.attendance_rate = rate.quantize(Decimal("0.01"))


def bulk_upsert_attendance(db: Session, context: RequestContext, payload: BulkAttendanceCreate) -> list[AttendanceRecord]:
    session_obj = get_session(db, context, payload.session_id)
    existing = {record.student_id: record for record in session_obj.records}
    now = utc_now()
    saved = []
    for entry in payload.attendances:
        student = get_student(db, context, entry.student_id)
        check_in_at = entry.check_in_at
        if entry.status in ("present", "late") and check_in_at is None:
            check_in_at = now
        record = existing.get(student.id)
        if record is None:
            record = AttendanceRecord(tenant_id=context.tenant_id, session_id=session_obj.id, student_id=student.id)
            db.add(record)
            existing[student.id] = record
        record.status = entry.status
        record.check_in_at = check_in_at
        record.check_out_at = entry.check_out_at
        record.notes = entry.notes
        record.deleted_at = None
        student.last_activity_date = session_obj.session_date
        saved.append(record)
    db.flush()
    for student in {record.student for record in saved}:
        _refresh_attendance_rate(db, student)
    db.commit()
    for record in saved:
        db.refresh(record)
    logger.info("Recorded attendance for %d students in session %s", len(saved), session_obj.id)
    return saved
