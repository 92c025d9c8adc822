"""Class capacity tracking and enrollment."""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from hagwon.app.core.errors import ConflictError, NotFoundError, ValidationError
from hagwon.app.core.pagination import PageMeta, Paginator
from hagwon.app.core.settings import get_settings
from hagwon.app.dependencies.auth import RequestContext
from hagwon.app.models.academy_class import AcademyClass, ClassEnrollment
from hagwon.app.schemas.academy_class import ClassCreate, ClassRead
from hagwon.app.services.students import get_student

logger = logging.getLogger(__name__)

CAPACITY_STATUSES = ("full", "near_full", "under_enrolled", "normal")


def derive_class_status(current_enrollment: int, max_capacity: int) -> str:
    if max_capacity <= 0:
        raise ValueError("max_capacity must be positive")
    settings = get_settings()
    if current_enrollment >= max_capacity:
        return "full"
    ratio = current_enrollment / max_capacity
    if ratio >= settings.class_near_full_ratio:
        return "near_full"
    if ratio < settings.class_under_enrolled_ratio:
        return "under_enrolled"
    return "normal"


def _active_enrollments(academy_class: AcademyClass) -> list[ClassEnrollment]:
    return [e for e in academy_class.enrollments if e.student.deleted_at is None]


def to_read(academy_class: AcademyClass) -> ClassRead:
    current = len(_active_enrollments(academy_class))
    return ClassRead(
        id=academy_class.id,
        name=academy_class.name,
        subject=academy_class.subject,
        teacher_name=academy_class.teacher_name,
        max_capacity=academy_class.max_capacity,
        status=academy_class.status,
        current_enrollment=current,
        capacity_status=derive_class_status(current, academy_class.max_capacity),
        created_at=academy_class.created_at,
    )


def get_class(db: Session, context: RequestContext, class_id: str) -> AcademyClass:
    academy_class = (
        db.query(AcademyClass)
        .filter(
            AcademyClass.id == class_id,
            AcademyClass.tenant_id == context.tenant_id,
            AcademyClass.deleted_at.is_(None),
        )
        .first()
    )
    if not academy_class:
        raise NotFoundError("Class", class_id)
    return academy_class


def list_classes(
    db: Session,
    context: RequestContext,
    *,
    page: int,
    limit: int,
    capacity_status: Optional[str] = None,
) -> tuple[list[ClassRead], PageMeta]:
    """Capacity status is derived per row, so filtering and paging happen in memory."""
    if capacity_status is not None and capacity_status not in CAPACITY_STATUSES:
        raise ValidationError("Invalid capacity status", details={"allowed": list(CAPACITY_STATUSES)})
    rows = (
        db.query(AcademyClass)
        .filter(AcademyClass.tenant_id == context.tenant_id, AcademyClass.deleted_at.is_(None))
        .order_by(AcademyClass.name.asc())
        .all()
    )
    classes = [to_read(row) for row in rows]
    if capacity_status:
        classes = [c for c in classes if c.capacity_status == capacity_status]
    paginator = Paginator(classes, items_per_page=limit, initial_page=page)
    items = paginator.page_items if paginator.current_page == page else []
    return items, PageMeta.build(page=page, limit=limit, total=paginator.total_items)


def create_class(db: Session, context: RequestContext, class_in: ClassCreate) -> AcademyClass:
    academy_class = AcademyClass(tenant_id=context.tenant_id, **class_in.model_dump())
    db.add(academy_class)
    db.commit()
    db.refresh(academy_class)
    return academy_class


def enroll_student(db: Session, context: RequestContext, class_id: str, student_id: str) -> AcademyClass:
    academy_class = get_class(db, context, class_id)
    student = get_student(db, context, student_id)
    enrollments = _active_enrollments(academy_class)
    if any(e.student_id == student.id for e in enrollments):
        raise ConflictError("Student is already enrolled in this class")
    if len(enrollments) >= academy_class.max_capacity:
        raise ConflictError("Class is full", details={"max_capacity": academy_class.max_capacity})
    db.add(ClassEnrollment(tenant_id=context.tenant_id, class_id=academy_class.id, student_id=student.id))
    db.commit()
    db.refresh(academy_class)
    logger.info("Enrolled student %s in class %s", student.id, academy_class.id)
    return academy_class


def unenroll_student(db: Session, context: RequestContext, class_id: str, student_id: str) -> AcademyClass:
    academy_class = get_class(db, context, class_id)
    enrollment = next((e for e in academy_class.enrollments if e.student_id == student_id), None)
    if not enrollment:
        raise NotFoundError("Enrollment")
    db.delete(enrollment)
    db.commit()
    db.refresh(academy_class)
    return academy_class
