"""Student record management scoped to the caller's tenant."""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from hagwon.app.core.avatar import get_student_avatar
from hagwon.app.core.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from hagwon.app.core.pagination import PageMeta
from hagwon.app.dependencies.auth import RequestContext
from hagwon.app.domain.repositories import CreateStudentInput, UpdateStudentInput
from hagwon.app.models.guardian import Guardian, GuardianStudent
from hagwon.app.models.student import Student
from hagwon.app.repositories.query import apply_sort, paginate_query
from hagwon.app.repositories.student_repository import SqlAlchemyStudentRepository
from hagwon.app.schemas.student import StudentCreate, StudentGuardianLink, StudentRead, StudentUpdate

logger = logging.getLogger(__name__)

STUDENT_STATUSES = ("active", "inactive", "withdrawn", "graduated")

SORT_COLUMNS = {
    "created_at": Student.created_at,
    "name": Student.name,
    "student_code": Student.student_code,
    "grade_level": Student.grade_level,
    "enrollment_date": Student.enrollment_date,
}


def to_read(student: Student) -> StudentRead:
    data = StudentRead.model_validate(student)
    data.avatar_url = get_student_avatar(student.profile_image_url, student.id, student.name, student.gender)
    return data


def get_student(db: Session, context: RequestContext, student_id: str) -> Student:
    student = (
        db.query(Student)
        .filter(
            Student.id == student_id,
            Student.tenant_id == context.tenant_id,
            Student.deleted_at.is_(None),
        )
        .first()
    )
    if not student:
        raise NotFoundError("Student", student_id)
    return student


def _check_status(status: Optional[str]) -> None:
    if status is not None and status not in STUDENT_STATUSES:
        raise ValidationError("Invalid student status", details={"allowed": list(STUDENT_STATUSES)})


def _ensure_unique_code(db: Session, context: RequestContext, code: Optional[str], exclude_id: Optional[str] = None):
    if not code:
        return
    query = db.query(Student).filter(
        Student.tenant_id == context.tenant_id,
        Student.student_code == code,
        Student.deleted_at.is_(None),
    )
    if exclude_id:
        query = query.filter(Student.id != exclude_id)
    if query.first():
        raise ConflictError(f"Student code {code} is already in use")


def list_students(
    db: Session,
    context: RequestContext,
    *,
    page: int,
    limit: int,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    search: Optional[str] = None,
    status: Optional[str] = None,
) -> tuple[list[StudentRead], PageMeta]:
    query = db.query(Student).filter(Student.tenant_id == context.tenant_id, Student.deleted_at.is_(None))
    if search:
        query = query.filter(Student.name.ilike(f"%{search}%"))
    if status:
        query = query.filter(Student.status == status)
    query = apply_sort(query, SORT_COLUMNS, sort_by, sort_order)
    rows, meta = paginate_query(query, page=page, limit=limit)
    return [to_read(row) for row in rows], meta


def create_student(db: Session, context: RequestContext, student_in: StudentCreate) -> Student:
    if str(student_in.tenant_id) != context.tenant_id:
        raise ForbiddenError("Cannot create students for another tenant")
    _check_status(student_in.status)
    _ensure_unique_code(db, context, student_in.student_code)

    created = SqlAlchemyStudentRepository(db).create(
        CreateStudentInput(
            tenant_id=context.tenant_id,
            name=student_in.name,
            student_code=student_in.student_code,
            grade=student_in.grade_level,
            status=student_in.status,
            enrollment_date=student_in.enrollment_date,
            meta=student_in.meta,
        )
    )
    return get_student(db, context, created.id)


def update_student(db: Session, context: RequestContext, student_id: str, student_in: StudentUpdate) -> Student:
    student = get_student(db, context, student_id)
    changes = student_in.model_dump(exclude_unset=True)
    _check_status(changes.get("status"))
    _ensure_unique_code(db, context, changes.get("student_code"), exclude_id=student.id)
    if "grade_level" in changes:
        changes["grade"] = changes.pop("grade_level")
    SqlAlchemyStudentRepository(db).update(context.tenant_id, student.id, UpdateStudentInput(**changes))
    return student


def delete_student(db: Session, context: RequestContext, student_id: str) -> None:
    SqlAlchemyStudentRepository(db).delete(context.tenant_id, student_id)


def list_student_guardians(db: Session, context: RequestContext, student_id: str) -> list[dict]:
    student = get_student(db, context, student_id)
    links = [link for link in student.guardian_links if link.guardian.deleted_at is None]
    links.sort(key=lambda link: (not link.is_primary, link.created_at))
    return [
        {
            "guardian_id": link.guardian_id,
            "name": link.guardian.name,
            "phone": link.guardian.phone,
            "email": link.guardian.email,
            "relation": link.relation,
            "is_primary": link.is_primary,
        }
        for link in links
    ]


def link_guardian(db: Session, context: RequestContext, student_id: str, link_in: StudentGuardianLink) -> GuardianStudent:
    """Attach a guardian; a new primary guardian demotes the previous one."""
    student = get_student(db, context, student_id)
    guardian = (
        db.query(Guardian)
        .filter(
            Guardian.id == link_in.guardian_id,
            Guardian.tenant_id == context.tenant_id,
            Guardian.deleted_at.is_(None),
        )
        .first()
    )
    if not guardian:
        raise NotFoundError("Guardian", link_in.guardian_id)

    existing = next((link for link in student.guardian_links if link.guardian_id == guardian.id), None)
    if existing:
        raise ConflictError("Guardian is already linked to this student")

    if link_in.is_primary:
        for link in student.guardian_links:
            if link.is_primary:
                link.is_primary = False

    link = GuardianStudent(
        tenant_id=context.tenant_id,
        guardian_id=guardian.id,
        student_id=student.id,
        relation=link_in.relation,
        is_primary=link_in.is_primary,
    )
    db.add(link)
    db.commit()
    db.refresh(link)
    logger.info("Linked guardian %s to student %s (primary=%s)", guardian.id, student.id, link.is_primary)
    return link


def unlink_guardian(db: Session, context: RequestContext, student_id: str, guardian_id: str) -> None:
    student = get_student(db, context, student_id)
    link = next((link for link in student.guardian_links if link.guardian_id == guardian_id), None)
    if not link:
        raise NotFoundError("Guardian link")
    db.delete(link)
    db.commit()
