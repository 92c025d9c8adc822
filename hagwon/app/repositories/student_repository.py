"""SQLAlchemy implementation of the StudentRepository contract."""

import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from hagwon.app.core.errors import ConflictError, DatabaseError, NotFoundError
from hagwon.app.core.time import utc_now
from hagwon.app.domain.entities import StudentEntity
from hagwon.app.domain.repositories import (
    CreateStudentInput,
    StudentFilter,
    StudentRepository,
    UpdateStudentInput,
)
from hagwon.app.domain.value_objects import AttendanceRate, grade_aliases
from hagwon.app.models.student import Student
from hagwon.app.repositories.student_mapper import to_entities, to_entity

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "name": Student.name,
    "grade": Student.grade_level,
    "status": Student.status,
    "created_at": Student.created_at,
    "last_activity_date": Student.last_activity_date,
}


def _rate_column(value: str) -> Decimal:
    return Decimal(str(AttendanceRate.from_percentage_string(value).value))


class SqlAlchemyStudentRepository(StudentRepository):
    def __init__(self, db: Session):
        self.db = db

    def _filtered(self, filters: StudentFilter):
        query = self.db.query(Student).filter(
            Student.tenant_id == filters.tenant_id,
            Student.deleted_at.is_(None),
        )
        if filters.status:
            query = query.filter(Student.status.in_(filters.status))
        if filters.grade:
            grades = set().union(*(grade_aliases(grade) for grade in filters.grade))
            query = query.filter(Student.grade_level.in_(sorted(grades)))
        if filters.search:
            query = query.filter(Student.name.ilike(f"%{filters.search}%"))
        return query

    def _get_row(self, tenant_id: str, student_id: str) -> Student:
        row = self._filtered(StudentFilter(tenant_id=tenant_id)).filter(Student.id == student_id).first()
        if row is None:
            raise NotFoundError("Student", student_id)
        return row

    def _commit(self, verb: str) -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ConflictError(f"Student could not be {verb}d", details=str(exc.orig)) from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise DatabaseError(f"Failed to {verb} student", details=str(exc)) from exc

    def find_all(self, filters: StudentFilter) -> list[StudentEntity]:
        query = self._filtered(filters)
        column = SORT_COLUMNS.get(filters.sort_by or "created_at", Student.created_at)
        query = query.order_by(column.asc() if filters.sort_order == "asc" else column.desc(), Student.id)
        if filters.offset:
            query = query.offset(filters.offset)
        if filters.limit:
            query = query.limit(filters.limit)
        try:
            return to_entities(query.all())
        except SQLAlchemyError as exc:
            raise DatabaseError("Failed to fetch students", details=str(exc)) from exc

    def find_by_id(self, tenant_id: str, student_id: str) -> Optional[StudentEntity]:
        row = self._filtered(StudentFilter(tenant_id=tenant_id)).filter(Student.id == student_id).first()
        return to_entity(row) if row else None

    def create(self, data: CreateStudentInput) -> StudentEntity:
        row = Student(
            tenant_id=data.tenant_id,
            student_code=data.student_code,
            name=data.name,
            grade_level=data.grade,
            status=data.status,
            enrollment_date=data.enrollment_date,
            attendance_rate=_rate_column(data.attendance_rate) if data.attendance_rate else None,
            last_activity_date=data.last_activity_date,
            meta=data.meta,
        )
        self.db.add(row)
        self._commit("create")
        self.db.refresh(row)
        logger.info("Created student %s in tenant %s", row.id, data.tenant_id)
        return to_entity(row)

    def update(self, tenant_id: str, student_id: str, data: UpdateStudentInput) -> StudentEntity:
        row = self._get_row(tenant_id, student_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is None:
                continue
            if field == "grade":
                row.grade_level = value
            elif field == "attendance_rate":
                row.attendance_rate = _rate_column(value)
            else:
                setattr(row, field, value)
        self._commit("update")
        self.db.refresh(row)
        return to_entity(row)

    def delete(self, tenant_id: str, student_id: str) -> None:
        row = self._get_row(tenant_id, student_id)
        row.deleted_at = utc_now()
        self._commit("delete")
        logger.info("Soft-deleted student %s in tenant %s", student_id, tenant_id)

    def count(self, filters: StudentFilter) -> int:
        try:
            return self._filtered(filters).count()
        except SQLAlchemyError as exc:
            raise DatabaseError("Failed to count students", details=str(exc)) from exc
