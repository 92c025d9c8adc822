"""Conversion between student rows and StudentEntity."""

from hagwon.app.domain.entities import StudentEntity
from hagwon.app.domain.value_objects import AttendanceRate, parse_grade
from hagwon.app.models.student import Student


def to_entity(row: Student) -> StudentEntity:
    rate = float(row.attendance_rate) if row.attendance_rate is not None else 0.0
    return StudentEntity(
        id=row.id,
        name=row.name,
        grade=parse_grade(row.grade_level),
        status=row.status,
        attendance_rate=AttendanceRate(rate),
        last_activity_date=row.last_activity_date,
        created_at=row.created_at,
        updated_at=row.updated_at,
        grade_label=row.grade_level,
    )


def to_entities(rows: list[Student]) -> list[StudentEntity]:
    return [to_entity(row) for row in rows]
