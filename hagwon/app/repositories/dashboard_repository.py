"""SQLAlchemy implementation of the DashboardRepository contract."""

from datetime import UTC, date, datetime, time, timedelta

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hagwon.app.core.errors import DatabaseError
from hagwon.app.domain.entities import DashboardStats
from hagwon.app.domain.repositories import DashboardRepository, DatePeriod, GrowthPoint
from hagwon.app.models.academy_class import AcademyClass
from hagwon.app.models.attendance import AttendanceRecord, AttendanceSession
from hagwon.app.models.student import Student


def _start_of(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=UTC)


def _month_starts(start: date, end: date) -> list[date]:
    months = []
    cursor = start.replace(day=1)
    while cursor <= end:
        months.append(cursor)
        cursor = (cursor.replace(day=28) + timedelta(days=4)).replace(day=1)
    return months


class SqlAlchemyDashboardRepository(DashboardRepository):
    def __init__(self, db: Session):
        self.db = db

    def _students(self, tenant_id: str):
        return self.db.query(Student).filter(Student.tenant_id == tenant_id, Student.deleted_at.is_(None))

    def get_stats(self, tenant_id: str, period: DatePeriod) -> DashboardStats:
        try:
            total_students = self._students(tenant_id).count()
            return DashboardStats(
                total_students=total_students,
                average_attendance_rate=self._average_attendance_rate(tenant_id, period),
                active_classes=self._active_classes(tenant_id),
                growth_rate=self._growth_rate(tenant_id, total_students, period),
                period_start=period.start_date,
                period_end=period.end_date,
            )
        except SQLAlchemyError as exc:
            raise DatabaseError("Failed to load dashboard statistics", details=str(exc)) from exc

    def get_student_growth(self, tenant_id: str, period: DatePeriod) -> list[GrowthPoint]:
        points = []
        try:
            for month_start in _month_starts(period.start_date, period.end_date):
                next_month = (month_start.replace(day=28) + timedelta(days=4)).replace(day=1)
                count = self._students(tenant_id).filter(Student.created_at < _start_of(next_month)).count()
                points.append(GrowthPoint(month=month_start.strftime("%Y-%m"), students=count))
        except SQLAlchemyError as exc:
            raise DatabaseError("Failed to load student growth", details=str(exc)) from exc
        return points

    def _average_attendance_rate(self, tenant_id: str, period: DatePeriod) -> float:
        rows = (
            self.db.query(AttendanceRecord.status, func.count(AttendanceRecord.id))
            .join(AttendanceSession, AttendanceRecord.session_id == AttendanceSession.id)
            .filter(
                AttendanceRecord.tenant_id == tenant_id,
                AttendanceRecord.deleted_at.is_(None),
                AttendanceSession.deleted_at.is_(None),
                AttendanceSession.session_date >= period.start_date,
                AttendanceSession.session_date <= period.end_date,
            )
            .group_by(AttendanceRecord.status)
            .all()
        )
        counts = dict(rows)
        total = sum(counts.values())
        if total == 0:
            return 0.0
        attended = counts.get("present", 0) + counts.get("late", 0)
        return round(attended / total * 100, 2)

    def _active_classes(self, tenant_id: str) -> int:
        return (
            self.db.query(AcademyClass)
            .filter(
                AcademyClass.tenant_id == tenant_id,
                AcademyClass.deleted_at.is_(None),
                AcademyClass.status == "active",
            )
            .count()
        )

    def _growth_rate(self, tenant_id: str, current_count: int, period: DatePeriod) -> float:
        previous_count = self._students(tenant_id).filter(Student.created_at < _start_of(period.start_date)).count()
        if previous_count == 0:
            return 100.0 if current_count > 0 else 0.0
        return round((current_count - previous_count) / previous_count * 100, 2)
