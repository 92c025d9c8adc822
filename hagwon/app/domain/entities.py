"""Domain entities returned by repositories and flattened to DTOs by use cases."""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel

from hagwon.app.core.time import utc_now, utc_today
from hagwon.app.domain.value_objects import AttendanceLevel, AttendanceRate, StudentGrade

GrowthTrend = Literal["growing", "stable", "declining"]


class StudentDTO(BaseModel):
    id: str
    name: str
    grade: Optional[str]
    status: str
    attendanceRate: str
    lastActivityDate: Optional[str]
    createdAt: str
    updatedAt: str


class StudentEntity:
    def __init__(
        self,
        id: str,
        name: str,
        grade: Optional[StudentGrade],
        status: str,
        attendance_rate: AttendanceRate,
        last_activity_date: Optional[date] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
        grade_label: Optional[str] = None,
    ):
        self.id = id
        self.name = name
        self.grade = grade
        # Stored grade text, shown as-is when it is not a known grade.
        self.grade_label = grade_label
        self.status = status
        self.attendance_rate = attendance_rate
        self.last_activity_date = last_activity_date
        self.created_at = created_at or utc_now()
        self.updated_at = updated_at or self.created_at

    def is_active(self) -> bool:
        return self.status == "active"

    def needs_attention_for_attendance(self) -> bool:
        return self.attendance_rate.is_poor()

    def is_recently_active(self, within_days: int = 30, today: Optional[date] = None) -> bool:
        if self.last_activity_date is None:
            return False
        return ((today or utc_today()) - self.last_activity_date).days <= within_days

    def to_dto(self) -> StudentDTO:
        return StudentDTO(
            id=self.id,
            name=self.name,
            grade=self.grade.value if self.grade else self.grade_label,
            status=self.status,
            attendanceRate=self.attendance_rate.to_percentage_string(),
            lastActivityDate=self.last_activity_date.isoformat() if self.last_activity_date else None,
            createdAt=self.created_at.isoformat(),
            updatedAt=self.updated_at.isoformat(),
        )


class DashboardStatsDTO(BaseModel):
    totalStudents: int
    averageAttendanceRate: float
    activeClasses: int
    growthRate: float
    periodStart: str
    periodEnd: str
    attendanceStatus: AttendanceLevel
    growthTrend: GrowthTrend


class DashboardStats:
    def __init__(
        self,
        total_students: int,
        average_attendance_rate: float,
        active_classes: int,
        growth_rate: float,
        period_start: date,
        period_end: date,
    ):
        self.total_students = total_students
        self.average_attendance_rate = AttendanceRate(average_attendance_rate)
        self.active_classes = active_classes
        self.growth_rate = growth_rate
        self.period_start = period_start
        self.period_end = period_end

    def attendance_status(self) -> AttendanceLevel:
        return self.average_attendance_rate.status()

    def growth_trend(self) -> GrowthTrend:
        if self.growth_rate > 5:
            return "growing"
        if self.growth_rate < -5:
            return "declining"
        return "stable"

    def to_dto(self) -> DashboardStatsDTO:
        return DashboardStatsDTO(
            totalStudents=self.total_students,
            averageAttendanceRate=self.average_attendance_rate.value,
            activeClasses=self.active_classes,
            growthRate=self.growth_rate,
            periodStart=self.period_start.isoformat(),
            periodEnd=self.period_end.isoformat(),
            attendanceStatus=self.attendance_status(),
            growthTrend=self.growth_trend(),
        )
