"""Storage-agnostic repository contracts consumed by the use cases."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from hagwon.app.domain.entities import DashboardStats, StudentEntity


class StudentFilter(BaseModel):
    tenant_id: str
    status: Optional[list[str]] = None
    grade: Optional[list[str]] = None
    search: Optional[str] = None
    sort_by: Optional[str] = None
    sort_order: Literal["asc", "desc"] = "asc"
    limit: Optional[int] = None
    offset: Optional[int] = None


class CreateStudentInput(BaseModel):
    tenant_id: str
    name: str
    student_code: Optional[str] = None
    grade: Optional[str] = None
    status: str = "active"
    enrollment_date: Optional[date] = None
    attendance_rate: Optional[str] = None
    last_activity_date: Optional[date] = None
    meta: dict[str, Any] = Field(default_factory=dict)


class UpdateStudentInput(BaseModel):
    """Partial update; unset fields are left alone."""

    name: Optional[str] = None
    student_code: Optional[str] = None
    grade: Optional[str] = None
    status: Optional[str] = None
    school: Optional[str] = None
    gender: Optional[str] = None
    enrollment_date: Optional[date] = None
    profile_image_url: Optional[str] = None
    emergency_contact: Optional[str] = None
    notes: Optional[str] = None
    meta: Optional[dict[str, Any]] = None
    attendance_rate: Optional[str] = None
    last_activity_date: Optional[date] = None


class DatePeriod(BaseModel):
    start_date: date
    end_date: date


class GrowthPoint(BaseModel):
    month: str
    students: int


class StudentRepository(ABC):
    @abstractmethod
    def find_all(self, filters: StudentFilter) -> list[StudentEntity]: ...

    @abstractmethod
    def find_by_id(self, tenant_id: str, student_id: str) -> Optional[StudentEntity]: ...

    @abstractmethod
    def create(self, data: CreateStudentInput) -> StudentEntity: ...

    @abstractmethod
    def update(self, tenant_id: str, student_id: str, data: UpdateStudentInput) -> StudentEntity: ...

    @abstractmethod
    def delete(self, tenant_id: str, student_id: str) -> None: ...

    @abstractmethod
    def count(self, filters: StudentFilter) -> int: ...


class DashboardRepository(ABC):
    @abstractmethod
    def get_stats(self, tenant_id: str, period: DatePeriod) -> DashboardStats: ...

    @abstractmethod
    def get_student_growth(self, tenant_id: str, period: DatePeriod) -> list[GrowthPoint]: ...
