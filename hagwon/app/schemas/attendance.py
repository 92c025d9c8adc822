"""Attendance session and record schemas."""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

SessionStatus = Literal["scheduled", "in_progress", "completed", "cancelled"]
AttendanceStatus = Literal["present", "late", "absent", "excused"]


class SessionCreate(BaseModel):
    class_id: str
    session_date: date
    scheduled_start_at: datetime
    scheduled_end_at: datetime
    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_schedule(self):
        if self.scheduled_end_at <= self.scheduled_start_at:
            raise ValueError("scheduled_end_at must be later than scheduled_start_at")
        return self


class SessionStatusUpdate(BaseModel):
    # checked against SESSION_STATUSES in the service
    status: str
    actual_start_at: Optional[datetime] = None
    actual_end_at: Optional[datetime] = None


class SessionRead(BaseModel):
    id: str
    tenant_id: str
    class_id: str
    session_date: date
    scheduled_start_at: datetime
    scheduled_end_at: datetime
    actual_start_at: Optional[datetime] = None
    actual_end_at: Optional[datetime] = None
    status: SessionStatus
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AttendanceEntry(BaseModel):
    student_id: str
    status: AttendanceStatus
    check_in_at: Optional[datetime] = None
    check_out_at: Optional[datetime] = None
    notes: Optional[str] = Field(default=None, max_length=500)

    @model_validator(mode="after")
    def check_times(self):
        if self.check_in_at and self.check_out_at and self.check_out_at <= self.check_in_at:
            raise ValueError("check_out_at must be later than check_in_at")
        return self


class BulkAttendanceCreate(BaseModel):
    session_id: str
    attendances: list[AttendanceEntry] = Field(min_length=1)


class AttendanceRead(BaseModel):
    id: str
    session_id: str
    student_id: str
    status: AttendanceStatus
    check_in_at: Optional[datetime] = None
    check_out_at: Optional[datetime] = None
    notes: Optional[str] = None
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
