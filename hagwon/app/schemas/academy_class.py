"""Class (수업) schemas."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ClassStatus = Literal["full", "near_full", "under_enrolled", "normal"]


class ClassCreate(BaseModel):
    name: str = Field(min_length=1)
    subject: Optional[str] = None
    teacher_name: Optional[str] = None
    max_capacity: int = Field(gt=0)
    status: Literal["active", "inactive"] = "active"


class ClassRead(BaseModel):
    id: str
    name: str
    subject: Optional[str] = None
    teacher_name: Optional[str] = None
    max_capacity: int
    status: str
    current_enrollment: int
    capacity_status: ClassStatus
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class EnrollmentCreate(BaseModel):
    student_id: str
