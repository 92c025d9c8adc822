"""Student schemas for the academy API."""

from datetime import date, datetime
from typing import Any, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

GuardianRelation = Literal["father", "mother", "grandfather", "grandmother", "uncle", "aunt", "other"]


class StudentCreate(BaseModel):
    tenant_id: UUID
    student_code: Optional[str] = None
    name: str = Field(min_length=2)
    grade_level: Optional[str] = None
    status: str = "active"
    enrollment_date: Optional[date] = None
    meta: dict[str, Any] = Field(default_factory=dict)


class StudentUpdate(BaseModel):
    student_code: Optional[str] = None
    name: Optional[str] = Field(default=None, min_length=2)
    grade_level: Optional[str] = None
    status: Optional[str] = None
    school: Optional[str] = None
    gender: Optional[str] = None
    enrollment_date: Optional[date] = None
    profile_image_url: Optional[str] = None
    emergency_contact: Optional[str] = None
    notes: Optional[str] = None
    meta: Optional[dict[str, Any]] = None


class StudentRead(BaseModel):
    id: str
    tenant_id: str
    student_code: Optional[str] = None
    name: str
    grade_level: Optional[str] = None
    school: Optional[str] = None
    gender: Optional[str] = None
    status: str
    enrollment_date: Optional[date] = None
    profile_image_url: Optional[str] = None
    avatar_url: Optional[str] = None
    meta: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class StudentGuardianLink(BaseModel):
    guardian_id: str
    relation: GuardianRelation = "other"
    is_primary: bool = False


class StudentGuardianRead(BaseModel):
    guardian_id: str
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    relation: str
    is_primary: bool
