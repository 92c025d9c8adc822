"""Guardian schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class GuardianCreate(BaseModel):
    name: str = Field(min_length=1)
    phone: str = Field(pattern=r"^01[0-9]-?[0-9]{3,4}-?[0-9]{4}$")
    email: Optional[EmailStr] = None
    address: Optional[str] = None
    occupation: Optional[str] = None


class GuardianUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    phone: Optional[str] = Field(default=None, pattern=r"^01[0-9]-?[0-9]{3,4}-?[0-9]{4}$")
    email: Optional[EmailStr] = None
    address: Optional[str] = None
    occupation: Optional[str] = None


class GuardianRead(BaseModel):
    id: str
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    occupation: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
