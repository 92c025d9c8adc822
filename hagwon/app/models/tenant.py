"""Tenant model: one row per academy account."""

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship

from hagwon.app.core.time import utc_now
from hagwon.app.db.base_class import Base
from hagwon.app.models.mixins import new_id


class Tenant(Base):
    __tablename__ = "tenants"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    users = relationship("User", back_populates="tenant", cascade="all, delete-orphan")
