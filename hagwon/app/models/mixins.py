"""Columns shared by every tenant-owned table."""

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.orm import declared_attr

from hagwon.app.core.time import utc_now


def new_id() -> str:
    return str(uuid.uuid4())


class TenantScopedMixin:
    id = Column(String(36), primary_key=True, default=new_id)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    @declared_attr
    def tenant_id(cls):
        return Column(String(36), ForeignKey("tenants.id"), nullable=False, index=True)
