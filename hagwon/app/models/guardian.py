"""Guardian records and their many-to-many link to students."""

from sqlalchemy import Boolean, Column, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import relationship

from hagwon.app.db.base_class import Base
from hagwon.app.models.mixins import TenantScopedMixin


class Guardian(TenantScopedMixin, Base):
    __tablename__ = "guardians"

    name = Column(String(100), nullable=False)
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    address = Column(String(255), nullable=True)
    occupation = Column(String(100), nullable=True)

    student_links = relationship("GuardianStudent", back_populates="guardian", cascade="all, delete-orphan")


class GuardianStudent(TenantScopedMixin, Base):
    __tablename__ = "guardian_students"

    guardian_id = Column(String(36), ForeignKey("guardians.id", ondelete="CASCADE"), nullable=False)
    student_id = Column(String(36), ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    relation = Column(String(20), nullable=False, default="other")
    is_primary = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        UniqueConstraint("guardian_id", "student_id", name="uq_guardian_student"),
    )

    guardian = relationship("Guardian", back_populates="student_links")
    student = relationship("Student", back_populates="guardian_links")
