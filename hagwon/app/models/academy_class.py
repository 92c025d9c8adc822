"""Classes (수업) and the students enrolled in them."""

from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from hagwon.app.db.base_class import Base
from hagwon.app.models.mixins import TenantScopedMixin


class AcademyClass(TenantScopedMixin, Base):
    __tablename__ = "classes"

    name = Column(String(100), nullable=False)
    subject = Column(String(50), nullable=True)
    teacher_name = Column(String(100), nullable=True)
    max_capacity = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default="active")

    enrollments = relationship("ClassEnrollment", back_populates="academy_class", cascade="all, delete-orphan")
    sessions = relationship("AttendanceSession", back_populates="academy_class")


class ClassEnrollment(TenantScopedMixin, Base):
    __tablename__ = "class_enrollments"

    class_id = Column(String(36), ForeignKey("classes.id", ondelete="CASCADE"), nullable=False)
    student_id = Column(String(36), ForeignKey("students.id", ondelete="CASCADE"), nullable=False)

    __table_args__ = (
        UniqueConstraint("class_id", "student_id", name="uq_class_enrollment"),
    )

    academy_class = relationship("AcademyClass", back_populates="enrollments")
    student = relationship("Student", back_populates="enrollments")
