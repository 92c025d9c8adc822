"""Attendance sessions and the per-student records taken in them."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from hagwon.app.db.base_class import Base
from hagwon.app.models.mixins import TenantScopedMixin

SESSION_STATUSES = ("scheduled", "in_progress", "completed", "cancelled")


class AttendanceSession(TenantScopedMixin, Base):
    __tablename__ = "attendance_sessions"

    class_id = Column(String(36), ForeignKey("classes.id"), nullable=False, index=True)
    session_date = Column(Date, nullable=False)
    scheduled_start_at = Column(DateTime(timezone=True), nullable=False)
    scheduled_end_at = Column(DateTime(timezone=True), nullable=False)
    actual_start_at = Column(DateTime(timezone=True), nullable=True)
    actual_end_at = Column(DateTime(timezone=True), nullable=True)
    status = Column(String(20), nullable=False, default="scheduled")
    notes = Column(Text, nullable=True)

    academy_class = relationship("AcademyClass", back_populates="sessions")
    records = relationship("AttendanceRecord", back_populates="session", cascade="all, delete-orphan")


class AttendanceRecord(TenantScopedMixin, Base):
    __tablename__ = "attendance_records"

    session_id = Column(String(36), ForeignKey("attendance_sessions.id", ondelete="CASCADE"), nullable=False)
    student_id = Column(String(36), ForeignKey("students.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False)
    check_in_at = Column(DateTime(timezone=True), nullable=True)
    check_out_at = Column(DateTime(timezone=True), nullable=True)
    notes = Column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("session_id", "student_id", name="uq_attendance_session_student"),
    )

    session = relationship("AttendanceSession", back_populates="records")
    student = relationship("Student")
