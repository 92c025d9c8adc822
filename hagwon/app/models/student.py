"""Student model for the academy."""

from sqlalchemy import JSON, Column, Date, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from hagwon.app.db.base_class import Base
from hagwon.app.models.mixins import TenantScopedMixin


class Student(TenantScopedMixin, Base):
    __tablename__ = "students"

    student_code = Column(String(50), nullable=True)
    name = Column(String(100), nullable=False)
    grade_level = Column(String(20), nullable=True)
    school = Column(String(100), nullable=True)
    gender = Column(String(10), nullable=True)
    status = Column(String(20), nullable=False, default="active")
    enrollment_date = Column(Date, nullable=True)
    profile_image_url = Column(String(512), nullable=True)
    emergency_contact = Column(String(50), nullable=True)
    notes = Column(Text, nullable=True)
    attendance_rate = Column(Numeric(5, 2), nullable=True)
    last_activity_date = Column(Date, nullable=True)
    meta = Column(JSON, nullable=False, default=dict)

    __table_args__ = (
        UniqueConstraint("tenant_id", "student_code", name="uq_student_code_per_tenant"),
    )

    guardian_links = relationship("GuardianStudent", back_populates="student", cascade="all, delete-orphan")
    enrollments = relationship("ClassEnrollment", back_populates="student", cascade="all, delete-orphan")
    invoices = relationship("Invoice", back_populates="student")
