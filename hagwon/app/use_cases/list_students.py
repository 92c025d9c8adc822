"""List one tenant's students a page at a time."""

import logging
import math
from typing import Optional

from pydantic import BaseModel

from hagwon.app.core.errors import ValidationError
from hagwon.app.core.settings import get_settings
from hagwon.app.domain.entities import StudentDTO
from hagwon.app.domain.repositories import StudentFilter, StudentRepository

logger = logging.getLogger(__name__)


class ListStudentsInput(BaseModel):
    tenant_id: Optional[str] = None
    status: Optional[list[str]] = None
    grade: Optional[list[str]] = None
    search: Optional[str] = None
    page: Optional[int] = None
    page_size: Optional[int] = None


class ListStudentsOutput(BaseModel):
    students: list[StudentDTO]
    total: int
    page: int
    pageSize: int
    totalPages: int


class ListStudentsUseCase:
    def __init__(self, student_repository: StudentRepository):
        self.student_repository = student_repository

    def execute(self, data: ListStudentsInput) -> ListStudentsOutput:
        self._validate(data)

        page = data.page if data.page is not None else 1
        page_size = data.page_size if data.page_size is not None else get_settings().default_page_size
        offset = (page - 1) * page_size

        criteria = dict(tenant_id=data.tenant_id, status=data.status, grade=data.grade, search=data.search)
        students = self.student_repository.find_all(StudentFilter(**criteria, limit=page_size, offset=offset))
        total = self.student_repository.count(StudentFilter(**criteria))
        logger.debug("Listed %d of %d students for tenant %s", len(students), total, data.tenant_id)

        return ListStudentsOutput(
            students=[student.to_dto() for student in students],
            total=total,
            page=page,
            pageSize=page_size,
            totalPages=math.ceil(total / page_size),
        )

    @staticmethod
    def _validate(data: ListStudentsInput) -> None:
        if not data.tenant_id:
            raise ValidationError("tenantId is required")
        if data.page is not None and data.page < 1:
            raise ValidationError("page must be greater than 0")
        if data.page_size is not None and data.page_size < 1:
            raise ValidationError("pageSize must be greater than 0")
