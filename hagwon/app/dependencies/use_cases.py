"""Wire use cases to their SQLAlchemy repositories per request."""

from fastapi import Depends
from sqlalchemy.orm import Session

from hagwon.app.db.session import get_db
from hagwon.app.repositories.dashboard_repository import SqlAlchemyDashboardRepository
from hagwon.app.repositories.student_repository import SqlAlchemyStudentRepository
from hagwon.app.use_cases.get_dashboard_stats import GetDashboardStatsUseCase
from hagwon.app.use_cases.get_student_growth import GetStudentGrowthUseCase
from hagwon.app.use_cases.list_students import ListStudentsUseCase


def get_list_students_use_case(db: Session = Depends(get_db)) -> ListStudentsUseCase:
    return ListStudentsUseCase(SqlAlchemyStudentRepository(db))


def get_dashboard_stats_use_case(db: Session = Depends(get_db)) -> GetDashboardStatsUseCase:
    return GetDashboardStatsUseCase(SqlAlchemyDashboardRepository(db))


def get_student_growth_use_case(db: Session = Depends(get_db)) -> GetStudentGrowthUseCase:
    return GetStudentGrowthUseCase(SqlAlchemyDashboardRepository(db))
