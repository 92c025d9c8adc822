"""Month-by-month student head count for the dashboard growth chart."""

import logging

from pydantic import BaseModel

from hagwon.app.domain.repositories import DashboardRepository, GrowthPoint
from hagwon.app.use_cases.get_dashboard_stats import GetDashboardStatsInput, validate_period

logger = logging.getLogger(__name__)


class StudentGrowthOutput(BaseModel):
    periodStart: str
    periodEnd: str
    points: list[GrowthPoint]


class GetStudentGrowthUseCase:
    def __init__(self, dashboard_repository: DashboardRepository):
        self.dashboard_repository = dashboard_repository

    def execute(self, data: GetDashboardStatsInput) -> StudentGrowthOutput:
        period = validate_period(data)
        points = self.dashboard_repository.get_student_growth(data.tenant_id, period)
        logger.debug("Growth series for tenant %s has %d months", data.tenant_id, len(points))
        return StudentGrowthOutput(
            periodStart=period.start_date.isoformat(),
            periodEnd=period.end_date.isoformat(),
            points=points,
        )
