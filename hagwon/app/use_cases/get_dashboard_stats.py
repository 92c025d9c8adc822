"""Dashboard statistics for a tenant over an inclusive date window."""

from typing import Optional

from pydantic import BaseModel

from hagwon.app.core.errors import ValidationError
from hagwon.app.core.time import parse_calendar_date
from hagwon.app.domain.entities import DashboardStatsDTO
from hagwon.app.domain.repositories import DashboardRepository, DatePeriod


class GetDashboardStatsInput(BaseModel):
    tenant_id: Optional[str] = None
    period_start: Optional[str] = None
    period_end: Optional[str] = None


def validate_period(data: GetDashboardStatsInput) -> DatePeriod:
    """Check the tenant and the ISO calendar-date window shared by dashboard queries."""
    if not data.tenant_id:
        raise ValidationError("tenantId is required")
    if not data.period_start:
        raise ValidationError("periodStart is required")
    if not data.period_end:
        raise ValidationError("periodEnd is required")

    start_date = parse_calendar_date(data.period_start)
    if start_date is None:
        raise ValidationError("Invalid periodStart date format")
    end_date = parse_calendar_date(data.period_end)
    if end_date is None:
        raise ValidationError("Invalid periodEnd date format")
    if start_date > end_date:
        raise ValidationError("periodStart must be before periodEnd")
    return DatePeriod(start_date=start_date, end_date=end_date)


class GetDashboardStatsUseCase:
    def __init__(self, dashboard_repository: DashboardRepository):
        self.dashboard_repository = dashboard_repository

    def execute(self, data: GetDashboardStatsInput) -> DashboardStatsDTO:
        period = validate_period(data)
        return self.dashboard_repository.get_stats(data.tenant_id, period).to_dto()
