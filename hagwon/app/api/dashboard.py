"""Dashboard statistics and per-user widget layout."""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hagwon.app.core.errors import ValidationError
from hagwon.app.db.session import get_db
from hagwon.app.dependencies.auth import RequestContext, get_request_context
from hagwon.app.dependencies.use_cases import get_dashboard_stats_use_case, get_student_growth_use_case
from hagwon.app.domain.entities import DashboardStatsDTO
from hagwon.app.schemas.dashboard import (
    DashboardPreferences,
    DashboardPreferencesResponse,
    DashboardPreferencesSaved,
    DashboardPreferencesUpdate,
)
from hagwon.app.services import preferences as preference_service
from hagwon.app.use_cases.get_dashboard_stats import GetDashboardStatsInput, GetDashboardStatsUseCase
from hagwon.app.use_cases.get_student_growth import GetStudentGrowthUseCase, StudentGrowthOutput

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStatsDTO)
def dashboard_stats(
    period_start: Optional[str] = None,
    period_end: Optional[str] = None,
    context: RequestContext = Depends(get_request_context),
    use_case: GetDashboardStatsUseCase = Depends(get_dashboard_stats_use_case),
):
    return use_case.execute(
        GetDashboardStatsInput(tenant_id=context.tenant_id, period_start=period_start, period_end=period_end)
    )


@router.get("/growth", response_model=StudentGrowthOutput)
def student_growth(
    period_start: Optional[str] = None,
    period_end: Optional[str] = None,
    context: RequestContext = Depends(get_request_context),
    use_case: GetStudentGrowthUseCase = Depends(get_student_growth_use_case),
):
    return use_case.execute(
        GetDashboardStatsInput(tenant_id=context.tenant_id, period_start=period_start, period_end=period_end)
    )


@router.get("/preferences", response_model=DashboardPreferencesResponse)
def get_preferences(
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    return DashboardPreferencesResponse(preferences=preference_service.get_dashboard_preferences(db, context))


@router.get("/preferences/defaults", response_model=DashboardPreferences)
def get_default_preferences(context: RequestContext = Depends(get_request_context)):
    return preference_service.default_preferences()


@router.post("/preferences", response_model=DashboardPreferencesSaved)
def save_preferences(
    body: DashboardPreferencesUpdate,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    if body.preferences is None:
        raise ValidationError("Invalid preferences data")
    saved = preference_service.save_dashboard_preferences(db, context, body.preferences)
    return DashboardPreferencesSaved(preferences=saved)
