"""Per-user dashboard layout stored in the user's preferences JSON."""

from typing import Optional

from sqlalchemy.orm import Session

from hagwon.app.core.errors import NotFoundError
from hagwon.app.dependencies.auth import RequestContext
from hagwon.app.models.user import User
from hagwon.app.schemas.dashboard import DashboardPreferences, DashboardWidget

DASHBOARD_KEY = "dashboard"

DEFAULT_WIDGETS = [
    DashboardWidget(id="today-tasks", title="오늘의 할 일", visible=True, order=0, column="left"),
    DashboardWidget(id="today-communications", title="오늘의 소통", visible=True, order=1, column="left"),
    DashboardWidget(id="recent-students", title="최근 등록 학생", visible=True, order=2, column="left"),
    DashboardWidget(id="financial-snapshot", title="재무 현황", visible=True, order=0, column="right"),
    DashboardWidget(id="student-alerts", title="학생 알림", visible=True, order=1, column="right"),
    DashboardWidget(id="class-status", title="수업 현황", visible=True, order=2, column="right"),
    DashboardWidget(id="stats-grid", title="통계", visible=True, order=3, column="right"),
    DashboardWidget(id="quick-actions", title="빠른 실행", visible=True, order=4, column="right"),
]


def default_preferences() -> DashboardPreferences:
    return DashboardPreferences(widgets=[w.model_copy() for w in DEFAULT_WIDGETS], layout="default")


def _get_user(db: Session, context: RequestContext) -> User:
    user = db.query(User).filter(User.id == context.user_id).first()
    if not user:
        raise NotFoundError("User", context.user_id)
    return user


def get_dashboard_preferences(db: Session, context: RequestContext) -> Optional[DashboardPreferences]:
    stored = (_get_user(db, context).preferences or {}).get(DASHBOARD_KEY)
    if not stored:
        return None
    return DashboardPreferences.model_validate(stored)


def save_dashboard_preferences(
    db: Session, context: RequestContext, preferences: DashboardPreferences
) -> DashboardPreferences:
    """Replace the dashboard entry while keeping every other key of the blob."""
    user = _get_user(db, context)
    merged = dict(user.preferences or {})
    merged[DASHBOARD_KEY] = preferences.model_dump(exclude_none=True)
    # Assign a new dict so the JSON column is flagged dirty.
    user.preferences = merged
    db.commit()
    return preferences
