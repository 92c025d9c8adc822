"""Dashboard widget layout schemas."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

DashboardWidgetId = Literal[
    "today-tasks",
    "today-communications",
    "recent-students",
    "financial-snapshot",
    "student-alerts",
    "class-status",
    "stats-grid",
    "quick-actions",
]


class DashboardWidget(BaseModel):
    id: DashboardWidgetId
    title: str
    visible: bool
    order: int
    column: Literal["left", "right"]


class DashboardPreferences(BaseModel):
    widgets: list[DashboardWidget]
    layout: Optional[Literal["default", "compact", "spacious"]] = None

    model_config = ConfigDict(extra="ignore")


class DashboardPreferencesUpdate(BaseModel):
    preferences: Optional[DashboardPreferences] = None


class DashboardPreferencesResponse(BaseModel):
    preferences: Optional[DashboardPreferences] = None


class DashboardPreferencesSaved(BaseModel):
    success: bool = True
    preferences: DashboardPreferences
