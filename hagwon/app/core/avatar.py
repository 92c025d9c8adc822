"""Default avatar URLs for students without an uploaded profile image."""

from typing import Optional
from urllib.parse import quote

from hagwon.app.core.settings import get_settings


def get_default_avatar(seed: str, gender: Optional[str] = None) -> str:
    # gender is accepted for callers but every student currently shares one style
    settings = get_settings()
    background = ",".join(settings.avatar_background_colors)
    return (
        f"{settings.avatar_base_url}/{settings.avatar_style}/svg"
        f"?seed={quote(seed, safe='')}&backgroundColor={background}"
    )


def get_student_avatar(
    profile_image_url: Optional[str],
    student_id: Optional[str],
    student_name: str,
    gender: Optional[str] = None,
) -> str:
    """Prefer the uploaded image; otherwise generate one seeded by id, then name."""
    if profile_image_url:
        return profile_image_url
    return get_default_avatar(student_id or student_name, gender)
