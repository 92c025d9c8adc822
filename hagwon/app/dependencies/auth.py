"""Authentication dependencies: resolve the bearer token into an explicit request context."""

from dataclasses import dataclass

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from hagwon.app.core.errors import ForbiddenError, UnauthorizedError
from hagwon.app.core.security import decode_access_token
from hagwon.app.db.session import get_db
from hagwon.app.models.user import User


@dataclass(frozen=True)
class RequestContext:
    """Who is calling and which tenant every query must be scoped to."""

    user_id: str
    tenant_id: str
    role: str


def get_current_user(db: Session = Depends(get_db), authorization: str | None = Header(default=None)) -> User:
    # Expect Authorization: Bearer <token>
    if not authorization or not authorization.startswith("Bearer "):
        raise UnauthorizedError()
    token = authorization.split(" ", 1)[1]
    try:
        payload = decode_access_token(token)
    except ValueError:
        raise UnauthorizedError()

    user_id = payload.get("sub")
    if not user_id:
        raise UnauthorizedError()

    user = db.query(User).filter(User.id == user_id, User.deleted_at.is_(None)).first()
    if not user or not user.is_active:
        raise UnauthorizedError()
    return user


def get_request_context(current_user: User = Depends(get_current_user)) -> RequestContext:
    return RequestContext(user_id=current_user.id, tenant_id=current_user.tenant_id, role=current_user.role)


def require_admin(context: RequestContext = Depends(get_request_context)) -> RequestContext:
    if context.role != "admin":
        raise ForbiddenError("Admin access required")
    return context
