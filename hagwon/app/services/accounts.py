"""Tenant sign-up and credential checks."""

import logging

from sqlalchemy.orm import Session

from hagwon.app.core.errors import ConflictError, UnauthorizedError
from hagwon.app.core.security import create_access_token, get_password_hash, verify_password
from hagwon.app.core.time import utc_now
from hagwon.app.models.tenant import Tenant
from hagwon.app.models.user import User
from hagwon.app.schemas.user import UserCreate

logger = logging.getLogger(__name__)


def register_tenant_admin(db: Session, user_in: UserCreate) -> User:
    existing = db.query(User).filter(User.email == user_in.email).first()
    if existing:
        raise ConflictError("Email already registered")
    tenant = Tenant(name=user_in.academy_name)
    db.add(tenant)
    db.flush()
    user = User(
        tenant_id=tenant.id,
        email=user_in.email,
        name=user_in.name,
        hashed_password=get_password_hash(user_in.password),
        role="admin",
        preferences={},
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered tenant %s with admin %s", tenant.id, user.id)
    return user


def authenticate(db: Session, email: str, password: str) -> str:
    user = db.query(User).filter(User.email == email, User.deleted_at.is_(None)).first()
    if not user or not user.hashed_password or not verify_password(password, user.hashed_password):
        raise UnauthorizedError("Invalid credentials")
    if not user.is_active:
        raise UnauthorizedError("User is inactive")
    user.last_login = utc_now()
    db.commit()
    return create_access_token(user.id)
