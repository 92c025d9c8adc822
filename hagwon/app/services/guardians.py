"""Guardian (보호자) management."""

from typing import Optional

from sqlalchemy.orm import Session

from hagwon.app.core.errors import NotFoundError
from hagwon.app.core.pagination import PageMeta
from hagwon.app.core.time import utc_now
from hagwon.app.dependencies.auth import RequestContext
from hagwon.app.models.guardian import Guardian
from hagwon.app.repositories.query import apply_sort, paginate_query
from hagwon.app.schemas.guardian import GuardianCreate, GuardianUpdate

SORT_COLUMNS = {"created_at": Guardian.created_at, "name": Guardian.name}


def get_guardian(db: Session, context: RequestContext, guardian_id: str) -> Guardian:
    guardian = (
        db.query(Guardian)
        .filter(
            Guardian.id == guardian_id,
            Guardian.tenant_id == context.tenant_id,
            Guardian.deleted_at.is_(None),
        )
        .first()
    )
    if not guardian:
        raise NotFoundError("Guardian", guardian_id)
    return guardian


def list_guardians(
    db: Session,
    context: RequestContext,
    *,
    page: int,
    limit: int,
    search: Optional[str] = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
) -> tuple[list[Guardian], PageMeta]:
    query = db.query(Guardian).filter(Guardian.tenant_id == context.tenant_id, Guardian.deleted_at.is_(None))
    if search:
        query = query.filter(Guardian.name.ilike(f"%{search}%"))
    query = apply_sort(query, SORT_COLUMNS, sort_by, sort_order)
    return paginate_query(query, page=page, limit=limit)


def create_guardian(db: Session, context: RequestContext, guardian_in: GuardianCreate) -> Guardian:
    guardian = Guardian(tenant_id=context.tenant_id, **guardian_in.model_dump())
    db.add(guardian)
    db.commit()
    db.refresh(guardian)
    return guardian


def update_guardian(db: Session, context: RequestContext, guardian_id: str, guardian_in: GuardianUpdate) -> Guardian:
    guardian = get_guardian(db, context, guardian_id)
    for field, value in guardian_in.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(guardian, field, value)
    db.commit()
    db.refresh(guardian)
    return guardian


def delete_guardian(db: Session, context: RequestContext, guardian_id: str) -> None:
    guardian = get_guardian(db, context, guardian_id)
    guardian.deleted_at = utc_now()
    db.commit()
