"""Generic paged-query helper used by the list endpoints."""

from typing import Any, Mapping

from sqlalchemy.orm import Query

from hagwon.app.core.errors import ValidationError
from hagwon.app.core.pagination import PageMeta, ServerPaginator


def apply_sort(query: Query, sort_columns: Mapping[str, Any], sort_by: str, sort_order: str) -> Query:
    if sort_by not in sort_columns:
        raise ValidationError("Invalid sort_by field", details={"allowed": sorted(sort_columns)})
    sort_order_normalized = (sort_order or "desc").lower()
    if sort_order_normalized not in {"asc", "desc"}:
        raise ValidationError("Invalid sort_order value")
    column = sort_columns[sort_by]
    return query.order_by(column.asc() if sort_order_normalized == "asc" else column.desc())


def paginate_query(query: Query, *, page: int, limit: int) -> tuple[list, PageMeta]:
    """Fetch one page of an already filtered and sorted query.

    ``meta`` echoes the requested page; a page past the end yields no rows.
    """
    total = query.order_by(None).count()
    paginator = ServerPaginator(total, items_per_page=limit, initial_page=page)
    if paginator.current_page != page:
        rows = []
    else:
        size = paginator.range_to - paginator.range_from + 1
        rows = query.offset(paginator.range_from).limit(size).all()
    return rows, PageMeta.build(page=page, limit=limit, total=total)
