"""
Query helpers shared by the stores.

Filtering, ordering and paging are all pushed down to the database.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from jobportal.core.exceptions import BadRequestError, ConflictError


def commit(db: Session, conflict_message: str) -> None:
    """Commit, turning a unique-constraint violation into a ConflictError."""
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(conflict_message)


def contains_ci(column, text: str):
    """Case-insensitive substring predicate; ``%`` and ``_`` match literally."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return column.ilike(f"%{escaped}%", escape="\\")


def order_by(query: Query, columns: dict, sort_by: str, sort_dir: str, tiebreak) -> Query:
    """Order ``query`` by one of the whitelisted ``columns`` (keyed by API name)."""
    column = columns.get(sort_by)
    if column is None:
        raise BadRequestError(
            f"Cannot sort by '{sort_by}'. Must be one of: {sorted(columns)}"
        )

    direction = (sort_dir or "desc").lower()
    if direction not in ("asc", "desc"):
        raise BadRequestError("Sort direction must be 'asc' or 'desc'")

    primary = column.asc() if direction == "asc" else column.desc()
    return query.order_by(primary, tiebreak.asc())


def paginate(query: Query, page: int, size: int) -> tuple[list, int]:
    """Return ``(items, total)`` for zero-based ``page`` of ``size`` rows."""
    if page < 0:
        raise BadRequestError("Page index must not be negative")
    if size < 1:
        raise BadRequestError("Page size must be at least 1")

    total = query.order_by(None).count()
    items = query.offset(page * size).limit(size).all()
    return items, total
