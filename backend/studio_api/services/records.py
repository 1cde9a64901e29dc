from sqlalchemy import func
from sqlalchemy.orm import Session

from studio_api.errors import InvalidIdentifier, NotFound
from studio_api.utils.clock import is_valid_id

RECENT_LIMIT = 5


def fetch(db: Session, model, entity_id: str, label: str):
    if not is_valid_id(entity_id):
        raise InvalidIdentifier(f"Invalid {label.lower()} ID")
    entity = db.get(model, entity_id)
    if entity is None:
        raise NotFound(f"{label} not found")
    return entity


def count_by(query, column, limit: int | None = None) -> list[dict]:
    rows = (
        query.with_entities(column.label("key"), func.count().label("count"))
        .group_by(column)
        .order_by(func.count().desc())
    )
    if limit:
        rows = rows.limit(limit)
    return [{"key": key, "count": count} for key, count in rows.all()]


def month_buckets(query, created_column, since: str | None = None, limit: int | None = None) -> list[dict]:
    """Group rows by the YYYY-MM prefix of an ISO timestamp column, oldest first."""
    month = func.substr(created_column, 1, 7)
    if since:
        query = query.filter(created_column >= since)
    rows = query.with_entities(month.label("key"), func.count().label("count")).group_by(month)
    if limit:
        rows = rows.order_by(month.desc()).limit(limit).all()
        rows = sorted(rows, key=lambda r: r[0])
    else:
        rows = rows.order_by(month.asc()).all()
    return [{"key": key, "count": count} for key, count in rows]


def apply_filter(query, column, value: str | None):
    if value and value != "all":
        query = query.filter(column == value)
    return query
