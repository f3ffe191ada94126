from __future__ import annotations

from typing import List

from sqlalchemy.orm import Session

from ecommerce_portal.models.activity_log import ActivityLog
from ecommerce_portal.repositories import activity_logs

DEFAULT_LIST_LIMIT = 100


def log_activity(
    db: Session,
    *,
    title: str,
    description: str,
    ip_address: str | None = None,
) -> ActivityLog:
    """Append an audit entry to the current unit of work; the caller commits."""
    return activity_logs.add(db, title=title, description=description, ip_address=ip_address)


def list_recent(db: Session, limit: int = DEFAULT_LIST_LIMIT) -> List[ActivityLog]:
    return activity_logs.list_recent(db, max(1, min(limit, 1000)))


def activity_log_to_dict(entry: ActivityLog) -> dict:
    return {
        "id": entry.id,
        "title": entry.title,
        "description": entry.description,
        "ip_address": entry.ip_address,
        "created_at": entry.created_at.isoformat() if entry.created_at else None,
    }
