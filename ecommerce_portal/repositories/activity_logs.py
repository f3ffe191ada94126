from __future__ import annotations

from typing import List

from sqlalchemy.orm import Session

from ecommerce_portal.models.activity_log import ActivityLog


def add(db: Session, *, title: str, description: str, ip_address: str | None) -> ActivityLog:
    entry = ActivityLog(title=title, description=description, ip_address=ip_address)
    db.add(entry)
    return entry


def list_recent(db: Session, limit: int) -> List[ActivityLog]:
    return (
        db.query(ActivityLog)
        .order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
        .limit(limit)
        .all()
    )
