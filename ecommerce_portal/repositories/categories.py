from __future__ import annotations

from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ecommerce_portal.models.category import Category


def list_all(db: Session) -> List[Category]:
    return db.query(Category).order_by(Category.name.asc()).all()


def find_by_id(db: Session, category_id: int | None) -> Optional[Category]:
    if category_id is None:
        return None
    return db.query(Category).filter(Category.id == category_id).first()


def find_by_name(db: Session, name: str) -> Optional[Category]:
    normalized = (name or "").strip().lower()
    return db.query(Category).filter(func.lower(Category.name) == normalized).first()


def add(db: Session, *, name: str, description: str | None = None) -> Category:
    category = Category(name=name, description=description, active=True)
    db.add(category)
    db.flush()
    return category
