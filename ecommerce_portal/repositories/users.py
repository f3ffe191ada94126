from __future__ import annotations

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ecommerce_portal.models.user import User, UserType


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def find_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def find_active_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id, User.active.is_(True)).first()


def find_by_email(db: Session, email: str) -> Optional[User]:
    normalized = normalize_email(email)
    if not normalized:
        return None
    return db.query(User).filter(func.lower(User.email) == normalized).first()


def add(db: Session, *, email: str, password_hash: str, user_type: UserType, active: bool = True) -> User:
    user = User(
        email=normalize_email(email),
        password_hash=password_hash,
        user_type=user_type,
        active=active,
    )
    db.add(user)
    db.flush()
    return user

