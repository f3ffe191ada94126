from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from ecommerce_portal.core.errors import ConflictError, ConflictReason, NotFoundError
from ecommerce_portal.models.user import User, UserType
from ecommerce_portal.repositories import users
from ecommerce_portal.services.auth import hash_password

logger = logging.getLogger(__name__)

EMAIL_TAKEN_MESSAGE = "The email address that you provided is already taken."


def ensure_email_available(db: Session, email: str, *, exclude_user_id: int | None = None) -> None:
    existing = users.find_by_email(db, email)
    if existing is not None and existing.id != exclude_user_id:
        raise ConflictError(EMAIL_TAKEN_MESSAGE, reason=ConflictReason.EMAIL_TAKEN)


def create_user(db: Session, *, email: str, password: str, user_type: UserType) -> User:
    """Add a user to the current unit of work (flushed, not committed)."""
    ensure_email_available(db, email)
    return users.add(
        db,
        email=email,
        password_hash=hash_password(password),
        user_type=user_type,
    )


def get_user(db: Session, user_id: int) -> User:
    user = users.find_by_id(db, user_id)
    if user is None:
        raise NotFoundError("User")
    return user


def change_email(db: Session, user: User, email: str) -> bool:
    normalized = users.normalize_email(email)
    if normalized == user.email:
        return False
    ensure_email_available(db, normalized, exclude_user_id=user.id)
    user.email = normalized
    return True


def set_active(user: User, active: bool) -> bool:
    if bool(user.active) == active:
        return False
    user.active = active
    logger.info("User active flag changed user_id=%s active=%s", user.id, active)
    return True


def user_to_dict(user: User) -> dict:
    return {
        "id": user.id,
        "email": user.email,
        "user_type": UserType(user.user_type).value,
        "active": bool(user.active),
    }
