from __future__ import annotations

import logging
from typing import List

from sqlalchemy.orm import Session

from ecommerce_portal.core.errors import InvalidInputError, NotFoundError
from ecommerce_portal.models.admin import Admin
from ecommerce_portal.models.user import UserType
from ecommerce_portal.repositories import admins, users
from ecommerce_portal.repositories.transaction import commit_or_conflict
from ecommerce_portal.schemas.admin import AdminCreate
from ecommerce_portal.services import users as user_service
from ecommerce_portal.services.activity_log import log_activity
from ecommerce_portal.services.auth import Principal
from ecommerce_portal.services.results import Outcome

logger = logging.getLogger(__name__)
ADMIN_PREFIX = "[ADMIN]"


def list_all(db: Session) -> List[Admin]:
    return admins.list_all(db)


def get_by_id(db: Session, admin_id: int) -> Admin:
    admin = admins.find_by_id(db, admin_id)
    if admin is None:
        raise NotFoundError("Admin")
    return admin


def create(db: Session, details: AdminCreate, *, ip_address: str | None = None) -> Outcome:
    try:
        user = user_service.create_user(
            db,
            email=details.email,
            password=details.password,
            user_type=UserType.ADMIN,
        )
        admin = admins.add(
            db,
            user=user,
            first_name=details.first_name.strip(),
            last_name=details.last_name.strip(),
        )
        log_activity(
            db,
            title="create-admin",
            description=f"A new admin named {admin.first_name} {admin.last_name} was created.",
            ip_address=ip_address,
        )
    except Exception:
        db.rollback()
        raise
    commit_or_conflict(db, duplicate_message=user_service.EMAIL_TAKEN_MESSAGE)

    logger.info("%s created admin_id=%s user_id=%s", ADMIN_PREFIX, admin.id, user.id)
    return Outcome.applied("Created Admin Successfully.")


def set_active(db: Session, admin_id: int, active: bool, *, actor: Principal) -> Outcome:
    admin = get_by_id(db, admin_id)
    if not active and admin.user_id == actor.user_id:
        raise InvalidInputError("You cannot deactivate your own account.")

    user_service.set_active(admin.user, active)
    commit_or_conflict(db)

    logger.info("%s active=%s admin_id=%s actor=%s", ADMIN_PREFIX, active, admin.id, actor.user_id)
    if active:
        return Outcome.applied("Activated admin successfully.")
    return Outcome.applied("Deactivated admin successfully.")


def admin_to_dict(admin: Admin) -> dict:
    return {
        "id": admin.id,
        "user_id": admin.user_id,
        "email": admin.user.email if admin.user else "",
        "first_name": admin.first_name,
        "last_name": admin.last_name,
        "active": bool(admin.user and admin.user.active),
        "created_at": admin.created_at.isoformat() if admin.created_at else None,
    }


def ensure_initial_admin(
    db: Session,
    *,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
) -> tuple[Admin, bool]:
    """Create the first admin if no user owns ``email`` yet. Returns (admin, created)."""
    existing = users.find_by_email(db, email)
    if existing is not None:
        admin = admins.find_by_user_id(db, existing.id)
        if admin is None:
            raise InvalidInputError(f"{email} already belongs to a non-admin account.")
        return admin, False

    create(
        db,
        AdminCreate(email=email, password=password, first_name=first_name, last_name=last_name),
        ip_address=None,
    )
    user = users.find_by_email(db, email)
    return admins.find_by_user_id(db, user.id), True
