"""Seller lifecycle.

A seller is a profile row attached one-to-one to a ``User`` of type
``seller``. Activation is modelled entirely on that user, and every mutation
checks the user type before touching anything.
"""
from __future__ import annotations

import logging
from typing import List

from sqlalchemy.orm import Session

from ecommerce_portal.core.errors import ConflictError, ConflictReason, ForbiddenError, NotFoundError
from ecommerce_portal.models.seller import Seller
from ecommerce_portal.models.user import UserType
from ecommerce_portal.repositories import sellers
from ecommerce_portal.repositories.transaction import commit_or_conflict
from ecommerce_portal.schemas.seller import SellerCreate, SellerUpdate
from ecommerce_portal.services import users as user_service
from ecommerce_portal.services.activity_log import log_activity
from ecommerce_portal.services.auth import Principal
from ecommerce_portal.services.results import Outcome

logger = logging.getLogger(__name__)
SELLER_PREFIX = "[SELLER]"

PASSWORD_MISMATCH_MESSAGE = "The password that you provided does not match."
NOT_A_SELLER_MESSAGE = "The account linked to this seller is not a seller account."


def list_all(db: Session) -> List[Seller]:
    return sellers.list_all(db)


def get_by_id(db: Session, seller_id: int) -> Seller:
    seller = sellers.find_by_id(db, seller_id)
    if seller is None:
        raise NotFoundError("Seller")
    return seller


def _ensure_seller_account(seller: Seller) -> None:
    if seller.user is None or seller.user.user_type != UserType.SELLER:
        logger.warning(
            "%s rejected mutation on non-seller account seller_id=%s user_type=%s",
            SELLER_PREFIX,
            seller.id,
            getattr(seller.user, "user_type", None),
        )
        raise ForbiddenError(NOT_A_SELLER_MESSAGE)


def ensure_actor_can_edit(db: Session, seller_id: int, actor: Principal) -> None:
    """Admins edit any seller; a seller only edits its own profile."""
    if actor.user_type == UserType.ADMIN:
        return
    seller = get_by_id(db, seller_id)
    if actor.user_type != UserType.SELLER or seller.user_id != actor.user_id:
        raise ForbiddenError()


def create(
    db: Session,
    details: SellerCreate,
    *,
    created_by_admin: bool,
    ip_address: str | None = None,
) -> Outcome:
    if sellers.find_by_email(db, details.email) is not None:
        raise ConflictError(user_service.EMAIL_TAKEN_MESSAGE, reason=ConflictReason.EMAIL_TAKEN)

    if not created_by_admin and details.password != details.confirm_password:
        raise ConflictError(PASSWORD_MISMATCH_MESSAGE, reason=ConflictReason.PASSWORD_MISMATCH)

    # User, seller and activity entry are committed together or not at all.
    try:
        user = user_service.create_user(
            db,
            email=details.email,
            password=details.password,
            user_type=UserType.SELLER,
        )
        seller = sellers.add(
            db,
            user=user,
            first_name=details.first_name.strip(),
            last_name=details.last_name.strip(),
            contact_number=details.contact_number,
            address=details.address,
        )
        log_activity(
            db,
            title="create-seller",
            description=f"A new seller named {seller.full_name} was created.",
            ip_address=ip_address,
        )
    except Exception:
        db.rollback()
        raise
    commit_or_conflict(db, duplicate_message=user_service.EMAIL_TAKEN_MESSAGE)

    logger.info(
        "%s created seller_id=%s user_id=%s by_admin=%s",
        SELLER_PREFIX,
        seller.id,
        user.id,
        created_by_admin,
    )
    return Outcome.applied("Created Seller Successfully.")


def update(
    db: Session,
    seller_id: int,
    details: SellerUpdate,
    *,
    ip_address: str | None = None,
) -> Outcome:
    changes = details.model_dump(exclude_unset=True)
    if not changes:
        return Outcome.noop()

    seller = get_by_id(db, seller_id)
    _ensure_seller_account(seller)

    try:
        email = changes.pop("email", None)
        if email is not None:
            user_service.change_email(db, seller.user, email)

        for field in ("first_name", "last_name"):
            value = changes.get(field)
            if value is not None:
                setattr(seller, field, value.strip())
        for field in ("contact_number", "address"):
            if field in changes:
                setattr(seller, field, changes[field])

        log_activity(
            db,
            title="update-seller",
            description=f"A seller named {seller.full_name} has updated its account information.",
            ip_address=ip_address,
        )
    except Exception:
        db.rollback()
        raise
    commit_or_conflict(db, duplicate_message=user_service.EMAIL_TAKEN_MESSAGE)

    logger.info("%s updated seller_id=%s", SELLER_PREFIX, seller.id)
    return Outcome.applied("Updated seller details successfully.")


def set_active(db: Session, seller_id: int, active: bool) -> Outcome:
    seller = get_by_id(db, seller_id)
    _ensure_seller_account(seller)

    user_service.set_active(seller.user, active)
    commit_or_conflict(db)

    logger.info("%s active=%s seller_id=%s", SELLER_PREFIX, active, seller.id)
    if active:
        return Outcome.applied("Activated seller successfully.")
    return Outcome.applied("Deactivated seller successfully.")


def seller_to_dict(seller: Seller) -> dict:
    return {
        "id": seller.id,
        "user_id": seller.user_id,
        "email": seller.user.email if seller.user else "",
        "first_name": seller.first_name,
        "last_name": seller.last_name,
        "contact_number": seller.contact_number,
        "address": seller.address,
        "active": seller.active,
        "created_at": seller.created_at.isoformat() if seller.created_at else None,
    }
