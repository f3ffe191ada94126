from __future__ import annotations

import logging
from typing import List

from sqlalchemy.orm import Session

from ecommerce_portal.core.errors import NotFoundError
from ecommerce_portal.models.shop import Shop
from ecommerce_portal.repositories import sellers, shops
from ecommerce_portal.repositories.transaction import commit_or_conflict
from ecommerce_portal.schemas.catalog import ShopCreate, ShopUpdate
from ecommerce_portal.services.results import Outcome

logger = logging.getLogger(__name__)


def list_all(db: Session) -> List[Shop]:
    return shops.list_all(db)


def get_by_id(db: Session, shop_id: int) -> Shop:
    shop = shops.find_by_id(db, shop_id)
    if shop is None:
        raise NotFoundError("Shop")
    return shop


def _ensure_seller_exists(db: Session, seller_id: int) -> None:
    if sellers.find_by_id(db, seller_id) is None:
        raise NotFoundError("Seller")


def create(db: Session, details: ShopCreate) -> Outcome:
    _ensure_seller_exists(db, details.seller_id)
    shop = shops.add(
        db,
        seller_id=details.seller_id,
        name=details.name.strip(),
        description=details.description,
    )
    commit_or_conflict(db)
    logger.info("Shop created shop_id=%s seller_id=%s", shop.id, shop.seller_id)
    return Outcome.applied("Created Shop Successfully.")


def update(db: Session, shop_id: int, details: ShopUpdate) -> Outcome:
    changes = details.model_dump(exclude_unset=True)
    if not changes:
        return Outcome.noop()

    shop = get_by_id(db, shop_id)
    if changes.get("seller_id") is not None:
        _ensure_seller_exists(db, changes["seller_id"])
        shop.seller_id = changes["seller_id"]
    if changes.get("name") is not None:
        shop.name = changes["name"].strip()
    if "description" in changes:
        shop.description = changes["description"]

    commit_or_conflict(db)
    return Outcome.applied("Updated shop details successfully.")


def set_active(db: Session, shop_id: int, active: bool) -> Outcome:
    shop = get_by_id(db, shop_id)
    shop.active = active
    commit_or_conflict(db)
    if active:
        return Outcome.applied("Activated shop successfully.")
    return Outcome.applied("Deactivated shop successfully.")


def shop_to_dict(shop: Shop) -> dict:
    return {
        "id": shop.id,
        "seller_id": shop.seller_id,
        "name": shop.name,
        "description": shop.description,
        "active": shop.active,
        "created_at": shop.created_at.isoformat() if shop.created_at else None,
        "updated_at": shop.updated_at.isoformat() if shop.updated_at else None,
    }
