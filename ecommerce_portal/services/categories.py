from __future__ import annotations

import logging
from typing import List

from sqlalchemy.orm import Session

from ecommerce_portal.core.errors import ConflictError, ConflictReason, NotFoundError
from ecommerce_portal.models.category import Category
from ecommerce_portal.repositories import categories
from ecommerce_portal.repositories.transaction import commit_or_conflict
from ecommerce_portal.schemas.catalog import CategoryCreate, CategoryUpdate
from ecommerce_portal.services.results import Outcome

logger = logging.getLogger(__name__)

DUPLICATE_CATEGORY_MESSAGE = "A category with that name already exists."


def list_all(db: Session) -> List[Category]:
    return categories.list_all(db)


def get_by_id(db: Session, category_id: int) -> Category:
    category = categories.find_by_id(db, category_id)
    if category is None:
        raise NotFoundError("Category")
    return category


def _ensure_name_available(db: Session, name: str, *, exclude_id: int | None = None) -> None:
    existing = categories.find_by_name(db, name)
    if existing is not None and existing.id != exclude_id:
        raise ConflictError(DUPLICATE_CATEGORY_MESSAGE, reason=ConflictReason.DUPLICATE_NAME)


def create(db: Session, details: CategoryCreate) -> Outcome:
    name = details.name.strip()
    _ensure_name_available(db, name)
    category = categories.add(db, name=name, description=details.description)
    commit_or_conflict(db, duplicate_message=DUPLICATE_CATEGORY_MESSAGE)
    logger.info("Category created category_id=%s", category.id)
    return Outcome.applied("Created Category Successfully.")


def update(db: Session, category_id: int, details: CategoryUpdate) -> Outcome:
    changes = details.model_dump(exclude_unset=True)
    if not changes:
        return Outcome.noop()

    category = get_by_id(db, category_id)
    if changes.get("name") is not None:
        name = changes["name"].strip()
        _ensure_name_available(db, name, exclude_id=category.id)
        category.name = name
    if "description" in changes:
        category.description = changes["description"]

    commit_or_conflict(db, duplicate_message=DUPLICATE_CATEGORY_MESSAGE)
    return Outcome.applied("Updated category details successfully.")


def set_active(db: Session, category_id: int, active: bool) -> Outcome:
    category = get_by_id(db, category_id)
    category.active = active
    commit_or_conflict(db)
    if active:
        return Outcome.applied("Activated category successfully.")
    return Outcome.applied("Deactivated category successfully.")


def category_to_dict(category: Category) -> dict:
    return {
        "id": category.id,
        "name": category.name,
        "description": category.description,
        "active": category.active,
        "created_at": category.created_at.isoformat() if category.created_at else None,
        "updated_at": category.updated_at.isoformat() if category.updated_at else None,
    }
