"""Product lifecycle.

Product rows and their images live in two independently failing systems:
the database and the object store. Storage calls happen before the commit,
and a failed commit triggers a compensating storage call that undoes
whatever was done to the bucket for that request.
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Callable, List, Optional

from fastapi import UploadFile
from sqlalchemy.orm import Session

from ecommerce_portal.core.config import LATEST_PRODUCTS_LIMIT
from ecommerce_portal.core.errors import InvalidInputError, NotFoundError, StorageError
from ecommerce_portal.models.category import Category
from ecommerce_portal.models.product import Product
from ecommerce_portal.models.shop import Shop
from ecommerce_portal.repositories import categories, products, shops
from ecommerce_portal.repositories.transaction import commit_or_conflict
from ecommerce_portal.schemas.product import ProductDetails
from ecommerce_portal.services import storage
from ecommerce_portal.services.results import Outcome

logger = logging.getLogger(__name__)
PRODUCT_PREFIX = "[PRODUCT]"
PRODUCT_IMAGE_CATEGORY = "products"


def list_all(db: Session) -> List[Product]:
    return products.list_all(db)


def list_latest(db: Session, limit: int = LATEST_PRODUCTS_LIMIT) -> List[Product]:
    return products.list_latest(db, limit)


def get_by_id(db: Session, product_id: int) -> Product:
    product = products.find_by_id(db, product_id)
    if product is None:
        raise NotFoundError("Product")
    return product


def _resolve_category(db: Session, category_id: Optional[int]) -> Category:
    category = categories.find_by_id(db, category_id)
    if category is None:
        raise NotFoundError("Category")
    return category


def _resolve_shop(db: Session, shop_id: Optional[int]) -> Shop:
    shop = shops.find_by_id(db, shop_id)
    if shop is None:
        raise NotFoundError("Shop")
    return shop


def _compensate(description: str, action: Callable, *args) -> None:
    try:
        action(*args)
    except StorageError:
        # The commit failure is what the caller sees; this one is only logged.
        logger.exception("%s compensation failed: %s", PRODUCT_PREFIX, description)
    else:
        logger.warning("%s compensated: %s", PRODUCT_PREFIX, description)


def _clear_image(db: Session, product_id: int) -> None:
    """Drop the image reference of a product whose stored object is already gone."""
    try:
        product = get_by_id(db, product_id)
        product.image_path = None
        product.image_name = None
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("%s could not clear image of product_id=%s", PRODUCT_PREFIX, product_id)
    else:
        logger.warning("%s cleared image of product_id=%s after a failed update", PRODUCT_PREFIX, product_id)


def create(db: Session, details: ProductDetails, file: Optional[UploadFile]) -> Outcome:
    if len(details.populated_fields()) <= 1:
        return Outcome.noop("No product details were provided.")

    category = _resolve_category(db, details.category_id)
    shop = _resolve_shop(db, details.shop_id)
    if not details.name:
        raise InvalidInputError("A product name is required.")
    if file is None:
        raise InvalidInputError("A product image is required.")

    key = storage.upload_file(file, shop.id, PRODUCT_IMAGE_CATEGORY)
    try:
        product = products.add(
            db,
            name=details.name.strip(),
            description=details.description,
            price=details.price if details.price is not None else Decimal("0"),
            quantity=details.quantity if details.quantity is not None else 0,
            category=category,
            shop=shop,
            image_name=storage.filename_from_key(key),
            image_path=key,
            active=True,
        )
        commit_or_conflict(db)
    except Exception:
        db.rollback()
        _compensate(f"remove orphaned upload {key}", storage.remove_file, key)
        raise

    logger.info("%s created product_id=%s shop_id=%s key=%s", PRODUCT_PREFIX, product.id, shop.id, key)
    return Outcome.applied("Created Product Successfully.")


def update(
    db: Session,
    product_id: int,
    details: ProductDetails,
    file: Optional[UploadFile] = None,
) -> Outcome:
    changes = details.populated_fields()
    if not changes and file is None:
        return Outcome.noop()

    category = _resolve_category(db, details.category_id) if details.category_id is not None else None
    shop = _resolve_shop(db, details.shop_id) if details.shop_id is not None else None
    product = get_by_id(db, product_id)

    current_shop_id = product.shop_id
    target_shop_id = shop.id if shop is not None else current_shop_id
    image_name = product.image_name
    new_key: Optional[str] = None
    relocated = False
    old_image_removed = False

    if file is not None:
        if product.image_path:
            storage.remove_file(product.image_path)
            old_image_removed = True
        try:
            new_key = storage.upload_file(file, target_shop_id, PRODUCT_IMAGE_CATEGORY)
        except StorageError:
            if old_image_removed:
                _clear_image(db, product_id)
            raise
    elif target_shop_id != current_shop_id and image_name:
        new_key = storage.rename_folder(PRODUCT_IMAGE_CATEGORY, current_shop_id, target_shop_id, image_name)
        relocated = True

    try:
        if "name" in changes:
            product.name = changes["name"].strip()
        for field in ("description", "price", "quantity"):
            if field in changes:
                setattr(product, field, changes[field])
        if category is not None:
            product.category = category
        if shop is not None:
            product.shop = shop
        if new_key is not None:
            product.image_path = new_key
            product.image_name = storage.filename_from_key(new_key)
        commit_or_conflict(db)
    except Exception:
        db.rollback()
        if relocated:
            _compensate(
                f"move {new_key} back to shop {current_shop_id}",
                storage.rename_folder,
                PRODUCT_IMAGE_CATEGORY,
                target_shop_id,
                current_shop_id,
                image_name,
            )
        elif new_key is not None:
            _compensate(f"remove orphaned upload {new_key}", storage.remove_file, new_key)
        if old_image_removed:
            _clear_image(db, product_id)
        raise

    logger.info(
        "%s updated product_id=%s shop_id=%s relocated=%s new_image=%s",
        PRODUCT_PREFIX,
        product_id,
        target_shop_id,
        relocated,
        file is not None,
    )
    return Outcome.applied("Updated product details successfully.")


def set_active(db: Session, product_id: int, active: bool) -> Outcome:
    product = get_by_id(db, product_id)
    product.active = active
    commit_or_conflict(db)

    logger.info("%s active=%s product_id=%s", PRODUCT_PREFIX, active, product.id)
    if active:
        return Outcome.applied("Activated product successfully.")
    return Outcome.applied("Deactivated product successfully.")


def product_to_dict(product: Product) -> dict:
    return {
        "id": product.id,
        "name": product.name,
        "description": product.description,
        "price": float(product.price) if product.price is not None else 0.0,
        "quantity": product.quantity,
        "image_name": product.image_name,
        "image_path": product.image_path,
        "image_url": storage.public_url(product.image_path),
        "active": product.active,
        "category_id": product.category_id,
        "category_name": product.category.name if product.category else None,
        "shop_id": product.shop_id,
        "shop_name": product.shop.name if product.shop else None,
        "created_at": product.created_at.isoformat() if product.created_at else None,
        "updated_at": product.updated_at.isoformat() if product.updated_at else None,
    }
