from __future__ import annotations

from typing import List, Optional

from sqlalchemy.orm import Session

from ecommerce_portal.models.product import Product


def list_all(db: Session) -> List[Product]:
    return db.query(Product).order_by(Product.created_at.desc(), Product.id.desc()).all()


def list_latest(db: Session, limit: int) -> List[Product]:
    return (
        db.query(Product)
        .filter(Product.active.is_(True))
        .order_by(Product.created_at.desc(), Product.id.desc())
        .limit(limit)
        .all()
    )


def find_by_id(db: Session, product_id: int) -> Optional[Product]:
    return db.query(Product).filter(Product.id == product_id).first()


def add(db: Session, **fields) -> Product:
    product = Product(**fields)
    db.add(product)
    db.flush()
    return product
