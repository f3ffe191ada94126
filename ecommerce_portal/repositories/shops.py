from __future__ import annotations

from typing import List, Optional

from sqlalchemy.orm import Session

from ecommerce_portal.models.shop import Shop


def list_all(db: Session) -> List[Shop]:
    return db.query(Shop).order_by(Shop.name.asc(), Shop.id.asc()).all()


def find_by_id(db: Session, shop_id: int | None) -> Optional[Shop]:
    if shop_id is None:
        return None
    return db.query(Shop).filter(Shop.id == shop_id).first()


def add(db: Session, *, seller_id: int, name: str, description: str | None = None) -> Shop:
    shop = Shop(seller_id=seller_id, name=name, description=description, active=True)
    db.add(shop)
    db.flush()
    return shop
