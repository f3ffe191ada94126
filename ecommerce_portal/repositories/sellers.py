from __future__ import annotations

from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ecommerce_portal.models.seller import Seller
from ecommerce_portal.models.user import User


def list_all(db: Session) -> List[Seller]:
    return db.query(Seller).order_by(Seller.id.asc()).all()


def find_by_id(db: Session, seller_id: int) -> Optional[Seller]:
    return db.query(Seller).filter(Seller.id == seller_id).first()


def find_by_email(db: Session, email: str) -> Optional[Seller]:
    normalized = (email or "").strip().lower()
    if not normalized:
        return None
    return (
        db.query(Seller)
        .join(User, Seller.user_id == User.id)
        .filter(func.lower(User.email) == normalized)
        .first()
    )


def add(
    db: Session,
    *,
    user: User,
    first_name: str,
    last_name: str,
    contact_number: str | None = None,
    address: str | None = None,
) -> Seller:
    seller = Seller(
        user=user,
        first_name=first_name,
        last_name=last_name,
        contact_number=contact_number,
        address=address,
    )
    db.add(seller)
    db.flush()
    return seller
