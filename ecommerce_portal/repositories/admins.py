from __future__ import annotations

from typing import List, Optional

from sqlalchemy.orm import Session

from ecommerce_portal.models.admin import Admin
from ecommerce_portal.models.user import User


def list_all(db: Session) -> List[Admin]:
    return db.query(Admin).order_by(Admin.id.asc()).all()


def find_by_id(db: Session, admin_id: int) -> Optional[Admin]:
    return db.query(Admin).filter(Admin.id == admin_id).first()


def find_by_user_id(db: Session, user_id: int) -> Optional[Admin]:
    return db.query(Admin).filter(Admin.user_id == user_id).first()


def add(db: Session, *, user: User, first_name: str, last_name: str) -> Admin:
    admin = Admin(user=user, first_name=first_name, last_name=last_name)
    db.add(admin)
    db.flush()
    return admin
