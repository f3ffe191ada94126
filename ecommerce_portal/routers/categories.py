from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ecommerce_portal.core.database import get_db
from ecommerce_portal.deps import get_current_principal, require_admin
from ecommerce_portal.schemas.catalog import CategoryCreate, CategoryOut, CategoryUpdate
from ecommerce_portal.services import categories as category_service
from ecommerce_portal.services.auth import Principal
from ecommerce_portal.services.categories import category_to_dict

router = APIRouter(prefix="/category", tags=["category"])


@router.get("/all", response_model=List[CategoryOut])
def list_categories(
    db: Session = Depends(get_db),
    _principal: Principal = Depends(get_current_principal),
):
    return [category_to_dict(category) for category in category_service.list_all(db)]


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(
    category_id: int,
    db: Session = Depends(get_db),
    _principal: Principal = Depends(get_current_principal),
):
    return category_to_dict(category_service.get_by_id(db, category_id))


@router.post("/add")
def add_category(
    payload: CategoryCreate,
    db: Session = Depends(get_db),
    _admin: Principal = Depends(require_admin),
):
    return category_service.create(db, payload).as_response()


@router.patch("/update/{category_id}")
def update_category(
    category_id: int,
    payload: CategoryUpdate,
    db: Session = Depends(get_db),
    _admin: Principal = Depends(require_admin),
):
    return category_service.update(db, category_id, payload).as_response()


@router.patch("/deactivate/{category_id}")
def deactivate_category(
    category_id: int,
    db: Session = Depends(get_db),
    _admin: Principal = Depends(require_admin),
):
    return category_service.set_active(db, category_id, False).as_response()


@router.patch("/activate/{category_id}")
def activate_category(
    category_id: int,
    db: Session = Depends(get_db),
    _admin: Principal = Depends(require_admin),
):
    return category_service.set_active(db, category_id, True).as_response()
