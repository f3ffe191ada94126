from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ecommerce_portal.core.database import get_db
from ecommerce_portal.deps import get_current_principal, require_admin
from ecommerce_portal.schemas.catalog import ShopCreate, ShopOut, ShopUpdate
from ecommerce_portal.services import shops as shop_service
from ecommerce_portal.services.auth import Principal
from ecommerce_portal.services.shops import shop_to_dict

router = APIRouter(prefix="/shop", tags=["shop"])


@router.get("/all", response_model=List[ShopOut])
def list_shops(
    db: Session = Depends(get_db),
    _principal: Principal = Depends(get_current_principal),
):
    return [shop_to_dict(shop) for shop in shop_service.list_all(db)]


@router.get("/{shop_id}", response_model=ShopOut)
def get_shop(
    shop_id: int,
    db: Session = Depends(get_db),
    _principal: Principal = Depends(get_current_principal),
):
    return shop_to_dict(shop_service.get_by_id(db, shop_id))


@router.post("/add")
def add_shop(
    payload: ShopCreate,
    db: Session = Depends(get_db),
    _admin: Principal = Depends(require_admin),
):
    return shop_service.create(db, payload).as_response()


@router.patch("/update/{shop_id}")
def update_shop(
    shop_id: int,
    payload: ShopUpdate,
    db: Session = Depends(get_db),
    _admin: Principal = Depends(require_admin),
):
    return shop_service.update(db, shop_id, payload).as_response()


@router.patch("/deactivate/{shop_id}")
def deactivate_shop(
    shop_id: int,
    db: Session = Depends(get_db),
    _admin: Principal = Depends(require_admin),
):
    return shop_service.set_active(db, shop_id, False).as_response()


@router.patch("/activate/{shop_id}")
def activate_shop(
    shop_id: int,
    db: Session = Depends(get_db),
    _admin: Principal = Depends(require_admin),
):
    return shop_service.set_active(db, shop_id, True).as_response()
