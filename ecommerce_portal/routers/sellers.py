from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ecommerce_portal.core.database import get_db
from ecommerce_portal.deps import get_client_ip, get_current_principal, require_admin
from ecommerce_portal.schemas.seller import SellerCreatePayload, SellerOut, SellerUpdatePayload
from ecommerce_portal.services import sellers as seller_service
from ecommerce_portal.services.auth import Principal
from ecommerce_portal.services.sellers import seller_to_dict

router = APIRouter(prefix="/seller", tags=["seller"])


@router.get("/all", response_model=List[SellerOut])
def list_sellers(
    db: Session = Depends(get_db),
    _principal: Principal = Depends(get_current_principal),
):
    return [seller_to_dict(seller) for seller in seller_service.list_all(db)]


@router.get("/{seller_id}", response_model=SellerOut)
def get_seller(
    seller_id: int,
    db: Session = Depends(get_db),
    _principal: Principal = Depends(get_current_principal),
):
    return seller_to_dict(seller_service.get_by_id(db, seller_id))


@router.post("/add")
def add_seller(
    payload: SellerCreatePayload,
    request: Request,
    db: Session = Depends(get_db),
    _admin: Principal = Depends(require_admin),
):
    outcome = seller_service.create(
        db,
        payload.details,
        created_by_admin=True,
        ip_address=get_client_ip(request),
    )
    return outcome.as_response()


@router.post("/new")
def register_seller(
    payload: SellerCreatePayload,
    request: Request,
    db: Session = Depends(get_db),
):
    outcome = seller_service.create(
        db,
        payload.details,
        created_by_admin=False,
        ip_address=get_client_ip(request),
    )
    return outcome.as_response()


@router.patch("/update/{seller_id}")
def update_seller(
    seller_id: int,
    payload: SellerUpdatePayload,
    request: Request,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    seller_service.ensure_actor_can_edit(db, seller_id, principal)
    outcome = seller_service.update(
        db,
        seller_id,
        payload.details,
        ip_address=get_client_ip(request),
    )
    return outcome.as_response()


@router.patch("/deactivate/{seller_id}")
def deactivate_seller(
    seller_id: int,
    db: Session = Depends(get_db),
    _admin: Principal = Depends(require_admin),
):
    return seller_service.set_active(db, seller_id, False).as_response()


@router.patch("/activate/{seller_id}")
def activate_seller(
    seller_id: int,
    db: Session = Depends(get_db),
    _admin: Principal = Depends(require_admin),
):
    return seller_service.set_active(db, seller_id, True).as_response()
