from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ecommerce_portal.core.database import get_db
from ecommerce_portal.deps import get_client_ip, require_admin
from ecommerce_portal.schemas.admin import AdminCreatePayload, AdminOut
from ecommerce_portal.services import admins as admin_service
from ecommerce_portal.services.admins import admin_to_dict
from ecommerce_portal.services.auth import Principal

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/all", response_model=List[AdminOut])
def list_admins(
    db: Session = Depends(get_db),
    _admin: Principal = Depends(require_admin),
):
    return [admin_to_dict(admin) for admin in admin_service.list_all(db)]


@router.get("/{admin_id}", response_model=AdminOut)
def get_admin(
    admin_id: int,
    db: Session = Depends(get_db),
    _admin: Principal = Depends(require_admin),
):
    return admin_to_dict(admin_service.get_by_id(db, admin_id))


@router.post("/add")
def add_admin(
    payload: AdminCreatePayload,
    request: Request,
    db: Session = Depends(get_db),
    _admin: Principal = Depends(require_admin),
):
    outcome = admin_service.create(db, payload.details, ip_address=get_client_ip(request))
    return outcome.as_response()


@router.patch("/deactivate/{admin_id}")
def deactivate_admin(
    admin_id: int,
    db: Session = Depends(get_db),
    admin: Principal = Depends(require_admin),
):
    return admin_service.set_active(db, admin_id, False, actor=admin).as_response()


@router.patch("/activate/{admin_id}")
def activate_admin(
    admin_id: int,
    db: Session = Depends(get_db),
    admin: Principal = Depends(require_admin),
):
    return admin_service.set_active(db, admin_id, True, actor=admin).as_response()
