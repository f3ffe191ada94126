# ecommerce_portal/routers/auth.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ecommerce_portal.core.database import get_db
from ecommerce_portal.core.errors import UnauthenticatedError
from ecommerce_portal.deps import get_current_principal
from ecommerce_portal.repositories import users
from ecommerce_portal.schemas.admin import LoginPayload, UserOut
from ecommerce_portal.services.auth import (
    Principal,
    clear_user_token_cookie,
    create_access_token,
    set_user_token_cookie,
    verify_password,
)
from ecommerce_portal.services.users import get_user, user_to_dict

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/login", response_model=UserOut)
def login(payload: LoginPayload, response: Response, db: Session = Depends(get_db)):
    user = users.find_by_email(db, payload.email)
    if not user or not verify_password(payload.password, user.password_hash):
        raise UnauthenticatedError("invalid credentials")
    if not user.active:
        raise UnauthenticatedError("inactive account")

    set_user_token_cookie(response, create_access_token(user))
    logger.info("[AUTH_COOKIE] issued user_token user_id=%s user_type=%s", user.id, user.user_type.value)
    return user_to_dict(user)


@router.post("/logout")
def logout(response: Response):
    clear_user_token_cookie(response)
    return {"message": "Logged out successfully."}


@router.get("/me", response_model=UserOut)
def me(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return user_to_dict(get_user(db, principal.user_id))
