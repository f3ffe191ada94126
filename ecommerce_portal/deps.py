# ecommerce_portal/deps.py
from __future__ import annotations

import logging
from typing import Iterable

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ecommerce_portal.core.database import get_db
from ecommerce_portal.core.errors import ForbiddenError, UnauthenticatedError
from ecommerce_portal.core.request_context import set_request_context
from ecommerce_portal.models.user import UserType
from ecommerce_portal.repositories import users
from ecommerce_portal.services.auth import Principal, authenticate

logger = logging.getLogger(__name__)


def get_current_principal(request: Request, db: Session = Depends(get_db)) -> Principal:
    """Verify the ``user_token`` cookie against an active user and expose the principal.

    Runs before the handler body, so a rejected token never reaches a service.
    A user deactivated after login loses access on its next request.
    """
    claims = authenticate(request)
    user = users.find_active_by_id(db, claims.user_id)
    if user is None:
        raise UnauthenticatedError("inactive account")

    principal = Principal(user_id=user.id, email=user.email, user_type=UserType(user.user_type))
    request.state.principal = principal
    set_request_context(user_id=str(principal.user_id), user_type=principal.user_type.value)
    return principal


def _log_access_denied(*, reason: str, principal: Principal, request: Request) -> None:
    logger.warning(
        "Access denied (%s): user_id=%s user_type=%s endpoint=%s %s",
        reason,
        principal.user_id,
        principal.user_type.value,
        request.method,
        request.url.path,
    )


def require_user_type(user_types: Iterable[UserType]):
    allowed = {UserType(user_type) for user_type in user_types}

    def _dependency(
        request: Request,
        principal: Principal = Depends(get_current_principal),
    ) -> Principal:
        if principal.user_type not in allowed:
            _log_access_denied(reason="user_type_denied", principal=principal, request=request)
            raise ForbiddenError("Insufficient permissions.")
        return principal

    return _dependency


require_admin = require_user_type([UserType.ADMIN])


def get_client_ip(request: Request) -> str | None:
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip() or None
    return request.client.host if request.client else None
