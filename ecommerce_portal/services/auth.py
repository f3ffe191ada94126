from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
from fastapi import Request, Response
from jose import JWTError, jwt

from ecommerce_portal.core import config
from ecommerce_portal.core.errors import UnauthenticatedError
from ecommerce_portal.models.user import User, UserType


@dataclass(frozen=True)
class Principal:
    user_id: int
    email: str
    user_type: UserType


# =========================
# PASSWORD (bcrypt directly, no passlib)
# =========================
def _normalize_password_for_bcrypt(password: str) -> bytes:
    """
    bcrypt only considers the first 72 bytes and bcrypt>=4.1 raises past that,
    so longer passwords are truncated before hashing and verifying.
    """
    pw = (password or "").encode("utf-8")
    return pw[:72]


def hash_password(password: str) -> str:
    hashed = bcrypt.hashpw(_normalize_password_for_bcrypt(password), bcrypt.gensalt())
    return hashed.decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(
            _normalize_password_for_bcrypt(plain_password),
            password_hash.encode("utf-8"),
        )
    except ValueError:
        # malformed hash in the database
        return False


# =========================
# JWT HELPERS
# =========================
def _secret() -> str:
    if not config.JWT_SECRET_KEY:
        raise RuntimeError("JWT_SECRET_KEY is not configured.")
    return config.JWT_SECRET_KEY


def create_access_token(
    user: User,
    extra: Optional[Dict[str, Any]] = None,
    expires_minutes: int | None = None,
) -> str:
    """
    "sub" must be a string for python-jose. The email and user type travel
    alongside it, the gate still confirms the account is active on each request.
    """
    now = datetime.now(timezone.utc)
    exp = now + timedelta(minutes=expires_minutes or config.JWT_EXPIRE_MINUTES)

    payload: Dict[str, Any] = {
        "sub": str(user.id),
        "email": user.email,
        "user_type": UserType(user.user_type).value,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    if extra:
        payload.update(extra)

    return jwt.encode(payload, _secret(), algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Return the verified payload or raise ``UnauthenticatedError``."""
    if not token:
        raise UnauthenticatedError("missing token")
    try:
        return jwt.decode(token, _secret(), algorithms=[config.JWT_ALGORITHM])
    except JWTError as exc:
        raise UnauthenticatedError(f"token rejected: {exc.__class__.__name__}") from exc


def principal_from_payload(payload: Dict[str, Any]) -> Principal:
    raw_user_id = str(payload.get("sub") or "").strip()
    if not raw_user_id.isdigit():
        raise UnauthenticatedError("token without subject")
    try:
        user_type = UserType(payload.get("user_type"))
    except ValueError as exc:
        raise UnauthenticatedError("token without user type") from exc
    return Principal(
        user_id=int(raw_user_id),
        email=str(payload.get("email") or ""),
        user_type=user_type,
    )


def authenticate(request: Request) -> Principal:
    token = request.cookies.get(config.USER_TOKEN_COOKIE)
    if not token:
        raise UnauthenticatedError("missing cookie")
    return principal_from_payload(decode_access_token(token))


# =========================
# COOKIE HELPERS
# =========================
def build_user_token_cookie_options() -> dict[str, Any]:
    secure = config.USER_TOKEN_COOKIE_SECURE
    samesite = config.USER_TOKEN_COOKIE_SAMESITE
    # Browsers reject SameSite=None without Secure
    if samesite == "none" and not secure:
        samesite = "lax"
    return {
        "domain": config.USER_TOKEN_COOKIE_DOMAIN,
        "httponly": True,
        "samesite": samesite,
        "path": "/",
        "secure": secure,
    }


def set_user_token_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=config.USER_TOKEN_COOKIE,
        value=token,
        max_age=config.JWT_EXPIRE_MINUTES * 60,
        **build_user_token_cookie_options(),
    )


def clear_user_token_cookie(response: Response) -> None:
    response.delete_cookie(key=config.USER_TOKEN_COOKIE, **build_user_token_cookie_options())
