from __future__ import annotations

from contextvars import ContextVar


_REQUEST_ID_CTX: ContextVar[str | None] = ContextVar("request_id", default=None)
_USER_ID_CTX: ContextVar[str | None] = ContextVar("user_id", default=None)
_USER_TYPE_CTX: ContextVar[str | None] = ContextVar("user_type", default=None)


def set_request_context(
    *,
    request_id: str | None = None,
    user_id: str | None = None,
    user_type: str | None = None,
) -> None:
    if request_id is not None:
        _REQUEST_ID_CTX.set(request_id)
    if user_id is not None:
        _USER_ID_CTX.set(user_id)
    if user_type is not None:
        _USER_TYPE_CTX.set(user_type)


def get_request_id() -> str | None:
    return _REQUEST_ID_CTX.get()


def get_user_id() -> str | None:
    return _USER_ID_CTX.get()


def get_user_type() -> str | None:
    """``admin`` / ``seller`` / ``buyer`` of the verified principal, if any."""
    return _USER_TYPE_CTX.get()


def request_context_snapshot() -> dict[str, str | None]:
    return {
        "request_id": get_request_id(),
        "user_id": get_user_id(),
        "user_type": get_user_type(),
    }


def clear_request_context() -> None:
    _REQUEST_ID_CTX.set(None)
    _USER_ID_CTX.set(None)
    _USER_TYPE_CTX.set(None)
