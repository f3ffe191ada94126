from __future__ import annotations

import logging
from enum import Enum

from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INVALID_INPUT = "invalid_input"
    STORAGE = "storage"


class ConflictReason(str, Enum):
    EMAIL_TAKEN = "email_taken"
    PASSWORD_MISMATCH = "password_mismatch"
    DUPLICATE_NAME = "duplicate_name"
    STALE_RECORD = "stale_record"


ERROR_STATUS_CODES = {
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.STORAGE: status.HTTP_502_BAD_GATEWAY,
}


class DomainError(Exception):
    """Base for every failure a domain service reports to the HTTP boundary."""

    kind: ErrorKind = ErrorKind.INVALID_INPUT

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnauthenticatedError(DomainError):
    kind = ErrorKind.UNAUTHENTICATED
    public_message = "Unauthorized"

    def __init__(self, reason: str = "invalid session") -> None:
        super().__init__(self.public_message)
        self.reason = reason


class ForbiddenError(DomainError):
    kind = ErrorKind.FORBIDDEN

    def __init__(self, message: str = "You are not allowed to perform this action.") -> None:
        super().__init__(message)


class NotFoundError(DomainError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: str, message: str | None = None) -> None:
        super().__init__(message or f"No {entity} Found.")
        self.entity = entity


class ConflictError(DomainError):
    kind = ErrorKind.CONFLICT

    def __init__(self, message: str, reason: ConflictReason | None = None) -> None:
        super().__init__(message)
        self.reason = reason


class InvalidInputError(DomainError):
    kind = ErrorKind.INVALID_INPUT


class StorageError(DomainError):
    kind = ErrorKind.STORAGE


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    if isinstance(exc, UnauthenticatedError):
        logger.info(
            "Unauthenticated request rejected (%s): endpoint=%s %s",
            exc.reason,
            request.method,
            request.url.path,
        )
    body = {"detail": exc.message, "kind": exc.kind.value}
    reason = getattr(exc, "reason", None)
    if isinstance(reason, ConflictReason):
        body["reason"] = reason.value
    return JSONResponse(status_code=ERROR_STATUS_CODES[exc.kind], content=body)
