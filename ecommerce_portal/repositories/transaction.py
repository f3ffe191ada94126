from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from ecommerce_portal.core.errors import ConflictError, ConflictReason

logger = logging.getLogger(__name__)

STALE_RECORD_MESSAGE = "The record was modified by another request. Please retry."


def commit_or_conflict(db: Session, *, duplicate_message: str = "The record already exists.") -> None:
    """Commit the session, turning concurrency and uniqueness failures into ``ConflictError``.

    The session is rolled back before the error propagates, so callers never
    see a half-applied unit of work.
    """
    try:
        db.commit()
    except StaleDataError as exc:
        db.rollback()
        logger.warning("Stale row detected on commit: %s", exc)
        raise ConflictError(STALE_RECORD_MESSAGE, reason=ConflictReason.STALE_RECORD) from exc
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Integrity violation on commit: %s", exc.orig)
        raise ConflictError(duplicate_message) from exc
    except Exception:
        db.rollback()
        raise
