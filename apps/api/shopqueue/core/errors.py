"""
Centralized mapping of data-store failures to HTTP errors.
Routes call commit_or_raise() so a rejected write is never swallowed.
"""
from __future__ import annotations

import logging

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

STATUS_CONFLICT = 409  # constraint/exclusion violation, e.g. overlapping booking
STATUS_INTERNAL_ERROR = 500


def store_message(exc: Exception) -> str:
    """Best available message from a DBAPI error (the driver's text, not SQLAlchemy's wrapper)."""
    orig = getattr(exc, "orig", None)
    msg = str(orig) if orig is not None else str(exc)
    return msg.strip() or exc.__class__.__name__


def store_error_to_http(exc: SQLAlchemyError, action: str) -> HTTPException:
    if isinstance(exc, IntegrityError):
        return HTTPException(status_code=STATUS_CONFLICT, detail=f"{action} rejected: {store_message(exc)}")
    return HTTPException(status_code=STATUS_INTERNAL_ERROR, detail=f"{action} failed: {store_message(exc)}")


def commit_or_raise(db: Session, action: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        if isinstance(e, IntegrityError):
            logger.warning("%s rejected by store: %s", action, store_message(e))
        else:
            logger.exception("%s failed", action)
        raise store_error_to_http(e, action)
