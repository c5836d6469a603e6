"""
Shared failure responses for the list and CRUD endpoints.

Every failure is logged with an operation tag such as ``[location.update]``
and reaches the caller as a bare HTTP status: 204 when the entity is absent,
400 with a message when the database or a business rule rejects the request.
"""
import logging

from fastapi import HTTPException, Response, status
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

DB_ERROR = "Database error:"


def db_error(operation: str, err: Exception, context=None, db: Session = None) -> HTTPException:
    """Log a database failure, roll back the session and build the 400 response"""
    if db is not None:
        db.rollback()
    logger.error(f"[{operation}] {DB_ERROR} {context if context is not None else ''}", exc_info=err)
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=f"{DB_ERROR} {err}"
    )


def rule_error(operation: str, message: str) -> HTTPException:
    logger.warning(f"[{operation}] {message}")
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


def no_content(operation: str, message: str) -> Response:
    """204 response used for "not found" across the API"""
    logger.info(f"[{operation}] {message}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
