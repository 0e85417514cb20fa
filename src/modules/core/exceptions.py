"""Cross-cutting error outcomes and their HTTP translation.

Handlers either return a successful ``Response`` or raise one of:

- ``ValidationFailed``: input rejected before the handler ran (400).
- ``ResourceNotFound``: the addressed entity does not exist (404).
- ``PersistenceError``: the data layer failed (503).

``api_exception_handler`` is the single place these outcomes become
HTTP status codes and bodies.  It is installed as DRF's
``EXCEPTION_HANDLER``; anything it does not recognise falls through to
DRF's default handler.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

import structlog
from django.db import DatabaseError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = structlog.get_logger(__name__)

PERSISTENCE_ERROR_MESSAGE = "Database unavailable"


class ResourceNotFound(Exception):
    """The addressed entity does not exist."""

    default_message = "Not found"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)


class ValidationFailed(Exception):
    """One or more validation rules failed.

    ``errors`` is a list of ``{"field": ..., "message": ...}`` items in
    the order the rules were evaluated.
    """

    def __init__(self, errors: List[Dict[str, str]]) -> None:
        super().__init__(f"{len(errors)} validation error(s)")
        self.errors = errors


class PersistenceError(Exception):
    """A database operation failed."""


@contextmanager
def persistence_errors(operation: str, **context: Any) -> Iterator[None]:
    """Translate ``DatabaseError`` raised inside the block into ``PersistenceError``."""
    try:
        yield
    except DatabaseError as exc:
        logger.error(
            "persistence.operation_failed",
            operation=operation,
            error=str(exc),
            **context,
        )
        raise PersistenceError(f"{operation} failed") from exc


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    if isinstance(exc, ValidationFailed):
        return Response({"errors": exc.errors}, status=status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, ResourceNotFound):
        return Response({"error": str(exc)}, status=status.HTTP_404_NOT_FOUND)

    if isinstance(exc, (PersistenceError, DatabaseError)):
        if isinstance(exc, DatabaseError):
            logger.error("persistence.unhandled_database_error", error=str(exc))
        return Response(
            {"error": PERSISTENCE_ERROR_MESSAGE},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    return drf_exception_handler(exc, context)


class InvalidReadinessTransition(Exception):
    """A readiness state change outside ``VALID_TRANSITIONS`` was attempted."""
