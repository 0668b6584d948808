from typing import Any, Dict, Optional, Type

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.logging import configure_logger

logger = configure_logger("core.exceptions")


class MarketplaceError(Exception):
    """Base exception for rejected marketplace operations."""

    default_message = "Request could not be processed."

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(MarketplaceError):
    """Raised when a referenced entity does not exist."""

    default_message = "Not found."


class ForbiddenError(MarketplaceError):
    """Raised when the caller lacks the ownership or role the action needs."""

    default_message = "Access denied."


class BadRequestError(MarketplaceError):
    """Raised when a value or state transition violates an invariant."""

    default_message = "Bad request."


_STATUS_CODES: Dict[Type[MarketplaceError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    BadRequestError: status.HTTP_400_BAD_REQUEST,
}


def marketplace_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    """Translate domain errors to HTTP responses; defer everything else to DRF."""

    if isinstance(exc, MarketplaceError):
        status_code = next(
            (code for exc_cls, code in _STATUS_CODES.items() if isinstance(exc, exc_cls)),
            status.HTTP_400_BAD_REQUEST,
        )
        view = context.get("view")
        logger.info(
            "Rejected %s: %s (%s)",
            view.__class__.__name__ if view is not None else "request",
            exc.message,
            status_code,
        )
        return Response({"detail": exc.message}, status=status_code)

    return exception_handler(exc, context)
