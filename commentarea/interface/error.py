"""Translation of domain errors into HTTP errors."""

import logfire
from fastapi import HTTPException, status

from commentarea.domain.error import (
    BusinessRuleViolationError,
    DomainError,
    NotFoundError,
    ValidationError,
)


def to_http_exception(error: DomainError, action: str) -> HTTPException:
    """Map a domain error raised while performing ``action`` to an HTTP error.

    Args:
        error: Error raised by a use case
        action: Short description for the log, e.g. "create comment"

    Returns:
        The exception the route should raise
    """
    if isinstance(error, NotFoundError):
        logfire.warn(f"Failed to {action} - not found", error=str(error))
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(error),
        )
    if isinstance(error, ValidationError):
        logfire.warn(
            f"Failed to {action} - invalid input", field_errors=error.field_errors
        )
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": "Validation failed", "errors": error.field_errors},
        )
    if isinstance(error, BusinessRuleViolationError):
        logfire.warn(f"Failed to {action} - rule violated", reason=error.reason)
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error.reason,
        )
    logfire.error(f"Unexpected domain error during {action}", error=str(error))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}",
    )
