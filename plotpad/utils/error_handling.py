from fastapi import HTTPException
from typing import Optional

from ..exceptions import (
    SheetNotFoundError, SheetLockedError, SheetUnlockError,
    OpenAIRateLimitError, OpenAIAPIError, ConfigurationError
)
from ..vault import UnlockFailure


def handle_unlock_failure(failure: UnlockFailure) -> HTTPException:
    """Map an unlock failure to the HTTP error the user can act on."""
    if failure == UnlockFailure.RECORD_MISSING:
        return HTTPException(
            status_code=409,
            detail="Encryption metadata is missing; the sheet cannot be unlocked"
        )
    return HTTPException(
        status_code=403,
        detail="Wrong password"
    )


def handle_error(error: Exception) -> HTTPException:
    """Handle general application errors and return appropriate HTTP exceptions."""
    if isinstance(error, HTTPException):
        return error
    elif isinstance(error, SheetNotFoundError):
        return HTTPException(
            status_code=404,
            detail=str(error)
        )
    elif isinstance(error, SheetLockedError):
        return HTTPException(
            status_code=409,
            detail=str(error)
        )
    elif isinstance(error, SheetUnlockError):
        return handle_unlock_failure(error.failure)
    elif isinstance(error, OpenAIRateLimitError):
        return HTTPException(
            status_code=429,
            detail="Rate limit exceeded"
        )
    elif isinstance(error, OpenAIAPIError):
        return HTTPException(
            status_code=502,
            detail=f"Suggestion model error: {str(error)}"
        )
    elif isinstance(error, ConfigurationError):
        return HTTPException(
            status_code=500,
            detail=f"Configuration error: {str(error)}"
        )
    elif isinstance(error, ValueError):
        return HTTPException(
            status_code=422,
            detail=str(error)
        )
    else:
        return HTTPException(
            status_code=500,
            detail=f"Unexpected error: {str(error)}"
        )


def validate_csv(csv_text: Optional[str]) -> None:
    """Validate posted CSV text."""
    if not csv_text or not isinstance(csv_text, str) or not csv_text.strip():
        raise HTTPException(
            status_code=422,
            detail="CSV cannot be empty"
        )
