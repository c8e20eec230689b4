import pytest
from fastapi import HTTPException

from plotpad.exceptions import (
    SheetNotFoundError, SheetLockedError, SheetUnlockError,
    OpenAIRateLimitError, OpenAIAPIError, ConfigurationError
)
from plotpad.utils import handle_error, handle_unlock_failure, validate_csv
from plotpad.vault import UnlockFailure


@pytest.mark.parametrize("error,status_code", [
    (SheetNotFoundError(3), 404),
    (SheetLockedError(3), 409),
    (SheetUnlockError(3, UnlockFailure.WRONG_PASSWORD_OR_CORRUPT), 403),
    (SheetUnlockError(3, UnlockFailure.RECORD_MISSING), 409),
    (OpenAIRateLimitError("slow down"), 429),
    (OpenAIAPIError("bad gateway"), 502),
    (ConfigurationError("no key"), 500),
    (ValueError("Password cannot be empty"), 422),
    (RuntimeError("boom"), 500),
])
def test_handle_error_status_codes(error, status_code):
    assert handle_error(error).status_code == status_code


def test_http_exceptions_pass_through():
    error = HTTPException(status_code=418, detail="teapot")
    assert handle_error(error) is error


def test_unlock_failure_detail():
    assert handle_unlock_failure(UnlockFailure.WRONG_PASSWORD_OR_CORRUPT).detail == "Wrong password"


@pytest.mark.parametrize("csv_text", [None, "", "   \n"])
def test_validate_csv_rejects_blank(csv_text):
    with pytest.raises(HTTPException) as exc_info:
        validate_csv(csv_text)
    assert exc_info.value.status_code == 422


def test_validate_csv_accepts_text():
    validate_csv("a,b\n1,2")
