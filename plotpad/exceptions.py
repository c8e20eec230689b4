"""Custom exceptions for the plotpad application."""

class OpenAIRateLimitError(Exception):
    """Raised when the suggestion model's API rate limit is exceeded."""
    pass

class OpenAIAPIError(Exception):
    """Raised when the suggestion model's API returns an error."""
    pass

class ConfigurationError(Exception):
    """Raised when there is a configuration error."""
    pass

class SheetNotFoundError(Exception):
    """Raised when a sheet id does not resolve to a stored sheet."""

    def __init__(self, sheet_id: int):
        super().__init__(f"Sheet {sheet_id} not found")
        self.sheet_id = sheet_id

class SheetUnlockError(Exception):
    """Raised by sheet operations that need the plaintext when unlocking fails."""

    def __init__(self, sheet_id: int, failure):
        super().__init__(f"Cannot unlock sheet {sheet_id}: {failure.value}")
        self.sheet_id = sheet_id
        self.failure = failure

class SheetLockedError(Exception):
    """Raised when plain content edits are attempted on an encrypted sheet."""

    def __init__(self, sheet_id: int):
        super().__init__(f"Sheet {sheet_id} is encrypted; content can only change by re-locking")
        self.sheet_id = sheet_id
