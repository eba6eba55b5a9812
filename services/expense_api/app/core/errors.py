"""
Error types raised at the service boundary.

Every error carries the HTTP status it maps to; main.py renders them as
{"error": "<message>"}.
"""


class ExpenseAPIError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingPrincipal(ExpenseAPIError):
    """No authenticated owner could be resolved from the request."""
    status_code = 401


class MalformedInput(ExpenseAPIError):
    """Request payload is missing required fields or has invalid values."""
    status_code = 400


class MalformedDate(ExpenseAPIError):
    """Day argument is missing or not a YYYY-MM-DD calendar date."""
    status_code = 400


class StorageFailure(ExpenseAPIError):
    status_code = 500
