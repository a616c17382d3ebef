# path: sheet_publisher/infra/exceptions.py
"""
Exceptions - Custom exception classes for the publisher.
"""

from typing import Optional, Dict, Any


class PublisherError(Exception):
    """
    Base exception for all publisher errors.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "UNKNOWN_ERROR"
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ConfigurationError(PublisherError):
    """
    Raised when there is a configuration problem.
    """

    def __init__(
        self,
        message: str,
        missing_keys: Optional[list] = None
    ):
        super().__init__(
            message=message,
            code="CONFIGURATION_ERROR",
            details={"missing_keys": missing_keys or []}
        )


class SheetsError(PublisherError):
    """
    Raised when there is a Google Sheets API error.
    """

    def __init__(
        self,
        message: str,
        spreadsheet_id: Optional[str] = None,
        operation: Optional[str] = None
    ):
        super().__init__(
            message=message,
            code="SHEETS_ERROR",
            details={
                "spreadsheet_id": spreadsheet_id,
                "operation": operation
            }
        )


class SheetNotFoundError(SheetsError):
    """
    Raised when a spreadsheet or sheet is not found.
    """

    def __init__(
        self,
        message: str,
        spreadsheet_id: Optional[str] = None,
        sheet_name: Optional[str] = None
    ):
        super().__init__(
            message=message,
            spreadsheet_id=spreadsheet_id,
            operation="get"
        )
        self.code = "SHEET_NOT_FOUND"
        self.details["sheet_name"] = sheet_name


class ValidationError(PublisherError):
    """
    Raised when input validation fails.
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None
    ):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "value": str(value) if value is not None else None
            }
        )


def handle_exception(error: Exception) -> Dict[str, Any]:
    """
    Convert any exception to a standardized error response.

    Args:
        error: The exception to handle

    Returns:
        Error dictionary
    """
    if isinstance(error, PublisherError):
        return error.to_dict()

    return {
        "error": "INTERNAL_ERROR",
        "message": str(error),
        "details": {
            "type": type(error).__name__
        }
    }


def get_user_friendly_message(error: Exception) -> str:
    """
    Get a user-friendly error message.

    Args:
        error: The exception

    Returns:
        Message suitable for an alert
    """
    messages = {
        "CONFIGURATION_ERROR": "The publisher is not configured correctly.",
        "SHEETS_ERROR": "Could not access the spreadsheet. Please try again.",
        "SHEET_NOT_FOUND": "Spreadsheet or sheet not found.",
        "VALIDATION_ERROR": "The given value is not valid.",
        "INTERNAL_ERROR": "An internal error occurred. Please try again."
    }

    if isinstance(error, PublisherError):
        base = messages.get(error.code, messages["INTERNAL_ERROR"])
        return f"{base}\n{error.message}"

    return messages["INTERNAL_ERROR"]
