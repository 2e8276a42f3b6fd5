"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
The note store raises these; transports translate them to status codes.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Raised when a referenced note does not exist."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class ValidationError(ApplicationError):
    """Raised when an argument fails a domain constraint."""

    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message, code="VAL_VALIDATION_ERROR")


class IdentifierExhaustedError(ApplicationError):
    """Raised when no unused note identifier was found within the attempt budget."""

    def __init__(self, message: str = "Could not allocate a note identifier") -> None:
        super().__init__(message, code="RES_ID_EXHAUSTED")
