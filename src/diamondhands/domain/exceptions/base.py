"""
Base domain exceptions.
"""


class DiamondHandsException(Exception):
    """Base exception for all DiamondHands client errors."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class ValidationError(DiamondHandsException):
    """Raised when an argument fails local validation."""

    def __init__(self, field: str, reason: str):
        message = f"Validation failed for {field}: {reason}"
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field
        self.reason = reason
