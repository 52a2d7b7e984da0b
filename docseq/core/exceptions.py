from typing import Any, Optional


class SequenceError(Exception):
    """Base exception for the sequence plugin"""
    def __init__(
        self,
        message: str,
        error_code: str = "SEQUENCE_ERROR",
        details: Optional[Any] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details
        super().__init__(message)


class ConfigError(SequenceError):
    """Raised when registration options are invalid"""
    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(
            message=f"Sequence plugin: {message}",
            error_code="CONFIG_ERROR",
            details=details
        )


class StoreError(SequenceError):
    """Raised when the counter store fails"""
    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(
            message=message,
            error_code="STORE_ERROR",
            details=details
        )
