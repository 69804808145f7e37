"""Custom exception classes."""

from typing import Any, Dict, Optional


class OperandDemoError(Exception):
    """Base exception for the Operand demo programs."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class IndexingError(OperandDemoError):
    """Operand object creation or indexing failure."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, status_code=500, details=details)


class SearchError(OperandDemoError):
    """Operand semantic search failure."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, status_code=500, details=details)


class StorageError(OperandDemoError):
    """Object storage (S3) error."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, status_code=500, details=details)


class CompletionError(OperandDemoError):
    """Completion model error."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, status_code=500, details=details)
