"""
Custom exceptions for the Competitive Content Intelligence Engine.

This module defines application-specific exceptions with proper error handling
and HTTP status code mapping for API responses.
"""

from typing import Any, Dict, Optional


class CompetitorIntelException(Exception):
    """Base exception for the competitive intelligence application."""

    def __init__(
        self,
        message: str,
        error_code: str = "GENERAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)


class ValidationError(CompetitorIntelException):
    """Raised when input validation fails."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            details=details,
            status_code=400
        )


class UnsupportedModeError(CompetitorIntelException):
    """Raised when an analysis mode outside the closed set is requested."""

    def __init__(self, mode: Any):
        super().__init__(
            message=f"Unsupported analysis type: {mode}",
            error_code="UNSUPPORTED_MODE",
            details={"mode": str(mode)},
            status_code=400
        )


class InsufficientDataError(CompetitorIntelException):
    """Raised when the competitor corpus is missing (or empty where it must not be)."""

    def __init__(self, message: str = "Competitor content is required for analysis", mode: Optional[str] = None):
        super().__init__(
            message=message,
            error_code="INSUFFICIENT_DATA",
            details={"mode": mode} if mode else {},
            status_code=422
        )


class MissingUserCorpusError(CompetitorIntelException):
    """Raised when gap or comprehensive analysis is requested without user content."""

    def __init__(self, mode: str):
        super().__init__(
            message=f"User content is required for '{mode}' analysis",
            error_code="MISSING_USER_CORPUS",
            details={"mode": mode},
            status_code=422
        )


class MalformedContentItemError(CompetitorIntelException):
    """Raised by the normalizer for a record it cannot read; always recovered locally."""

    def __init__(self, message: str, index: Optional[int] = None):
        super().__init__(
            message=f"Malformed content item: {message}",
            error_code="MALFORMED_CONTENT_ITEM",
            details={"index": index},
            status_code=400
        )


class AnalysisTimeoutError(CompetitorIntelException):
    """Raised when an analysis exceeds its wall-clock budget."""

    def __init__(self, mode: str, timeout_seconds: float):
        super().__init__(
            message=f"Analysis '{mode}' exceeded {timeout_seconds}s budget",
            error_code="ANALYSIS_TIMEOUT",
            details={"mode": mode, "timeout_seconds": timeout_seconds},
            status_code=504
        )


class NotFoundError(CompetitorIntelException):
    """Raised when a resource is not found."""

    def __init__(self, resource: str, identifier: str):
        message = f"{resource} with identifier '{identifier}' not found"
        super().__init__(
            message=message,
            error_code="NOT_FOUND_ERROR",
            details={"resource": resource, "identifier": identifier},
            status_code=404
        )


class StorageError(CompetitorIntelException):
    """Raised when storage operations fail."""

    def __init__(self, operation: str, message: str):
        super().__init__(
            message=f"Storage {operation} failed: {message}",
            error_code="STORAGE_ERROR",
            details={"operation": operation},
            status_code=500
        )


class EngineError(CompetitorIntelException):
    """Raised when engine operations fail unexpectedly."""

    def __init__(self, engine: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"Engine '{engine}' error: {message}",
            error_code="ENGINE_ERROR",
            details=details or {"engine": engine},
            status_code=500
        )
