"""
Custom exceptions for fitcoach.

This module defines a hierarchy of exceptions used across the storage
layer, the external clients and the HTTP API. Each exception includes:
- A descriptive message
- An error code for API responses
- HTTP status code mapping
- Optional details for debugging
"""

from typing import Any, Dict, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for consistent API error responses."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"

    # Progression errors
    WORKOUT_VALIDATION_ERROR = "WORKOUT_VALIDATION_ERROR"
    CHALLENGE_TYPE_INVALID = "CHALLENGE_TYPE_INVALID"

    # Storage errors
    STORAGE_ERROR = "STORAGE_ERROR"
    STORAGE_READ_FAILED = "STORAGE_READ_FAILED"
    STORAGE_WRITE_FAILED = "STORAGE_WRITE_FAILED"

    # LLM errors
    LLM_SERVICE_UNAVAILABLE = "LLM_SERVICE_UNAVAILABLE"
    LLM_RESPONSE_INVALID = "LLM_RESPONSE_INVALID"
    LLM_API_ERROR = "LLM_API_ERROR"

    # Video catalog errors
    VIDEO_CATALOG_UNAVAILABLE = "VIDEO_CATALOG_UNAVAILABLE"


class FitCoachError(Exception):
    """
    Base exception for all fitcoach errors.

    Attributes:
        message: Human-readable error message
        code: Error code from ErrorCode enum
        status_code: HTTP status code for API responses
        details: Optional dictionary with additional error details
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API response."""
        result: Dict[str, Any] = {
            "error": {
                "code": self.code.value,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


# ============================================================================
# Validation Errors (400)
# ============================================================================

class ValidationError(FitCoachError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(
            message=message,
            code=ErrorCode.VALIDATION_ERROR,
            status_code=400,
            details=error_details,
        )


class WorkoutValidationError(ValidationError):
    """Raised when workout completion data is out of range."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, field=field, details=details)
        self.code = ErrorCode.WORKOUT_VALIDATION_ERROR


class ChallengeTypeError(ValidationError):
    """Raised when challenge progress names an unknown challenge type."""

    def __init__(self, challenge_type: Any) -> None:
        super().__init__(
            message=f"Unknown challenge type '{challenge_type}'",
            field="challenge_type",
            details={"allowed": ["workouts", "calories", "minutes", "streak"]},
        )
        self.code = ErrorCode.CHALLENGE_TYPE_INVALID


# ============================================================================
# Not Found Errors (404)
# ============================================================================

class NotFoundError(FitCoachError):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        message = f"{resource_type} with ID '{resource_id}' not found"
        error_details = details or {}
        error_details["resource_type"] = resource_type
        error_details["resource_id"] = resource_id
        super().__init__(
            message=message,
            code=ErrorCode.NOT_FOUND,
            status_code=404,
            details=error_details,
        )


# ============================================================================
# Storage Errors (500)
# ============================================================================

class StorageError(FitCoachError):
    """Base class for key-value storage failures."""

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        code: ErrorCode = ErrorCode.STORAGE_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if key:
            error_details["key"] = key
        super().__init__(
            message=message,
            code=code,
            status_code=500,
            details=error_details,
        )
        self.key = key


class StorageReadError(StorageError):
    """Raised by a store adapter when a value cannot be read or decoded."""

    def __init__(self, key: str, reason: str = "") -> None:
        message = f"Failed to read '{key}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, key=key, code=ErrorCode.STORAGE_READ_FAILED)


class StorageWriteError(StorageError):
    """Raised by a store adapter when a value cannot be written."""

    def __init__(self, key: str, reason: str = "") -> None:
        message = f"Failed to write '{key}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, key=key, code=ErrorCode.STORAGE_WRITE_FAILED)


# ============================================================================
# LLM Service Errors (500/503)
# ============================================================================

class LLMError(FitCoachError):
    """Base class for LLM-related errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.LLM_API_ERROR,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=code,
            status_code=status_code,
            details=details,
        )


class LLMServiceUnavailableError(LLMError):
    """Raised when the LLM service is unavailable or not configured."""

    def __init__(
        self,
        message: str = "LLM service is currently unavailable",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.LLM_SERVICE_UNAVAILABLE,
            status_code=503,
            details=details,
        )


class LLMResponseInvalidError(LLMError):
    """Raised when LLM response cannot be parsed."""

    def __init__(
        self,
        message: str = "Failed to parse LLM response",
        raw_response: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if raw_response:
            error_details["raw_response_preview"] = raw_response[:500]
        super().__init__(
            message=message,
            code=ErrorCode.LLM_RESPONSE_INVALID,
            status_code=500,
            details=error_details,
        )


# ============================================================================
# Video Catalog Errors (503)
# ============================================================================

class VideoCatalogError(FitCoachError):
    """Raised when the video catalog provider cannot be reached."""

    def __init__(
        self,
        message: str = "Video catalog is currently unavailable",
        status: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if status is not None:
            error_details["upstream_status"] = status
        super().__init__(
            message=message,
            code=ErrorCode.VIDEO_CATALOG_UNAVAILABLE,
            status_code=503,
            details=error_details,
        )
