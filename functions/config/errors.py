"""Remoteness API error handling.

Custom exceptions and error codes for the scoring service.
"""

from typing import Optional, Dict, Any


# Error Codes
class ErrorCode:
    """Error code constants."""

    # Validation Errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    MISSING_FIELD = "MISSING_FIELD"
    INVALID_FIELD = "INVALID_FIELD"

    # Lookup Errors
    LOCATION_NOT_FOUND = "LOCATION_NOT_FOUND"

    # Dataset Errors
    DATASET_LOAD_FAILED = "DATASET_LOAD_FAILED"

    # Everything else
    INTERNAL_ERROR = "INTERNAL_ERROR"


class RemotenessError(Exception):
    """Base exception for Remoteness API errors.

    Provides structured error information for API responses.

    Attributes:
        code: Error code from ErrorCode constants
        message: Human-readable error message
        details: Additional error context
    """

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize RemotenessError.

        Args:
            code: Error code from ErrorCode constants
            message: Human-readable error message
            details: Additional error context
        """
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for API response.

        Returns:
            Dictionary with code, message, and details.
        """
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class ValidationError(RemotenessError):
    """A required request parameter is missing or unusable."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        code: str = ErrorCode.MISSING_FIELD,
        details: Optional[Dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            details={**(details or {}), "field": field} if field else details
        )
        self.field = field


class LocationNotFoundError(RemotenessError):
    """Identifier absent from the current reference snapshot."""

    def __init__(
        self,
        location_id: str,
        role: Optional[str] = None,
        details: Optional[Dict] = None
    ):
        label = f"{role.capitalize()} ZIP" if role else "ZIP"
        super().__init__(
            code=ErrorCode.LOCATION_NOT_FOUND,
            message=f"{label} {location_id} not found in dataset",
            details={**(details or {}), "location_id": location_id, "role": role}
        )
        self.location_id = location_id
        self.role = role


class DatasetLoadError(RemotenessError):
    """Reference dataset could not be read or parsed."""

    def __init__(
        self,
        source: str,
        reason: str,
        details: Optional[Dict] = None
    ):
        super().__init__(
            code=ErrorCode.DATASET_LOAD_FAILED,
            message=f"Failed to load location dataset from {source}: {reason}",
            details={**(details or {}), "source": source, "reason": reason}
        )
        self.source = source
        self.reason = reason
