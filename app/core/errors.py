"""
@file errors.py
@brief Domain error values for project validation

@details
Business-rule failures (missing project, permission denied, duplicate
name, out-of-range dates, wrong area type) are returned as
ValidationFailure values rather than raised. Each value carries the
HTTP-equivalent status so the API layer can translate it directly.

Only programming errors (unknown validation level) and lookups that the
caller asked to be strict about (AreaNotFoundError) are raised.

@author PAFS Project
@date 2026-01-12
@version 1.0
@license AGPL-3.0
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorKind(str, Enum):
    """Category of a domain failure"""

    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    CONFLICT = "conflict"
    VALIDATION_FAILED = "validation_failed"


## @brief Default transport status for each failure category
STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.CONFLICT: 409,
    ErrorKind.VALIDATION_FAILED: 400,
}


class ErrorCodes:
    """Machine-readable error codes returned to API clients"""

    INVALID_DATA = "INVALID_DATA"
    NOT_ALLOWED_TO_CREATE = "NOT_ALLOWED_TO_CREATE"
    NOT_ALLOWED_TO_UPDATE = "NOT_ALLOWED_TO_UPDATE"
    NAME_DUPLICATE = "NAME_DUPLICATE"
    AREA_IS_NOT_ALLOWED = "AREA_IS_NOT_ALLOWED"
    FINANCIAL_START_YEAR_SHOULD_BE_LESS_THAN_END_YEAR = (
        "FINANCIAL_START_YEAR_SHOULD_BE_LESS_THAN_END_YEAR"
    )
    FINANCIAL_END_YEAR_SHOULD_BE_GREATER_THAN_START_YEAR = (
        "FINANCIAL_END_YEAR_SHOULD_BE_GREATER_THAN_START_YEAR"
    )
    DATE_BEFORE_FINANCIAL_START = "DATE_BEFORE_FINANCIAL_START"
    DATE_AFTER_FINANCIAL_END = "DATE_AFTER_FINANCIAL_END"
    DATE_AFTER_FINANCIAL_START = "DATE_AFTER_FINANCIAL_START"
    INVALID_LEVEL = "INVALID_LEVEL"
    DATA_CONFLICT = "DATA_CONFLICT"


@dataclass(frozen=True)
class ValidationFailure:
    """
    @brief A single business-rule or field-level failure

    @details
    Construct through the kind-specific helpers (not_found, forbidden,
    conflict, invalid) so the status code always matches the kind.
    """

    kind: ErrorKind
    status_code: int
    error_code: str
    message: str
    field: Optional[str] = None

    @classmethod
    def not_found(cls, error_code: str, message: str, field: Optional[str] = None) -> "ValidationFailure":
        return cls(ErrorKind.NOT_FOUND, STATUS_BY_KIND[ErrorKind.NOT_FOUND], error_code, message, field)

    @classmethod
    def forbidden(cls, error_code: str, message: str, field: Optional[str] = None) -> "ValidationFailure":
        return cls(ErrorKind.FORBIDDEN, STATUS_BY_KIND[ErrorKind.FORBIDDEN], error_code, message, field)

    @classmethod
    def conflict(cls, error_code: str, message: str, field: Optional[str] = None) -> "ValidationFailure":
        return cls(ErrorKind.CONFLICT, STATUS_BY_KIND[ErrorKind.CONFLICT], error_code, message, field)

    @classmethod
    def invalid(cls, error_code: str, message: str, field: Optional[str] = None) -> "ValidationFailure":
        return cls(
            ErrorKind.VALIDATION_FAILED,
            STATUS_BY_KIND[ErrorKind.VALIDATION_FAILED],
            error_code,
            message,
            field,
        )

    def to_error(self) -> Dict[str, Any]:
        """Render the failure as one entry of an error list"""
        error = {"errorCode": self.error_code, "message": self.message}
        if self.field:
            error["field"] = self.field
        return error

    def to_response(self) -> Dict[str, Any]:
        """Render the failure as a complete response body"""
        return failures_to_response([self])


def failures_to_response(failures: List[ValidationFailure]) -> Dict[str, Any]:
    """
    @brief Render several failures as one response body

    @details
    The status of the first failure wins; field-level schema failures
    all share status 400 so this only matters for mixed lists.
    """
    return {
        "statusCode": failures[0].status_code,
        "errors": [failure.to_error() for failure in failures],
    }


@dataclass
class ValidationResult:
    """
    @brief Outcome of one validation pass

    @details
    Exactly one of `error` or the success context is meaningful.
    `area_data` and `rfcc_code` are only set when they were resolved
    during this pass.
    """

    error: Optional[ValidationFailure] = None
    area_data: Optional[Any] = None
    rfcc_code: Optional[str] = None
    existing_project: Optional[Any] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, error: ValidationFailure) -> "ValidationResult":
        return cls(error=error)


class InvalidLevelError(ValueError):
    """Raised when a validation level name is not registered"""

    def __init__(self, level: Any):
        self.level = level
        super().__init__(f"Invalid validation level: {level}")


class AreaNotFoundError(LookupError):
    """Raised by strict area lookups when the area does not exist"""

    def __init__(self, area_id: Any):
        self.area_id = area_id
        super().__init__(f"Area with ID {area_id} not found")
