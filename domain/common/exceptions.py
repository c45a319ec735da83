"""Domain business exceptions, shared by the domain and infrastructure layers.

The core layer only maps them to HTTP responses; the domain never imports
from core.
"""
from __future__ import annotations

from typing import Optional
from shared.codes import BusinessCode


class BusinessException(Exception):
    """Base class for business errors"""

    def __init__(
        self,
        code: int,
        message: str,
        error_type: str = "BusinessError",
        details: Optional[dict] = None,
        field: Optional[str] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.error_type = error_type
        self.details = details
        self.field = field
        super().__init__(self.message)


class InvalidCourseException(BusinessException):
    def __init__(self, course: Optional[str] = None):
        details = {"course": course} if course else None
        super().__init__(
            code=BusinessCode.INVALID_COURSE,
            message="Invalid course selected",
            error_type="InvalidCourse",
            details=details,
            field="course",
        )


class MissingFieldsException(BusinessException):
    def __init__(self, fields: list[str], message: str = "Missing required fields"):
        super().__init__(
            code=BusinessCode.PARAM_MISSING,
            message=message,
            error_type="MissingFields",
            details={"fields": fields},
            field=fields[0] if len(fields) == 1 else None,
        )


class DomainValidationException(BusinessException):
    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(
            code=BusinessCode.PARAM_VALIDATION_ERROR,
            message=message,
            error_type="DomainValidationError",
            details=details,
            field=field,
        )


class SignatureConfigurationError(BusinessException):
    """Raised when a signature is requested but no gateway secret is configured."""

    def __init__(self):
        super().__init__(
            code=BusinessCode.CONFIGURATION_ERROR,
            message="Payment gateway secret is not configured",
            error_type="SignatureConfigurationError",
        )


class CatalogLoadError(Exception):
    """Course catalog could not be read or is malformed.

    Not a BusinessException: it only happens at startup and must abort it.
    """

    def __init__(self, message: str, *, path: Optional[str] = None):
        self.path = path
        super().__init__(f"{message} ({path})" if path else message)
