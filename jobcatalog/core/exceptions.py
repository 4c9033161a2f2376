"""
Error types raised by repositories, the unit of work and services.

``status_code`` is an HTTP-style hint for whatever transport wraps the
services; nothing in this package acts on it.
"""

from typing import Any, Dict, Optional, Union


class AppException(Exception):
    status_code: int = 400
    default_error_code: Optional[str] = None

    def __init__(self, message: str,
                 error_code: Optional[str] = None,
                 status_code: Optional[int] = None,
                 details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code or self.default_error_code or self.__class__.__name__
        if status_code is not None:
            self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"{self.status_code}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', status_code={self.status_code})"


class ValidationException(AppException):
    """A request was rejected before anything was staged."""
    status_code = 422
    default_error_code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        value: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.field = field
        self.value = value

        details = dict(details or {})
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, details=details)


class NotFoundError(AppException):
    status_code = 404
    default_error_code = "NOT_FOUND"

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[Union[str, int]] = None,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.resource = resource
        self.resource_id = resource_id

        if not message:
            message = (f"{resource} with ID '{resource_id}' not found"
                       if resource_id is not None else f"{resource} not found")

        details = dict(details or {})
        details.update(resource=resource, resource_id=resource_id)
        super().__init__(message, details=details)


class ConflictError(AppException):
    """A commit was rejected by a storage constraint, such as a duplicate job code."""
    status_code = 409
    default_error_code = "CONFLICT"

    def __init__(
        self,
        message: str = "Conflict with current state",
        resource: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.resource = resource

        details = dict(details or {})
        if resource:
            details["resource"] = resource
        super().__init__(message, details=details)


class DatabaseError(AppException):
    """The storage engine failed; the operation may succeed if retried."""
    status_code = 500
    default_error_code = "DATABASE_ERROR"

    def __init__(
        self,
        message: str = "Database error occurred",
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.operation = operation

        details = dict(details or {})
        if operation:
            details["operation"] = operation
        super().__init__(message, details=details)
