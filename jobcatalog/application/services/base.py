"""
Base service class providing common functionality for all services.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from ...core.exceptions import ValidationException
from ...core.logging import get_logger
from ...infrastructure.db.unit_of_work import UnitOfWork


class BaseService(ABC):
    """Base class for all services."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.logger = get_logger(f"jobcatalog.services.{self.__class__.__name__}",
                                 {"service": self.get_service_name()})

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Log service operation; details become structured fields in JSON logs."""
        log_msg = f"Service operation: {operation}"
        if details:
            log_msg += f" - Details: {details}"
        self.logger.info(log_msg, extra={"extra_fields": {"operation": operation, **(details or {})}})

    def require_text(self, value: Optional[str], field: str) -> None:
        """Reject missing or whitespace-only text."""
        if value is None or not value.strip():
            raise ValidationException(f"{field} is required", field=field, value=value)

    def require_id(self, value: Optional[int], field: str) -> None:
        """Reject ids that cannot reference a stored row."""
        if value is None or value <= 0:
            raise ValidationException(f"{field} must be a positive integer", field=field, value=value)

    @abstractmethod
    def get_service_name(self) -> str:
        """Return the service name."""
        pass
