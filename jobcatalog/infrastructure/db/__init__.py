from .connection import DatabaseManager, database_manager
from .unit_of_work import UnitOfWork
from .repositories import (
    Repository,
    DepartmentRepository,
    LocationRepository,
    JobRepository,
)
from .models import BaseModel, TimestampMixin, Department, Location, Job

__all__ = [
    # Connection
    "DatabaseManager",
    "database_manager",
    "UnitOfWork",

    # Repository
    "Repository",
    "DepartmentRepository",
    "LocationRepository",
    "JobRepository",

    # Models
    "BaseModel",
    "TimestampMixin",
    "Department",
    "Location",
    "Job",
]
