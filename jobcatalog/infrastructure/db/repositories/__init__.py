from .base import Repository
from .department_repository import DepartmentRepository
from .location_repository import LocationRepository
from .job_repository import JobRepository

__all__ = [
    "Repository",
    "DepartmentRepository",
    "LocationRepository",
    "JobRepository",
]
