from .base import BaseService
from .department_service import DepartmentService
from .location_service import LocationService
from .job_service import JobService
from .job_listing import build_job_list

__all__ = [
    "BaseService",
    "DepartmentService",
    "LocationService",
    "JobService",
    "build_job_list",
]
