from .department_schemas import DepartmentRequest, DepartmentResponse
from .location_schemas import LocationRequest, LocationResponse
from .job_schemas import (
    JobRequest,
    JobListRequest,
    JobListItem,
    JobListResponse,
    JobDetailsResponse,
    LocationSummary,
    DepartmentSummary,
)

__all__ = [
    "DepartmentRequest",
    "DepartmentResponse",
    "LocationRequest",
    "LocationResponse",
    "JobRequest",
    "JobListRequest",
    "JobListItem",
    "JobListResponse",
    "JobDetailsResponse",
    "LocationSummary",
    "DepartmentSummary",
]
