from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.config import get_settings
from ..utils.date import to_naive_utc


class JobRequest(BaseModel):
    """Schema for creating or updating a job."""
    title: str = Field(..., description="Job title")
    description: str = Field(..., description="Job description")
    location_id: int = Field(..., description="ID of an existing location")
    department_id: int = Field(..., description="ID of an existing department")
    closing_date: datetime = Field(..., description="Date the posting closes")

    @field_validator("closing_date")
    @classmethod
    def normalize_closing_date(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


class JobListRequest(BaseModel):
    """Schema for the filtered, paginated job listing."""
    q: Optional[str] = Field(default=None, description="Substring to match in the job title")
    page_no: int = Field(default=1, ge=1, description="1-based page number")
    page_size: int = Field(
        default_factory=lambda: get_settings().default_page_size,
        ge=1,
        description="Number of items per page",
    )
    location_id: Optional[int] = Field(default=None, description="Location filter, 0 means no filter")
    department_id: Optional[int] = Field(default=None, description="Department filter, 0 means no filter")


class JobListItem(BaseModel):
    """Summary of a job in the listing."""
    id: int
    code: Optional[str] = None
    title: Optional[str] = None
    location: Optional[str] = Field(default=None, description="Location title")
    department: Optional[str] = Field(default=None, description="Department title")
    posted_date: Optional[datetime] = None
    closing_date: Optional[datetime] = None


class JobListResponse(BaseModel):
    """Schema for the job listing response."""
    total: int = Field(..., ge=0, description="Number of jobs matching the filters")
    data: List[JobListItem] = Field(default_factory=list)


class LocationSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    zip: Optional[str] = None


class DepartmentSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: Optional[str] = None


class JobDetailsResponse(BaseModel):
    """Schema for a single job with its location and department."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    code: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    location: LocationSummary
    department: DepartmentSummary
    posted_date: Optional[datetime] = None
    closing_date: Optional[datetime] = None
