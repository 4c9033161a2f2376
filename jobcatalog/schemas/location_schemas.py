from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LocationRequest(BaseModel):
    """Schema for creating or updating a location."""
    title: str = Field(..., description="Location title")
    description: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    zip: Optional[str] = None


class LocationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: Optional[str] = None
    description: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    zip: Optional[str] = None
