from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DepartmentRequest(BaseModel):
    """Schema for creating or updating a department."""
    title: str = Field(..., description="Department title")


class DepartmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: Optional[str] = None
