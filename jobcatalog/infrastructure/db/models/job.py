from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, Relationship

from .base import BaseModel
from .department import Department
from .location import Location


class Job(BaseModel, table=True):
    """
    Model for the jobs table.

    ``code`` is allocated by the job repository on creation and is unique
    across all rows; the unique index is the only guard against two
    concurrent allocations of the same code.
    """
    __tablename__ = "jobs"

    code: Optional[str] = Field(default=None, max_length=20, unique=True, index=True)
    title: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = Field(default=None)
    location_id: int = Field(foreign_key="locations.id", index=True)
    posted_date: Optional[datetime] = Field(default=None, sa_type=DateTime, index=True)
    closing_date: Optional[datetime] = Field(default=None, sa_type=DateTime)
    department_id: int = Field(foreign_key="departments.id", index=True)

    # Relationships
    location: Optional[Location] = Relationship()
    department: Optional[Department] = Relationship()
