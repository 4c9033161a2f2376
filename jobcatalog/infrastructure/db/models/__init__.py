"""
Database models package.
"""

from .base import BaseModel, TimestampMixin
from .department import Department
from .location import Location
from .job import Job

__all__ = [
    "BaseModel",
    "TimestampMixin",

    "Department",
    "Location",
    "Job",
]
