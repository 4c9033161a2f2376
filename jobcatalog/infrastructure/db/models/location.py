from typing import Optional

from sqlmodel import Field

from .base import BaseModel, TimestampMixin


class LocationBase(BaseModel):
    """Base model for Location with the caller-editable fields"""
    title: str = Field(max_length=200)
    description: Optional[str] = Field(default=None)
    city: Optional[str] = Field(default=None, max_length=100)
    state: Optional[str] = Field(default=None, max_length=100)
    country: Optional[str] = Field(default=None, max_length=100)
    zip: Optional[str] = Field(default=None, max_length=20)


class Location(LocationBase, TimestampMixin, table=True):
    """Model for the locations table"""
    __tablename__ = "locations"
