from sqlmodel import Field

from .base import BaseModel


class Department(BaseModel, table=True):
    """Model for the departments table"""
    __tablename__ = "departments"

    title: str = Field(max_length=200)
