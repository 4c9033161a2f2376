from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field


class BaseModel(SQLModel):
    """
    Base model with the integer surrogate key shared by all tables.

    The id stays ``None`` until the row is flushed to storage.
    """

    id: Optional[int] = Field(
        default=None,
        primary_key=True,
        description="Unique identifier"
    )


class TimestampMixin(SQLModel):
    """
    Mixin for models that carry creation and update timestamps.

    Timestamps are stored as naive UTC values (see ``utils.date.utc_now``).
    """

    created_at: Optional[datetime] = Field(
        default=None,
        sa_type=DateTime,
        description="Record creation timestamp"
    )

    updated_at: Optional[datetime] = Field(
        default=None,
        sa_type=DateTime,
        description="Record last update timestamp"
    )
