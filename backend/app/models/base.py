from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, DateTime, func
from sqlmodel import SQLModel, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def timestamp_field(*, on_update: bool = False) -> Any:
    """Timezone-aware timestamp column.

    Creation stamps are filled by the database as well as client-side;
    update stamps stay null until the row is first modified.
    """
    if on_update:
        return Field(
            default=None,
            sa_type=DateTime(timezone=True),
            sa_column_kwargs={"onupdate": func.now(), "nullable": True},
        )
    return Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"server_default": func.now(), "nullable": False},
    )


def json_field(default_factory) -> Any:
    """Non-null JSON column. Mutating the stored object in place is not
    tracked; assign a new value to persist changes."""
    return Field(default_factory=default_factory, sa_column=Column(JSON, nullable=False))


class BaseUUIDModel(SQLModel):
    id: UUID = Field(default_factory=uuid4, primary_key=True, index=True)
    created_at: datetime = timestamp_field()
    updated_at: datetime | None = timestamp_field(on_update=True)
