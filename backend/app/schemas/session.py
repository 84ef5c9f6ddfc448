import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.schemas.project_data import BrandConfig, ProjectData


class SessionCreate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    brand: BrandConfig | None = None


class BrandUpdate(BaseModel):
    """Partial brand update; only the fields sent are applied."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    logo: str | None = None
    company_name: str | None = None
    primary_color: str | None = None
    secondary_color: str | None = None
    accent_color: str | None = None
    dark_color: str | None = None
    light_color: str | None = None


class CategoryProgress(BaseModel):
    category: str
    label: str
    description: str
    completed: bool
    current: bool


class SessionRead(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: UUID
    brand: BrandConfig
    project_data: ProjectData
    completed_categories: list[str]
    current_category: str | None
    status: str
    progress: list[CategoryProgress]
    can_generate: bool
    created_at: datetime.datetime
    updated_at: datetime.datetime | None = None


def session_read(session: Any, progress: list[dict], can_generate: bool) -> SessionRead:
    """Build the API view of a ``WizardSession`` row."""
    return SessionRead(
        id=session.id,
        brand=BrandConfig.model_validate(session.brand or {}),
        project_data=ProjectData.model_validate(session.project_data or {}),
        completed_categories=list(session.completed_categories or []),
        current_category=session.current_category,
        status=session.status,
        progress=[CategoryProgress(**item) for item in progress],
        can_generate=can_generate,
        created_at=session.created_at,
        updated_at=session.updated_at,
    )
