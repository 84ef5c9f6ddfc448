from typing import TYPE_CHECKING

from sqlmodel import Field, Relationship

from app.models.base import BaseUUIDModel, json_field

if TYPE_CHECKING:
    from app.models.chat_message import ChatMessage


class WizardSession(BaseUUIDModel, table=True):
    __tablename__ = "wizard_sessions"

    # Wire-format (camelCase) payloads of BrandConfig / ProjectData
    brand: dict = json_field(dict)
    project_data: dict = json_field(dict)
    completed_categories: list[str] = json_field(list)

    current_category: str | None = Field(default="site", max_length=20)
    status: str = Field(default="interviewing", max_length=20)  # interviewing, complete

    # Relationships
    messages: list["ChatMessage"] = Relationship(
        back_populates="session",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "passive_deletes": True,
            "order_by": "ChatMessage.created_at",
        },
    )
