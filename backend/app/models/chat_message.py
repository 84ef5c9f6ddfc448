from typing import TYPE_CHECKING
from uuid import UUID

from sqlmodel import Field, Relationship

from app.models.base import BaseUUIDModel

if TYPE_CHECKING:
    from app.models.wizard_session import WizardSession


class ChatMessage(BaseUUIDModel, table=True):
    __tablename__ = "chat_messages"

    session_id: UUID = Field(foreign_key="wizard_sessions.id", index=True, ondelete="CASCADE")
    role: str = Field(max_length=20)  # "user" or "assistant"
    content: str  # TEXT by default

    # Relationships
    session: "WizardSession" = Relationship(back_populates="messages")
