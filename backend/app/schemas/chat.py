import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.schemas.project_data import ProjectData
from app.schemas.session import SessionRead


class ChatMessageBase(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class MessageCreate(BaseModel):
    content: str = Field(min_length=1)


class ChatMessageRead(ChatMessageBase):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: UUID
    session_id: UUID
    created_at: datetime.datetime


class SessionTurnResponse(BaseModel):
    message: ChatMessageRead
    session: SessionRead


# ---------------------------------------------------------------------------
# Stateless endpoints
# ---------------------------------------------------------------------------

class ChatRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    messages: list[ChatMessageBase] = Field(min_length=1)
    project_data: ProjectData = Field(default_factory=ProjectData)
    completed_categories: list[str] = Field(default_factory=list)


class ChatResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    content: str
    completed_categories: list[str]
    all_complete: bool
    project_data: ProjectData


class ExtractRequest(BaseModel):
    messages: list[ChatMessageBase] = Field(default_factory=list)


class ExtractResponse(BaseModel):
    data: ProjectData
