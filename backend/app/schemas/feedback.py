from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FeedbackCreate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    category: str = Field(default="general", max_length=50)
    feedback: str = Field(min_length=1, max_length=5000)
    project_name: str | None = None
    timestamp: str | None = None


class FeedbackResponse(BaseModel):
    success: bool = True
    delivered: list[str] = []
