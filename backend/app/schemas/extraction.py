"""
Pydantic models for the structured outputs of the interview and extraction
agents.

The interview agent reports progress through typed fields rather than
marker strings in its prose: the categories it considers finished, whether
the whole interview is done, and any project values it picked up from the
latest exchange.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from app.schemas.project_data import ProjectData

Category = Literal["site", "development", "market", "financials", "team", "terms"]


class InterviewTurn(BaseModel):
    response: str = Field(description="The assistant's reply, shown to the user verbatim (markdown allowed).")
    completed_categories: list[Category] = Field(
        default_factory=list,
        description="Categories that now have all essential answers.",
    )
    all_complete: bool = Field(
        default=False,
        description="True once every category is complete and the deck can be generated.",
    )
    project_data: ProjectData | None = Field(
        default=None,
        description="Values stated by the user so far. Leave a field null unless it was actually given.",
    )


class ExtractionResult(BaseModel):
    project_data: ProjectData = Field(default_factory=ProjectData)
