from pydantic_ai.messages import ModelMessage, ModelResponse
from pydantic_ai.models.function import AgentInfo, FunctionModel
from pydantic_ai.models.test import TestModel

from app.core.ai_generators import (
    build_interview_context,
    describe_collected,
    extract_project_data,
    extraction_agent,
    interview_agent,
    run_interview_turn,
)
from app.schemas.project_data import ProjectData


def _broken_model() -> FunctionModel:
    def fail(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
        raise RuntimeError("model unavailable")

    return FunctionModel(fail)


def test_describe_collected_groups_by_category():
    text = describe_collected(ProjectData(project_name="Sunrise", projected_irr="19%"))
    assert "Site & Property:\n- project_name: Sunrise" in text
    assert "Financials:\n- projected_irr: 19%" in text
    assert describe_collected(ProjectData()) == "(nothing yet)"


def test_interview_context_includes_history_and_state():
    context = build_interview_context(
        [{"role": "assistant", "content": "Where is the site?"}],
        ProjectData(zoning="R-3"),
        ["site"],
        "Riverside, CA",
    )
    assert "assistant: Where is the site?" in context
    assert "- zoning: R-3" in context
    assert 'Completed categories: ["site"]' in context
    assert context.endswith("User message: Riverside, CA")


async def test_interview_turn_returns_structured_output():
    output = {
        "response": "Thanks! Now the development plan.",
        "completed_categories": ["site"],
        "all_complete": False,
        "project_data": {"propertyAddress": "123 Palm Ave", "lotSize": "2 acres"},
    }
    with interview_agent.override(model=TestModel(custom_output_args=output)):
        turn = await run_interview_turn([], ProjectData(), [], "123 Palm Ave, 2 acres")

    assert turn.response == "Thanks! Now the development plan."
    assert turn.completed_categories == ["site"]
    assert turn.project_data.property_address == "123 Palm Ave"


async def test_extraction_returns_project_data():
    output = {"project_data": {"projectName": "Sunrise Gardens", "bedCount": "72"}}
    with extraction_agent.override(model=TestModel(custom_output_args=output)):
        data = await extract_project_data([{"role": "user", "content": "Sunrise Gardens, 72 beds"}])
    assert data.populated() == {"project_name": "Sunrise Gardens", "bed_count": "72"}


async def test_extraction_failure_returns_empty():
    with extraction_agent.override(model=_broken_model()):
        data = await extract_project_data([{"role": "user", "content": "hello"}])
    assert data == ProjectData()


async def test_extraction_of_empty_transcript_skips_agent():
    with extraction_agent.override(model=_broken_model()):
        assert await extract_project_data([]) == ProjectData()
