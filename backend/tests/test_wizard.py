from app.controllers import session_controller
from app.core.wizard import can_generate, mark_categories_complete, merge_project_data, next_category, progress
from app.models.wizard_session import WizardSession
from app.schemas.project_data import ProjectData


# ---------------------------------------------------------------------------
# Merge
# ---------------------------------------------------------------------------

def test_merge_overwrites_with_non_blank_values():
    current = ProjectData(project_name="Old", bed_count="60")
    merged = merge_project_data(current, {"projectName": "Sunrise Gardens"})
    assert merged.project_name == "Sunrise Gardens"
    assert merged.bed_count == "60"


def test_merge_never_erases_with_blank_or_null():
    current = ProjectData(project_name="Sunrise", bed_count="72")
    merged = merge_project_data(current, {"projectName": "", "bedCount": None, "zoning": "  "})
    assert merged == current


def test_merge_is_immutable():
    current = ProjectData(project_name="Sunrise")
    merge_project_data(current, ProjectData(bed_count="72"))
    assert current.bed_count is None


def test_merge_accumulates_in_order():
    data = ProjectData()
    for update in ({"projectName": "A"}, {"bedCount": "10"}, {"projectName": "B"}):
        data = merge_project_data(data, update)
    assert data.populated() == {"project_name": "B", "bed_count": "10"}


def test_merge_none_returns_current():
    current = ProjectData(project_name="Sunrise")
    assert merge_project_data(current, None) is current


# ---------------------------------------------------------------------------
# Progress
# ---------------------------------------------------------------------------

def test_mark_complete_is_idempotent_and_ordered():
    once = mark_categories_complete([], ["market", "site"])
    twice = mark_categories_complete(once, ["site", "market"])
    assert once == twice == ["site", "market"]


def test_mark_complete_drops_unknown_categories():
    assert mark_categories_complete(["site"], ["pricing"]) == ["site"]


def test_next_category_is_first_incomplete():
    assert next_category([]) == "site"
    assert next_category(["site", "market"]) == "development"
    assert next_category(["site", "development", "market", "financials", "team", "terms"]) is None


def test_progress_flags_current():
    items = progress(["site"])
    assert [i["category"] for i in items] == ["site", "development", "market", "financials", "team", "terms"]
    assert items[0]["completed"] and not items[0]["current"]
    assert items[1]["current"] and not items[1]["completed"]
    assert items[1]["label"] == "Development Plan"


# ---------------------------------------------------------------------------
# Readiness gate
# ---------------------------------------------------------------------------

def test_gate_opens_on_categories():
    assert not can_generate(["site", "market"], ProjectData(), 3, 5)
    assert can_generate(["site", "market", "team"], ProjectData(), 3, 5)


def test_gate_opens_on_populated_fields():
    data = ProjectData(project_name="A", bed_count="1", zoning="R", lot_size="1", total_raise="$1M")
    assert can_generate([], data, 3, 5)
    assert not can_generate([], ProjectData(project_name="A", zoning="  "), 3, 5)


# ---------------------------------------------------------------------------
# Session bookkeeping
# ---------------------------------------------------------------------------

def _session() -> WizardSession:
    return WizardSession(brand={}, project_data={}, completed_categories=[], current_category="site")


def test_apply_turn_to_session():
    session = _session()
    session_controller.apply_project_data(session, ProjectData(project_name="Sunrise", bed_count="72"))
    completed = session_controller.apply_completed(session, ["site"])

    assert session.project_data == {"projectName": "Sunrise", "bedCount": "72"}
    assert completed == ["site"]
    assert session.current_category == "development"
    assert session.status == "interviewing"


def test_all_complete_finishes_session():
    session = _session()
    session_controller.apply_completed(session, [], all_complete=True)
    assert session.current_category is None
    assert session.status == "complete"
    assert len(session.completed_categories) == 6


def test_session_read_reports_gate():
    session = _session()
    session_controller.apply_completed(session, ["site", "development", "market"])
    view = session_controller.to_read(session)
    assert view.can_generate
    assert view.current_category == "financials"
    assert view.progress[3].current
    assert view.model_dump(by_alias=True)["canGenerate"] is True
