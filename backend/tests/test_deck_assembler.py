import pytest

from app.core.deck_assembler import assemble_deck
from app.core.slide_catalog import SLIDE_CATALOG, SLIDE_IDS
from app.schemas.deck import (
    ChartElement,
    FieldRef,
    Format,
    ImageElement,
    ShapeElement,
    TableElement,
    TableRegion,
    TextElement,
    TextRegion,
)
from app.schemas.project_data import FIELD_FALLBACKS, BrandConfig, ProjectData

EXPECTED_ORDER = [
    "cover",
    "executive_summary",
    "opportunity",
    "market_analysis",
    "development_plan",
    "team",
    "financials",
    "deal_structure",
    "use_of_funds",
    "exit",
]


def _texts(slide):
    return [e.text for e in slide.elements if isinstance(e, TextElement)]


# ---------------------------------------------------------------------------
# Totality and order
# ---------------------------------------------------------------------------

def test_empty_input_yields_ten_slides_in_order(fixed_date):
    deck = assemble_deck({}, {}, generated_on=fixed_date)
    assert [s.id for s in deck.slides] == EXPECTED_ORDER
    assert list(SLIDE_IDS) == EXPECTED_ORDER


def test_none_inputs_are_accepted(fixed_date):
    deck = assemble_deck(None, None, generated_on=fixed_date)
    assert len(deck.slides) == 10
    assert deck.title == "Investment Opportunity"
    assert deck.author == "Investor Deck Wizard"


def test_every_element_has_a_non_empty_value(fixed_date):
    deck = assemble_deck({}, {}, generated_on=fixed_date)
    for slide in deck.slides:
        for element in slide.elements:
            if isinstance(element, TextElement):
                assert element.paragraphs and all(p.strip() for p in element.paragraphs), element.id
            elif isinstance(element, TableElement):
                assert all(cell.strip() for row in element.rows for cell in row), element.id
            elif isinstance(element, ChartElement):
                assert element.data.series[0].values, element.id


def test_no_unresolved_placeholders(fixed_date, full_data):
    for data in (ProjectData(), full_data):
        deck = assemble_deck(BrandConfig(), data, generated_on=fixed_date)
        for slide in deck.slides:
            for text in _texts(slide):
                assert "{" not in text and "}" not in text


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------

def test_empty_input_fallbacks(fixed_date):
    deck = assemble_deck({}, {}, generated_on=fixed_date)
    assert deck.slide("cover").element("title").text == "Investment Opportunity"
    metrics = deck.slide("executive_summary").element("key_metrics")
    assert metrics.value_for("Total Raise") == "$1.5M"
    assert metrics.value_for("Projected IRR") == "—"


def test_partial_input(fixed_date):
    data = {"projectName": "Sunrise Gardens", "bedCount": "72"}
    deck = assemble_deck({}, data, generated_on=fixed_date)

    assert deck.title == "Sunrise Gardens"
    assert deck.slide("cover").element("title").text == "Sunrise Gardens"
    overview = deck.slide("opportunity").element("development_overview")
    assert overview.value_for("Licensed Beds") == "72"
    assert overview.value_for("Facility Type") == "Skilled Nursing Facility"
    assert overview.value_for("Total Cost") == "$8.5M"


def test_cover_badge_only_with_facility_data(fixed_date):
    bare = assemble_deck({}, {}, generated_on=fixed_date).slide("cover")
    assert bare.element("badge") is None
    assert bare.element("badge_text") is None

    cover = assemble_deck({}, {"bedCount": "72"}, generated_on=fixed_date).slide("cover")
    assert cover.element("badge_text").text == "Skilled Nursing Facility | 72 Beds"

    facility_only = assemble_deck({}, {"facilityType": "Memory Care"}, generated_on=fixed_date).slide("cover")
    assert facility_only.element("badge_text").text == "Memory Care"


def test_cover_date_and_tagline(fixed_date):
    cover = assemble_deck({}, {"totalRaise": "$4M"}, generated_on=fixed_date).slide("cover")
    assert cover.element("date").text == "March 2026"
    assert cover.element("tagline").text == "$4M Equity Investment Opportunity"


def test_waterfall_interpolates_preferred_return_only(fixed_date):
    deck = assemble_deck({}, {"preferredReturn": "7%"}, generated_on=fixed_date)
    waterfall = deck.slide("deal_structure").element("waterfall")
    assert waterfall.header == ["Tier", "Threshold", "LP", "GP"]
    assert "7%" in waterfall.rows[1][1]
    assert waterfall.rows[2] == ["3", "Up to 12% IRR", "80%", "20%"]
    assert waterfall.rows[3] == ["4", "Above 12% IRR", "70%", "30%"]


def test_demand_drivers_truncated_to_four(fixed_date):
    data = {
        "demandDrivers": "Aging population, Hospital partnerships, Limited supply, High acuity, Extra item"
    }
    deck = assemble_deck({}, data, generated_on=fixed_date)
    drivers = deck.slide("market_analysis").element("demand_drivers")
    assert drivers.paragraphs == ["Aging population", "Hospital partnerships", "Limited supply", "High acuity"]
    assert drivers.bullet == "•"


def test_optional_regions_follow_data(fixed_date):
    deck = assemble_deck({}, {}, generated_on=fixed_date)
    assert deck.slide("market_analysis").element("population_85") is None
    assert deck.slide("development_plan").element("budget_per_bed") is None
    assert deck.slide("team").element("management") is None

    deck = assemble_deck(
        {},
        {"population85Plus": "30,000", "constructionCostPerBed": "$140K", "managementTeam": "Ops team"},
        generated_on=fixed_date,
    )
    assert deck.slide("market_analysis").element("population_85").text == "Population 85+: 30,000"
    assert deck.slide("development_plan").element("budget_per_bed").text == "$140K per bed"
    assert deck.slide("team").element("management").text == "Management: Ops team"


def test_contact_line_prefers_sponsor_then_company(fixed_date):
    deck = assemble_deck({}, {}, generated_on=fixed_date)
    assert deck.slide("exit").element("contact").text == "To learn more, contact the Sponsor"

    deck = assemble_deck({"companyName": "Harbor Care"}, {}, generated_on=fixed_date)
    assert deck.slide("exit").element("contact").text == "To learn more, contact Harbor Care"

    deck = assemble_deck({"companyName": "Harbor Care"}, {"sponsorName": "Jane Rivera"}, generated_on=fixed_date)
    assert deck.slide("exit").element("contact").text == "To learn more, contact Jane Rivera"


def test_use_of_proceeds_land_row_uses_purchase_price(fixed_date, full_data):
    table = assemble_deck({}, full_data, generated_on=fixed_date).slide("use_of_funds").element("use_of_proceeds")
    assert table.value_for("Land Acquisition") == "$1.4M"
    assert table.value_for("Hard Construction Costs") == "$5.5M"


def test_derived_financial_visuals(fixed_date, full_data):
    deck = assemble_deck({}, full_data, generated_on=fixed_date, financial_visuals="derived")
    chart = deck.slide("financials").element("noi_chart")
    assert chart.data.series[0].values[-1] == 1200.0
    table = deck.slide("use_of_funds").element("use_of_proceeds")
    assert table.value_for("Hard Construction Costs") == "$6.5M"


# ---------------------------------------------------------------------------
# Branding
# ---------------------------------------------------------------------------

def test_logo_becomes_image_on_every_slide(fixed_date, png_logo):
    deck = assemble_deck({"logo": png_logo}, {}, generated_on=fixed_date)
    for slide in deck.slides:
        assert isinstance(slide.element("logo"), ImageElement)


def test_company_name_stands_in_for_missing_logo(fixed_date):
    deck = assemble_deck({"companyName": "Harbor Care"}, {}, generated_on=fixed_date)
    logo = deck.slide("team").element("logo")
    assert isinstance(logo, TextElement)
    assert logo.text == "Harbor Care"
    assert deck.slide("team").element("footer_note").text == "Harbor Care | Confidential"
    assert deck.author == "Harbor Care"


def test_no_logo_element_without_logo_or_company(fixed_date):
    deck = assemble_deck({}, {}, generated_on=fixed_date)
    assert all(slide.element("logo") is None for slide in deck.slides)


def test_theme_colors_flow_into_elements(fixed_date, brand):
    deck = assemble_deck(brand, {}, generated_on=fixed_date)
    cover = deck.slide("cover")
    assert cover.background == "1A2B3C"
    header = deck.slide("team").element("header_bar")
    assert isinstance(header, ShapeElement)
    assert header.fill == "1A2B3C"
    assert deck.slide("team").background == "F8FAFC"


def test_content_slides_carry_master_chrome(fixed_date):
    deck = assemble_deck({}, {}, generated_on=fixed_date)
    for number, slide in enumerate(deck.slides, start=1):
        if slide.master != "content":
            continue
        assert slide.element("slide_title").text == slide.title
        assert slide.element("slide_number").text == str(number)
        assert slide.element("header_bar").from_master


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

def test_assembly_is_idempotent(fixed_date, brand, full_data):
    first = assemble_deck(brand, full_data, generated_on=fixed_date)
    second = assemble_deck(brand, full_data, generated_on=fixed_date)
    assert first.model_dump() == second.model_dump()


def test_unrelated_field_does_not_change_other_slides(fixed_date):
    base = assemble_deck({}, {}, generated_on=fixed_date)
    changed = assemble_deck({}, {"lotSize": "3 acres"}, generated_on=fixed_date)
    for before, after in zip(base.slides, changed.slides):
        if before.id == "opportunity":
            assert after.element("property_details").value_for("Lot Size") == "3 acres"
            continue
        assert before.model_dump() == after.model_dump()


@pytest.mark.parametrize("extra", [{"fooBar": "x"}, {"internalNotes": "call Tuesday", "score": 7}])
def test_unreferenced_keys_leave_deck_unchanged(fixed_date, full_data, extra):
    base = assemble_deck({}, full_data, generated_on=fixed_date)
    changed = assemble_deck({}, {**full_data.to_payload(), **extra}, generated_on=fixed_date)
    assert base.model_dump() == changed.model_dump()


def test_blank_strings_behave_like_missing(fixed_date):
    blank = assemble_deck({}, {"projectName": "   ", "totalRaise": ""}, generated_on=fixed_date)
    empty = assemble_deck({}, {}, generated_on=fixed_date)
    assert blank.model_dump() == empty.model_dump()


@pytest.mark.parametrize("spec", SLIDE_CATALOG, ids=lambda s: s.id)
def test_layout_boxes_in_bounds_and_text_does_not_overlap(spec, fixed_date, full_data, png_logo):
    deck = assemble_deck({"logo": png_logo, "companyName": "Harbor"}, full_data, generated_on=fixed_date)
    slide = deck.slide(spec.id)

    for element in slide.elements:
        assert element.box.within(), element.id

    text_boxes = [
        e for e in slide.elements if isinstance(e, (TextElement, TableElement, ChartElement, ImageElement))
    ]
    for i, a in enumerate(text_boxes):
        for b in text_boxes[i + 1:]:
            assert not a.box.overlaps(b.box), f"{a.id} overlaps {b.id}"


def _documented_fallback(binding):
    if isinstance(binding, FieldRef):
        if binding.fallback is not None:
            return binding.fallback
        assert binding.key in FIELD_FALLBACKS, binding.key
        return FIELD_FALLBACKS[binding.key]
    if isinstance(binding, Format) and all(isinstance(v, FieldRef) for v in binding.values.values()):
        return binding.template.format(**{k: _documented_fallback(v) for k, v in binding.values.items()})
    return None


def _field_cells(spec):
    """Yield ``(region_id, position, expected)`` for every field-bound cell or paragraph."""
    for region in spec.regions:
        if region.when:
            continue
        if isinstance(region, TextRegion):
            if not all(isinstance(b, (FieldRef, Format)) or b.kind == "static" for b in region.content):
                continue
            for i, binding in enumerate(region.content):
                expected = _documented_fallback(binding)
                if expected is not None:
                    yield region.id, i, expected
        elif isinstance(region, TableRegion):
            for r, row in enumerate(region.rows):
                for c, cell in enumerate(row):
                    expected = _documented_fallback(cell)
                    if expected is not None:
                        yield region.id, (r, c), expected


@pytest.mark.parametrize("spec", SLIDE_CATALOG, ids=lambda s: s.id)
def test_empty_data_resolves_documented_fallbacks(spec, fixed_date):
    slide = assemble_deck({}, {}, generated_on=fixed_date).slide(spec.id)
    checked = 0
    for region_id, position, expected in _field_cells(spec):
        element = slide.element(region_id)
        if isinstance(element, TableElement):
            r, c = position
            actual = element.rows[r][c]
        else:
            actual = element.paragraphs[position]
        assert actual == expected, f"{spec.id}.{region_id}"
        checked += 1
    assert checked > 0
