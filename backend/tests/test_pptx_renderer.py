from io import BytesIO

import pytest
from pptx import Presentation
from pptx.enum.shapes import MSO_SHAPE_TYPE
from pptx.util import Inches

from app.core.deck_assembler import assemble_deck
from app.core.pptx_renderer import DeckGenerationError, deck_filename, render_pptx


def _open(content: bytes):
    return Presentation(BytesIO(content))


def _all_text(slide) -> str:
    chunks = []
    for shape in slide.shapes:
        if shape.has_text_frame:
            chunks.append(shape.text_frame.text)
        if shape.has_table:
            for row in shape.table.rows:
                chunks.extend(cell.text for cell in row.cells)
    return "\n".join(chunks)


def test_round_trip_has_ten_widescreen_slides(fixed_date):
    prs = _open(render_pptx(assemble_deck({}, {}, generated_on=fixed_date)))
    assert len(prs.slides) == 10
    assert prs.slide_width == Inches(13.333)
    assert prs.slide_height == Inches(7.5)


def test_document_properties(fixed_date):
    deck = assemble_deck({"companyName": "Harbor Care"}, {"projectName": "Sunrise Gardens"}, generated_on=fixed_date)
    props = _open(render_pptx(deck)).core_properties
    assert props.title == "Sunrise Gardens"
    assert props.author == "Harbor Care"
    assert props.subject == "Real Estate Investment Opportunity"


def test_rendered_text_matches_assembled_values(fixed_date, full_data):
    prs = _open(render_pptx(assemble_deck({}, full_data, generated_on=fixed_date)))
    assert "Sunrise Gardens" in _all_text(prs.slides[0])
    opportunity = _all_text(prs.slides[2])
    assert "72" in opportunity
    assert "Assisted Living Facility" in opportunity


def test_control_characters_in_data_still_render(fixed_date):
    deck = assemble_deck(
        {"companyName": "Harbor\x0bCare"},
        {"projectName": "Sunrise\x01Gardens", "zoning": "R-3\x0c", "demandDrivers": "Aging\x1f, Wealth"},
        generated_on=fixed_date,
    )
    prs = _open(render_pptx(deck))
    assert "SunriseGardens" in _all_text(prs.slides[0])
    assert prs.core_properties.author == "HarborCare"


def test_charts_are_native(fixed_date):
    prs = _open(render_pptx(assemble_deck({}, {}, generated_on=fixed_date)))
    financials = [s for s in prs.slides[6].shapes if s.has_chart]
    use_of_funds = [s for s in prs.slides[8].shapes if s.has_chart]
    assert len(financials) == 1
    assert len(use_of_funds) == 1
    assert list(financials[0].chart.plots[0].categories) == ["Year 1", "Year 2", "Year 3", "Year 4", "Year 5"]


def test_logo_is_embedded(fixed_date, png_logo):
    prs = _open(render_pptx(assemble_deck({"logo": png_logo}, {}, generated_on=fixed_date)))
    pictures = [s for s in prs.slides[0].shapes if s.shape_type == MSO_SHAPE_TYPE.PICTURE]
    assert len(pictures) == 1


def test_corrupt_logo_raises_deck_generation_error(fixed_date):
    deck = assemble_deck({"logo": "data:image/png;base64,not base64!!"}, {}, generated_on=fixed_date)
    with pytest.raises(DeckGenerationError):
        render_pptx(deck)


def test_undecodable_image_bytes_raise_deck_generation_error(fixed_date):
    # valid base64, but not an image
    deck = assemble_deck({"logo": "aGVsbG8gd29ybGQ="}, {}, generated_on=fixed_date)
    with pytest.raises(DeckGenerationError):
        render_pptx(deck)


def test_malformed_brand_color_degrades_instead_of_failing(fixed_date):
    content = render_pptx(assemble_deck({"primaryColor": "blue-ish"}, {}, generated_on=fixed_date))
    assert len(_open(content).slides) == 10


def test_deck_filename(fixed_date):
    deck = assemble_deck({}, {"projectName": "Sunrise Gardens / Phase II"}, generated_on=fixed_date)
    assert deck_filename(deck) == "Sunrise_Gardens_Phase_II_Investor_Deck.pptx"
