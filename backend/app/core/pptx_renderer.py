"""
PowerPoint (PPTX) renderer for assembled investor decks.

Walks a ``Deck`` and draws every element with python-pptx on a blank 16:9
layout.  Charts use native PPTX chart objects, tables use formatted PPTX
tables.  Rendering is all-or-nothing: any library failure surfaces as a
single ``DeckGenerationError`` and no partial file is returned.
"""

import base64
import binascii
import logging
import re
from io import BytesIO

from pptx import Presentation
from pptx.chart.data import CategoryChartData
from pptx.dml.color import RGBColor
from pptx.enum.chart import XL_CHART_TYPE, XL_LEGEND_POSITION
from pptx.enum.shapes import MSO_SHAPE
from pptx.enum.text import MSO_ANCHOR, MSO_AUTO_SIZE, PP_ALIGN
from pptx.util import Inches, Pt

from app.schemas.deck import (
    SLIDE_HEIGHT,
    SLIDE_WIDTH,
    AssembledSlide,
    ChartElement,
    Deck,
    ImageElement,
    ShapeElement,
    TableElement,
    TextElement,
    TextStyle,
)

logger = logging.getLogger(__name__)

BLANK_LAYOUT = 6
PPTX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.presentationml.presentation"

_HEX_RE = re.compile(r"^[0-9A-Fa-f]{6}$")
_FALLBACK_COLOR = "333333"
_STRIPE_COLOR = "F1F5F9"

_ALIGN = {
    "left": PP_ALIGN.LEFT,
    "center": PP_ALIGN.CENTER,
    "right": PP_ALIGN.RIGHT,
}

_SHAPES = {
    "rect": MSO_SHAPE.RECTANGLE,
    "round_rect": MSO_SHAPE.ROUNDED_RECTANGLE,
    "ellipse": MSO_SHAPE.OVAL,
}


class DeckGenerationError(Exception):
    """Raised when a deck cannot be serialised."""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _rgb(hex_color: str | None) -> RGBColor:
    if hex_color and _HEX_RE.match(hex_color):
        return RGBColor.from_string(hex_color.upper())
    logger.warning("Invalid color %r, using %s", hex_color, _FALLBACK_COLOR)
    return RGBColor.from_string(_FALLBACK_COLOR)


def _apply_font(paragraph, style: TextStyle, bold: bool | None = None, color: str | None = None):
    """Style every run of *paragraph*; run properties win over paragraph defaults."""
    for run in paragraph.runs:
        font = run.font
        font.name = style.font
        font.size = Pt(style.size)
        font.bold = style.bold if bold is None else bold
        font.italic = style.italic
        font.color.rgb = _rgb(color or style.color)


def _decode_image(data: str) -> bytes:
    """Decode a base64 image, with or without a ``data:`` URL prefix."""
    payload = data.split(",", 1)[1] if data.startswith("data:") else data
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DeckGenerationError(f"Logo is not valid base64: {e}") from e


# ---------------------------------------------------------------------------
# Elements
# ---------------------------------------------------------------------------

def _add_text(slide, element: TextElement):
    box = element.box
    tx_box = slide.shapes.add_textbox(Inches(box.x), Inches(box.y), Inches(box.w), Inches(box.h))
    tf = tx_box.text_frame
    tf.word_wrap = True
    tf.auto_size = MSO_AUTO_SIZE.NONE
    tf.vertical_anchor = MSO_ANCHOR.MIDDLE if len(element.paragraphs) == 1 else MSO_ANCHOR.TOP

    for i, line in enumerate(element.paragraphs):
        p = tf.paragraphs[0] if i == 0 else tf.add_paragraph()
        p.text = f"{element.bullet} {line}" if element.bullet else line
        p.alignment = _ALIGN[element.style.align]
        if element.bullet:
            p.space_after = Pt(4)
        _apply_font(p, element.style)
    return tx_box


def _add_shape(slide, element: ShapeElement):
    box = element.box
    shape = slide.shapes.add_shape(
        _SHAPES[element.shape], Inches(box.x), Inches(box.y), Inches(box.w), Inches(box.h)
    )
    shape.fill.solid()
    shape.fill.fore_color.rgb = _rgb(element.fill)
    shape.line.fill.background()
    if not element.shadow:
        shape.shadow.inherit = False
    return shape


def _add_table(slide, element: TableElement):
    box = element.box
    header_rows = 1 if element.header else 0
    n_rows = len(element.rows) + header_rows
    n_cols = len(element.col_widths)

    shape = slide.shapes.add_table(
        n_rows, n_cols, Inches(box.x), Inches(box.y), Inches(box.w), Inches(box.h)
    )
    table = shape.table
    table.first_row = bool(element.header)
    table.horz_banding = False
    for i, width in enumerate(element.col_widths):
        table.columns[i].width = Inches(width)
    row_height = Inches(box.h / n_rows)
    for row in table.rows:
        row.height = row_height

    if element.header:
        for j, label in enumerate(element.header):
            cell = table.cell(0, j)
            cell.text = label
            cell.fill.solid()
            cell.fill.fore_color.rgb = _rgb(element.header_fill)
            for paragraph in cell.text_frame.paragraphs:
                _apply_font(paragraph, element.style, bold=True, color=element.header_color)

    for i, row in enumerate(element.rows):
        for j in range(n_cols):
            cell = table.cell(i + header_rows, j)
            cell.text = row[j] if j < len(row) else ""
            cell.vertical_anchor = MSO_ANCHOR.MIDDLE
            cell.margin_left = Pt(4)
            cell.margin_right = Pt(4)
            cell.margin_top = Pt(2)
            cell.margin_bottom = Pt(2)
            if element.fill is None:
                cell.fill.background()
            else:
                cell.fill.solid()
                cell.fill.fore_color.rgb = _rgb(_STRIPE_COLOR if i % 2 and element.header else element.fill)
            is_label = j == 0 and not element.header
            for paragraph in cell.text_frame.paragraphs:
                if is_label:
                    _apply_font(paragraph, element.style, bold=False, color=element.label_color)
                else:
                    _apply_font(paragraph, element.style, bold=element.bold_values and not element.header)
    return shape


def _add_chart(slide, element: ChartElement):
    box = element.box
    chart_data = CategoryChartData()
    chart_data.categories = element.data.categories
    for series in element.data.series:
        chart_data.add_series(series.name, series.values)

    chart_type = XL_CHART_TYPE.DOUGHNUT if element.chart == "doughnut" else XL_CHART_TYPE.COLUMN_CLUSTERED
    chart_frame = slide.shapes.add_chart(
        chart_type, Inches(box.x), Inches(box.y), Inches(box.w), Inches(box.h), chart_data
    )
    chart = chart_frame.chart

    chart.has_legend = element.show_legend
    if element.show_legend:
        chart.legend.position = XL_LEGEND_POSITION.BOTTOM
        chart.legend.include_in_layout = False
        chart.legend.font.size = Pt(10)

    plot = chart.plots[0]
    plot.has_data_labels = True
    data_labels = plot.data_labels
    data_labels.number_format = element.number_format
    data_labels.number_format_is_linked = False
    data_labels.font.size = Pt(9)

    series = plot.series[0]
    if element.chart == "doughnut":
        for i, color in enumerate(element.colors[: len(element.data.categories)]):
            point = series.points[i]
            point.format.fill.solid()
            point.format.fill.fore_color.rgb = _rgb(color)
    else:
        plot.gap_width = 80
        series.format.fill.solid()
        series.format.fill.fore_color.rgb = _rgb(element.colors[0])

    chart.has_title = True
    title = chart.chart_title.text_frame.paragraphs[0]
    title.text = element.title
    title.font.size = Pt(12)
    title.font.bold = True
    return chart_frame


def _add_image(slide, element: ImageElement):
    box = element.box
    raw = _decode_image(element.data)
    return slide.shapes.add_picture(
        BytesIO(raw), Inches(box.x), Inches(box.y), Inches(box.w), Inches(box.h)
    )


_RENDERERS = {
    "text": _add_text,
    "shape": _add_shape,
    "table": _add_table,
    "chart": _add_chart,
    "image": _add_image,
}


def _render_slide(prs, assembled: AssembledSlide):
    slide = prs.slides.add_slide(prs.slide_layouts[BLANK_LAYOUT])
    background = slide.background.fill
    background.solid()
    background.fore_color.rgb = _rgb(assembled.background)
    for element in assembled.elements:
        _RENDERERS[element.kind](slide, element)
    return slide


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def render_pptx(deck: Deck) -> bytes:
    """Serialise *deck* to ``.pptx`` bytes.

    Raises ``DeckGenerationError`` if python-pptx (or image decoding) fails.
    """
    try:
        prs = Presentation()
        prs.slide_width = Inches(SLIDE_WIDTH)
        prs.slide_height = Inches(SLIDE_HEIGHT)

        props = prs.core_properties
        props.title = deck.title
        props.author = deck.author
        props.subject = deck.subject

        for assembled in deck.slides:
            _render_slide(prs, assembled)

        buf = BytesIO()
        prs.save(buf)
    except DeckGenerationError:
        raise
    except Exception as e:
        logger.exception("PPTX rendering failed for deck %r", deck.title)
        raise DeckGenerationError(f"Deck generation failed: {e}") from e

    logger.info("Rendered deck %r (%d slides)", deck.title, len(deck.slides))
    return buf.getvalue()


def deck_filename(deck: Deck) -> str:
    """Download filename derived from the deck title."""
    stem = re.sub(r"[^A-Za-z0-9]+", "_", deck.title).strip("_") or "Investor_Deck"
    return f"{stem}_Investor_Deck.pptx"
