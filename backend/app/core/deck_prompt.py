"""
Natural-language prompt for the external presentation service.

The prompt is built by walking an assembled ``Deck``, so it carries exactly
the values (and fallbacks) the PPTX export would show.
"""

from app.schemas.deck import ChartElement, Deck, TableElement, TextElement

ADDITIONAL_INSTRUCTIONS = (
    "This is a real estate investor pitch deck. Make it look extremely professional, "
    "suitable for presenting to institutional investors and high-net-worth individuals. "
    "Use a corporate color scheme. Include compelling data visualizations and charts. "
    "Add relevant images of healthcare facilities and senior care."
)

_STYLE_INSTRUCTIONS = """\
# STYLE INSTRUCTIONS
- Use a professional, clean design suitable for institutional investors
- Primary color #{primary}, secondary #{secondary}, accent #{accent}
- Include relevant images of healthcare facilities, seniors, and medical settings
- Charts should be clean and easy to read
- Keep exactly one card per slide, in the order given above"""


def _format_number(value: float) -> str:
    return f"{value:g}"


def _chart_lines(element: ChartElement) -> list[str]:
    lines = [f"Chart ({element.chart}): {element.title}"]
    for series in element.data.series:
        points = ", ".join(
            f"{category}: {_format_number(value)}"
            for category, value in zip(element.data.categories, series.values)
        )
        lines.append(f"- {series.name}: {points}")
    return lines


def _table_lines(element: TableElement) -> list[str]:
    lines = []
    if element.header:
        lines.append("| " + " | ".join(element.header) + " |")
    for row in element.rows:
        lines.append("| " + " | ".join(row) + " |")
    return lines


def build_deck_prompt(deck: Deck) -> str:
    """Render *deck* as a slide-by-slide outline followed by style guidance."""
    sections = [
        "Create a professional investor pitch deck for a real estate development project.",
        f"Project: {deck.title}\nPresented by: {deck.author}",
        "# SLIDES TO CREATE",
    ]

    for number, slide in enumerate(deck.slides, start=1):
        lines = [f"## Slide {number}: {slide.title}"]
        for element in slide.elements:
            if element.from_master:
                continue
            if isinstance(element, TextElement):
                if element.bullet or len(element.paragraphs) > 1:
                    lines.extend(f"- {p}" for p in element.paragraphs)
                else:
                    lines.append(element.paragraphs[0])
            elif isinstance(element, TableElement):
                lines.extend(_table_lines(element))
            elif isinstance(element, ChartElement):
                lines.extend(_chart_lines(element))
        sections.append("\n".join(lines))

    theme = deck.theme
    sections.append(
        _STYLE_INSTRUCTIONS.format(
            primary=theme.primary, secondary=theme.secondary, accent=theme.accent
        )
    )
    return "\n\n".join(sections)
