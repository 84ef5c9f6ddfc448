"""
Pydantic models describing investor decks.

Two families live here:

* **Layout specs** (``SlideSpec``, ``MasterSpec`` and the region models) are
  static configuration.  Regions hold bindings that say *where* their text
  comes from, not the text itself.
* **Assembled output** (``Deck``, ``AssembledSlide`` and the element models)
  is what the assembler produces: every binding resolved, every color a
  concrete hex value.  It is JSON serialisable and is the only input the
  PPTX renderer and the prompt builder need.

All coordinates are inches on a 13.333 x 7.5 canvas.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

SLIDE_WIDTH = 13.333
SLIDE_HEIGHT = 7.5

# Boxes that share an edge are not overlapping.
_EPSILON = 1e-6


class Box(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    w: float
    h: float

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    def overlaps(self, other: "Box") -> bool:
        return (
            self.x < other.right - _EPSILON
            and other.x < self.right - _EPSILON
            and self.y < other.bottom - _EPSILON
            and other.y < self.bottom - _EPSILON
        )

    def within(self, width: float = SLIDE_WIDTH, height: float = SLIDE_HEIGHT) -> bool:
        return (
            self.x >= -_EPSILON
            and self.y >= -_EPSILON
            and self.right <= width + _EPSILON
            and self.bottom <= height + _EPSILON
        )


class TextStyle(BaseModel):
    """Font settings.  ``color`` is a theme role in specs and hex once assembled."""

    model_config = ConfigDict(frozen=True)

    size: float = 12
    color: str = "text"
    bold: bool = False
    italic: bool = False
    align: Literal["left", "center", "right"] = "left"
    font: str = "Arial"


# ---------------------------------------------------------------------------
# Bindings
# ---------------------------------------------------------------------------

class Static(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["static"] = "static"
    text: str


class FieldRef(BaseModel):
    """A ``ProjectData`` field, tried after ``alternates`` before the fallback.

    ``fallback=None`` means the canonical entry in ``FIELD_FALLBACKS``.
    The key ``company_name`` reads from the brand.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["field"] = "field"
    key: str
    alternates: tuple[str, ...] = ()
    fallback: str | None = None


class Derived(BaseModel):
    """A value computed by a named derivation (dates, charts, split lists)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["derived"] = "derived"
    name: str
    arg: str | None = None


class Format(BaseModel):
    """``str.format`` template whose placeholders are themselves bindings."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["format"] = "format"
    template: str
    values: dict[str, Union[Static, FieldRef, Derived]] = Field(default_factory=dict)


Binding = Annotated[Union[Static, FieldRef, Derived, Format], Field(discriminator="kind")]


# ---------------------------------------------------------------------------
# Regions
# ---------------------------------------------------------------------------

class _Region(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    box: Box
    # Emit only if at least one of these fields is present.
    when: tuple[str, ...] = ()


class TextRegion(_Region):
    kind: Literal["text"] = "text"
    content: tuple[Binding, ...]
    style: TextStyle = TextStyle()
    bullet: str | None = None


class ShapeRegion(_Region):
    kind: Literal["shape"] = "shape"
    shape: Literal["rect", "round_rect", "ellipse"] = "rect"
    fill: str = "white"
    shadow: bool = False


class TableRegion(_Region):
    kind: Literal["table"] = "table"
    header: tuple[str, ...] | None = None
    rows: tuple[tuple[Binding, ...], ...]
    col_widths: tuple[float, ...]
    style: TextStyle = TextStyle(size=11)
    label_color: str = "text_light"
    header_fill: str = "primary"
    header_color: str = "white"
    fill: str | None = "white"
    bold_values: bool = True


class ChartRegion(_Region):
    kind: Literal["chart"] = "chart"
    chart: Literal["bar", "doughnut"]
    data: Derived
    title: str
    colors: tuple[str, ...] = ("primary",)
    show_legend: bool = False
    number_format: str = "General"


class LogoRegion(_Region):
    """Brand logo image, else the company name as text, else nothing."""

    kind: Literal["logo"] = "logo"
    style: TextStyle = TextStyle(size=14, color="white", bold=True)


Region = Annotated[
    Union[TextRegion, ShapeRegion, TableRegion, ChartRegion, LogoRegion],
    Field(discriminator="kind"),
]


class MasterSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: Literal["title", "content"]
    background: str
    regions: tuple[Region, ...] = ()


class SlideSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    master: Literal["title", "content"] = "content"
    regions: tuple[Region, ...]


# ---------------------------------------------------------------------------
# Theme
# ---------------------------------------------------------------------------

class DeckTheme(BaseModel):
    """Concrete colors (hex, no ``#``) for every role a spec may name."""

    model_config = ConfigDict(frozen=True)

    primary: str
    secondary: str
    accent: str
    dark: str
    light: str
    white: str = "FFFFFF"
    text: str = "333333"
    text_light: str = "666666"

    def color(self, ref: str) -> str:
        """Map a role name to its hex value; anything else is already a color."""
        if ref in DeckTheme.model_fields:
            return getattr(self, ref)
        return ref.lstrip("#").upper()


# ---------------------------------------------------------------------------
# Assembled output
# ---------------------------------------------------------------------------

class _Element(BaseModel):
    id: str
    box: Box
    from_master: bool = False


class TextElement(_Element):
    kind: Literal["text"] = "text"
    paragraphs: list[str]
    style: TextStyle
    bullet: str | None = None

    @property
    def text(self) -> str:
        return "\n".join(self.paragraphs)


class ShapeElement(_Element):
    kind: Literal["shape"] = "shape"
    shape: Literal["rect", "round_rect", "ellipse"]
    fill: str
    shadow: bool = False


class TableElement(_Element):
    kind: Literal["table"] = "table"
    header: list[str] | None = None
    rows: list[list[str]]
    col_widths: list[float]
    style: TextStyle
    label_color: str
    header_fill: str
    header_color: str
    fill: str | None = None
    bold_values: bool = True

    def value_for(self, label: str) -> str | None:
        """Second cell of the first row whose first cell is *label*."""
        for row in self.rows:
            if row and row[0] == label:
                return row[1] if len(row) > 1 else None
        return None


class ChartSeries(BaseModel):
    name: str
    values: list[float]


class ChartData(BaseModel):
    categories: list[str]
    series: list[ChartSeries]


class ChartElement(_Element):
    kind: Literal["chart"] = "chart"
    chart: Literal["bar", "doughnut"]
    title: str
    data: ChartData
    colors: list[str]
    show_legend: bool = False
    number_format: str = "General"


class ImageElement(_Element):
    kind: Literal["image"] = "image"
    data: str


Element = Annotated[
    Union[TextElement, ShapeElement, TableElement, ChartElement, ImageElement],
    Field(discriminator="kind"),
]


class AssembledSlide(BaseModel):
    id: str
    title: str
    master: Literal["title", "content"]
    background: str
    elements: list[Element]

    def element(self, element_id: str):
        for element in self.elements:
            if element.id == element_id:
                return element
        return None


class Deck(BaseModel):
    title: str
    author: str
    subject: str
    theme: DeckTheme
    slides: list[AssembledSlide]

    def slide(self, slide_id: str) -> AssembledSlide | None:
        for slide in self.slides:
            if slide.id == slide_id:
                return slide
        return None
