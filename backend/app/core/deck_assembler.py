"""
Deck assembly: ``BrandConfig`` + ``ProjectData`` -> ``Deck``.

Pure and synchronous.  The theme is resolved once, then every slide of the
catalog is walked in order and each master and slide region is turned into a
positioned element with all bindings resolved.  Missing data is never an
error; it is what the fallbacks are for.
"""

import logging
from collections.abc import Mapping
from datetime import date
from typing import Any

from app.core.deck_derivations import DERIVATIONS, DerivationContext, FinancialVisuals
from app.core.field_resolver import is_present, resolve_field
from app.core.slide_catalog import MASTERS, SLIDE_CATALOG
from app.core.theme import resolve_theme
from app.schemas.deck import (
    AssembledSlide,
    ChartData,
    ChartElement,
    ChartRegion,
    Deck,
    DeckTheme,
    Derived,
    FieldRef,
    Format,
    ImageElement,
    LogoRegion,
    ShapeElement,
    ShapeRegion,
    Static,
    TableElement,
    TableRegion,
    TextElement,
    TextRegion,
    TextStyle,
)
from app.schemas.project_data import BrandConfig, ProjectData

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Investment Opportunity"
DEFAULT_AUTHOR = "Investor Deck Wizard"
DECK_SUBJECT = "Real Estate Investment Opportunity"


def coerce_brand(brand: BrandConfig | Mapping[str, Any] | None) -> BrandConfig:
    if brand is None:
        return BrandConfig()
    if isinstance(brand, BrandConfig):
        return brand
    return BrandConfig.model_validate(dict(brand))


def coerce_project_data(data: ProjectData | Mapping[str, Any] | None) -> ProjectData:
    if data is None:
        return ProjectData()
    if isinstance(data, ProjectData):
        return data
    return ProjectData.model_validate(dict(data))


# ---------------------------------------------------------------------------
# Binding resolution
# ---------------------------------------------------------------------------

def _resolve(binding, ctx: DerivationContext):
    if isinstance(binding, Static):
        return binding.text
    if isinstance(binding, FieldRef):
        return resolve_field(ctx.values, binding.key, binding.fallback, binding.alternates)
    if isinstance(binding, Derived):
        return DERIVATIONS[binding.name](ctx, binding.arg)
    if isinstance(binding, Format):
        return binding.template.format(
            **{name: _resolve_text(value, ctx) for name, value in binding.values.items()}
        )
    raise TypeError(f"Unknown binding: {binding!r}")


def _resolve_text(binding, ctx: DerivationContext) -> str:
    value = _resolve(binding, ctx)
    if isinstance(value, list):
        return ", ".join(value)
    return str(value)


def _resolve_paragraphs(content, ctx: DerivationContext) -> list[str]:
    paragraphs: list[str] = []
    for binding in content:
        value = _resolve(binding, ctx)
        if isinstance(value, list):
            paragraphs.extend(value)
        else:
            paragraphs.append(str(value))
    return paragraphs


def _themed(style: TextStyle, theme: DeckTheme) -> TextStyle:
    return style.model_copy(update={"color": theme.color(style.color)})


# ---------------------------------------------------------------------------
# Regions -> elements
# ---------------------------------------------------------------------------

def _build_element(region, ctx: DerivationContext, theme: DeckTheme, brand: BrandConfig, from_master: bool):
    if region.when and not any(is_present(ctx.values, key) for key in region.when):
        return None

    common = {"id": region.id, "box": region.box, "from_master": from_master}

    if isinstance(region, TextRegion):
        return TextElement(
            **common,
            paragraphs=_resolve_paragraphs(region.content, ctx),
            style=_themed(region.style, theme),
            bullet=region.bullet,
        )

    if isinstance(region, ShapeRegion):
        return ShapeElement(
            **common,
            shape=region.shape,
            fill=theme.color(region.fill),
            shadow=region.shadow,
        )

    if isinstance(region, TableRegion):
        return TableElement(
            **common,
            header=list(region.header) if region.header else None,
            rows=[[_resolve_text(cell, ctx) for cell in row] for row in region.rows],
            col_widths=list(region.col_widths),
            style=_themed(region.style, theme),
            label_color=theme.color(region.label_color),
            header_fill=theme.color(region.header_fill),
            header_color=theme.color(region.header_color),
            fill=theme.color(region.fill) if region.fill else None,
            bold_values=region.bold_values,
        )

    if isinstance(region, ChartRegion):
        data: ChartData = _resolve(region.data, ctx)
        return ChartElement(
            **common,
            chart=region.chart,
            title=region.title,
            data=data,
            colors=[theme.color(color) for color in region.colors],
            show_legend=region.show_legend,
            number_format=region.number_format,
        )

    if isinstance(region, LogoRegion):
        if brand.logo:
            return ImageElement(**common, data=brand.logo)
        if brand.company_name:
            return TextElement(
                **common,
                paragraphs=[brand.company_name],
                style=_themed(region.style, theme),
            )
        return None

    raise TypeError(f"Unknown region: {region!r}")


def assemble_deck(
    brand: BrandConfig | Mapping[str, Any] | None = None,
    project_data: ProjectData | Mapping[str, Any] | None = None,
    *,
    generated_on: date | None = None,
    financial_visuals: FinancialVisuals = "illustrative",
) -> Deck:
    """Assemble the ten-slide investor deck.

    Parameters
    ----------
    brand:
        ``BrandConfig`` or its camelCase dict; ``None`` means default branding.
    project_data:
        ``ProjectData`` snapshot or its camelCase dict; any subset of fields.
    generated_on:
        Date stamped on the cover.  Defaults to today.
    financial_visuals:
        ``"illustrative"`` keeps the placeholder NOI, capital-stack and
        use-of-proceeds figures; ``"derived"`` computes them from the data.
    """
    brand = coerce_brand(brand)
    data = coerce_project_data(project_data)
    theme = resolve_theme(brand)

    values = data.populated()
    if brand.company_name:
        values["company_name"] = brand.company_name

    stamp = generated_on or date.today()
    slides: list[AssembledSlide] = []

    for index, spec in enumerate(SLIDE_CATALOG):
        master = MASTERS[spec.master]
        ctx = DerivationContext(
            values=values,
            slide_number=index + 1,
            slide_title=spec.title,
            generated_on=stamp,
            financial_visuals=financial_visuals,
        )

        elements = []
        for region in master.regions:
            element = _build_element(region, ctx, theme, brand, from_master=True)
            if element is not None:
                elements.append(element)
        for region in spec.regions:
            element = _build_element(region, ctx, theme, brand, from_master=False)
            if element is not None:
                elements.append(element)

        slides.append(
            AssembledSlide(
                id=spec.id,
                title=spec.title,
                master=spec.master,
                background=theme.color(master.background),
                elements=elements,
            )
        )

    logger.debug("Assembled %d slides for %r", len(slides), data.project_name)

    return Deck(
        title=resolve_field(values, "project_name", fallback=DEFAULT_TITLE),
        author=brand.company_name or DEFAULT_AUTHOR,
        subject=DECK_SUBJECT,
        theme=theme,
        slides=slides,
    )
