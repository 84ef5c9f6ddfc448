"""
Pydantic models for the data a wizard run collects and the branding it applies.

``ProjectData`` is a flat record of optional display strings grouped into six
interview categories.  Values arrive pre-formatted ("$1.5M", "72", "8%") and
are never parsed for layout purposes; every field has one canonical fallback
in ``FIELD_FALLBACKS`` so a deck can be assembled from any partial record.

Both models speak camelCase on the wire (``projectName``, ``projectedIRR``)
and snake_case in Python.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Interview categories
# ---------------------------------------------------------------------------

CATEGORY_ORDER: tuple[str, ...] = (
    "site",
    "development",
    "market",
    "financials",
    "team",
    "terms",
)

CATEGORY_LABELS: dict[str, str] = {
    "site": "Site & Property",
    "development": "Development Plan",
    "market": "Market Analysis",
    "financials": "Financials",
    "team": "Team & Track Record",
    "terms": "Deal Terms",
}

CATEGORY_DESCRIPTIONS: dict[str, str] = {
    "site": "Location, zoning, and property details",
    "development": "Facility type, beds, construction",
    "market": "Demographics, competition, demand",
    "financials": "Projections, returns, capital structure",
    "team": "Sponsor experience and credentials",
    "terms": "Investment structure and returns",
}

CATEGORY_FIELDS: dict[str, tuple[str, ...]] = {
    "site": (
        "project_name",
        "property_address",
        "lot_size",
        "zoning",
        "zoning_status",
        "purchase_price",
        "land_ownership",
    ),
    "development": (
        "facility_type",
        "bed_count",
        "square_footage",
        "construction_timeline",
        "total_project_cost",
        "construction_cost_per_bed",
        "license_type",
        "general_contractor",
    ),
    "market": (
        "market_location",
        "population_65_plus",
        "population_85_plus",
        "population_growth",
        "competitor_count",
        "market_occupancy",
        "average_daily_rate",
        "demand_drivers",
    ),
    "financials": (
        "total_raise",
        "equity_structure",
        "debt_financing",
        "projected_noi",
        "projected_irr",
        "cash_on_cash",
        "equity_multiple",
        "going_in_cap_rate",
        "exit_cap_rate",
        "hold_period",
    ),
    "team": (
        "sponsor_name",
        "sponsor_experience",
        "prior_deals",
        "prior_returns",
        "assets_under_management",
        "co_invest_amount",
        "operator",
        "management_team",
    ),
    "terms": (
        "minimum_investment",
        "preferred_return",
        "waterfall_structure",
        "management_fee",
        "acquisition_fee",
        "disposition_fee",
        "distribution_frequency",
        "exit_strategy",
    ),
}

EM_DASH = "—"

# Canonical display value for every field when the record has nothing usable.
FIELD_FALLBACKS: dict[str, str] = {
    # site
    "project_name": "Investment Opportunity",
    "property_address": EM_DASH,
    "lot_size": EM_DASH,
    "zoning": EM_DASH,
    "zoning_status": EM_DASH,
    "purchase_price": EM_DASH,
    "land_ownership": EM_DASH,
    # development
    "facility_type": "Skilled Nursing Facility",
    "bed_count": EM_DASH,
    "square_footage": EM_DASH,
    "construction_timeline": "18-24 months",
    "total_project_cost": "$8.5M",
    "construction_cost_per_bed": EM_DASH,
    "license_type": "TBD",
    "general_contractor": "TBD",
    # market
    "market_location": "Southern California",
    "population_65_plus": "125,000+",
    "population_85_plus": EM_DASH,
    "population_growth": "+15%",
    "competitor_count": "6",
    "market_occupancy": "92%",
    "average_daily_rate": "$325",
    "demand_drivers": (
        "Hospital discharge partnerships, aging in place trends, "
        "increasing acuity levels, limited new supply"
    ),
    # financials
    "total_raise": "$1.5M",
    "equity_structure": EM_DASH,
    "debt_financing": "TBD",
    "projected_noi": EM_DASH,
    "projected_irr": EM_DASH,
    "cash_on_cash": EM_DASH,
    "equity_multiple": EM_DASH,
    "going_in_cap_rate": EM_DASH,
    "exit_cap_rate": EM_DASH,
    "hold_period": "5-7 years",
    # team
    "sponsor_name": "Principal Sponsor",
    "sponsor_experience": "15+ years in healthcare real estate",
    "prior_deals": "10+",
    "prior_returns": "18%+",
    "assets_under_management": "$50M+",
    "co_invest_amount": "5%",
    "operator": "Experienced third-party operator",
    "management_team": EM_DASH,
    # terms
    "minimum_investment": "$50,000",
    "preferred_return": "8%",
    "waterfall_structure": (
        "Standard waterfall with LP-favorable structure. GP promotes are earned "
        "only after investor capital is returned with the preferred return."
    ),
    "management_fee": "1.5%",
    "acquisition_fee": "1.0%",
    "disposition_fee": "1.0%",
    "distribution_frequency": "Quarterly",
    "exit_strategy": "Sale at stabilization",
}

FIELD_TO_CATEGORY: dict[str, str] = {
    field_name: category
    for category, field_names in CATEGORY_FIELDS.items()
    for field_name in field_names
}


# Characters XML 1.0 forbids in document text; tab, newline and CR are allowed
_XML_ILLEGAL = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def clean_text(value: str) -> str:
    return _XML_ILLEGAL.sub("", value)


def is_blank(value: Any) -> bool:
    """``True`` for ``None`` and for strings that are empty after stripping."""
    return value is None or (isinstance(value, str) and not value.strip())


# ---------------------------------------------------------------------------
# ProjectData
# ---------------------------------------------------------------------------

class ProjectData(BaseModel):
    """Immutable snapshot of everything collected so far."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    # site
    project_name: str | None = None
    property_address: str | None = None
    lot_size: str | None = None
    zoning: str | None = None
    zoning_status: str | None = None
    purchase_price: str | None = None
    land_ownership: str | None = None

    # development
    facility_type: str | None = None
    bed_count: str | None = None
    square_footage: str | None = None
    construction_timeline: str | None = None
    total_project_cost: str | None = None
    construction_cost_per_bed: str | None = None
    license_type: str | None = None
    general_contractor: str | None = None

    # market
    market_location: str | None = None
    population_65_plus: str | None = None
    population_85_plus: str | None = None
    population_growth: str | None = None
    competitor_count: str | None = None
    market_occupancy: str | None = None
    average_daily_rate: str | None = None
    demand_drivers: str | None = None

    # financials
    total_raise: str | None = None
    equity_structure: str | None = None
    debt_financing: str | None = None
    projected_noi: str | None = Field(default=None, alias="projectedNOI")
    projected_irr: str | None = Field(default=None, alias="projectedIRR")
    cash_on_cash: str | None = None
    equity_multiple: str | None = None
    going_in_cap_rate: str | None = None
    exit_cap_rate: str | None = None
    hold_period: str | None = None

    # team
    sponsor_name: str | None = None
    sponsor_experience: str | None = None
    prior_deals: str | None = None
    prior_returns: str | None = None
    assets_under_management: str | None = None
    co_invest_amount: str | None = None
    operator: str | None = None
    management_team: str | None = None

    # terms
    minimum_investment: str | None = None
    preferred_return: str | None = None
    waterfall_structure: str | None = None
    management_fee: str | None = None
    acquisition_fee: str | None = None
    disposition_fee: str | None = None
    distribution_frequency: str | None = None
    exit_strategy: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _as_display_string(cls, value: Any) -> str | None:
        # Extraction output sometimes carries bare numbers; anything that is
        # not a scalar has no display form and is treated as missing.
        if value is None:
            return None
        if isinstance(value, str):
            return clean_text(value)
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return str(value)
        return None

    def populated(self) -> dict[str, str]:
        """Return ``{field_name: value}`` for every non-blank field."""
        return {
            name: value.strip()
            for name, value in self.model_dump().items()
            if not is_blank(value)
        }

    def to_payload(self) -> dict[str, str]:
        """camelCase dict of the populated fields, as stored and sent over the wire."""
        return self.model_dump(by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# BrandConfig
# ---------------------------------------------------------------------------

DEFAULT_PRIMARY_COLOR = "#003B75"
DEFAULT_SECONDARY_COLOR = "#00A3E0"
DEFAULT_ACCENT_COLOR = "#FF6B35"
DEFAULT_DARK_COLOR = "#1E293B"
DEFAULT_LIGHT_COLOR = "#F8FAFC"


class BrandConfig(BaseModel):
    """Company branding applied to every slide."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    logo: str | None = None  # base64 image, optionally a data: URL
    company_name: str = ""
    primary_color: str = DEFAULT_PRIMARY_COLOR
    secondary_color: str = DEFAULT_SECONDARY_COLOR
    accent_color: str = DEFAULT_ACCENT_COLOR
    dark_color: str = DEFAULT_DARK_COLOR
    light_color: str = DEFAULT_LIGHT_COLOR

    @field_validator("logo", mode="before")
    @classmethod
    def _blank_logo_is_none(cls, value: Any) -> str | None:
        if not isinstance(value, str) or not value.strip():
            return None
        return value.strip()

    @field_validator("company_name", mode="before")
    @classmethod
    def _company_name_as_string(cls, value: Any) -> str:
        return clean_text(value).strip() if isinstance(value, str) else ""

    @field_validator(
        "primary_color",
        "secondary_color",
        "accent_color",
        "dark_color",
        "light_color",
        mode="before",
    )
    @classmethod
    def _blank_color_is_default(cls, value: Any, info) -> str:
        if not isinstance(value, str) or not value.strip():
            return cls.model_fields[info.field_name].default
        return value.strip()

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
