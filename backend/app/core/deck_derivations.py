"""
Named derivations referenced by ``Derived`` bindings in the slide catalog.

Each derivation receives the per-slide ``DerivationContext`` and the binding's
optional ``arg`` and returns display text, a list of paragraphs, or chart data.

The NOI growth chart, the capital stack and the use-of-proceeds amounts are
illustrative by default.  With ``financial_visuals="derived"`` they are
computed from the collected figures instead, falling back to the illustrative
numbers for any visual whose inputs cannot be parsed.
"""

import re
from collections.abc import Callable
from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict

from app.core.field_resolver import is_present, resolve_field
from app.schemas.deck import ChartData, ChartSeries
from app.schemas.project_data import FIELD_FALLBACKS

FinancialVisuals = Literal["illustrative", "derived"]

MAX_DEMAND_DRIVERS = 4

NOI_CATEGORIES = ["Year 1", "Year 2", "Year 3", "Year 4", "Year 5"]
ILLUSTRATIVE_NOI = [200.0, 450.0, 650.0, 750.0, 800.0]  # $K

CAPITAL_STACK_LABELS = ["LP Equity", "GP Equity", "Debt"]
ILLUSTRATIVE_CAPITAL_STACK = [60.0, 10.0, 30.0]  # percent

# (key, label, illustrative amount, share of total cost in percent)
USE_OF_PROCEEDS: tuple[tuple[str, str, str, int], ...] = (
    ("land", "Land Acquisition", "$1.2M", 14),
    ("hard_costs", "Hard Construction Costs", "$5.5M", 65),
    ("soft_costs", "Soft Costs & Permits", "$800K", 9),
    ("financing", "Financing Costs", "$400K", 5),
    ("reserve", "Operating Reserve", "$350K", 4),
    ("developer_fee", "Developer Fee", "$250K", 3),
)
PROCEEDS_BY_KEY = {key: (label, amount, share) for key, label, amount, share in USE_OF_PROCEEDS}


class DerivationContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    values: dict[str, str]
    slide_number: int
    slide_title: str
    generated_on: date
    financial_visuals: FinancialVisuals = "illustrative"


# ---------------------------------------------------------------------------
# Amount parsing / formatting
# ---------------------------------------------------------------------------

_NUMBER_RE = re.compile(r"-?\d+(?:,\d{3})*(?:\.\d+)?")
_SUFFIX_RE = re.compile(r"\s*(thousand|million|billion|mm|bn|k|m|b)\b", re.IGNORECASE)
_PERCENT_RE = re.compile(r"(-?\d+(?:\.\d+)?)\s*%")

_MULTIPLIERS = {
    "k": 1_000,
    "thousand": 1_000,
    "m": 1_000_000,
    "mm": 1_000_000,
    "million": 1_000_000,
    "b": 1_000_000_000,
    "bn": 1_000_000_000,
    "billion": 1_000_000_000,
}


def parse_amount(text: str | None) -> float | None:
    """Parse a display amount such as ``"$1.5M"`` or ``"$850,000"``."""
    if not text:
        return None
    match = _NUMBER_RE.search(text)
    if match is None:
        return None
    number = float(match.group(0).replace(",", ""))
    suffix = _SUFFIX_RE.match(text, match.end())
    if suffix:
        number *= _MULTIPLIERS[suffix.group(1).lower()]
    return number


def parse_percent(text: str | None) -> float | None:
    if not text:
        return None
    match = _PERCENT_RE.search(text)
    return float(match.group(1)) if match else None


def format_amount(n: float) -> str:
    if abs(n) >= 1_000_000_000:
        return f"${n / 1_000_000_000:.1f}B"
    if abs(n) >= 1_000_000:
        return f"${n / 1_000_000:.1f}M"
    if abs(n) >= 1_000:
        return f"${n / 1_000:.0f}K"
    return f"${n:,.0f}"


# ---------------------------------------------------------------------------
# Text derivations
# ---------------------------------------------------------------------------

def generated_on(ctx: DerivationContext, arg: str | None = None) -> str:
    return ctx.generated_on.strftime("%B %Y")


def slide_title(ctx: DerivationContext, arg: str | None = None) -> str:
    return ctx.slide_title


def slide_number(ctx: DerivationContext, arg: str | None = None) -> str:
    return str(ctx.slide_number)


def cover_badge(ctx: DerivationContext, arg: str | None = None) -> str:
    """Facility type, plus the bed count only when one was collected."""
    parts = [resolve_field(ctx.values, "facility_type")]
    if is_present(ctx.values, "bed_count"):
        parts.append(f"{resolve_field(ctx.values, 'bed_count')} Beds")
    return " | ".join(parts)


def _split_drivers(text: str) -> list[str]:
    items = [item.strip() for item in text.split(",")]
    return [item for item in items if item][:MAX_DEMAND_DRIVERS]


def demand_drivers(ctx: DerivationContext, arg: str | None = None) -> list[str]:
    """Comma-separated drivers, trimmed, blanks dropped, at most four."""
    drivers = _split_drivers(resolve_field(ctx.values, "demand_drivers"))
    return drivers or _split_drivers(FIELD_FALLBACKS["demand_drivers"])


# ---------------------------------------------------------------------------
# Financial visuals
# ---------------------------------------------------------------------------

def _derived_noi(values: dict[str, str]) -> list[float] | None:
    stabilized = parse_amount(values.get("projected_noi"))
    if stabilized is None or stabilized <= 0:
        return None
    peak = ILLUSTRATIVE_NOI[-1]
    return [round(stabilized * (point / peak) / 1_000, 1) for point in ILLUSTRATIVE_NOI]


def noi_growth(ctx: DerivationContext, arg: str | None = None) -> ChartData:
    values = None
    if ctx.financial_visuals == "derived":
        values = _derived_noi(ctx.values)
    return ChartData(
        categories=list(NOI_CATEGORIES),
        series=[ChartSeries(name="NOI ($K)", values=values or list(ILLUSTRATIVE_NOI))],
    )


def _derived_capital_stack(values: dict[str, str]) -> list[float] | None:
    # totalRaise is the LP equity; the GP co-invest is either a percent of it
    # or an amount of its own.
    lp = parse_amount(values.get("total_raise"))
    debt = parse_amount(values.get("debt_financing"))
    if lp is None or debt is None:
        return None

    co_invest = values.get("co_invest_amount")
    co_invest_pct = parse_percent(co_invest)
    gp = lp * co_invest_pct / 100 if co_invest_pct is not None else parse_amount(co_invest)
    if gp is None:
        return None

    total = lp + gp + debt
    if lp < 0 or gp < 0 or debt < 0 or total <= 0:
        return None
    return [round(part / total * 100, 1) for part in (lp, gp, debt)]


def capital_stack(ctx: DerivationContext, arg: str | None = None) -> ChartData:
    values = None
    if ctx.financial_visuals == "derived":
        values = _derived_capital_stack(ctx.values)
    return ChartData(
        categories=list(CAPITAL_STACK_LABELS),
        series=[ChartSeries(name="Capital Stack", values=values or list(ILLUSTRATIVE_CAPITAL_STACK))],
    )


def proceeds_amount(ctx: DerivationContext, arg: str | None = None) -> str:
    _, illustrative, share = PROCEEDS_BY_KEY[arg]
    if arg == "land" and is_present(ctx.values, "purchase_price"):
        return resolve_field(ctx.values, "purchase_price")
    if ctx.financial_visuals == "derived":
        total = parse_amount(ctx.values.get("total_project_cost"))
        if total is not None and total > 0:
            return format_amount(total * share / 100)
    return illustrative


def proceeds_note(ctx: DerivationContext, arg: str | None = None) -> str:
    if ctx.financial_visuals == "derived" and parse_amount(ctx.values.get("total_project_cost")):
        return "Allocation applies typical budget shares to the total project cost."
    return "Allocation shown is illustrative of a typical development budget."


Derivation = Callable[[DerivationContext, str | None], object]

DERIVATIONS: dict[str, Derivation] = {
    "generated_on": generated_on,
    "slide_title": slide_title,
    "slide_number": slide_number,
    "cover_badge": cover_badge,
    "demand_drivers": demand_drivers,
    "noi_growth": noi_growth,
    "capital_stack": capital_stack,
    "proceeds_amount": proceeds_amount,
    "proceeds_note": proceeds_note,
}
