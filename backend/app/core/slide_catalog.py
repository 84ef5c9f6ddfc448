"""
The investor deck layout, as data.

``SLIDE_CATALOG`` is the single authoritative list of the ten slides, in the
order they are presented (cover, summary, details, financials, close).  Every
region is positioned on the 13.333 x 7.5 inch canvas; text-bearing regions on
one slide never overlap and every box stays inside the canvas.

``MASTERS`` holds the chrome shared by slides of the same master: the title
master (brand background with a bottom band) and the content master (header
bar with the slide title, accent line, footer with slide number, logo).
"""

from app.schemas.deck import (
    SLIDE_WIDTH,
    Box,
    ChartRegion,
    Derived,
    FieldRef,
    Format,
    LogoRegion,
    MasterSpec,
    ShapeRegion,
    SlideSpec,
    Static,
    TableRegion,
    TextRegion,
    TextStyle,
)
from app.core.deck_derivations import USE_OF_PROCEEDS

# Light tints used for secondary text on primary-colored backgrounds.
PALE_BLUE = "B0D4F1"
MUTED_BLUE = "80B0D4"
RULE_GRAY = "E0E0E0"
FOOTER_GRAY = "CBD5E1"

PROCEEDS_BAR_MAX_WIDTH = 4.2


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def field(key: str, *alternates: str, fallback: str | None = None) -> FieldRef:
    return FieldRef(key=key, alternates=alternates, fallback=fallback)


def fmt(template: str, **values) -> Format:
    """Template binding; plain string values name ``ProjectData`` fields."""
    bindings = {
        name: FieldRef(key=value) if isinstance(value, str) else value
        for name, value in values.items()
    }
    return Format(template=template, values=bindings)


def _binding(item):
    return Static(text=item) if isinstance(item, str) else item


def text(
    region_id: str,
    box: tuple[float, float, float, float],
    *content,
    size: float = 12,
    color: str = "text",
    bold: bool = False,
    italic: bool = False,
    align: str = "left",
    bullet: str | None = None,
    when: tuple[str, ...] = (),
) -> TextRegion:
    return TextRegion(
        id=region_id,
        box=Box(x=box[0], y=box[1], w=box[2], h=box[3]),
        content=tuple(_binding(item) for item in content),
        style=TextStyle(size=size, color=color, bold=bold, italic=italic, align=align),
        bullet=bullet,
        when=when,
    )


def heading(region_id: str, box, title: str, size: float = 14, color: str = "primary") -> TextRegion:
    return text(region_id, box, title, size=size, color=color, bold=True)


def shape(
    region_id: str,
    box: tuple[float, float, float, float],
    fill: str = "white",
    kind: str = "round_rect",
    shadow: bool = False,
    when: tuple[str, ...] = (),
) -> ShapeRegion:
    return ShapeRegion(
        id=region_id,
        box=Box(x=box[0], y=box[1], w=box[2], h=box[3]),
        shape=kind,
        fill=fill,
        shadow=shadow,
        when=when,
    )


def card(region_id: str, box) -> ShapeRegion:
    return shape(region_id, box, fill="white", shadow=True)


def table(
    region_id: str,
    box: tuple[float, float, float, float],
    rows,
    col_widths: tuple[float, ...],
    header: tuple[str, ...] | None = None,
    size: float = 11,
    value_color: str = "text",
    fill: str | None = "white",
) -> TableRegion:
    return TableRegion(
        id=region_id,
        box=Box(x=box[0], y=box[1], w=box[2], h=box[3]),
        header=header,
        rows=tuple(tuple(_binding(cell) for cell in row) for row in rows),
        col_widths=col_widths,
        style=TextStyle(size=size, color=value_color),
        fill=fill,
    )


# ---------------------------------------------------------------------------
# Masters
# ---------------------------------------------------------------------------

TITLE_MASTER = MasterSpec(
    name="title",
    background="primary",
    regions=(
        shape("accent_bar", (0, 6.8, SLIDE_WIDTH, 0.7), fill="secondary", kind="rect"),
    ),
)

CONTENT_MASTER = MasterSpec(
    name="content",
    background="light",
    regions=(
        shape("header_bar", (0, 0, SLIDE_WIDTH, 1.0), fill="primary", kind="rect"),
        shape("header_accent", (0, 1.0, SLIDE_WIDTH, 0.05), fill="secondary", kind="rect"),
        shape("footer_bar", (0, 7.1, SLIDE_WIDTH, 0.4), fill="dark", kind="rect"),
        text("slide_title", (0.4, 0.25, 8.0, 0.5), Derived(name="slide_title"),
             size=24, color="white", bold=True),
        LogoRegion(id="logo", box=Box(x=11.3, y=0.2, w=1.7, h=0.6),
                   style=TextStyle(size=14, color="white", bold=True, align="right")),
        text("footer_note", (0.4, 7.15, 6.0, 0.3),
             fmt("{company} | Confidential", company="company_name"),
             size=9, color=FOOTER_GRAY, when=("company_name",)),
        text("slide_number", (12.3, 7.15, 0.7, 0.3), Derived(name="slide_number"),
             size=10, color="white", align="right"),
    ),
)

MASTERS: dict[str, MasterSpec] = {
    "title": TITLE_MASTER,
    "content": CONTENT_MASTER,
}


# ---------------------------------------------------------------------------
# 1.  Cover
# ---------------------------------------------------------------------------

COVER = SlideSpec(
    id="cover",
    title="Cover",
    master="title",
    regions=(
        LogoRegion(id="logo", box=Box(x=5.42, y=0.8, w=2.5, h=1.0),
                   style=TextStyle(size=20, color="white", bold=True, align="center")),
        text("title", (0.5, 2.3, 12.33, 1.2),
             field("project_name", "company_name", fallback="Investment Opportunity"),
             size=44, color="white", bold=True, align="center"),
        text("tagline", (0.5, 3.6, 12.33, 0.6),
             fmt("{raise_amount} Equity Investment Opportunity", raise_amount="total_raise"),
             size=24, color="secondary", align="center"),
        text("location", (0.5, 4.3, 12.33, 0.5),
             field("property_address", "market_location", fallback="Southern California"),
             size=18, color=PALE_BLUE, align="center"),
        shape("badge", (4.67, 4.95, 4.0, 0.45), fill="accent",
              when=("facility_type", "bed_count")),
        text("badge_text", (4.67, 4.95, 4.0, 0.45),
             Derived(name="cover_badge"),
             size=14, color="white", bold=True, align="center",
             when=("facility_type", "bed_count")),
        text("date", (0.5, 5.55, 12.33, 0.4), Derived(name="generated_on"),
             size=14, color=MUTED_BLUE, align="center"),
        text("confidential", (0.5, 6.95, 12.33, 0.3), "CONFIDENTIAL",
             size=10, color="white", align="center"),
    ),
)


# ---------------------------------------------------------------------------
# 2.  Executive Summary
# ---------------------------------------------------------------------------

EXECUTIVE_SUMMARY = SlideSpec(
    id="executive_summary",
    title="Executive Summary",
    regions=(
        card("highlights_card", (0.5, 1.3, 6.0, 4.5)),
        heading("highlights_heading", (0.7, 1.45, 5.6, 0.4), "Investment Highlights", size=16),
        text("highlights", (0.7, 1.95, 5.6, 3.7),
             fmt("{facility} Development", facility="facility_type"),
             fmt("{beds} Licensed Beds", beds="bed_count"),
             field("property_address", "market_location", fallback="Southern California"),
             fmt("{timeline} development timeline", timeline="construction_timeline"),
             fmt("Projected {irr} IRR", irr="projected_irr"),
             fmt("{pref} Preferred Return to LPs", pref="preferred_return"),
             size=13, bullet="•"),
        card("metrics_card", (6.8, 1.3, 6.0, 4.5)),
        heading("metrics_heading", (7.0, 1.45, 5.6, 0.4), "Key Metrics", size=16),
        table("key_metrics", (7.0, 1.95, 5.6, 3.6), (
            ("Total Raise", field("total_raise")),
            ("Total Project Cost", field("total_project_cost")),
            ("Projected IRR", field("projected_irr")),
            ("Equity Multiple", field("equity_multiple")),
            ("Cash-on-Cash", field("cash_on_cash")),
            ("Hold Period", field("hold_period")),
        ), col_widths=(3.0, 2.6), size=12, value_color="primary"),
        heading("thesis_heading", (0.5, 5.95, 12.33, 0.35), "Investment Thesis"),
        text("thesis", (0.5, 6.35, 12.33, 0.7),
             fmt("Strategic development opportunity in {market} addressing the growing "
                 "demand for {facility} beds in an underserved market. Experienced sponsor "
                 "({experience}) seeking {raise_amount} in LP equity.",
                 market="market_location", facility="facility_type",
                 experience="sponsor_experience", raise_amount="total_raise"),
             size=11),
    ),
)


# ---------------------------------------------------------------------------
# 3.  The Opportunity
# ---------------------------------------------------------------------------

OPPORTUNITY = SlideSpec(
    id="opportunity",
    title="The Opportunity",
    regions=(
        card("property_card", (0.5, 1.3, 6.0, 3.0)),
        heading("property_heading", (0.7, 1.45, 5.6, 0.35), "Property Details"),
        table("property_details", (0.7, 1.9, 5.6, 2.25), (
            ("Address", field("property_address")),
            ("Lot Size", field("lot_size")),
            ("Zoning", field("zoning")),
            ("Status", field("zoning_status")),
            ("Land Basis", field("purchase_price", "land_ownership")),
        ), col_widths=(1.8, 3.8)),
        card("development_card", (6.8, 1.3, 6.0, 3.0)),
        heading("development_heading", (7.0, 1.45, 5.6, 0.35), "Development Overview"),
        table("development_overview", (7.0, 1.9, 5.6, 2.25), (
            ("Facility Type", field("facility_type")),
            ("Licensed Beds", field("bed_count")),
            ("Square Footage", field("square_footage")),
            ("Timeline", field("construction_timeline")),
            ("Total Cost", field("total_project_cost")),
        ), col_widths=(2.0, 3.6)),
        card("why_card", (0.5, 4.5, 12.33, 2.45)),
        heading("why_heading", (0.7, 4.65, 12.0, 0.35), "Why This Opportunity"),
        text("why_checklist", (0.7, 5.1, 12.0, 1.7),
             fmt("Aging population in {market} driving sustained demand for care beds",
                 market="market_location"),
             "Limited new supply due to CON requirements and development complexity",
             "Prime location with strong referral network and hospital proximity",
             fmt("Experienced sponsor with {deals} completed healthcare real estate deals",
                 deals="prior_deals"),
             size=11, bullet="✓"),
    ),
)


# ---------------------------------------------------------------------------
# 4.  Market Analysis
# ---------------------------------------------------------------------------

_MARKET_STATS = (
    ("population_65_plus", "Population 65+ (10-mile radius)", "primary"),
    ("population_growth", "Projected Growth (10-year)", "accent"),
    ("competitor_count", "Competing Facilities", "primary"),
    ("market_occupancy", "Market Occupancy Rate", "secondary"),
    ("average_daily_rate", "Average Daily Rate", "primary"),
)


def _market_tiles():
    regions = []
    for i, (key, label, color) in enumerate(_MARKET_STATS):
        x = 0.5 + i * 2.5
        regions.append(card(f"stat_{i + 1}_card", (x, 1.3, 2.33, 1.95)))
        regions.append(text(f"stat_{i + 1}_value", (x, 1.5, 2.33, 0.75), field(key),
                            size=28, color=color, bold=True, align="center"))
        regions.append(text(f"stat_{i + 1}_label", (x, 2.35, 2.33, 0.6), label,
                            size=10, color="text_light", align="center"))
    return tuple(regions)


MARKET_ANALYSIS = SlideSpec(
    id="market_analysis",
    title="Market Analysis",
    regions=(
        *_market_tiles(),
        text("market_line", (0.5, 3.45, 12.33, 0.45),
             fmt("Target Market: {market}", market="market_location"),
             size=14, color="primary", bold=True),
        text("population_85", (0.5, 3.9, 12.33, 0.35),
             fmt("Population 85+: {population}", population="population_85_plus"),
             size=11, color="text_light", when=("population_85_plus",)),
        card("drivers_card", (0.5, 4.4, 12.33, 2.55)),
        heading("drivers_heading", (0.7, 4.55, 12.0, 0.35), "Key Demand Drivers"),
        text("demand_drivers", (0.7, 5.0, 12.0, 1.85), Derived(name="demand_drivers"),
             size=12, bullet="•"),
    ),
)


# ---------------------------------------------------------------------------
# 5.  Development Plan
# ---------------------------------------------------------------------------

_PHASES = (
    ("Pre-Development", "0-3 months", "Entitlements, permits, financing"),
    ("Construction", "3-18 months", "Ground-up development"),
    ("Licensing", "18-21 months", "State licensing, CMS certification"),
    ("Stabilization", "21-30 months", "Lease-up to stabilized occupancy"),
)


def _phase_cards():
    regions = []
    for i, (name, duration, activities) in enumerate(_PHASES):
        x = 0.5 + i * 3.08
        n = i + 1
        regions.append(shape(f"phase_{n}_dot", (x + 1.25, 1.6, 0.4, 0.4), fill="secondary", kind="ellipse"))
        regions.append(text(f"phase_{n}_number", (x + 1.25, 1.6, 0.4, 0.4), str(n),
                            size=12, color="white", bold=True, align="center"))
        regions.append(card(f"phase_{n}_card", (x, 2.15, 2.9, 1.75)))
        regions.append(text(f"phase_{n}_name", (x, 2.25, 2.9, 0.4), name,
                            size=13, color="primary", bold=True, align="center"))
        regions.append(text(f"phase_{n}_duration", (x, 2.65, 2.9, 0.35), duration,
                            size=11, color="secondary", align="center"))
        regions.append(text(f"phase_{n}_activities", (x, 3.05, 2.9, 0.7), activities,
                            size=10, color="text_light", align="center"))
    return tuple(regions)


DEVELOPMENT_PLAN = SlideSpec(
    id="development_plan",
    title="Development Plan",
    regions=(
        shape("timeline_bar", (0.5, 1.76, 12.33, 0.08), fill=RULE_GRAY, kind="rect"),
        *_phase_cards(),
        card("specs_card", (0.5, 4.15, 7.5, 2.8)),
        heading("specs_heading", (0.7, 4.3, 7.1, 0.35), "Facility Specifications"),
        table("facility_specs", (0.7, 4.75, 7.1, 2.0), (
            ("Facility Type", field("facility_type")),
            ("Licensed Beds", field("bed_count")),
            ("Building Size", field("square_footage")),
            ("License Type", field("license_type")),
            ("General Contractor", field("general_contractor")),
        ), col_widths=(2.6, 4.5)),
        shape("budget_card", (8.2, 4.15, 4.63, 2.8), fill="primary", shadow=True),
        heading("budget_heading", (8.4, 4.3, 4.23, 0.35), "Development Budget", color="white"),
        text("budget_total", (8.4, 4.75, 4.23, 0.7), field("total_project_cost"),
             size=32, color="white", bold=True, align="center"),
        text("budget_label", (8.4, 5.45, 4.23, 0.3), "Total Project Cost",
             size=11, color=PALE_BLUE, align="center"),
        text("budget_per_bed", (8.4, 5.8, 4.23, 0.35),
             fmt("{per_bed} per bed", per_bed="construction_cost_per_bed"),
             size=12, color="white", align="center", when=("construction_cost_per_bed",)),
        text("budget_timeline", (8.4, 6.2, 4.23, 0.6),
             fmt("Construction timeline: {timeline}", timeline="construction_timeline"),
             size=11, color=PALE_BLUE, align="center"),
    ),
)


# ---------------------------------------------------------------------------
# 6.  Team & Track Record
# ---------------------------------------------------------------------------

_TRACK_RECORD = (
    ("prior_deals", "Deals"),
    ("assets_under_management", "AUM"),
    ("prior_returns", "Avg IRR"),
)


def _track_tiles():
    regions = []
    for i, (key, label) in enumerate(_TRACK_RECORD):
        x = 7.2 + i * 1.9
        regions.append(text(f"track_{i + 1}_value", (x, 1.9, 1.8, 0.6), field(key),
                            size=24, color="primary", bold=True, align="center"))
        regions.append(text(f"track_{i + 1}_label", (x, 2.5, 1.8, 0.35), label,
                            size=10, color="text_light", align="center"))
    return tuple(regions)


TEAM = SlideSpec(
    id="team",
    title="Team & Track Record",
    regions=(
        card("sponsor_card", (0.5, 1.3, 6.5, 4.0)),
        heading("sponsor_heading", (0.7, 1.45, 6.1, 0.35), "Sponsor Profile"),
        text("sponsor_name", (0.7, 1.85, 6.1, 0.5), field("sponsor_name"),
             size=20, color="dark", bold=True),
        text("sponsor_details", (0.7, 2.45, 6.1, 2.7),
             field("sponsor_experience"),
             fmt("{deals} deals completed", deals="prior_deals"),
             fmt("{aum} assets under management", aum="assets_under_management"),
             fmt("{returns} average investor IRR", returns="prior_returns"),
             fmt("{co_invest} co-investment in this deal", co_invest="co_invest_amount"),
             size=12, bullet="•"),
        card("track_card", (7.2, 1.3, 5.63, 2.0)),
        heading("track_heading", (7.4, 1.45, 5.23, 0.35), "Track Record"),
        *_track_tiles(),
        card("operations_card", (7.2, 3.5, 5.63, 1.8)),
        heading("operations_heading", (7.4, 3.65, 5.23, 0.35), "Operations"),
        text("operator", (7.4, 4.05, 5.23, 0.5),
             fmt("Operator: {operator}", operator="operator"), size=12),
        text("management", (7.4, 4.6, 5.23, 0.55),
             fmt("Management: {team}", team="management_team"),
             size=11, when=("management_team",)),
        shape("alignment_banner", (0.5, 5.5, 12.33, 1.4), fill="primary"),
        heading("alignment_heading", (0.7, 5.6, 11.93, 0.4), "Investor Alignment", color="white"),
        text("alignment_text", (0.7, 6.05, 11.93, 0.7),
             fmt("GP is co-investing {co_invest} of equity alongside LPs, ensuring aligned "
                 "interests throughout the project lifecycle.", co_invest="co_invest_amount"),
             size=12, color=PALE_BLUE),
    ),
)


# ---------------------------------------------------------------------------
# 7.  Financial Projections
# ---------------------------------------------------------------------------

_RETURN_METRICS = (
    ("projected_irr", "Projected IRR"),
    ("equity_multiple", "Equity Multiple"),
    ("cash_on_cash", "Cash-on-Cash"),
    ("hold_period", "Hold Period"),
)


def _return_tiles():
    regions = []
    for i, (key, label) in enumerate(_RETURN_METRICS):
        x = 0.5 + i * 3.15
        regions.append(card(f"return_{i + 1}_card", (x, 1.3, 2.9, 1.4)))
        regions.append(text(f"return_{i + 1}_value", (x, 1.4, 2.9, 0.7), field(key),
                            size=28, color="primary", bold=True, align="center"))
        regions.append(text(f"return_{i + 1}_label", (x, 2.1, 2.9, 0.4), label,
                            size=11, color="text_light", align="center"))
    return tuple(regions)


FINANCIALS = SlideSpec(
    id="financials",
    title="Financial Projections",
    regions=(
        *_return_tiles(),
        ChartRegion(id="noi_chart", box=Box(x=0.5, y=3.0, w=6.0, h=3.9), chart="bar",
                    data=Derived(name="noi_growth"), title="Projected NOI Growth ($K)",
                    colors=("primary",), number_format="#,##0"),
        card("valuation_card", (6.8, 3.0, 6.03, 2.55)),
        heading("valuation_heading", (7.0, 3.1, 5.63, 0.35), "Valuation Analysis"),
        table("valuation", (7.0, 3.5, 5.63, 1.95), (
            ("Going-In Cap Rate", field("going_in_cap_rate")),
            ("Exit Cap Rate", field("exit_cap_rate")),
            ("Stabilized NOI", field("projected_noi")),
            ("Total Raise", field("total_raise")),
            ("Debt Financing", field("debt_financing")),
        ), col_widths=(3.0, 2.63), value_color="primary"),
        heading("assumptions_heading", (6.8, 5.7, 6.03, 0.35), "Key Assumptions", size=12),
        text("assumptions", (6.8, 6.05, 6.03, 0.9),
             "24-month stabilization period",
             "3% annual rent growth",
             "25 bps exit cap expansion",
             size=10, color="text_light", bullet="•"),
    ),
)


# ---------------------------------------------------------------------------
# 8.  Deal Structure
# ---------------------------------------------------------------------------

DEAL_STRUCTURE = SlideSpec(
    id="deal_structure",
    title="Deal Structure",
    regions=(
        card("terms_card", (0.5, 1.3, 5.8, 4.1)),
        heading("terms_heading", (0.7, 1.45, 5.4, 0.35), "Investment Terms"),
        table("investment_terms", (0.7, 1.9, 5.4, 3.3), (
            ("Total Raise", field("total_raise")),
            ("Minimum Investment", field("minimum_investment")),
            ("Preferred Return", field("preferred_return")),
            ("Distribution Frequency", field("distribution_frequency")),
            ("Hold Period", field("hold_period")),
            ("GP Co-Invest", field("co_invest_amount")),
        ), col_widths=(3.0, 2.4), value_color="primary"),
        heading("fees_heading", (0.5, 5.6, 5.8, 0.35), "Fee Structure", size=12),
        text("fees", (0.7, 6.0, 5.6, 0.95),
             fmt("Acquisition Fee: {fee}", fee="acquisition_fee"),
             fmt("Asset Management: {fee}", fee="management_fee"),
             fmt("Disposition Fee: {fee}", fee="disposition_fee"),
             size=11, bullet="•"),
        card("waterfall_card", (6.5, 1.3, 6.33, 5.65)),
        heading("waterfall_heading", (6.7, 1.45, 5.93, 0.35), "Waterfall Structure"),
        table("waterfall", (6.7, 1.9, 5.93, 2.75), (
            ("1", "Return of Capital", "100%", "0%"),
            ("2", fmt("Preferred Return ({pref})", pref="preferred_return"), "100%", "0%"),
            ("3", "Up to 12% IRR", "80%", "20%"),
            ("4", "Above 12% IRR", "70%", "30%"),
        ), col_widths=(0.8, 3.13, 1.0, 1.0), header=("Tier", "Threshold", "LP", "GP")),
        text("waterfall_note", (6.7, 4.8, 5.93, 2.0), field("waterfall_structure"),
             size=10, color="text_light", italic=True),
    ),
)


# ---------------------------------------------------------------------------
# 9.  Use of Funds
# ---------------------------------------------------------------------------

_PROCEEDS_TOP = 2.35
_PROCEEDS_ROW_H = 0.6


def _proceeds_bars():
    regions = []
    for i, (key, _label, _amount, share) in enumerate(USE_OF_PROCEEDS):
        y = _PROCEEDS_TOP + i * _PROCEEDS_ROW_H + 0.48
        width = round(PROCEEDS_BAR_MAX_WIDTH * share / 100, 3)
        regions.append(shape(f"proceeds_bar_{key}", (6.75, y, width, 0.08),
                             fill="secondary", kind="rect"))
    return tuple(regions)


USE_OF_FUNDS = SlideSpec(
    id="use_of_funds",
    title="Use of Funds",
    regions=(
        ChartRegion(id="capital_stack", box=Box(x=0.5, y=1.3, w=5.7, h=4.4), chart="doughnut",
                    data=Derived(name="capital_stack"), title="Capital Stack",
                    colors=("primary", "secondary", "accent"), show_legend=True,
                    number_format='0"%"'),
        heading("equity_heading", (0.5, 5.85, 5.7, 0.35), "Equity Breakdown", size=12),
        text("equity_lines", (0.5, 6.25, 5.7, 0.7),
             fmt("LP Equity: {raise_amount} | GP Co-Invest: {co_invest}",
                 raise_amount="total_raise", co_invest="co_invest_amount"),
             fmt("Debt Financing: {debt}", debt="debt_financing"),
             size=11),
        card("proceeds_card", (6.5, 1.3, 6.33, 5.65)),
        heading("proceeds_heading", (6.7, 1.4, 5.93, 0.35), "Use of Proceeds"),
        text("proceeds_total", (6.7, 1.8, 5.93, 0.4),
             fmt("Total Project Cost: {cost}", cost="total_project_cost"),
             size=12, color="dark", bold=True),
        table("use_of_proceeds", (6.7, _PROCEEDS_TOP, 5.93, _PROCEEDS_ROW_H * len(USE_OF_PROCEEDS)),
              tuple(
                  (label, Derived(name="proceeds_amount", arg=key), f"{share}%")
                  for key, label, _amount, share in USE_OF_PROCEEDS
              ),
              col_widths=(3.13, 1.6, 1.2), fill=None),
        *_proceeds_bars(),
        text("proceeds_note", (6.7, 6.1, 5.93, 0.75), Derived(name="proceeds_note"),
             size=9, color="text_light", italic=True),
    ),
)


# ---------------------------------------------------------------------------
# 10.  Exit Strategy & Next Steps
# ---------------------------------------------------------------------------

EXIT = SlideSpec(
    id="exit",
    title="Exit Strategy & Next Steps",
    regions=(
        card("scenarios_card", (0.5, 1.3, 7.0, 3.2)),
        heading("scenarios_heading", (0.7, 1.4, 6.6, 0.35), "Exit Scenarios"),
        table("exit_scenarios", (0.7, 1.8, 6.6, 2.55), (
            ("Sale to Institutional Buyer",
             "REIT, private equity, or regional operator acquisition at stabilization", "Year 5-7"),
            ("Refinance & Hold",
             "Cash-out refinance with continued operation and LP distributions", "Year 4-5"),
            ("Portfolio Sale",
             "Sale as part of larger multi-facility portfolio transaction", "Year 6-8"),
        ), col_widths=(2.2, 3.3, 1.1), size=10, value_color="text"),
        card("timeline_card", (7.7, 1.3, 5.13, 3.2)),
        heading("timeline_heading", (7.9, 1.4, 4.73, 0.35), "Timeline"),
        text("hold_period", (7.9, 1.85, 4.73, 0.7), field("hold_period"),
             size=32, color="primary", bold=True, align="center"),
        text("hold_label", (7.9, 2.55, 4.73, 0.3), "Target Hold Period",
             size=10, color="text_light", align="center"),
        text("exit_strategy", (7.9, 2.95, 4.73, 1.45),
             fmt("Strategy: {strategy}", strategy="exit_strategy"), size=11),
        shape("next_steps_band", (0.5, 4.7, 12.33, 1.75), fill="primary"),
        heading("next_steps_heading", (0.7, 4.8, 11.93, 0.4), "Next Steps", size=16, color="white"),
        text("next_steps", (0.7, 5.25, 11.93, 1.1),
             "1. Schedule a call to discuss the opportunity in detail",
             "2. Review the Private Placement Memorandum (PPM)",
             "3. Complete subscription documents and fund your investment",
             size=12, color=PALE_BLUE),
        text("contact", (0.5, 6.55, 12.33, 0.45),
             fmt("To learn more, contact {contact}",
                 contact=field("sponsor_name", "company_name", fallback="the Sponsor")),
             size=12, color="primary", bold=True, align="center"),
    ),
)


SLIDE_CATALOG: tuple[SlideSpec, ...] = (
    COVER,
    EXECUTIVE_SUMMARY,
    OPPORTUNITY,
    MARKET_ANALYSIS,
    DEVELOPMENT_PLAN,
    TEAM,
    FINANCIALS,
    DEAL_STRUCTURE,
    USE_OF_FUNDS,
    EXIT,
)

SLIDE_IDS: tuple[str, ...] = tuple(spec.id for spec in SLIDE_CATALOG)
