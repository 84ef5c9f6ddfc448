"""Shared fixtures.  Settings are read at import time, so the environment is
pinned here before any ``app`` module is imported."""

import os

os.environ.setdefault("MODE", "testing")
os.environ.setdefault("OPENAI_API_KEY", "sk-test")
os.environ.setdefault("GAMMA_API_KEY", "")
os.environ.setdefault("RESEND_API_KEY", "")
os.environ.setdefault("FEEDBACK_EMAIL", "")
os.environ.setdefault("SLACK_FEEDBACK_WEBHOOK", "")

import base64  # noqa: E402
from datetime import date  # noqa: E402

import pytest  # noqa: E402

from app.schemas.project_data import BrandConfig, ProjectData  # noqa: E402

# 1x1 transparent PNG
PNG_1X1 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
)


@pytest.fixture
def fixed_date() -> date:
    return date(2026, 3, 15)


@pytest.fixture
def brand() -> BrandConfig:
    return BrandConfig(
        company_name="Harbor Care Partners",
        primary_color="#1A2B3C",
        secondary_color="#00A3E0",
        accent_color="#ff6b35",
    )


@pytest.fixture
def png_logo() -> str:
    base64.b64decode(PNG_1X1, validate=True)
    return f"data:image/png;base64,{PNG_1X1}"


@pytest.fixture
def full_data() -> ProjectData:
    return ProjectData.model_validate({
        "projectName": "Sunrise Gardens",
        "propertyAddress": "123 Palm Ave, Riverside, CA",
        "lotSize": "2.1 acres",
        "zoning": "R-3",
        "zoningStatus": "Entitled",
        "purchasePrice": "$1.4M",
        "facilityType": "Assisted Living Facility",
        "bedCount": "72",
        "squareFootage": "48,000 sq ft",
        "constructionTimeline": "20 months",
        "totalProjectCost": "$10M",
        "marketLocation": "Inland Empire",
        "population65Plus": "140,000",
        "demandDrivers": "Aging population, Hospital partnerships",
        "totalRaise": "$3M",
        "debtFinancing": "$6M",
        "projectedNOI": "$1.2M",
        "projectedIRR": "19%",
        "equityMultiple": "2.1x",
        "holdPeriod": "6 years",
        "sponsorName": "Jane Rivera",
        "coInvestAmount": "10%",
        "preferredReturn": "8%",
    })
