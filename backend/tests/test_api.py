"""HTTP-level tests for the stateless routes.

``TestClient`` is used without a ``with`` block so the lifespan (which
connects to Postgres) never runs.
"""

from io import BytesIO

import httpx
import pytest
from fastapi.testclient import TestClient
from pptx import Presentation
from pydantic_ai.models.test import TestModel

from app.controllers import deck_controller
from app.core.ai_generators import extraction_agent, interview_agent
from app.core.config import settings
from app.core.gamma_client import GammaClient, GammaGenerationError, GammaResult
from app.core.pptx_renderer import PPTX_MEDIA_TYPE
from app.main import app
from app.schemas.project_data import BrandConfig, ProjectData

API = settings.API_V1_STR


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def test_root(client):
    assert client.get("/").json() == {"message": "Welcome to the Investor Deck Wizard API"}


# ---------------------------------------------------------------------------
# Deck
# ---------------------------------------------------------------------------

def test_assemble_returns_ten_slides(client):
    response = client.post(f"{API}/deck/assemble", json={"projectData": {"projectName": "Sunrise Gardens"}})
    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Sunrise Gardens"
    assert [s["id"] for s in body["slides"]][0] == "cover"
    assert len(body["slides"]) == 10


def test_assemble_accepts_empty_body(client):
    response = client.post(f"{API}/deck/assemble", json={})
    assert response.status_code == 200
    assert response.json()["title"] == "Investment Opportunity"


def test_pptx_download(client):
    response = client.post(
        f"{API}/deck/pptx",
        json={"brand": {"companyName": "Harbor Care"}, "projectData": {"projectName": "Sunrise Gardens"}},
    )
    assert response.status_code == 200
    assert response.headers["content-type"] == PPTX_MEDIA_TYPE
    assert 'filename="Sunrise_Gardens_Investor_Deck.pptx"' in response.headers["content-disposition"]
    assert len(Presentation(BytesIO(response.content)).slides) == 10


def test_pptx_render_failure_is_500(client):
    response = client.post(f"{API}/deck/pptx", json={"brand": {"logo": "%%%"}})
    assert response.status_code == 500
    assert response.json() == {"detail": "Deck generation failed"}


def test_gamma_without_key_is_500(client):
    response = client.post(f"{API}/deck/gamma", json={"projectData": {}})
    assert response.status_code == 500
    assert response.json()["detail"] == "Gamma API key not configured"


def test_gamma_success(client, monkeypatch):
    prompts = []

    class FakeGamma:
        async def generate(self, text, max_attempts=None):
            prompts.append(text)
            return GammaResult(generation_id="g1", status="completed", gamma_url="https://gamma.app/d/g1",
                               export_url="https://x.test/g1.pptx", credits={"deducted": 40})

    monkeypatch.setattr(deck_controller, "GammaClient", FakeGamma)
    response = client.post(f"{API}/deck/gamma", json={"companyName": "Harbor", "projectData": {"projectName": "Sunrise"}})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "gammaUrl": "https://gamma.app/d/g1",
        "exportUrl": "https://x.test/g1.pptx",
        "credits": {"deducted": 40},
    }
    assert "Project: Sunrise" in prompts[0]
    assert "Presented by: Harbor" in prompts[0]


def test_gamma_async_requires_email(client):
    assert client.post(f"{API}/deck/gamma/async", json={"projectData": {}}).status_code == 422


def test_gamma_async_is_queued(client, monkeypatch):
    queued = []

    async def fake_background(email, brand, data):
        queued.append((email, data.project_name))

    monkeypatch.setattr(deck_controller, "_background_generate", fake_background)
    response = client.post(
        f"{API}/deck/gamma/async",
        json={"email": "investor@example.com", "projectData": {"projectName": "Sunrise"}},
    )
    assert response.status_code == 202
    assert response.json()["queued"] is True


@pytest.fixture
def failure_emails(monkeypatch):
    sent = []

    async def fake_failed(email, project_name, reason):
        sent.append((email, project_name, reason))
        return True

    monkeypatch.setattr(deck_controller, "notify_deck_failed", fake_failed)
    return sent


async def test_queued_generation_emails_on_unexpected_error(monkeypatch, failure_emails):
    class BrokenGamma:
        async def generate(self, text, max_attempts=None):
            raise ValueError("Expecting value: line 1 column 1 (char 0)")

    monkeypatch.setattr(deck_controller, "GammaClient", BrokenGamma)
    await deck_controller._background_generate(
        "investor@example.com", BrandConfig(), ProjectData(project_name="Sunrise")
    )
    assert failure_emails == [("investor@example.com", "Sunrise", "Unexpected error during generation")]


async def test_queued_generation_emails_gamma_reason(monkeypatch, failure_emails):
    class FailingGamma:
        async def generate(self, text, max_attempts=None):
            raise GammaGenerationError("Gamma returned an unreadable response", status="200")

    monkeypatch.setattr(deck_controller, "GammaClient", FailingGamma)
    await deck_controller._background_generate("investor@example.com", BrandConfig(), ProjectData())
    assert failure_emails[0][2] == "Gamma returned an unreadable response"


async def test_queued_generation_survives_ready_email_failure(monkeypatch):
    class FakeGamma:
        async def generate(self, text, max_attempts=None):
            return GammaResult(generation_id="g2", status="completed", gamma_url="https://gamma.app/d/g2")

    async def broken_ready(*args):
        raise ValueError("bad response")

    monkeypatch.setattr(deck_controller, "GammaClient", FakeGamma)
    monkeypatch.setattr(deck_controller, "notify_deck_ready", broken_ready)
    await deck_controller._background_generate("investor@example.com", BrandConfig(), ProjectData())


def test_gamma_unreadable_response_is_502(client, monkeypatch):
    def handler(request):
        return httpx.Response(200, text="<html>maintenance</html>")

    class MockedGamma(GammaClient):
        def __init__(self):
            super().__init__(api_key="gk-test", http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))

    monkeypatch.setattr(deck_controller, "GammaClient", MockedGamma)
    response = client.post(f"{API}/deck/gamma", json={"projectData": {}})
    assert response.status_code == 502
    assert response.json()["detail"]["status"] == "200"


def test_send_deck_without_resend_key(client):
    response = client.post(
        f"{API}/deck/send",
        json={"email": "investor@example.com", "exportUrl": "https://x.test/deck.pptx"},
    )
    assert response.status_code == 500
    assert response.json() == {"detail": "Email service not configured"}


def test_send_deck_validates_input(client):
    assert client.post(f"{API}/deck/send", json={"email": "not-an-email", "exportUrl": "x"}).status_code == 422


# ---------------------------------------------------------------------------
# Chat / extract
#
# Agent overrides are context-local, so these run the app in-process on the
# test's own event loop instead of through TestClient's portal thread.
# ---------------------------------------------------------------------------

def _async_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")


async def test_stateless_chat_merges_turn():
    output = {
        "response": "Great, what facility type?",
        "completed_categories": ["site"],
        "all_complete": False,
        "project_data": {"lotSize": "2 acres"},
    }
    with interview_agent.override(model=TestModel(custom_output_args=output)):
        async with _async_client() as ac:
            response = await ac.post(
                f"{API}/chat",
                json={
                    "messages": [{"role": "user", "content": "It's 2 acres"}],
                    "projectData": {"projectName": "Sunrise"},
                },
            )

    assert response.status_code == 200
    body = response.json()
    assert body["content"] == "Great, what facility type?"
    assert body["completedCategories"] == ["site"]
    assert body["allComplete"] is False
    assert body["projectData"]["projectName"] == "Sunrise"
    assert body["projectData"]["lotSize"] == "2 acres"


async def test_stateless_chat_all_complete_lists_every_category():
    output = {
        "response": "That covers everything.",
        "completed_categories": ["terms"],
        "all_complete": True,
        "project_data": None,
    }
    with interview_agent.override(model=TestModel(custom_output_args=output)):
        async with _async_client() as ac:
            response = await ac.post(
                f"{API}/chat",
                json={
                    "messages": [{"role": "user", "content": "Quarterly distributions"}],
                    "completedCategories": ["site", "development"],
                },
            )

    body = response.json()
    assert body["allComplete"] is True
    assert body["completedCategories"] == ["site", "development", "market", "financials", "team", "terms"]


def test_chat_last_message_must_be_user(client):
    response = client.post(f"{API}/chat", json={"messages": [{"role": "assistant", "content": "Hi"}]})
    assert response.status_code == 400


async def test_extract_returns_only_stated_fields():
    output = {"project_data": {"bedCount": "72"}}
    with extraction_agent.override(model=TestModel(custom_output_args=output)):
        async with _async_client() as ac:
            response = await ac.post(f"{API}/extract", json={"messages": [{"role": "user", "content": "72 beds"}]})
    assert response.status_code == 200
    assert response.json() == {"data": {"bedCount": "72"}}


def test_extract_empty_transcript(client):
    response = client.post(f"{API}/extract", json={"messages": []})
    assert response.json() == {"data": {}}


# ---------------------------------------------------------------------------
# Feedback
# ---------------------------------------------------------------------------

def test_feedback_accepted_without_channels(client):
    response = client.post(f"{API}/feedback", json={"category": "idea", "feedback": "Add a map slide"})
    assert response.status_code == 200
    assert response.json() == {"success": True, "delivered": []}
