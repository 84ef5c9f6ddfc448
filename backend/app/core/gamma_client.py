"""
Client for the Gamma generations API.

A generation is started with one POST and then polled every
``poll_interval`` seconds until it reports ``completed`` or ``failed``.
Running out of attempts counts as a failure.  Polls that come back non-2xx
are skipped and still use up an attempt, as are polls whose body is not a
JSON object.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx
from pydantic import BaseModel

from app.core.config import settings
from app.core.deck_prompt import ADDITIONAL_INSTRUCTIONS

logger = logging.getLogger(__name__)


class GammaGenerationError(Exception):
    """Start failed, the generation failed, or polling ran out of attempts."""

    def __init__(self, message: str, status: str | None = None, details: str | None = None):
        super().__init__(message)
        self.status = status
        self.details = details


class GammaNotConfiguredError(GammaGenerationError):
    pass


def _json_object(response: httpx.Response) -> dict[str, Any] | None:
    try:
        body = response.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


class GammaResult(BaseModel):
    generation_id: str
    status: str
    gamma_url: str | None = None
    export_url: str | None = None
    credits: dict[str, Any] | None = None


def build_generation_request(input_text: str) -> dict[str, Any]:
    return {
        "inputText": input_text,
        "textMode": "generate",
        "format": "presentation",
        "numCards": 10,
        "exportAs": "pptx",
        "additionalInstructions": ADDITIONAL_INSTRUCTIONS,
        "imageOptions": {"source": "aiGenerated"},
        "textOptions": {
            "amount": "medium",
            "tone": "professional, confident, data-driven",
            "audience": "institutional investors and high-net-worth individuals",
        },
        "cardOptions": {"dimensions": "16x9"},
    }


class GammaClient:
    def __init__(
        self,
        api_key: str | None = None,
        api_url: str | None = None,
        poll_interval: float | None = None,
        max_attempts: int | None = None,
        http_client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.api_key = settings.GAMMA_API_KEY if api_key is None else api_key
        self.api_url = (api_url or settings.GAMMA_API_URL).rstrip("/")
        self.poll_interval = settings.GAMMA_POLL_INTERVAL_SECONDS if poll_interval is None else poll_interval
        self.max_attempts = max_attempts or settings.GAMMA_MAX_POLL_ATTEMPTS
        self._http_client = http_client
        self._sleep = sleep

    def _headers(self) -> dict[str, str]:
        return {"X-API-KEY": self.api_key, "Content-Type": "application/json"}

    def _client(self) -> httpx.AsyncClient:
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=settings.GAMMA_REQUEST_TIMEOUT_SECONDS)

    async def start_generation(self, client: httpx.AsyncClient, input_text: str) -> str:
        response = await client.post(
            self.api_url,
            headers=self._headers(),
            json=build_generation_request(input_text),
        )
        if response.is_error:
            logger.error("Gamma start failed (%s): %s", response.status_code, response.text)
            raise GammaGenerationError(
                "Failed to start generation",
                status=str(response.status_code),
                details=response.text,
            )
        body = _json_object(response)
        if body is None:
            logger.error("Gamma start returned an unreadable body: %s", response.text[:200])
            raise GammaGenerationError(
                "Gamma returned an unreadable response",
                status=str(response.status_code),
                details=response.text,
            )
        generation_id = body.get("generationId")
        if not generation_id:
            raise GammaGenerationError("Gamma response did not include a generationId")
        logger.info("Gamma generation %s started", generation_id)
        return generation_id

    async def wait_for_completion(
        self,
        client: httpx.AsyncClient,
        generation_id: str,
        max_attempts: int | None = None,
    ) -> GammaResult:
        attempts = max_attempts or self.max_attempts
        status = "pending"

        for attempt in range(1, attempts + 1):
            await self._sleep(self.poll_interval)
            response = await client.get(f"{self.api_url}/{generation_id}", headers=self._headers())
            if response.is_error:
                logger.warning(
                    "Gamma poll %d/%d for %s returned %s",
                    attempt, attempts, generation_id, response.status_code,
                )
                continue

            body = _json_object(response)
            if body is None:
                logger.warning(
                    "Gamma poll %d/%d for %s returned an unreadable body",
                    attempt, attempts, generation_id,
                )
                continue
            status = body.get("status", status)
            if status == "completed":
                return GammaResult(
                    generation_id=generation_id,
                    status=status,
                    gamma_url=body.get("gammaUrl"),
                    export_url=body.get("exportUrl"),
                    credits=body.get("credits"),
                )
            if status == "failed":
                raise GammaGenerationError("Generation failed", status=status)

        raise GammaGenerationError("Generation timed out", status=status)

    async def generate(self, input_text: str, max_attempts: int | None = None) -> GammaResult:
        """Start a generation and poll it to completion."""
        if not self.api_key:
            raise GammaNotConfiguredError("Gamma API key not configured")

        client = self._client()
        try:
            generation_id = await self.start_generation(client, input_text)
            return await self.wait_for_completion(client, generation_id, max_attempts)
        except httpx.HTTPError as e:
            raise GammaGenerationError(f"Gamma request failed: {e}") from e
        finally:
            if self._http_client is None:
                await client.aclose()
