"""
Deck generation: local assembly and PPTX export, plus the external Gamma
path (polled in-request or queued with an email on completion).
"""

import asyncio
import logging
import uuid

from fastapi import HTTPException
from sqlmodel.ext.asyncio.session import AsyncSession
from starlette.concurrency import run_in_threadpool

from app.controllers import session_controller
from app.core.config import settings
from app.core.deck_assembler import assemble_deck
from app.core.deck_prompt import build_deck_prompt
from app.core.gamma_client import GammaClient, GammaGenerationError, GammaNotConfiguredError, GammaResult
from app.core.mailer import (
    EmailDeliveryError,
    EmailNotConfiguredError,
    notify_deck_failed,
    notify_deck_ready,
    send_deck_link,
)
from app.core.pptx_renderer import DeckGenerationError, deck_filename, render_pptx
from app.schemas.deck import Deck
from app.schemas.generation import GammaAsyncRequest, GammaRequest, SendDeckRequest
from app.schemas.project_data import BrandConfig, ProjectData

logger = logging.getLogger(__name__)

# Strong references so queued generations are not garbage-collected mid-flight
_background_tasks: set[asyncio.Task] = set()


def build_deck(brand: BrandConfig, data: ProjectData) -> Deck:
    return assemble_deck(brand, data, financial_visuals=settings.DECK_FINANCIAL_VISUALS)


async def export_pptx(brand: BrandConfig, data: ProjectData) -> tuple[bytes, str]:
    """Assemble and serialise a deck; returns ``(content, filename)``."""
    deck = build_deck(brand, data)
    try:
        content = await run_in_threadpool(render_pptx, deck)
    except DeckGenerationError as e:
        logger.error("PPTX export failed: %s", e)
        raise HTTPException(status_code=500, detail="Deck generation failed")
    return content, deck_filename(deck)


async def export_session_pptx(session_id: uuid.UUID, db: AsyncSession) -> tuple[bytes, str]:
    session = await session_controller.get_session(session_id, db)
    if not session_controller.is_ready(session):
        raise HTTPException(
            status_code=422,
            detail={
                "message": "Not enough information collected to generate a deck yet.",
                "completed_categories": session.completed_categories or [],
                "min_categories": settings.GENERATION_MIN_CATEGORIES,
                "min_fields": settings.GENERATION_MIN_FIELDS,
            },
        )
    return await export_pptx(
        session_controller.brand_of(session),
        session_controller.project_data_of(session),
    )


# ---------------------------------------------------------------------------
# Gamma
# ---------------------------------------------------------------------------

def _project_name(data: ProjectData, brand: BrandConfig) -> str:
    return data.project_name or brand.company_name or "Your Investment Opportunity"


async def generate_gamma(payload: GammaRequest) -> GammaResult:
    """Generate through Gamma, polling until it finishes or times out."""
    brand = payload.resolved_brand()
    prompt = build_deck_prompt(build_deck(brand, payload.project_data))

    try:
        result = await GammaClient().generate(prompt)
    except GammaNotConfiguredError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except GammaGenerationError as e:
        logger.error("Gamma generation failed: %s (status=%s)", e, e.status)
        raise HTTPException(
            status_code=502,
            detail={"message": f"{e}. Please try again.", "status": e.status},
        )

    if payload.email and result.gamma_url:
        try:
            await notify_deck_ready(payload.email, payload.project_data, result.gamma_url, result.export_url)
        except EmailDeliveryError:
            logger.exception("Deck-ready email to %s failed", payload.email)
    return result


async def _background_generate(email: str, brand: BrandConfig, data: ProjectData) -> None:
    """Run a queued Gamma generation and email the outcome."""
    name = _project_name(data, brand)
    try:
        prompt = build_deck_prompt(build_deck(brand, data))
        result = await GammaClient().generate(prompt, max_attempts=settings.GAMMA_ASYNC_MAX_POLL_ATTEMPTS)
    except Exception as e:
        logger.exception("Queued Gamma generation for %s failed", email)
        reason = str(e) if isinstance(e, GammaGenerationError) else "Unexpected error during generation"
        try:
            await notify_deck_failed(email, name, reason)
        except Exception:
            logger.exception("Deck-error email to %s failed", email)
        return

    try:
        await notify_deck_ready(email, data, result.gamma_url, result.export_url)
    except Exception:
        logger.exception("Deck-ready email to %s failed", email)
    logger.info("Queued generation %s delivered to %s", result.generation_id, email)


def queue_gamma(payload: GammaAsyncRequest) -> dict:
    task = asyncio.create_task(
        _background_generate(payload.email, payload.resolved_brand(), payload.project_data)
    )
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)
    return {
        "queued": True,
        "message": "Your deck is being generated. Check your email in about 2 minutes.",
    }


# ---------------------------------------------------------------------------
# Email
# ---------------------------------------------------------------------------

async def send_deck(payload: SendDeckRequest) -> dict:
    name = payload.project_data.project_name or payload.company_name or "Your Investment Opportunity"
    try:
        await send_deck_link(payload.email, name, payload.export_url, payload.project_data)
    except EmailNotConfiguredError:
        raise HTTPException(status_code=500, detail="Email service not configured")
    except EmailDeliveryError as e:
        logger.error("Deck link email failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to send email")
    return {"success": True}
