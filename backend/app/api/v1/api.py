"""API v1: aggregates all routers under a single prefix."""

from fastapi import APIRouter

from app.api.v1.routers import chat, deck, feedback, sessions

router = APIRouter()
router.include_router(sessions.router)
router.include_router(chat.router)
router.include_router(deck.router)
router.include_router(feedback.router)
