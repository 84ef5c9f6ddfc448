"""Stateless interview endpoints; the caller keeps the transcript."""

from fastapi import APIRouter

from app.controllers import chat_controller
from app.schemas.chat import ChatRequest, ChatResponse, ExtractRequest, ExtractResponse

router = APIRouter(tags=["chat"])


@router.post("/chat", response_model=ChatResponse)
async def chat(payload: ChatRequest):
    return await chat_controller.chat(payload)


@router.post("/extract", response_model=ExtractResponse, response_model_exclude_none=True)
async def extract(payload: ExtractRequest):
    """Pull project values out of a transcript; ``{}`` when nothing could be read."""
    data = await chat_controller.extract(payload.messages)
    return {"data": data}
