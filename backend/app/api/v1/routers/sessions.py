"""Wizard session router: thin HTTP layer over session/chat/deck controllers."""

import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlmodel.ext.asyncio.session import AsyncSession

from app.api.deps import get_db
from app.controllers import chat_controller, deck_controller, session_controller
from app.core.pptx_renderer import PPTX_MEDIA_TYPE
from app.schemas.chat import ChatMessageRead, MessageCreate, SessionTurnResponse
from app.schemas.project_data import ProjectData
from app.schemas.session import BrandUpdate, SessionCreate, SessionRead

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("", response_model=SessionRead, status_code=status.HTTP_201_CREATED)
async def create_session(
    payload: SessionCreate | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Start a wizard session, seeded with the welcome message."""
    session = await session_controller.create_session(payload.brand if payload else None, db)
    return session_controller.to_read(session)


@router.get("/{session_id}", response_model=SessionRead)
async def get_session(session_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    session = await session_controller.get_session(session_id, db)
    return session_controller.to_read(session)


@router.patch("/{session_id}/brand", response_model=SessionRead)
async def update_brand(
    session_id: uuid.UUID,
    payload: BrandUpdate,
    db: AsyncSession = Depends(get_db),
):
    session = await session_controller.update_brand(session_id, payload, db)
    return session_controller.to_read(session)


@router.patch("/{session_id}/data", response_model=SessionRead)
async def update_project_data(
    session_id: uuid.UUID,
    payload: ProjectData,
    db: AsyncSession = Depends(get_db),
):
    """Merge values into the collected data; blanks never erase a value."""
    session = await session_controller.update_project_data(session_id, payload, db)
    return session_controller.to_read(session)


@router.post("/{session_id}/reset", response_model=SessionRead)
async def reset_session(session_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    session = await session_controller.reset_session(session_id, db)
    return session_controller.to_read(session)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    await session_controller.delete_session(session_id, db)


@router.get("/{session_id}/messages", response_model=list[ChatMessageRead])
async def get_messages(session_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    return await session_controller.get_messages(session_id, db)


@router.post("/{session_id}/messages", response_model=SessionTurnResponse)
async def send_message(
    session_id: uuid.UUID,
    payload: MessageCreate,
    db: AsyncSession = Depends(get_db),
):
    """Send one interview answer and get the assistant's reply."""
    return await chat_controller.send_message(session_id, payload.content, db)


@router.get("/{session_id}/deck.pptx")
async def download_deck(session_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    content, filename = await deck_controller.export_session_pptx(session_id, db)
    return Response(
        content=content,
        media_type=PPTX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
