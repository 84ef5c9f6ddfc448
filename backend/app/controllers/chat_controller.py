"""
Interview chat logic.

- **session turns** load the stored transcript and collected data, run the
  interview agent, persist both messages and fold the structured result
  back into the session.
- **stateless turns** do the same against data supplied by the caller and
  persist nothing.
"""

import logging
import uuid

from fastapi import HTTPException
from sqlmodel.ext.asyncio.session import AsyncSession

from app.controllers import session_controller
from app.core import wizard
from app.core.ai_generators import extract_project_data, run_interview_turn
from app.models.chat_message import ChatMessage
from app.schemas.chat import ChatMessageBase, ChatRequest, ChatResponse
from app.schemas.extraction import InterviewTurn
from app.schemas.project_data import CATEGORY_ORDER, ProjectData

logger = logging.getLogger(__name__)


async def _interview(history: list[dict], data: ProjectData, completed: list[str], content: str) -> InterviewTurn:
    try:
        return await run_interview_turn(history, data, completed, content)
    except Exception as e:
        logger.exception("Interview agent failed")
        raise HTTPException(status_code=502, detail=f"Interview agent error: {str(e)}")


# ---------------------------------------------------------------------------
# 1.  send_message  (persisted session)
# ---------------------------------------------------------------------------

async def send_message(session_id: uuid.UUID, content: str, db: AsyncSession) -> dict:
    """Run one interview turn for a stored session.

    1. Load history BEFORE saving the new user message.
    2. Save the user message.
    3. Call the interview agent.
    4. Save the assistant reply.
    5. Merge extracted values (non-null overwrites, null preserves) and
       mark completed categories.
    """
    session = await session_controller.get_session(session_id, db)
    history = [
        {"role": m.role, "content": m.content}
        for m in await session_controller.get_messages(session_id, db)
    ]

    db.add(ChatMessage(session_id=session.id, role="user", content=content))
    await db.flush()

    turn = await _interview(
        history,
        session_controller.project_data_of(session),
        session.completed_categories or [],
        content,
    )

    assistant_message = ChatMessage(session_id=session.id, role="assistant", content=turn.response)
    db.add(assistant_message)

    session_controller.apply_project_data(session, turn.project_data)
    completed = session_controller.apply_completed(session, turn.completed_categories, turn.all_complete)
    db.add(session)
    await db.flush()
    await db.refresh(assistant_message)
    await db.refresh(session)

    logger.info("Session %s: %d/6 categories complete", session.id, len(completed))
    return {"message": assistant_message, "session": session_controller.to_read(session)}


# ---------------------------------------------------------------------------
# 2.  chat  (stateless)
# ---------------------------------------------------------------------------

async def chat(payload: ChatRequest) -> ChatResponse:
    *history, last = payload.messages
    if last.role != "user":
        raise HTTPException(status_code=400, detail="The last message must come from the user.")

    turn = await _interview(
        [m.model_dump() for m in history],
        payload.project_data,
        payload.completed_categories,
        last.content,
    )

    completed = wizard.mark_categories_complete(payload.completed_categories, turn.completed_categories)
    if turn.all_complete:
        completed = list(CATEGORY_ORDER)
    return ChatResponse(
        content=turn.response,
        completed_categories=completed,
        all_complete=wizard.next_category(completed) is None,
        project_data=wizard.merge_project_data(payload.project_data, turn.project_data),
    )


# ---------------------------------------------------------------------------
# 3.  extract  (stateless)
# ---------------------------------------------------------------------------

async def extract(messages: list[ChatMessageBase]) -> ProjectData:
    """Transcript to partial ``ProjectData``; empty on any failure."""
    return await extract_project_data([m.model_dump() for m in messages])
