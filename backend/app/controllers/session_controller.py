import uuid

from fastapi import HTTPException
from sqlalchemy import delete, select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core import wizard
from app.core.ai_generators import INITIAL_MESSAGE
from app.core.config import settings
from app.models.chat_message import ChatMessage
from app.models.wizard_session import WizardSession
from app.schemas.project_data import CATEGORY_ORDER, BrandConfig, ProjectData
from app.schemas.session import BrandUpdate, SessionRead, session_read


def project_data_of(session: WizardSession) -> ProjectData:
    return ProjectData.model_validate(session.project_data or {})


def brand_of(session: WizardSession) -> BrandConfig:
    return BrandConfig.model_validate(session.brand or {})


def is_ready(session: WizardSession) -> bool:
    return wizard.can_generate(
        session.completed_categories or [],
        project_data_of(session),
        settings.GENERATION_MIN_CATEGORIES,
        settings.GENERATION_MIN_FIELDS,
    )


def to_read(session: WizardSession) -> SessionRead:
    completed = session.completed_categories or []
    return session_read(session, wizard.progress(completed), is_ready(session))


async def _add_welcome(session: WizardSession, db: AsyncSession) -> None:
    db.add(ChatMessage(session_id=session.id, role="assistant", content=INITIAL_MESSAGE))
    await db.flush()


async def create_session(brand: BrandConfig | None, db: AsyncSession) -> WizardSession:
    session = WizardSession(
        brand=(brand or BrandConfig()).to_payload(),
        project_data={},
        completed_categories=[],
        current_category=CATEGORY_ORDER[0],
        status="interviewing",
    )
    db.add(session)
    await db.flush()
    await _add_welcome(session, db)
    await db.refresh(session)
    return session


async def get_session(session_id: uuid.UUID, db: AsyncSession) -> WizardSession:
    session = await db.get(WizardSession, session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


async def update_brand(session_id: uuid.UUID, update: BrandUpdate, db: AsyncSession) -> WizardSession:
    session = await get_session(session_id, db)
    changes = update.model_dump(by_alias=True, exclude_unset=True)
    merged = BrandConfig.model_validate({**brand_of(session).to_payload(), **changes})

    # JSON columns only persist when assigned a new object
    session.brand = merged.to_payload()
    db.add(session)
    await db.flush()
    await db.refresh(session)
    return session


def apply_project_data(session: WizardSession, update: ProjectData | dict | None) -> ProjectData:
    merged = wizard.merge_project_data(project_data_of(session), update)
    session.project_data = merged.to_payload()
    return merged


def apply_completed(session: WizardSession, newly: list[str], all_complete: bool = False) -> list[str]:
    completed = wizard.mark_categories_complete(session.completed_categories or [], newly)
    if all_complete:
        completed = list(CATEGORY_ORDER)
    session.completed_categories = completed
    session.current_category = wizard.next_category(completed)
    session.status = "complete" if session.current_category is None else "interviewing"
    return completed


async def update_project_data(session_id: uuid.UUID, update: ProjectData, db: AsyncSession) -> WizardSession:
    session = await get_session(session_id, db)
    apply_project_data(session, update)
    db.add(session)
    await db.flush()
    await db.refresh(session)
    return session


async def reset_session(session_id: uuid.UUID, db: AsyncSession) -> WizardSession:
    """Clear collected data, progress and transcript; branding is kept."""
    session = await get_session(session_id, db)
    await db.execute(delete(ChatMessage).where(ChatMessage.session_id == session.id))

    session.project_data = {}
    session.completed_categories = []
    session.current_category = CATEGORY_ORDER[0]
    session.status = "interviewing"
    db.add(session)
    await db.flush()
    await _add_welcome(session, db)
    await db.refresh(session)
    return session


async def delete_session(session_id: uuid.UUID, db: AsyncSession) -> None:
    session = await get_session(session_id, db)
    await db.execute(delete(ChatMessage).where(ChatMessage.session_id == session.id))
    await db.delete(session)
    await db.flush()


async def get_messages(session_id: uuid.UUID, db: AsyncSession) -> list[ChatMessage]:
    """Return every message for *session_id*, ordered oldest-first."""
    session = await get_session(session_id, db)
    result = await db.execute(
        select(ChatMessage)
        .where(ChatMessage.session_id == session.id)
        .order_by(ChatMessage.created_at.asc())
    )
    return list(result.scalars().all())
