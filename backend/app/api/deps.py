"""
Shared FastAPI dependencies.

Routers import ``get_db`` from here rather than from ``app.db.database`` so
tests can override a single callable.
"""

from collections.abc import AsyncGenerator

from sqlmodel.ext.asyncio.session import AsyncSession

from app.db.database import get_db as _get_db

__all__ = ["get_db"]


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async database session."""
    async for session in _get_db():
        yield session
