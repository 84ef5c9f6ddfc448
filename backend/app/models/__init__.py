# Import all models so SQLModel.metadata registers them for Alembic autogenerate.
from app.models.base import BaseUUIDModel  # noqa: F401
from app.models.wizard_session import WizardSession  # noqa: F401
from app.models.chat_message import ChatMessage  # noqa: F401
