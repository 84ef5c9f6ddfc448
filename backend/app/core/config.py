from enum import Enum
from typing import Any, Literal

from pydantic import PostgresDsn, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ModeEnum(str, Enum):
    development = "development"
    production = "production"
    testing = "testing"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file="../.env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── App ───────────────────────────────────────────────────
    MODE: ModeEnum = ModeEnum.production
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Investor Deck Wizard"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
    ]

    # ── Database ──────────────────────────────────────────────
    DATABASE_USER: str = "postgres"
    DATABASE_PASSWORD: str = "postgres"
    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: int = 5432
    DATABASE_NAME: str = "deck_wizard"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_RECYCLE_SECONDS: int = 300
    DB_ECHO: bool = False

    ASYNC_DATABASE_URI: PostgresDsn | str = ""

    @field_validator("ASYNC_DATABASE_URI", mode="before")
    @classmethod
    def assemble_db_connection(cls, v: str | None, info) -> Any:
        if isinstance(v, str) and v == "":
            data = info.data
            # Skip SSL for local dev
            mode = data.get("MODE", ModeEnum.development)
            query = "ssl=require" if mode != ModeEnum.development else None
            return PostgresDsn.build(
                scheme="postgresql+asyncpg",
                username=data.get("DATABASE_USER"),
                password=data.get("DATABASE_PASSWORD"),
                host=data.get("DATABASE_HOST"),
                port=data.get("DATABASE_PORT"),
                path=data.get("DATABASE_NAME"),
                query=query,
            )
        return v

    # ── OpenAI ────────────────────────────────────────────────
    OPENAI_API_KEY: str = ""
    CHAT_MODEL: str = "openai:gpt-4o"
    EXTRACTION_MODEL: str = "openai:gpt-4o-mini"

    # ── Gamma (external deck generation) ──────────────────────
    GAMMA_API_KEY: str = ""
    GAMMA_API_URL: str = "https://public-api.gamma.app/v1.0/generations"
    GAMMA_POLL_INTERVAL_SECONDS: float = 2.0
    GAMMA_MAX_POLL_ATTEMPTS: int = 60
    GAMMA_ASYNC_MAX_POLL_ATTEMPTS: int = 90
    GAMMA_REQUEST_TIMEOUT_SECONDS: float = 30.0

    # ── Email (Resend) / feedback ─────────────────────────────
    RESEND_API_KEY: str = ""
    RESEND_API_URL: str = "https://api.resend.com/emails"
    EMAIL_FROM: str = "Investor Deck <noreply@resend.dev>"
    FEEDBACK_EMAIL: str = ""
    SLACK_FEEDBACK_WEBHOOK: str = ""

    # ── Deck generation ───────────────────────────────────────
    GENERATION_MIN_CATEGORIES: int = 3
    GENERATION_MIN_FIELDS: int = 5
    DECK_FINANCIAL_VISUALS: Literal["illustrative", "derived"] = "illustrative"


settings = Settings()
