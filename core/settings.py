from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field, PostgresDsn, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from api.shared.utils import clamp_int

DEFAULT_MODEL = "gpt-4o-mini"


class CustomSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


class AppSettings(CustomSettings):
    ENVIRONMENT: Literal["local", "dev", "prod"] = Field(default="local")
    LOG_LEVEL: str = Field(default="INFO")
    JSON_LOGS: bool = Field(default=True)
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=3001)


class PgDbSettings(CustomSettings):
    """Database connection.

    Env vars:
    - DATABASE_URL (full URL, wins when set)
    - POSTGRES_* (parts; the URL is built from them only if at least one is set)

    With neither, DATABASE_URL stays blank and persistence reports
    ``db_not_configured``.
    """

    POSTGRES_ENGINE: str = Field(default="postgresql+asyncpg")
    POSTGRES_USER: str = Field(default="postgres")
    POSTGRES_PASSWORD: SecretStr = Field(default="postgres")
    POSTGRES_DB: str = Field(default="chat")
    POSTGRES_HOST: str = Field(default="localhost")
    POSTGRES_PORT: int = Field(default=5432)
    DATABASE_URL: PostgresDsn | str = Field(default="")

    @model_validator(mode="before")
    def validate_postgres_dsn(cls, data: dict):
        if not isinstance(data, dict) or data.get("DATABASE_URL"):
            return data
        if any(key.startswith("POSTGRES_") and data[key] for key in data):
            _built_uri = PostgresDsn.build(
                scheme=data.get("POSTGRES_ENGINE", "postgresql+asyncpg"),
                username=data.get("POSTGRES_USER", "postgres"),
                password=data.get("POSTGRES_PASSWORD", "postgres"),
                host=data.get("POSTGRES_HOST", "localhost"),
                port=int(data.get("POSTGRES_PORT", 5432)),
                path=data.get("POSTGRES_DB", "chat"),
            ).unicode_string()
            data["DATABASE_URL"] = _built_uri
        return data


class OpenAISettings(CustomSettings):
    """Credentials and model for the completion provider.

    Env vars:
    - OPENAI_API_KEY (blank means "not configured", replies fall back)
    - OPENAI_MODEL
    """

    OPENAI_API_KEY: SecretStr = Field(default="")
    OPENAI_MODEL: str = Field(default=DEFAULT_MODEL)

    @field_validator("OPENAI_MODEL", mode="before")
    def validate_model(cls, value):
        if not isinstance(value, str) or not value.strip():
            return DEFAULT_MODEL
        return value.strip()

    def api_key(self) -> str | None:
        key = self.OPENAI_API_KEY.get_secret_value().strip()
        return key or None


class LlmSettings(CustomSettings):
    """Limits applied around every provider call.

    Invalid or out-of-range values are clamped instead of failing startup:
    - LLM_TIMEOUT_MS: 15000, range [1000, 120000]
    - LLM_HISTORY_LIMIT: 20, range [1, 100]
    - LLM_MAX_OUTPUT_TOKENS: 250, range [1, 2000]
    """

    LLM_TIMEOUT_MS: int = Field(default=15_000)
    LLM_HISTORY_LIMIT: int = Field(default=20)
    LLM_MAX_OUTPUT_TOKENS: int = Field(default=250)

    @field_validator("LLM_TIMEOUT_MS", mode="before")
    def validate_timeout(cls, value):
        return clamp_int(value, 1_000, 120_000, 15_000)

    @field_validator("LLM_HISTORY_LIMIT", mode="before")
    def validate_history_limit(cls, value):
        return clamp_int(value, 1, 100, 20)

    @field_validator("LLM_MAX_OUTPUT_TOKENS", mode="before")
    def validate_max_output_tokens(cls, value):
        return clamp_int(value, 1, 2_000, 250)


class Settings(BaseModel):
    APP: AppSettings = Field(default_factory=AppSettings)
    DATABASE: PgDbSettings = Field(default_factory=PgDbSettings)
    OPENAI: OpenAISettings = Field(default_factory=OpenAISettings)
    LLM: LlmSettings = Field(default_factory=LlmSettings)


@lru_cache
def get_settings() -> Settings:
    return Settings()


SETTINGS = get_settings()
