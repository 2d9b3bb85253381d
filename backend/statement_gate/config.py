"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded in code paths)
    - get_settings() is cached (lru_cache) — single instance per process
    - Validator limits are positive integers

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from statement_gate.core.rule_library import DEFAULT_MAX_BATCH_SIZE, DEFAULT_MAX_DEPTH
from statement_gate.core.violations import ValidationLimits


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://lrs:lrs@db:5432/lrs"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms provide postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Basic auth for the statements endpoint
    lrs_username: str = "lrs"
    lrs_password: str = "change-me"

    # Validator
    validator_max_depth: int = Field(DEFAULT_MAX_DEPTH, gt=0)
    validator_max_batch_size: int = Field(DEFAULT_MAX_BATCH_SIZE, gt=0)

    # API
    cors_origins: list[str] = ["http://localhost:5173"]
    app_host: str = "0.0.0.0"
    app_port: int = 3000

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    def validation_limits(self) -> ValidationLimits:
        return ValidationLimits(
            max_depth=self.validator_max_depth,
            max_batch_size=self.validator_max_batch_size,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
