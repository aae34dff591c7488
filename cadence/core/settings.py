# cadence/core/settings.py
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # --- Contractor defaults (used when a settings record leaves them out) ---
    DEFAULT_DEPOSIT_PERCENT: float = 50.0
    QUOTE_VALIDITY_DAYS: int = 30
    DEFAULT_CREW_SIZE: int = 2

    # --- Scheme catalog ---
    SCHEME_CATALOG_PATH: Optional[str] = None

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    model_config = SettingsConfigDict(
        env_prefix="CADENCE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()  # reads .env
