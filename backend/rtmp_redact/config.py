from __future__ import annotations

from functools import lru_cache
import logging
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent
BACKEND_DIR = PACKAGE_DIR.parent
REPO_ROOT = BACKEND_DIR.parent
ROOT_ENV_FILE = REPO_ROOT / ".env"
BACKEND_ENV_FILE = BACKEND_DIR / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="RTMP_REDACT_",
        env_file=(str(ROOT_ENV_FILE), str(BACKEND_ENV_FILE)),
        extra="ignore",
    )

    log_level: str = "INFO"
    log_format: str = Field(default="json", pattern="^(json|plain)$")
    plain_log_format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    # Install the RTMP redacting filter on the root handler
    redact_log_records: bool = True

    @property
    def log_level_value(self) -> int:
        level = logging.getLevelName(self.log_level.strip().upper())
        if isinstance(level, int):
            return level
        return logging.INFO

    @property
    def active_env_file(self) -> str:
        if ROOT_ENV_FILE.exists() and BACKEND_ENV_FILE.exists():
            return f"{ROOT_ENV_FILE} (base), {BACKEND_ENV_FILE} (override)"
        if ROOT_ENV_FILE.exists():
            return str(ROOT_ENV_FILE)
        if BACKEND_ENV_FILE.exists():
            return str(BACKEND_ENV_FILE)
        return "none"


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    logger.info(
        "Active Log Settings | RTMP_REDACT_LOG_LEVEL=%s | format=%s | redact_log_records=%s | env_file=%s",
        settings.log_level,
        settings.log_format,
        settings.redact_log_records,
        settings.active_env_file,
    )
    return settings
