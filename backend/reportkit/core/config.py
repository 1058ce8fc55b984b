"""
config.py — Centralized Configuration Loader

Purpose:
- Define a single source of truth for reportkit settings.
- Load and validate environment variables from `.env` or OS environment.

Settings cover the collaborators around the fiscal calendar and tagging core:
- Logging level for scripts
- Database config file location and the obscured password fallback
- Default export directory for CSV dumps
- SQL template file suffix

This module does NOT:
- Open database connections.
- Read the database JSON config (see reportkit.db.connection).
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# config.py is at: backend/reportkit/core/config.py
# .env should be at: backend/.env
_CONFIG_DIR = Path(__file__).parent
_BACKEND_DIR = _CONFIG_DIR.parent.parent
_ENV_FILE = _BACKEND_DIR / ".env"

if _ENV_FILE.exists():
    _ENV_FILE_PATH = str(_ENV_FILE.resolve())
else:
    # pydantic will look in CWD
    _ENV_FILE_PATH = ".env"


class Settings(BaseSettings):
    """
    Settings container for scripts and collaborators.

    Every field can be overridden by an environment variable of the same name.
    """
    LOG_LEVEL: str = Field(
        "INFO",
        description="Root logging level used by configure_logging()",
    )

    # Database
    DB_CONFIG_PATH: str = Field(
        "",
        description="Default path to the JSON database config file",
    )
    DB_PASSWORD_OBSCURED: str = Field(
        "",
        description="Base64-encoded database password, used when the config file has none",
    )

    # Export
    EXPORT_DIR: str = Field(
        ".",
        description="Directory that dfs_to_csv() writes into when none is given",
    )

    # SQL scripts
    SQL_SCRIPT_SUFFIX: str = Field(
        ".sql",
        description="File suffix of SQL template files read by read_scripts()",
    )

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Upper-case the level name."""
        if isinstance(v, str):
            return v.strip().upper() or "INFO"
        return v

    @field_validator("DB_PASSWORD_OBSCURED", mode="before")
    @classmethod
    def strip_password(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v or ""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE_PATH,
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Singleton: every module importing settings shares this object.
settings = Settings()
