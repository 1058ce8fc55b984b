"""
connection.py — Database Connection Setup

Purpose:
- Read a JSON database config (scheme, host, port, database, classname, jars, user).
- Resolve the password without ever requiring it to sit in the config file.
- Open a connection of the right kind for the configured driver class.

Connection types:
- Postgres-wire services (driver class org.postgresql.Driver, or any class name
  containing "postgres"): SQLAlchemy engine on the psycopg (v3) driver; a
  SQLAlchemy Connection is returned.
- Everything else: JDBC through JayDeBeApi; a DB-API connection is returned.

Both kinds work with pandas.read_sql (see reportkit.db.scripts).

Typical use:
    config = load_db_config("~/vdm.cfg")
    conn = connect(config)

This module does NOT:
- Run queries (see reportkit.db.scripts).
- Retry or wrap driver errors; they reach the caller unmodified.
"""

from __future__ import annotations

import base64
import getpass
import json
from pathlib import Path
from typing import Any, Callable, List, Optional, Union

import jaydebeapi
from pydantic import BaseModel, Field, field_validator
from sqlalchemy import create_engine
from sqlalchemy.engine import URL

from reportkit.core.config import Settings, settings
from reportkit.core.logging import get_logger

logger = get_logger(__name__)

POSTGRES_DRIVER_CLASS = "org.postgresql.Driver"
PASSWORD_PROMPT = "Enter the Database Password: "


# -----------------------------------------------------------------------------
# Config
# -----------------------------------------------------------------------------

class DatabaseConfig(BaseModel):
    """
    Contents of a database config file.

    `database` and `password` are optional; a missing password is resolved by
    resolve_password().
    """
    scheme: str = Field(..., description="URL scheme, e.g. 'jdbc:teiid' or 'postgresql'")
    host: str
    port: int
    database: Optional[str] = None
    classname: str = Field(..., description="Driver class identifier, e.g. org.postgresql.Driver")
    jars: List[str] = Field(default_factory=list, description="JDBC driver jar paths")
    user: str
    password: Optional[str] = None

    @field_validator("jars", mode="before")
    @classmethod
    def coerce_jars(cls, v: Any) -> List[str]:
        """Accept a single jar path as well as a list."""
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v

    @field_validator("database", "password", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def is_postgres(self) -> bool:
        return self.classname == POSTGRES_DRIVER_CLASS or "postgres" in self.classname.lower()


def load_db_config(filename: Optional[Union[str, Path]] = None) -> DatabaseConfig:
    """
    Read a JSON database config file.

    Args:
        filename: Path to the config; defaults to settings.DB_CONFIG_PATH

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If no path is given and none is configured
        pydantic.ValidationError: If required keys are missing
    """
    if filename is None:
        filename = settings.DB_CONFIG_PATH
    if not filename:
        raise ValueError("No database config path given and DB_CONFIG_PATH is not set")

    path = Path(filename).expanduser()
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    logger.debug("Loaded database config from %s", path)
    return DatabaseConfig.model_validate(raw)


# -----------------------------------------------------------------------------
# Password resolution
# -----------------------------------------------------------------------------

def _decode_obscured(value: str) -> str:
    try:
        return base64.b64decode(value, validate=True).decode("utf-8")
    except ValueError as e:
        raise ValueError("DB_PASSWORD_OBSCURED is not valid base64") from e


def resolve_password(
    config: DatabaseConfig,
    env_settings: Optional[Settings] = None,
    prompt: Callable[[str], str] = getpass.getpass,
) -> str:
    """
    Find the database password.

    Priority:
    1. `password` in the config file
    2. base64-encoded DB_PASSWORD_OBSCURED environment setting
    3. interactive prompt

    Args:
        config: Parsed database config
        env_settings: Settings to read DB_PASSWORD_OBSCURED from (defaults to the singleton)
        prompt: Prompt function, getpass.getpass by default
    """
    if config.password:
        return config.password

    env_settings = env_settings or settings
    if env_settings.DB_PASSWORD_OBSCURED:
        logger.debug("Using password from DB_PASSWORD_OBSCURED")
        return _decode_obscured(env_settings.DB_PASSWORD_OBSCURED)

    return prompt(PASSWORD_PROMPT)


# -----------------------------------------------------------------------------
# URLs
# -----------------------------------------------------------------------------

def build_url(config: DatabaseConfig) -> str:
    """
    Compose scheme://host:port[/database] from the config.

    Example:
        jdbc:teiid://vdm.example.com:31000/APL_CEE_VDM
    """
    url = f"{config.scheme}://{config.host}:{config.port}"
    if config.database:
        url = f"{url}/{config.database}"
    return url


def build_postgres_url(config: DatabaseConfig, password: str) -> URL:
    """SQLAlchemy URL on the psycopg (v3) driver."""
    return URL.create(
        "postgresql+psycopg",
        username=config.user,
        password=password,
        host=config.host,
        port=config.port,
        database=config.database,
    )


# -----------------------------------------------------------------------------
# Connections
# -----------------------------------------------------------------------------

def _connect_postgres(config: DatabaseConfig, password: str):
    engine = create_engine(
        build_postgres_url(config, password),
        pool_pre_ping=True  # Ensures connections are valid before use
    )
    return engine.connect()


def _connect_jdbc(config: DatabaseConfig, password: str):
    return jaydebeapi.connect(
        config.classname,
        build_url(config),
        [config.user, password],
        config.jars or None,
    )


def connect(config: Union[DatabaseConfig, str, Path], password: Optional[str] = None):
    """
    Open a database connection.

    Args:
        config: DatabaseConfig or path to a JSON config file
        password: Explicit password; otherwise resolve_password() is used

    Returns:
        SQLAlchemy Connection for Postgres drivers, JayDeBeApi connection otherwise.
        The caller owns the connection and must close it.
    """
    if not isinstance(config, DatabaseConfig):
        config = load_db_config(config)

    if password is None:
        password = resolve_password(config)

    if config.is_postgres:
        logger.info("Connecting to %s:%s over Postgres wire", config.host, config.port)
        return _connect_postgres(config, password)

    logger.info("Connecting to %s via JDBC driver %s", build_url(config), config.classname)
    return _connect_jdbc(config, password)
