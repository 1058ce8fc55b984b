"""
Tests for database config loading and connection dispatch.

Tests verify that:
1. JSON configs parse into DatabaseConfig, with optional fields normalized
2. URLs are composed as scheme://host:port[/database]
3. The password comes from the config, then DB_PASSWORD_OBSCURED, then the prompt
4. Postgres driver classes go through SQLAlchemy, everything else through JDBC

No real database is contacted; the connect functions are replaced.
"""

from __future__ import annotations

import base64
import json

import pytest

from reportkit.core.config import Settings
from reportkit.db import connection
from reportkit.db.connection import (
    DatabaseConfig,
    build_postgres_url,
    build_url,
    connect,
    load_db_config,
    resolve_password,
)


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def teiid_config():
    return DatabaseConfig(
        scheme="jdbc:teiid",
        host="vdm.example.com",
        port=31000,
        database="APL_CEE_VDM",
        classname="org.teiid.jdbc.TeiidDriver",
        jars="/opt/jdbc/teiid.jar",
        user="analyst",
    )


@pytest.fixture
def postgres_config():
    return DatabaseConfig(
        scheme="postgresql",
        host="db.example.com",
        port="5432",
        database="reporting",
        classname="org.postgresql.Driver",
        user="analyst",
        password="from-config",
    )


@pytest.fixture
def no_env_password():
    return Settings(DB_PASSWORD_OBSCURED="")


def fail_prompt(message):
    raise AssertionError("prompt should not be called")


# ============================================================================
# Test: Config
# ============================================================================

def test_config_normalizes_fields(teiid_config):
    assert teiid_config.jars == ["/opt/jdbc/teiid.jar"]
    assert teiid_config.password is None
    assert not teiid_config.is_postgres


def test_config_blank_optional_fields():
    config = DatabaseConfig(
        scheme="jdbc:teiid", host="h", port=1, database="  ",
        classname="org.teiid.jdbc.TeiidDriver", user="u", password="",
    )
    assert config.database is None
    assert config.password is None
    assert config.jars == []


def test_load_db_config(tmp_path):
    path = tmp_path / "vdm.cfg"
    path.write_text(json.dumps({
        "scheme": "postgresql",
        "host": "db.example.com",
        "port": 5432,
        "database": "reporting",
        "classname": "org.postgresql.Driver",
        "jars": [],
        "user": "analyst",
    }))
    config = load_db_config(path)
    assert config.port == 5432
    assert config.is_postgres


def test_load_db_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_db_config(tmp_path / "nope.cfg")


# ============================================================================
# Test: URLs
# ============================================================================

def test_build_url(teiid_config):
    assert build_url(teiid_config) == "jdbc:teiid://vdm.example.com:31000/APL_CEE_VDM"


def test_build_url_without_database(teiid_config):
    config = teiid_config.model_copy(update={"database": None})
    assert build_url(config) == "jdbc:teiid://vdm.example.com:31000"


def test_build_postgres_url(postgres_config):
    url = build_postgres_url(postgres_config, "s3cret")
    assert url.drivername == "postgresql+psycopg"
    assert url.host == "db.example.com"
    assert url.port == 5432
    assert url.database == "reporting"
    assert url.password == "s3cret"


# ============================================================================
# Test: Password resolution
# ============================================================================

def test_password_from_config_wins(postgres_config):
    env = Settings(DB_PASSWORD_OBSCURED=base64.b64encode(b"from-env").decode())
    assert resolve_password(postgres_config, env, prompt=fail_prompt) == "from-config"


def test_password_from_obscured_setting(teiid_config):
    env = Settings(DB_PASSWORD_OBSCURED=base64.b64encode(b"s3cret").decode())
    assert resolve_password(teiid_config, env, prompt=fail_prompt) == "s3cret"


def test_password_prompt_is_last_resort(teiid_config, no_env_password):
    prompts = []

    def prompt(message):
        prompts.append(message)
        return "typed"

    assert resolve_password(teiid_config, no_env_password, prompt=prompt) == "typed"
    assert prompts == [connection.PASSWORD_PROMPT]


def test_invalid_obscured_password(teiid_config):
    env = Settings(DB_PASSWORD_OBSCURED="not base64!!")
    with pytest.raises(ValueError):
        resolve_password(teiid_config, env, prompt=fail_prompt)


# ============================================================================
# Test: Connection dispatch
# ============================================================================

def test_postgres_driver_uses_sqlalchemy(monkeypatch, postgres_config):
    calls = []
    monkeypatch.setattr(connection, "_connect_postgres", lambda cfg, pw: calls.append(("pg", pw)) or "pg-conn")
    monkeypatch.setattr(connection, "_connect_jdbc", lambda cfg, pw: calls.append(("jdbc", pw)) or "jdbc-conn")

    assert connect(postgres_config) == "pg-conn"
    assert calls == [("pg", "from-config")]


def test_other_drivers_use_jdbc(monkeypatch, teiid_config):
    captured = {}

    def fake_connect(classname, url, credentials, jars):
        captured.update(classname=classname, url=url, credentials=credentials, jars=jars)
        return "jdbc-conn"

    monkeypatch.setattr(connection.jaydebeapi, "connect", fake_connect)

    assert connect(teiid_config, password="typed") == "jdbc-conn"
    assert captured == {
        "classname": "org.teiid.jdbc.TeiidDriver",
        "url": "jdbc:teiid://vdm.example.com:31000/APL_CEE_VDM",
        "credentials": ["analyst", "typed"],
        "jars": ["/opt/jdbc/teiid.jar"],
    }


def test_connect_from_config_path(monkeypatch, tmp_path):
    path = tmp_path / "vdm.cfg"
    path.write_text(json.dumps({
        "scheme": "postgresql", "host": "db", "port": 5432, "database": "reporting",
        "classname": "org.postgresql.Driver", "user": "analyst", "password": "pw",
    }))
    monkeypatch.setattr(connection, "_connect_postgres", lambda cfg, pw: (cfg.host, pw))

    assert connect(str(path)) == ("db", "pw")
