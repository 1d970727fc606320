"""Tests for environment-driven configuration."""

from pathlib import Path

import pytest

from schemadoc.config import (
    DEFAULT_MSSQL_DRIVER,
    OUTPUT_FILENAME,
    infer_dialect,
    load_settings,
    parse_database_url,
)
from schemadoc.exceptions import ConfigurationError
from schemadoc.models import DatabaseType


def test_sqlite_requires_database_path():
    with pytest.raises(ConfigurationError, match="DATABASE_PATH"):
        load_settings(DatabaseType.SQLITE, environ={})


def test_sqlite_missing_file(tmp_path: Path):
    with pytest.raises(ConfigurationError, match="not found"):
        load_settings(DatabaseType.SQLITE, environ={"DATABASE_PATH": str(tmp_path / "nope.db")})


def test_sqlite_opens_read_only(sample_db: Path):
    settings = load_settings(DatabaseType.SQLITE, environ={"DATABASE_PATH": str(sample_db)})

    assert settings.dialect == DatabaseType.SQLITE
    assert settings.database == "shop.db"
    assert settings.url.drivername == "sqlite"
    assert settings.url.query["mode"] == "ro"
    assert settings.url.query["uri"] == "true"
    assert settings.url.database == sample_db.resolve().as_uri()


@pytest.mark.parametrize(
    ("url", "dialect", "drivername"),
    [
        ("postgres://app:secret@db:5432/shop", DatabaseType.POSTGRESQL, "postgresql+psycopg2"),
        ("postgresql://app:secret@db/shop", DatabaseType.POSTGRESQL, "postgresql+psycopg2"),
        ("postgresql+asyncpg://app:secret@db/shop", DatabaseType.POSTGRESQL, "postgresql+asyncpg"),
        ("mysql://app:secret@db:3306/shop", DatabaseType.MYSQL, "mysql+pymysql"),
        ("mssql://app:secret@db:1433/shop", DatabaseType.MSSQL, "mssql+pyodbc"),
    ],
)
def test_database_url_normalization(url, dialect, drivername):
    settings = load_settings(dialect, environ={"DATABASE_URL": url})

    assert settings.url.drivername == drivername
    assert settings.database == "shop"
    assert "secret" not in settings.display_url


def test_database_url_dialect_mismatch():
    with pytest.raises(ConfigurationError, match="expected PostgreSQL"):
        load_settings(DatabaseType.POSTGRESQL, environ={"DATABASE_URL": "mysql://app@db/shop"})


def test_database_url_unparseable():
    with pytest.raises(ConfigurationError, match="Invalid DATABASE_URL"):
        parse_database_url("not a url", DatabaseType.POSTGRESQL)


def test_database_url_without_database():
    with pytest.raises(ConfigurationError, match="must name a database"):
        load_settings(DatabaseType.POSTGRESQL, environ={"DATABASE_URL": "postgresql://app@db"})


@pytest.mark.parametrize(
    ("dialect", "port"),
    [
        (DatabaseType.POSTGRESQL, 5432),
        (DatabaseType.MYSQL, 3306),
        (DatabaseType.MSSQL, 1433),
    ],
)
def test_discrete_variables_use_default_port(dialect, port):
    environ = {"DB_HOST": "db", "DB_NAME": "shop", "DB_USER": "app", "DB_PASSWORD": "secret"}

    settings = load_settings(dialect, environ=environ)

    assert settings.url.host == "db"
    assert settings.url.port == port
    assert settings.url.username == "app"
    assert settings.url.password == "secret"
    assert settings.database == "shop"


def test_mssql_driver_options():
    environ = {
        "DB_HOST": "db",
        "DB_NAME": "shop",
        "DB_USER": "sa",
        "DB_DRIVER": "ODBC Driver 17 for SQL Server",
        "DB_TRUST_SERVER_CERTIFICATE": "true",
    }

    settings = load_settings(DatabaseType.MSSQL, environ=environ)

    assert settings.url.query["driver"] == "ODBC Driver 17 for SQL Server"
    assert settings.url.query["TrustServerCertificate"] == "yes"


def test_mssql_database_url_gets_driver_options():
    environ = {
        "DATABASE_URL": "mssql://sa:pw@db:1433/shop",
        "DB_DRIVER": "ODBC Driver 17 for SQL Server",
        "DB_TRUST_SERVER_CERTIFICATE": "true",
    }

    settings = load_settings(DatabaseType.MSSQL, environ=environ)

    assert settings.url.drivername == "mssql+pyodbc"
    assert settings.url.query["driver"] == "ODBC Driver 17 for SQL Server"
    assert settings.url.query["TrustServerCertificate"] == "yes"


def test_mssql_database_url_defaults_driver():
    settings = load_settings(DatabaseType.MSSQL, environ={"DATABASE_URL": "mssql://sa:pw@db/shop"})

    assert settings.url.query["driver"] == DEFAULT_MSSQL_DRIVER
    assert "TrustServerCertificate" not in settings.url.query


def test_mssql_database_url_keeps_its_own_driver():
    url = "mssql+pyodbc://sa:pw@db/shop?driver=FreeTDS"

    settings = load_settings(DatabaseType.MSSQL, environ={"DATABASE_URL": url, "DB_DRIVER": "ignored"})

    assert settings.url.query["driver"] == "FreeTDS"


def test_discrete_variables_report_every_missing_name():
    with pytest.raises(ConfigurationError) as exc_info:
        load_settings(DatabaseType.MYSQL, environ={"DB_HOST": "db", "DB_NAME": "  "})

    message = str(exc_info.value)
    assert "DB_NAME" in message
    assert "DB_USER" in message
    assert "DB_HOST" not in message


def test_invalid_port():
    environ = {"DB_HOST": "db", "DB_NAME": "shop", "DB_USER": "app", "DB_PORT": "five"}
    with pytest.raises(ConfigurationError, match="DB_PORT"):
        load_settings(DatabaseType.POSTGRESQL, environ=environ)


@pytest.mark.parametrize(
    ("environ", "expected"),
    [
        ({"DATABASE_PATH": "shop.db", "DATABASE_URL": "mysql://a@b/c"}, DatabaseType.SQLITE),
        ({"DATABASE_URL": "postgres://a@b/c"}, DatabaseType.POSTGRESQL),
        ({"DATABASE_URL": "mysql+pymysql://a@b/c"}, DatabaseType.MYSQL),
        ({"DB_DIALECT": "MSSQL"}, DatabaseType.MSSQL),
        ({"DB_DIALECT": "postgres"}, DatabaseType.POSTGRESQL),
    ],
)
def test_infer_dialect(environ, expected):
    assert infer_dialect(environ) == expected


def test_infer_dialect_needs_a_hint():
    with pytest.raises(ConfigurationError, match="Cannot determine database type"):
        infer_dialect({})


def test_infer_dialect_rejects_unknown_name():
    with pytest.raises(ConfigurationError, match="Unsupported DB_DIALECT"):
        infer_dialect({"DB_DIALECT": "oracle"})


def test_output_path_defaults_to_cwd(sample_db: Path, tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    settings = load_settings(environ={"DATABASE_PATH": str(sample_db)})

    assert settings.output_path == tmp_path.resolve() / OUTPUT_FILENAME


def test_output_path_override(sample_db: Path, tmp_path: Path):
    target = tmp_path / "docs" / "schema.md"

    settings = load_settings(environ={"DATABASE_PATH": str(sample_db), "SCHEMA_DOC_OUTPUT": str(target)})

    assert settings.output_path == target
