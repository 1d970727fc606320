"""Tests for the command-line entry points and exit codes."""

from pathlib import Path

import pytest

from schemadoc.config import OUTPUT_FILENAME
from schemadoc.main import main, run, sqlite
from schemadoc.models import DatabaseType


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch) -> Path:
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return work


def test_missing_database_path_exits_1_without_writing(workdir: Path):
    assert run(DatabaseType.SQLITE) == 1
    assert not (workdir / OUTPUT_FILENAME).exists()


def test_sqlite_entry_point_exit_code(workdir: Path):
    with pytest.raises(SystemExit) as exc_info:
        sqlite()

    assert exc_info.value.code == 1
    assert not (workdir / OUTPUT_FILENAME).exists()


def test_missing_server_variables_exit_1(workdir: Path, monkeypatch, caplog):
    monkeypatch.setenv("DB_HOST", "localhost")

    assert run(DatabaseType.POSTGRESQL) == 1
    assert "DB_NAME" in caplog.text
    assert not (workdir / OUTPUT_FILENAME).exists()


def test_generic_entry_point_needs_a_dialect(workdir: Path):
    with pytest.raises(SystemExit) as exc_info:
        main()

    assert exc_info.value.code == 1


def test_sqlite_export_succeeds(workdir: Path, sample_db: Path, monkeypatch, capsys):
    monkeypatch.setenv("DATABASE_PATH", str(sample_db))

    with pytest.raises(SystemExit) as exc_info:
        main()

    output = workdir / OUTPUT_FILENAME
    assert exc_info.value.code == 0
    assert output.exists()
    assert "## main.users" in output.read_text(encoding="utf-8")
    assert OUTPUT_FILENAME in capsys.readouterr().out
