"""
Shared pytest configuration and fixtures for all tests.
"""
import logging
import sqlite3
import sys
from pathlib import Path

import pytest

# Make the package importable without installing it
sys.path.insert(0, str(Path(__file__).parent.parent))

from smreplace.settings_store import DEFAULT_SETTINGS


SAMPLE_PATHS = [
    "/old/a.mp3",
    "/old/b.mp3",
    "/new/c.mp3",
]


def read_column(db_path, table="justinmetadata", column="FilePath"):
    """Return the column values ordered by rowid."""
    conn = sqlite3.connect(str(db_path))
    try:
        rows = conn.execute(f'SELECT "{column}" FROM "{table}" ORDER BY rowid').fetchall()
    finally:
        conn.close()
    return [row[0] for row in rows]


def make_db(path, rows, table="justinmetadata", column="FilePath"):
    conn = sqlite3.connect(str(path))
    try:
        conn.execute(f'CREATE TABLE "{table}" (id INTEGER PRIMARY KEY, "{column}" TEXT, Title TEXT)')
        conn.executemany(
            f'INSERT INTO "{table}" ("{column}", Title) VALUES (?, ?)',
            [(value, f"Track {i}") for i, value in enumerate(rows)],
        )
        conn.commit()
    finally:
        conn.close()
    return path


@pytest.fixture
def sample_db(tmp_path):
    """SM-style database with the default table and column."""
    return make_db(tmp_path / "library.db", SAMPLE_PATHS)


@pytest.fixture
def files_db(tmp_path):
    """Database using a custom table name `files`."""
    return make_db(tmp_path / "files.db", SAMPLE_PATHS, table="files")


@pytest.fixture
def settings(tmp_path):
    """Default settings with file logs redirected into the test directory."""
    return {**DEFAULT_SETTINGS, "log_dir": str(tmp_path / "logs")}


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Never let a real settings.json leak into a test run."""
    monkeypatch.setattr("smreplace.settings_store.CONFIG_PATH", tmp_path / "settings.json")


@pytest.fixture(autouse=True)
def reset_warning_capture():
    """Undo logging.captureWarnings() left on by setup_logging in earlier tests."""
    yield
    logging.captureWarnings(False)
