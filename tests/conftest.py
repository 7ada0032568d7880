"""
Pytest configuration for the SQLite stress harness.

Provides fixtures for:
- Settings pointed at a temporary database file
- An initialized record store per test
- A factory for deterministic records
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Callable, Generator

import pytest

from sqlite_stress.config import Settings
from sqlite_stress.domain.models import Record
from sqlite_stress.infrastructure.record_store import RecordStore


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path of a not-yet-created database file inside the test's temp dir."""
    return tmp_path / "storage.db"


@pytest.fixture
def test_settings(db_path: Path) -> Settings:
    """
    Settings fixture with test-specific overrides.

    A generous busy timeout keeps the threaded tests about correctness rather
    than about how long SQLite waits for a lock.
    """
    return Settings(
        db_path=str(db_path),
        db_timeout_seconds=30.0,
        log_level="DEBUG",
        worker_count=3,
    )


@pytest.fixture
def store(test_settings: Settings) -> RecordStore:
    """A record store with its schema already created."""
    record_store = RecordStore(
        db_path=Path(test_settings.db_path), timeout=test_settings.db_timeout_seconds
    )
    record_store.initialize()
    return record_store


@pytest.fixture
def make_record() -> Callable[..., Record]:
    """
    Build records with fixed defaults; any field can be overridden.
    """

    def _make(**overrides) -> Record:
        fields = {
            "id": uuid.uuid4(),
            "number": 5,
            "amount": Decimal("0.25"),
            "comment": "c1",
            "timestamp": datetime.now(timezone.utc),
        }
        fields.update(overrides)
        return Record(**fields)

    return _make


@pytest.fixture
def reset_logging() -> Generator[None, None, None]:
    """
    Drop handlers installed by configure_logging once the test is done.

    Handlers bound to pytest's captured streams must not outlive the test.
    """
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.WARNING)
