"""Shared fixtures."""

from datetime import date

import pytest

from heartlog.services.storage import HeartStorage
from heartlog.utils.config import Settings


@pytest.fixture
def settings(tmp_path):
    return Settings(data_dir=tmp_path, _env_file=None)


@pytest.fixture
def storage(tmp_path, settings):
    """A fresh database per test."""
    store = HeartStorage(settings=settings, db_path=tmp_path / "db.json")
    yield store
    store.close()


@pytest.fixture
def today():
    return date(2024, 3, 15)
