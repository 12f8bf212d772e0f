"""
Shared pytest fixtures for the String Analyzer Service tests.

Every test gets its own data file under tmp_path, so nothing touches
the real data directory.
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.database import StringStore
from app.main import create_app


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "data" / "strings.json"


@pytest.fixture
def settings(data_file: Path) -> Settings:
    return Settings(data_file=str(data_file), log_level="DEBUG")


@pytest.fixture
def store(data_file: Path) -> StringStore:
    return StringStore(str(data_file))


@pytest.fixture
def client(settings: Settings):
    """Test client with startup (store load) already run."""
    app = create_app(settings)
    with TestClient(app) as c:
        yield c
