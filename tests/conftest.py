"""Pytest configuration to ensure the `src` package layout is importable.

This adds the `src/` directory to `sys.path` so tests can import the
`armory` package without requiring an editable install in CI, and provides
in-memory document stores.
"""

import sys
from pathlib import Path

import pytest

SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from armory.repository import DocumentClient  # noqa: E402


@pytest.fixture
def store_client():
    """Client whose databases each live in their own in-memory SQLite engine."""
    with DocumentClient("sqlite://") as client:
        yield client


@pytest.fixture
def production(store_client):
    return store_client.get_database("arma-api")


@pytest.fixture
def backup(store_client):
    return store_client.get_database("arma-api-backup")
