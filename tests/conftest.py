# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from tareas_service.database import create_db_engine
from tareas_service.main import create_app
from tareas_service.store import TaskStore


@pytest.fixture()
def store() -> TaskStore:
    """Real TaskStore over a private in-memory SQLite database, already reset."""
    store = TaskStore(create_db_engine("sqlite://"))
    store.initialize()
    return store


@pytest.fixture()
def client(store: TaskStore) -> Iterator[TestClient]:
    # Entering the client runs the startup handler (table reset).
    with TestClient(create_app(store)) as client:
        yield client
