# tests/test_task_store.py

from __future__ import annotations

import pytest
from sqlalchemy import text

from tareas_service.database import create_db_engine
from tareas_service.errors import StorageFailure
from tareas_service.escaping import escape_descripcion, unescape_descripcion
from tareas_service.store import TaskStore


def test_escape_round_trip() -> None:
    raw = '<a href="x">Tom & \'Jerry\'</a>'
    escaped = escape_descripcion(raw)
    assert "<" not in escaped and ">" not in escaped and '"' not in escaped
    assert escaped.startswith("&lt;a href=&quot;x&quot;&gt;Tom &amp; ")
    assert unescape_descripcion(escaped) == raw


def test_descriptions_are_persisted_escaped(store: TaskStore) -> None:
    numero = store.create("<b>urgent</b>", "c1")

    stored = store.get_stored(numero)
    assert stored is not None
    assert stored.descripcion == "&lt;b&gt;urgent&lt;/b&gt;"

    tarea = store.get(numero)
    assert tarea is not None
    assert tarea.descripcion == "<b>urgent</b>"
    assert tarea.conversation_id == "c1"


def test_numbers_are_never_reused(store: TaskStore) -> None:
    first = store.create("a", "c1")
    second = store.create("b", "c1")
    assert first >= 1
    assert second > first


def test_update_reports_whether_a_row_was_affected(store: TaskStore) -> None:
    numero = store.create("old", "c1")

    assert store.update(numero, "new & improved") is True
    assert store.get_stored(numero).descripcion == "new &amp; improved"
    assert store.get(numero).conversation_id == "c1"

    assert store.update(numero + 100, "nothing") is False


def test_list_in_creation_order(store: TaskStore) -> None:
    store.create("one", "c1")
    store.create("<two>", "c2")
    store.create("three", "c1")

    assert [t.descripcion for t in store.list()] == ["one", "<two>", "three"]
    assert [t.descripcion for t in store.list("c1")] == ["one", "three"]


def test_get_missing_returns_none(store: TaskStore) -> None:
    assert store.get(42) is None
    assert store.get_stored(42) is None


def test_initialize_discards_existing_rows(store: TaskStore) -> None:
    store.create("a", "c1")
    store.initialize()
    assert store.list() == []


def test_storage_faults_become_storage_failure() -> None:
    engine = create_db_engine("sqlite://")
    store = TaskStore(engine)
    store.initialize()
    with engine.begin() as conn:
        conn.execute(text("DROP TABLE tareas"))

    with pytest.raises(StorageFailure) as exc_info:
        store.create("a", "c1")
    assert exc_info.value.message == "Error al crear la tarea"

    with pytest.raises(StorageFailure):
        store.update(1, "a")
    with pytest.raises(StorageFailure):
        store.list()
    with pytest.raises(StorageFailure):
        store.get(1)
