from threading import Lock
from typing import List, Optional
import logging

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from .database import reset_tables
from .errors import StorageFailure
from .escaping import escape_descripcion, unescape_descripcion
from .models import Tarea

logger = logging.getLogger(__name__)


class TaskStore:
    """Owns the `tareas` table and every statement run against it.

    Descriptions are escaped on the way in and unescaped on the way out,
    except through `get_stored`, which hands back the row as persisted.
    Every call is serialized behind one lock; the in-memory database is a
    single shared connection.
    """

    def __init__(self, engine: Engine):
        self._engine = engine
        self._lock = Lock()

    def initialize(self) -> None:
        """Drop the table left by a previous run and recreate it empty."""
        with self._lock:
            try:
                reset_tables(self._engine)
            except SQLAlchemyError as exc:
                logger.exception("Failed to reset tareas table")
                raise StorageFailure("Error al inicializar la base de datos") from exc
        logger.info("tareas table reset")

    def create(self, descripcion: str, conversation_id: str) -> int:
        with self._lock:
            try:
                with Session(self._engine) as session:
                    tarea = Tarea(
                        descripcion=escape_descripcion(descripcion),
                        conversation_id=conversation_id,
                    )
                    session.add(tarea)
                    session.commit()
                    session.refresh(tarea)
                    return tarea.numero_tarea
            except SQLAlchemyError as exc:
                logger.exception("Failed to create tarea conversation_id=%s", conversation_id)
                raise StorageFailure("Error al crear la tarea") from exc

    def update(self, numero_tarea: int, descripcion: str) -> bool:
        """Replace the description. Returns False when no row was affected."""
        with self._lock:
            try:
                with Session(self._engine) as session:
                    tarea = session.get(Tarea, numero_tarea)
                    if tarea is None:
                        return False
                    tarea.descripcion = escape_descripcion(descripcion)
                    session.add(tarea)
                    session.commit()
                    return True
            except SQLAlchemyError as exc:
                logger.exception("Failed to update tarea numero_tarea=%s", numero_tarea)
                raise StorageFailure("Error al actualizar la tarea") from exc

    def list(self, conversation_id: Optional[str] = None) -> List[Tarea]:
        with self._lock:
            try:
                with Session(self._engine) as session:
                    query = select(Tarea)
                    if conversation_id is not None:
                        query = query.where(Tarea.conversation_id == conversation_id)
                    rows = session.exec(query.order_by(Tarea.numero_tarea)).all()
                    return [_unescaped(row) for row in rows]
            except SQLAlchemyError as exc:
                logger.exception("Failed to list tareas")
                raise StorageFailure("Error al obtener las tareas") from exc

    def get(self, numero_tarea: int) -> Optional[Tarea]:
        stored = self.get_stored(numero_tarea)
        if stored is None:
            return None
        return _unescaped(stored)

    def get_stored(self, numero_tarea: int) -> Optional[Tarea]:
        """Fetch a row with its description exactly as persisted (still escaped)."""
        with self._lock:
            try:
                with Session(self._engine) as session:
                    tarea = session.get(Tarea, numero_tarea)
                    if tarea is None:
                        return None
                    return _copy(tarea, tarea.descripcion)
            except SQLAlchemyError as exc:
                logger.exception("Failed to get tarea numero_tarea=%s", numero_tarea)
                raise StorageFailure("Error al obtener la tarea") from exc


def _copy(tarea: Tarea, descripcion: str) -> Tarea:
    # Detached copy so callers never touch session-bound instances
    return Tarea(
        numero_tarea=tarea.numero_tarea,
        descripcion=descripcion,
        conversation_id=tarea.conversation_id,
    )


def _unescaped(tarea: Tarea) -> Tarea:
    return _copy(tarea, unescape_descripcion(tarea.descripcion))


def get_store(request: Request) -> TaskStore:
    """Dependency returning the store owned by the running app."""
    return request.app.state.store
