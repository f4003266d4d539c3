from typing import Annotated, List, Optional
import logging

from fastapi import APIRouter, Depends, Path, Query
from fastapi.responses import HTMLResponse

from ..errors import InvalidInput, NotFound
from ..models import Tarea as TareaModel
from ..schemas.tarea import Tarea as TareaSchema, TareaCreate, TareaCreated, TareaUpdate, TareaUpdated
from ..store import TaskStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter()

# SQLite INTEGER range; larger keys cannot name a row and are rejected as unknown.
NumeroTarea = Annotated[int, Path(ge=-(2**63), le=2**63 - 1)]


def _to_schema(tarea: TareaModel) -> TareaSchema:
    return TareaSchema(
        numero_tarea=tarea.numero_tarea,
        descripcion=tarea.descripcion,
        conversationID=tarea.conversation_id,
    )


@router.post("", response_model=TareaCreated)
def create_tarea(tarea: Optional[TareaCreate] = None, store: TaskStore = Depends(get_store)):
    """Create a tarea and return the number the store assigned to it."""
    # A missing or null body is checked like an empty one.
    tarea = tarea or TareaCreate()
    # Empty strings are rejected like missing fields; no trimming.
    if not tarea.descripcion or not tarea.conversation_id:
        logger.info("Rejected tarea without descripcion or conversationID")
        raise InvalidInput("La descripción y el conversationID son requeridos")

    numero_tarea = store.create(tarea.descripcion, tarea.conversation_id)
    logger.info("Created tarea numero_tarea=%s conversation_id=%s", numero_tarea, tarea.conversation_id)
    return TareaCreated(numero_tarea=numero_tarea)


@router.put("/{numero_tarea}", response_model=TareaUpdated)
def update_tarea(
    numero_tarea: NumeroTarea,
    tarea_update: Optional[TareaUpdate] = None,
    store: TaskStore = Depends(get_store),
):
    """Replace the description of an existing tarea."""
    tarea_update = tarea_update or TareaUpdate()
    if not tarea_update.descripcion:
        logger.info("Rejected update of tarea %s without descripcion", numero_tarea)
        raise InvalidInput("La descripción es requerida")

    if not store.update(numero_tarea, tarea_update.descripcion):
        raise NotFound()

    logger.info("Updated tarea numero_tarea=%s", numero_tarea)
    return TareaUpdated()


@router.get("", response_model=List[TareaSchema])
def list_tareas(
    conversation_id: Optional[str] = Query(default=None, alias="conversationID"),
    store: TaskStore = Depends(get_store),
):
    """List every tarea in creation order, optionally for one conversation."""
    return [_to_schema(tarea) for tarea in store.list(conversation_id)]


@router.get("/{numero_tarea}", response_model=TareaSchema)
def get_tarea(numero_tarea: NumeroTarea, store: TaskStore = Depends(get_store)):
    tarea = store.get(numero_tarea)
    if tarea is None:
        raise NotFound()
    return _to_schema(tarea)


@router.get("/{numero_tarea}/desc", response_class=HTMLResponse)
def render_tarea_descripcion(numero_tarea: NumeroTarea, store: TaskStore = Depends(get_store)):
    """Render the description as an HTML page.

    The stored text goes into the body verbatim. It was escaped once when
    written and is deliberately NOT unescaped here, nor escaped again: the
    page shows escaped markup instead of rendering it, and nothing else
    guards against content crafted to survive that single escape. Keep it
    that way; clients depend on this output.
    """
    tarea = store.get_stored(numero_tarea)
    if tarea is None:
        raise NotFound()
    return HTMLResponse(
        content=(
            "<!DOCTYPE html>\n"
            "<html>\n"
            f"<head><title>Tarea {tarea.numero_tarea}</title></head>\n"
            f"<body>{tarea.descripcion}</body>\n"
            "</html>\n"
        )
    )
