from typing import Optional
import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from .config import CORS_ORIGINS, LOG_LEVEL
from .database import create_db_engine
from .errors import StorageFailure, TareaError, tarea_error_handler, validation_error_handler
from .routers import tareas
from .store import TaskStore

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)


def create_app(store: Optional[TaskStore] = None) -> FastAPI:
    """Build the API around a single TaskStore.

    Without an explicit store one is created over DATABASE_URL. The store's
    table is dropped and recreated every time the app starts.
    """
    app = FastAPI(
        title="Tareas API",
        description="Task tracking per conversation",
        version="1.0.0",
    )
    app.state.store = store if store is not None else TaskStore(create_db_engine())

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(TareaError, tarea_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(tareas.router, prefix="/tareas", tags=["tareas"])

    # Reset the table on startup
    @app.on_event("startup")
    def on_startup():
        try:
            app.state.store.initialize()
        except StorageFailure:
            # Keep booting; requests will surface the fault as 500s.
            logger.error("Starting without a usable tareas table")

    @app.get("/")
    def read_root():
        return {"message": "Tareas API"}

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    return app


app = create_app()
