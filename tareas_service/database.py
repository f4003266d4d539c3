from sqlmodel import SQLModel, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import NullPool, StaticPool

from .config import DATABASE_URL

# Import all models to ensure they are registered with SQLModel metadata
from .models import Tarea  # noqa: F401


def _is_in_memory(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url


def create_db_engine(url: str = DATABASE_URL) -> Engine:
    """Build the engine backing a TaskStore.

    In-memory SQLite lives inside a single connection, so every session has
    to share it through StaticPool or each checkout would see an empty db.
    """
    if _is_in_memory(url):
        return create_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    if url.startswith("sqlite"):
        return create_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
        )

    # Postgres and friends: disable pooling and enable pre-ping
    return create_engine(
        url,
        echo=False,
        pool_pre_ping=True,
        poolclass=NullPool,
    )


def reset_tables(engine: Engine) -> None:
    """Drop every registered table and recreate it empty."""
    SQLModel.metadata.drop_all(bind=engine)
    SQLModel.metadata.create_all(bind=engine)
