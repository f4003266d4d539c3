from sqlalchemy import Column, String
from sqlmodel import SQLModel, Field
from typing import Optional


class Tarea(SQLModel, table=True):
    """A tracked task owned by a conversation.

    `descripcion` holds the HTML-escaped text; see tareas_service.escaping.
    """
    __tablename__ = "tareas"
    # AUTOINCREMENT keeps sqlite from handing out a number twice
    __table_args__ = {"sqlite_autoincrement": True}

    numero_tarea: Optional[int] = Field(default=None, primary_key=True)
    descripcion: str = Field(nullable=False)
    conversation_id: str = Field(sa_column=Column("conversationID", String, nullable=False))
