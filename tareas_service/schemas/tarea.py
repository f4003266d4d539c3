from pydantic import BaseModel, Field
from typing import Optional


class TareaCreate(BaseModel):
    """Body of POST /tareas.

    Both fields are optional here so that a missing field reaches the
    router's own check and gets its field-specific 400 message.
    """
    descripcion: Optional[str] = None
    conversation_id: Optional[str] = Field(default=None, alias="conversationID")


class TareaUpdate(BaseModel):
    """Body of PUT /tareas/{numero_tarea}. Only the description can change."""
    descripcion: Optional[str] = None


class Tarea(BaseModel):
    """Task as returned to API clients."""
    numero_tarea: int
    descripcion: str
    conversation_id: str = Field(alias="conversationID")

    class Config:
        from_attributes = True


class TareaCreated(BaseModel):
    mensaje: str = "Tarea creada"
    numero_tarea: int


class TareaUpdated(BaseModel):
    mensaje: str = "Tarea actualizada"
