from .tarea import Tarea

# Export all models for easy importing
__all__ = ["Tarea"]
