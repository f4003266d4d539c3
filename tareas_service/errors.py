from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import logging

logger = logging.getLogger(__name__)


class TareaError(Exception):
    """Base error carrying the HTTP status and the message shown to callers."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(TareaError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(TareaError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Tarea no encontrada"):
        super().__init__(message)


class StorageFailure(TareaError):
    """The data operation failed. Details are logged where it happened."""


def tarea_error_handler(request: Request, exc: TareaError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Map FastAPI's 422 onto the service's error kinds.

    A path segment that is not an integer cannot name any stored tarea, so it
    is reported as not found; anything wrong with the body is invalid input.
    """
    errors = exc.errors()
    logger.info("Rejected %s %s: %s", request.method, request.url.path, errors)
    if any(err.get("loc", ())[:1] == ("path",) for err in errors):
        return tarea_error_handler(request, NotFound())
    return tarea_error_handler(request, InvalidInput("Solicitud inválida"))
