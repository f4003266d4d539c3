#!/usr/bin/env python
"""Script to run the tareas server."""
import logging

import uvicorn

from tareas_service.config import HOST, PORT
from tareas_service.main import app

logger = logging.getLogger("run_server")

if __name__ == "__main__":
    logger.info("Servicio escuchando en http://localhost:%s", PORT)
    uvicorn.run(app, host=HOST, port=PORT)
