"""Global exception handlers: storage failures become structured 500 responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from todo_api.repositories.json_storage import StorageError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(
            f"StorageError on {request.method} {request.url.path}: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        # the message can carry filesystem paths; keep it out of the response
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": {"code": exc.code, "message": "Falha ao persistir os dados"}},
        )
