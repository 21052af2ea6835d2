import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from todo_api.core.config import Settings, get_settings
from todo_api.core.logging import setup_logging
from todo_api.routers import tasks as tasks_router
from todo_api.routers import users as users_router
from todo_api.routers.error_handlers import register_error_handlers
from todo_api.services.store_service import StoreService

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "POST", "PUT", "DELETE"]
CORS_HEADERS = ["Authorization", "Accept", "Content-Type"]


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory compatible with uvicorn/gunicorn (``--factory``)."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)

    app = FastAPI(title="Task Store API")
    app.state.settings = settings
    # a missing or broken data file means an empty store, never a failed start
    app.state.store_service = StoreService.from_file(settings.data_file, atomic_writes=settings.atomic_writes)

    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=settings.cors_origin_regex,
        allow_credentials=True,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )

    app.include_router(tasks_router.router)
    app.include_router(users_router.router)
    register_error_handlers(app)

    logger.info("App ready (env=%s)", settings.app_env, extra={"data_file": str(settings.data_file)})
    return app
