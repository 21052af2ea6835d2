"""
FastAPI routers grouped by record kind (tasks, users).

Each module exposes an APIRouter that is included in the application built by
``todo_api.app.create_app``.
"""

from fastapi import Request

from todo_api.services.store_service import StoreService


def get_store_service(request: Request) -> StoreService:
    svc = getattr(getattr(request.app, "state", None), "store_service", None)
    if not svc:
        raise RuntimeError("StoreService not configured")
    return svc
