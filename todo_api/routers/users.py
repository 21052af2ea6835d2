from __future__ import annotations

import logging
from typing import Annotated, List

from fastapi import APIRouter, HTTPException, Path, Request, Response, status

from todo_api.domain.records import RECORD_ID_MAX, User
from todo_api.routers import get_store_service
from todo_api.services.store_service import UserNotFoundError

router = APIRouter(prefix="/users", tags=["users"])
logger = logging.getLogger(__name__)

UserId = Annotated[int, Path(ge=0, le=RECORD_ID_MAX)]


@router.get("/", response_model=List[User])
def list_users(request: Request):
    return get_store_service(request).list_users()


@router.get("/{user_id}", response_model=User)
def get_user(request: Request, user_id: UserId):
    try:
        return get_store_service(request).get_user(user_id)
    except UserNotFoundError:
        raise HTTPException(404, "Usuario nao encontrado")


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED, include_in_schema=False)
@router.post("/", response_model=User, status_code=status.HTTP_201_CREATED)
def create_user(user: User, request: Request):
    return get_store_service(request).add_user(user)


@router.put("/{user_id}", response_model=User)
def update_user(user: User, request: Request, user_id: UserId):
    # the body id is the key; the path id is informational
    if user.id != user_id:
        logger.info("PUT /users/%d carries user id %d; storing under %d", user_id, user.id, user.id)
    return get_store_service(request).update_user(user)


@router.put("/", response_model=User)
def update_user_without_id(user: User, request: Request):
    return get_store_service(request).update_user(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(request: Request, user_id: UserId):
    get_store_service(request).delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
