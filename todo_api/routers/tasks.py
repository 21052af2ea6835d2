from __future__ import annotations

import logging
from typing import Annotated, List

from fastapi import APIRouter, HTTPException, Path, Request, Response, status

from todo_api.domain.records import RECORD_ID_MAX, Task
from todo_api.routers import get_store_service
from todo_api.services.store_service import TaskNotFoundError

router = APIRouter(prefix="/tasks", tags=["tasks"])
logger = logging.getLogger(__name__)

TaskId = Annotated[int, Path(ge=0, le=RECORD_ID_MAX)]


@router.get("/", response_model=List[Task])
def list_tasks(request: Request):
    return get_store_service(request).list_tasks()


@router.get("/{task_id}", response_model=Task)
def get_task(request: Request, task_id: TaskId):
    try:
        return get_store_service(request).get_task(task_id)
    except TaskNotFoundError:
        raise HTTPException(404, "Tarefa nao encontrada")


@router.post("", response_model=Task, status_code=status.HTTP_201_CREATED, include_in_schema=False)
@router.post("/", response_model=Task, status_code=status.HTTP_201_CREATED)
def create_task(task: Task, request: Request):
    return get_store_service(request).add_task(task)


@router.put("", response_model=Task, include_in_schema=False)
@router.put("/", response_model=Task)
def update_task(task: Task, request: Request):
    return get_store_service(request).update_task(task)


@router.put("/{task_id}", response_model=Task)
def update_task_by_path(task: Task, request: Request, task_id: TaskId):
    # the body id is the key; the path id is informational
    if task.id != task_id:
        logger.info("PUT /tasks/%d carries task id %d; storing under %d", task_id, task.id, task.id)
    return get_store_service(request).update_task(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(request: Request, task_id: TaskId):
    get_store_service(request).delete_task(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
