"""Shared store access: one lock around every operation, save after each mutation."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import List

from todo_api.domain.records import Task, User
from todo_api.domain.store import RecordCollection, Store
from todo_api.repositories import json_storage
from todo_api.repositories.json_storage import StorageEncodeError, StorageError, StorageIOError

logger = logging.getLogger(__name__)


class StoreServiceError(Exception):
    """Base exception for store use cases."""


class RecordNotFoundError(StoreServiceError):
    kind = "record"

    def __init__(self, record_id: int):
        super().__init__(f"{self.kind} {record_id} not found")
        self.record_id = record_id


class TaskNotFoundError(RecordNotFoundError):
    kind = "task"


class UserNotFoundError(RecordNotFoundError):
    kind = "user"


def load_or_empty(path: Path) -> Store:
    """Load the persisted store, starting empty when it is missing or broken."""
    try:
        store = json_storage.load(path)
    except StorageIOError as exc:
        if not Path(path).exists():
            logger.info("No data file yet; starting with an empty store", extra={"data_file": str(path)})
        else:
            logger.warning(
                "Could not read data file, starting empty: %s",
                exc.message,
                extra={"data_file": str(path), "error_code": exc.code},
            )
        return Store()
    except StorageError as exc:
        logger.warning(
            "Data file is unusable, starting empty: %s",
            exc.message,
            extra={"data_file": str(path), "error_code": exc.code},
        )
        return Store()
    if store.is_empty():
        logger.info("Data file holds no records", extra={"data_file": str(path)})
        return store
    logger.info(
        "Loaded %d tasks and %d users",
        len(store.tasks),
        len(store.users),
        extra={"data_file": str(path)},
    )
    return store


class StoreService:
    """Owns the process-wide Store.

    Every call, reads included, holds the same exclusive lock for its whole
    duration. Mutations write the data file before the lock is released, so
    file access is never concurrent. A failed write keeps the in-memory change
    and raises the storage error to the caller; a record that cannot be
    encoded is rolled back instead, so it does not block later saves.
    """

    def __init__(self, store: Store | None = None, data_file: Path | None = None, *, atomic_writes: bool = False) -> None:
        self.store = store if store is not None else Store()
        self.data_file = Path(data_file) if data_file is not None else None
        self.atomic_writes = atomic_writes
        self._lock = threading.Lock()

    @classmethod
    def from_file(cls, data_file: Path, *, atomic_writes: bool = False) -> "StoreService":
        return cls(load_or_empty(data_file), data_file, atomic_writes=atomic_writes)

    # -------------------------- tasks --------------------------
    def list_tasks(self) -> List[Task]:
        with self._lock:
            return self.store.tasks.list()

    def get_task(self, task_id: int) -> Task:
        with self._lock:
            task = self.store.tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def add_task(self, task: Task) -> Task:
        return self._write(self.store.tasks, task, "task", "add")

    def update_task(self, task: Task) -> Task:
        return self._write(self.store.tasks, task, "task", "update")

    def delete_task(self, task_id: int) -> None:
        self._remove(self.store.tasks, task_id, "task")

    # -------------------------- users --------------------------
    def list_users(self) -> List[User]:
        with self._lock:
            return self.store.users.list()

    def get_user(self, user_id: int) -> User:
        with self._lock:
            user = self.store.users.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def add_user(self, user: User) -> User:
        return self._write(self.store.users, user, "user", "add")

    def update_user(self, user: User) -> User:
        return self._write(self.store.users, user, "user", "update")

    def delete_user(self, user_id: int) -> None:
        self._remove(self.store.users, user_id, "user")

    # -------------------------- helpers --------------------------
    def _write(self, collection: RecordCollection, record, kind: str, op: str):
        with self._lock:
            previous = collection.get(record.id)
            if op == "update":
                collection.update(record)
            else:
                collection.add(record)
            logger.debug("%s %s", op, kind, extra={"record_kind": kind, "record_id": record.id})
            try:
                self._persist()
            except StorageEncodeError:
                # a record that cannot be encoded would fail every later save
                if previous is None:
                    collection.delete(record.id)
                else:
                    collection.add(previous)
                raise
        return record

    def _remove(self, collection: RecordCollection, record_id: int, kind: str) -> None:
        with self._lock:
            removed = collection.delete(record_id)
            logger.debug(
                "delete %s (%s)",
                kind,
                "removed" if removed else "absent",
                extra={"record_kind": kind, "record_id": record_id},
            )
            # persisted even when nothing changed
            self._persist()

    def _persist(self) -> None:
        if self.data_file is None:
            return
        try:
            json_storage.save(self.store, self.data_file, atomic=self.atomic_writes)
        except StorageError as exc:
            logger.error(
                "Failed to save store: %s",
                exc.message,
                extra={"data_file": str(self.data_file), "error_code": exc.code},
            )
            raise
