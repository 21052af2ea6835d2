"""
JSON-file persistence adapter.

The whole store is written in one go to a single file shaped as::

    {"tasks": {"<id>": {...}}, "users": {"<id>": {...}}}

Object keys are the decimal ids (JSON keys must be strings). ``save`` overwrites
the file in place, so a crash mid-write can leave it truncated; pass
``atomic=True`` to write a temp file and rename it over the target instead.
``load`` never falls back to an empty store: callers decide what to do with
the raised error.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Type

from pydantic import ValidationError

from todo_api.domain.records import Task, User
from todo_api.domain.store import RecordCollection, Store

SECTIONS: dict[str, Type[Task] | Type[User]] = {"tasks": Task, "users": User}

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Base class for persistence failures."""

    code = "storage_error"

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.message = message
        self.path = path


class StorageIOError(StorageError):
    """The data file could not be read or written."""

    code = "storage_io_error"


class StorageDecodeError(StorageError):
    """The data file exists but does not hold a valid store."""

    code = "storage_decode_error"


class StorageEncodeError(StorageError):
    """The store could not be serialized."""

    code = "storage_encode_error"


def dump_store(store: Store) -> dict[str, Any]:
    """Plain-dict view of the store, ready for ``json.dumps``."""
    return {
        "tasks": {str(key): task.model_dump() for key, task in store.tasks.items()},
        "users": {str(key): user.model_dump() for key, user in store.users.items()},
    }


def parse_store(raw: Any) -> Store:
    """Build a Store from decoded JSON, raising StorageDecodeError on bad shape."""
    if not isinstance(raw, dict):
        raise StorageDecodeError("Top-level value must be an object")
    collections = {}
    for section, model in SECTIONS.items():
        entries = raw.get(section)
        if not isinstance(entries, dict):
            raise StorageDecodeError(f"Missing or invalid '{section}' section")
        collection: RecordCollection = RecordCollection()
        for key, value in entries.items():
            if not (key.isascii() and key.isdigit()):
                raise StorageDecodeError(f"Invalid key {key!r} in '{section}'")
            try:
                record = model.model_validate(value)
            except ValidationError as exc:
                raise StorageDecodeError(f"Invalid record {key} in '{section}': {exc}") from exc
            if int(key) != record.id:
                logger.warning(
                    "Key %s in '%s' holds id %d; keeping it under %d",
                    key,
                    section,
                    record.id,
                    record.id,
                    extra={"record_kind": section, "record_id": record.id},
                )
            if record.id in collection:
                logger.warning(
                    "Duplicate id %d in '%s'; the later entry replaces the earlier one",
                    record.id,
                    section,
                    extra={"record_kind": section, "record_id": record.id},
                )
            collection.add(record)
        collections[section] = collection
    return Store(tasks=collections["tasks"], users=collections["users"])


def load(path: Path) -> Store:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise StorageDecodeError(f"{path} is not valid UTF-8", path) from exc
    except OSError as exc:
        raise StorageIOError(f"Could not read {path}: {exc}", path) from exc
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise StorageDecodeError(f"{path} is not valid JSON: {exc}", path) from exc
    try:
        return parse_store(raw)
    except StorageDecodeError as exc:
        exc.path = path
        raise


def save(store: Store, path: Path, *, atomic: bool = False) -> None:
    path = Path(path)
    # encode fully before opening the target: opening truncates it
    try:
        data = json.dumps(dump_store(store), ensure_ascii=False, indent=2).encode("utf-8")
    except (TypeError, ValueError) as exc:
        # UnicodeEncodeError (lone surrogates) is a ValueError
        raise StorageEncodeError(f"Could not encode store: {exc}", path) from exc
    try:
        if atomic:
            tmp_path = path.with_name(path.name + ".tmp")
            tmp_path.write_bytes(data)
            os.replace(tmp_path, path)
        else:
            path.write_bytes(data)
    except OSError as exc:
        raise StorageIOError(f"Could not write {path}: {exc}", path) from exc
