"""In-memory authoritative state for tasks and users.

Nothing here does I/O or locking; callers serialize access (see
``todo_api.services.store_service``) and persist snapshots through
``todo_api.repositories.json_storage``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Generic, Iterable, Iterator, List, Optional, TypeVar

from .records import Task, User

R = TypeVar("R", Task, User)


class RecordCollection(Generic[R]):
    """Records keyed by their own ``id``. Every write is an upsert."""

    def __init__(self, records: Iterable[R] = ()) -> None:
        self._records: Dict[int, R] = {}
        for record in records:
            self.add(record)

    def add(self, record: R) -> R:
        self._records[record.id] = record
        return record

    def get(self, record_id: int) -> Optional[R]:
        return self._records.get(record_id)

    def list(self) -> List[R]:
        # iteration order of the dict; callers must not rely on it
        return list(self._records.values())

    def update(self, record: R) -> R:
        """Same as :meth:`add`: a missing id is created, not rejected."""
        return self.add(record)

    def delete(self, record_id: int) -> bool:
        """Remove ``record_id`` if present. Returns whether something was removed."""
        return self._records.pop(record_id, None) is not None

    def items(self) -> Iterator[tuple[int, R]]:
        return iter(self._records.items())

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._records

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecordCollection):
            return NotImplemented
        return self._records == other._records

    def __repr__(self) -> str:
        return f"RecordCollection({len(self._records)} records)"


@dataclass(eq=True)
class Store:
    tasks: RecordCollection[Task] = field(default_factory=RecordCollection)
    users: RecordCollection[User] = field(default_factory=RecordCollection)

    def is_empty(self) -> bool:
        return not self.tasks and not self.users
