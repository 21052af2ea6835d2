"""Record shapes and the in-memory store (no I/O)."""

from .records import RECORD_ID_MAX, Task, User
from .store import RecordCollection, Store

__all__ = ["RECORD_ID_MAX", "Task", "User", "RecordCollection", "Store"]
