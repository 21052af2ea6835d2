"""Plain record shapes stored by the API."""
from __future__ import annotations

from pydantic import BaseModel, Field

# ids are unsigned 32-bit integers supplied by the caller
RECORD_ID_MAX = 2**32 - 1


class Task(BaseModel):
    id: int = Field(ge=0, le=RECORD_ID_MAX)
    name: str
    completed: bool


class User(BaseModel):
    """A user account.

    ``password`` is kept and persisted in cleartext, exactly as received.
    Nothing hashes or checks it; there is no authentication layer.
    """

    id: int = Field(ge=0, le=RECORD_ID_MAX)
    username: str
    password: str
