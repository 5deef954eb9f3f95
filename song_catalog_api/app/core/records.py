"""
Record types held by the in-memory store.

Records are plain dataclasses, decoupled from the Pydantic schemas in
``app.schemas`` that describe API payloads.  Fields listed in
``IMMUTABLE_FIELDS`` are fixed at creation and the store refuses to
change them.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Account:
    id: str
    email: str
    name: str
    created_at: datetime = field(default_factory=utcnow)


@dataclass
class Song:
    id: str
    title: str
    singer: str
    year: int
    owner_id: str
    created_at: datetime
    updated_at: datetime


IMMUTABLE_FIELDS = frozenset({"id", "owner_id", "created_at"})
