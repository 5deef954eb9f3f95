"""
In-memory record store.

This module replaces a database connection layer with process-local
tables.  A :class:`RecordStore` is created explicitly (one per
application instance, see ``create_app``) and handed to the services,
so tests can build an isolated store per test case.

There is no locking and no durability: requests are served one at a
time on the event loop and all data is lost when the process exits.
"""

import logging
from dataclasses import fields, replace
from typing import Any, Callable, Dict, Generic, Iterator, List, Mapping, Optional, TypeVar

from fastapi import Request

from .errors import DuplicateIdError
from .records import IMMUTABLE_FIELDS, Account, Song


logger = logging.getLogger(__name__)

R = TypeVar("R")


class Table(Generic[R]):
    """Insertion-ordered collection of records keyed by ``id``."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._rows: Dict[str, R] = {}

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[R]:
        return iter(list(self._rows.values()))

    def insert(self, record: R) -> R:
        """Append ``record``; its ``id`` must not be present yet."""
        record_id = getattr(record, "id")
        if record_id in self._rows:
            raise DuplicateIdError(f"{self.name}: duplicate id {record_id!r}")
        self._rows[record_id] = record
        return record

    def find_by_id(self, record_id: str) -> Optional[R]:
        return self._rows.get(record_id)

    def find_all(self) -> List[R]:
        return list(self._rows.values())

    def scan(self, predicate: Callable[[R], bool]) -> List[R]:
        """Return records matching ``predicate`` in insertion order."""
        return [row for row in self._rows.values() if predicate(row)]

    def update(self, record_id: str, changes: Mapping[str, Any]) -> Optional[R]:
        """Merge the named fields into a record.

        Returns the updated record, or ``None`` if no record has
        ``record_id``.  Unknown fields and fields in
        ``IMMUTABLE_FIELDS`` raise ``ValueError``; callers pass an
        explicit field list rather than arbitrary payloads.
        """
        current = self._rows.get(record_id)
        if current is None:
            return None
        allowed = {f.name for f in fields(current)} - IMMUTABLE_FIELDS
        rejected = set(changes) - allowed
        if rejected:
            raise ValueError(f"{self.name}: cannot update fields {sorted(rejected)}")
        updated = replace(current, **dict(changes))
        self._rows[record_id] = updated
        return updated

    def delete(self, record_id: str) -> bool:
        return self._rows.pop(record_id, None) is not None

    def count(self) -> int:
        return len(self._rows)

    def clear(self) -> None:
        self._rows.clear()


class RecordStore:
    """All tables of the application, owned for the process lifetime."""

    def __init__(self) -> None:
        self.accounts: Table[Account] = Table("accounts")
        self.songs: Table[Song] = Table("songs")

    def clear(self) -> None:
        """Drop every record from every table."""
        self.accounts.clear()
        self.songs.clear()
        logger.debug("Record store cleared")


def get_store(request: Request) -> RecordStore:
    """Dependency returning the store attached to the running application."""
    return request.app.state.store
