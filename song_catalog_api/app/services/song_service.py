"""
Business logic for songs.

Every operation is scoped to the calling account.  Detail operations
(get, update, delete) first check that the song exists and only then
that the caller owns it, so ``NotFoundError`` and ``ForbiddenError``
are reported with a fixed precedence.

Listing returns songs in creation order; sorting for display belongs
to :mod:`song_filter`.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Callable, List, Optional, Tuple

from ..core.config import settings
from ..core.errors import (
    DeleteFailedError,
    ForbiddenError,
    InternalError,
    InvalidYearError,
    NotFoundError,
    UnauthenticatedError,
    ValidationError,
)
from ..core.records import Song, utcnow
from ..core.security import new_id
from ..core.store import RecordStore


logger = logging.getLogger(__name__)

_TICK = timedelta(microseconds=1)


class SongService:
    """Owner-scoped CRUD over the ``songs`` table.

    ``clock`` returns the current aware datetime; it drives both the
    timestamps and the upper bound of accepted years.
    """

    def __init__(
        self,
        store: RecordStore,
        clock: Callable[[], datetime] = utcnow,
        min_year: Optional[int] = None,
    ) -> None:
        self.store = store
        self.clock = clock
        self.min_year = settings.min_song_year if min_year is None else min_year

    def list_owned(self, caller_id: str) -> List[Song]:
        self._require_caller(caller_id)
        return self.store.songs.scan(lambda song: song.owner_id == caller_id)

    def get_owned(self, caller_id: str, song_id: str) -> Song:
        self._require_caller(caller_id)
        song = self.store.songs.find_by_id(song_id)
        if song is None:
            logger.debug("Song %s not found (caller %s)", song_id, caller_id)
            raise NotFoundError()
        if song.owner_id != caller_id:
            logger.debug("Song %s owned by %s, requested by %s", song_id, song.owner_id, caller_id)
            raise ForbiddenError()
        return song

    def create(self, caller_id: str, title: Any, singer: Any, year: Any) -> Song:
        self._require_caller(caller_id)
        title, singer, year = self._validate_fields(title, singer, year)
        now = self.clock()
        song = Song(
            id=new_id(),
            title=title,
            singer=singer,
            year=year,
            owner_id=caller_id,
            created_at=now,
            updated_at=now,
        )
        self.store.songs.insert(song)
        logger.info("Account %s added song %s '%s'", caller_id, song.id, song.title)
        return song

    def update(self, caller_id: str, song_id: str, title: Any, singer: Any, year: Any) -> Song:
        """Replace title, singer and year of an owned song.

        ``updated_at`` always moves forward, even when the clock has
        not advanced since the previous write.
        """
        current = self.get_owned(caller_id, song_id)
        title, singer, year = self._validate_fields(title, singer, year)
        updated_at = max(self.clock(), current.updated_at + _TICK)
        updated = self.store.songs.update(
            song_id,
            {"title": title, "singer": singer, "year": year, "updated_at": updated_at},
        )
        if updated is None:
            raise InternalError("Failed to update song")
        logger.info("Account %s updated song %s", caller_id, song_id)
        return updated

    def delete(self, caller_id: str, song_id: str) -> None:
        self.get_owned(caller_id, song_id)
        if not self.store.songs.delete(song_id):
            raise DeleteFailedError()
        logger.info("Account %s deleted song %s", caller_id, song_id)

    def current_year(self) -> int:
        return self.clock().year

    def _require_caller(self, caller_id: Optional[str]) -> None:
        if not caller_id or not str(caller_id).strip():
            raise UnauthenticatedError()

    def _validate_fields(self, title: Any, singer: Any, year: Any) -> Tuple[str, str, int]:
        title = title.strip() if isinstance(title, str) else ""
        singer = singer.strip() if isinstance(singer, str) else ""
        if not title or not singer or year is None or year == "":
            raise ValidationError("Title, singer, and year are required")
        if isinstance(year, bool) or (isinstance(year, float) and not year.is_integer()):
            raise ValidationError("Year must be an integer")
        try:
            year = int(year)
        except (TypeError, ValueError):
            raise ValidationError("Year must be an integer") from None
        if year < self.min_year or year > self.current_year():
            raise InvalidYearError(
                f"Invalid year: must be between {self.min_year} and {self.current_year()}"
            )
        return title, singer, year
