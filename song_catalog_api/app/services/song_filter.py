"""
Display filter for an owner's song collection.

:class:`SongFilter` is an immutable description of what the user has
selected in the song list: a free-text query, a singer, a first letter
and a year range.  :meth:`SongFilter.apply` narrows a sequence of songs
in that fixed order and always sorts the result by title.  Applying
the same filter to the same songs always yields the same list.

The filter never crosses ownership boundaries: it is handed a list
that ``SongService.list_owned`` already scoped to one account.
"""

import unicodedata
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple

from pydantic import BaseModel, model_validator

from ..core.config import settings


class SongLike(Protocol):
    title: str
    singer: str
    year: int


def title_sort_key(title: str) -> Tuple[str, str, str]:
    """Collation key approximating a locale-aware string comparison.

    Primary level ignores accents and case (``"apple" < "Zebra"``),
    secondary level orders accents, and the tertiary level puts
    lowercase before uppercase.
    """
    folded = title.casefold()
    decomposed = unicodedata.normalize("NFKD", folded)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base, folded, title.swapcase()


def distinct_singers(songs: Iterable[SongLike]) -> List[str]:
    """Non-empty singers of ``songs``, de-duplicated and sorted."""
    return sorted({song.singer for song in songs if song.singer})


class SongFilter(BaseModel):
    """Filter selection for the song list.

    Empty values disable a stage.  ``year_from`` and ``year_to``
    default to the full accepted range ``[min_song_year, current
    year]``.  Both bounds are clamped to at least the minimum year,
    and an inverted range, including one against a defaulted bound, is
    normalized by raising ``year_to``.
    """

    query: str = ""
    singer: str = ""
    letter: str = ""
    year_from: Optional[int] = None
    year_to: Optional[int] = None

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _clamp_years(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        year_from = data.get("year_from")
        year_to = data.get("year_to")
        if year_from is not None:
            data["year_from"] = max(int(year_from), settings.min_song_year)
        if year_to is not None:
            data["year_to"] = max(int(year_to), settings.min_song_year)
        # Compare against the defaults of unset bounds as well.
        low = data["year_from"] if year_from is not None else settings.min_song_year
        high = data["year_to"] if year_to is not None else date.today().year
        if low > high:
            data["year_to"] = low
        return data

    @property
    def year_range(self) -> Tuple[int, int]:
        low = self.year_from if self.year_from is not None else settings.min_song_year
        high = self.year_to if self.year_to is not None else date.today().year
        return low, high

    @property
    def is_active(self) -> bool:
        """Whether any selection departs from the defaults."""
        default_range = (settings.min_song_year, date.today().year)
        return bool(self.query or self.singer or self.letter) or self.year_range != default_range

    def with_year_from(self, year: int) -> "SongFilter":
        """Select a new lower bound, raising the upper bound if needed."""
        low, high = self.year_range
        year = max(int(year), settings.min_song_year)
        return self._replace(year_from=year, year_to=max(high, year))

    def with_year_to(self, year: int) -> "SongFilter":
        """Select a new upper bound, lowering the lower bound if needed."""
        low, high = self.year_range
        year = max(int(year), settings.min_song_year)
        return self._replace(year_from=min(low, year), year_to=year)

    def cleared(self) -> "SongFilter":
        return SongFilter()

    def apply(self, songs: Iterable[SongLike]) -> List[SongLike]:
        """Narrow ``songs`` stage by stage and sort by title."""
        result = list(songs)

        if self.query:
            needle = self.query.lower()
            result = [
                song for song in result
                if needle in song.title.lower() or needle in song.singer.lower()
            ]

        if self.singer:
            result = [song for song in result if song.singer == self.singer]

        if self.letter:
            letter = self.letter.upper()
            result = [song for song in result if song.title[:1].upper() == letter]

        low, high = self.year_range
        result = [song for song in result if low <= int(song.year) <= high]

        return sorted(result, key=lambda song: title_sort_key(song.title))

    def _replace(self, **changes: Any) -> "SongFilter":
        values: Dict[str, Any] = self.model_dump()
        values.update(changes)
        return SongFilter(**values)
