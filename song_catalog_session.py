"""Client-side state for the song catalog.

:class:`CatalogSession` sits between a user interface and
:class:`song_catalog_client.SongCatalogAPI`.  It keeps the signed-in
account, the caller's song collection and the current
:class:`SongFilter` selection, and derives the list to display.

Every request the session makes is tracked as an operation state,
one of :class:`Pending`, :class:`Ok` or :class:`Err`, keyed by
operation name (``"register"``, ``"login"``, ``"fetch"``, ``"add"``,
``"update"``, ``"delete"``).  A state is ``Pending`` while the request
is in flight and is replaced by ``Ok(value)`` or ``Err(error)`` when
it completes.

The module can also be run as a small command line tool that signs in
and prints the caller's songs through the filter::

    python song_catalog_session.py --email jane@example.com --password secret1 --search love
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, TypeVar, Union

from pydantic import ValidationError as SchemaError

from song_catalog_api.app.core.logging_config import setup_logging
from song_catalog_api.app.schemas.song import SongRead
from song_catalog_api.app.schemas.user import AccountRead
from song_catalog_api.app.services.song_filter import SongFilter, distinct_singers
from song_catalog_client import ApiError, SongCatalogAPI


logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Pending:
    """The operation has been started and has not completed yet."""


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: ApiError

    @property
    def message(self) -> str:
        return str(self.error.get("message") or "Request failed")


OperationState = Union[Pending, Ok[Any], Err]


@dataclass
class AuthState:
    account: Optional[AccountRead] = None
    token: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.account is not None and bool(self.token)


@dataclass
class CatalogSession:
    """Signed-in account, its songs and the display filter."""

    api: SongCatalogAPI
    auth: AuthState = field(default_factory=AuthState)
    songs: List[SongRead] = field(default_factory=list)
    filter: SongFilter = field(default_factory=SongFilter)
    operations: Dict[str, OperationState] = field(default_factory=dict)

    # ------------------------------------------------------------------
    # Operation bookkeeping
    # ------------------------------------------------------------------
    def state(self, operation: str) -> Optional[OperationState]:
        return self.operations.get(operation)

    def _start(self, operation: str) -> None:
        self.operations[operation] = Pending()

    def _fail(self, operation: str, error: ApiError) -> Err:
        result = Err(error)
        self.operations[operation] = result
        logger.warning("%s failed: %s", operation, result.message)
        return result

    def _succeed(self, operation: str, value: Any) -> Ok[Any]:
        result = Ok(value)
        self.operations[operation] = result
        return result

    def _parse_song(self, operation: str, data: Any) -> Union[SongRead, Err]:
        try:
            return SongRead.model_validate(data)
        except SchemaError as exc:
            return self._fail(operation, {"status_code": None, "message": f"Malformed song: {exc}"})

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------
    def register(self, name: str, email: str, password: str) -> OperationState:
        self._start("register")
        data, error = self.api.register(name, email, password)
        if error:
            return self._fail("register", error)
        return self._sign_in("register", data)

    def login(self, email: str, password: str) -> OperationState:
        self._start("login")
        data, error = self.api.login(email, password)
        if error:
            return self._fail("login", error)
        return self._sign_in("login", data)

    def _sign_in(self, operation: str, data: Dict[str, Any]) -> OperationState:
        try:
            account = AccountRead.model_validate(data["account"])
        except (KeyError, TypeError, SchemaError) as exc:
            return self._fail(operation, {"status_code": None, "message": f"Malformed response: {exc}"})
        self.auth = AuthState(account=account, token=data.get("token"))
        logger.info("Signed in as %s", account.email)
        return self._succeed(operation, account)

    def logout(self) -> None:
        """Forget credentials, songs and operation states."""
        self.api.logout()
        self.auth = AuthState()
        self.songs = []
        self.operations.clear()

    # ------------------------------------------------------------------
    # Songs
    # ------------------------------------------------------------------
    def fetch_songs(self) -> OperationState:
        """Replace the local collection with the server's."""
        self._start("fetch")
        data, error = self.api.list_songs()
        if error:
            return self._fail("fetch", error)
        songs: List[SongRead] = []
        for item in data:
            song = self._parse_song("fetch", item)
            if isinstance(song, Err):
                return song
            songs.append(song)
        self.songs = songs
        return self._succeed("fetch", songs)

    def add_song(self, title: str, singer: str, year: int) -> OperationState:
        self._start("add")
        data, error = self.api.create_song(title, singer, year)
        if error:
            return self._fail("add", error)
        song = self._parse_song("add", data)
        if isinstance(song, Err):
            return song
        self.songs.append(song)
        return self._succeed("add", song)

    def update_song(self, song_id: str, title: str, singer: str, year: int) -> OperationState:
        """Update a song; an id missing locally is appended."""
        self._start("update")
        data, error = self.api.update_song(song_id, title, singer, year)
        if error:
            return self._fail("update", error)
        song = self._parse_song("update", data)
        if isinstance(song, Err):
            return song
        for index, existing in enumerate(self.songs):
            if existing.id == song.id:
                self.songs[index] = song
                break
        else:
            self.songs.append(song)
        return self._succeed("update", song)

    def delete_song(self, song_id: str) -> OperationState:
        self._start("delete")
        _, error = self.api.delete_song(song_id)
        if error:
            return self._fail("delete", error)
        self.songs = [song for song in self.songs if song.id != song_id]
        return self._succeed("delete", song_id)

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------
    def set_search(self, query: str) -> None:
        self.filter = self.filter.model_copy(update={"query": query})

    def set_singer(self, singer: str) -> None:
        self.filter = self.filter.model_copy(update={"singer": singer})

    def set_letter(self, letter: str) -> None:
        self.filter = self.filter.model_copy(update={"letter": letter})

    def set_year_from(self, year: int) -> None:
        self.filter = self.filter.with_year_from(year)

    def set_year_to(self, year: int) -> None:
        self.filter = self.filter.with_year_to(year)

    def clear_filters(self) -> None:
        self.filter = self.filter.cleared()

    def visible_songs(self) -> List[SongRead]:
        """The collection narrowed and sorted by the current filter."""
        return self.filter.apply(self.songs)

    def singers(self) -> List[str]:
        return distinct_singers(self.songs)


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="List your songs from a Song Catalog API server.")
    ap.add_argument("--base-url", default="http://localhost:8000", help="Server URL")
    ap.add_argument("--email", required=True)
    ap.add_argument("--password", required=True)
    ap.add_argument("--search", default="", help="Case-insensitive text in title or singer")
    ap.add_argument("--singer", default="", help="Exact singer name")
    ap.add_argument("--letter", default="", help="First letter of the title")
    ap.add_argument("--year-from", type=int, default=None)
    ap.add_argument("--year-to", type=int, default=None)
    ap.add_argument("--log-level", default="WARNING")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    setup_logging(args.log_level, force=True)

    session = CatalogSession(api=SongCatalogAPI(base_url=args.base_url))
    result = session.login(args.email, args.password)
    if isinstance(result, Err):
        print(f"[!] Login failed: {result.message}", file=sys.stderr)
        return 1
    result = session.fetch_songs()
    if isinstance(result, Err):
        print(f"[!] Could not load songs: {result.message}", file=sys.stderr)
        return 1

    session.set_search(args.search)
    session.set_singer(args.singer)
    session.set_letter(args.letter)
    if args.year_from is not None:
        session.set_year_from(args.year_from)
    if args.year_to is not None:
        session.set_year_to(args.year_to)

    visible = session.visible_songs()
    print(f"Songs ({len(visible)} of {len(session.songs)})")
    for song in visible:
        print(f"  {song.title} - {song.singer} ({song.year})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
