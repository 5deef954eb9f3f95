"""Tests for client-side session state."""

import pytest

from song_catalog_session import CatalogSession, Err, Ok, Pending


def song(song_id, title, singer="Singer", year=2000):
    stamp = "2025-01-01T00:00:00Z"
    return {
        "id": song_id, "title": title, "singer": singer, "year": year,
        "owner_id": "u1", "created_at": stamp, "updated_at": stamp,
    }


class StubAPI:
    """Answers like ``SongCatalogAPI`` from canned data."""

    def __init__(self):
        self.songs = []
        self.error = None
        self.seen_states = []
        self.session = None
        self.logged_out = False

    def _result(self, data):
        if self.session is not None:
            self.seen_states.append(dict(self.session.operations))
        if self.error:
            return None, self.error
        return data, None

    def register(self, name, email, password):
        return self._result({"account": {"id": "u1", "email": email, "name": name}, "token": "t"})

    def login(self, email, password):
        return self._result({"account": {"id": "u1", "email": email, "name": "Jane"}, "token": "t"})

    def logout(self):
        self.logged_out = True

    def list_songs(self):
        data, error = self._result(list(self.songs))
        return (data if data is not None else []), error

    def create_song(self, title, singer, year):
        return self._result(song("new", title, singer, year))

    def update_song(self, song_id, title, singer, year):
        return self._result(song(song_id, title, singer, year))

    def delete_song(self, song_id):
        return self._result({"message": "Song deleted successfully"})


@pytest.fixture
def api():
    return StubAPI()


@pytest.fixture
def session(api):
    session = CatalogSession(api=api)
    api.session = session
    return session


def test_login_moves_from_pending_to_ok(session, api):
    result = session.login("jane@example.com", "secret1")
    assert isinstance(api.seen_states[0]["login"], Pending)
    assert isinstance(result, Ok)
    assert session.state("login") == result
    assert session.auth.is_authenticated
    assert session.auth.account.email == "jane@example.com"


def test_failed_login_is_err(session, api):
    api.error = {"status_code": 401, "message": "Invalid email or password"}
    result = session.login("x@example.com", "y")
    assert isinstance(result, Err)
    assert result.message == "Invalid email or password"
    assert not session.auth.is_authenticated


def test_register_signs_in(session):
    assert isinstance(session.register("Jane", "jane@example.com", "secret1"), Ok)
    assert session.auth.account.name == "Jane"


def test_fetch_replaces_collection(session, api):
    session.songs = []
    api.songs = [song("1", "B"), song("2", "A")]
    result = session.fetch_songs()
    assert isinstance(result, Ok)
    assert [s.id for s in session.songs] == ["1", "2"]


def test_fetch_error_keeps_collection(session, api):
    api.songs = [song("1", "B")]
    session.fetch_songs()
    api.error = {"status_code": None, "message": "offline"}
    assert isinstance(session.fetch_songs(), Err)
    assert [s.id for s in session.songs] == ["1"]


def test_malformed_song_is_err(session, api):
    api.songs = [{"id": "1"}]
    result = session.fetch_songs()
    assert isinstance(result, Err)
    assert "Malformed" in result.message


def test_add_update_delete_reducers(session, api):
    api.songs = [song("1", "Old")]
    session.fetch_songs()

    session.add_song("Added", "Singer", 2001)
    assert [s.id for s in session.songs] == ["1", "new"]

    session.update_song("1", "Renamed", "Singer", 2002)
    assert session.songs[0].title == "Renamed"
    assert len(session.songs) == 2

    session.update_song("elsewhere", "Unknown", "Singer", 2003)
    assert session.songs[-1].id == "elsewhere"

    result = session.delete_song("1")
    assert result == Ok("1")
    assert [s.id for s in session.songs] == ["new", "elsewhere"]


def test_failed_delete_keeps_song(session, api):
    api.songs = [song("1", "Old")]
    session.fetch_songs()
    api.error = {"status_code": 403, "message": "Forbidden"}
    assert isinstance(session.delete_song("1"), Err)
    assert [s.id for s in session.songs] == ["1"]


def test_visible_songs_follow_filter(session, api):
    api.songs = [
        song("1", "Zebra", "A", 2000),
        song("2", "apple", "B", 1990),
        song("3", "Yesterday", "The Beatles", 1965),
    ]
    session.fetch_songs()
    assert [s.title for s in session.visible_songs()] == ["apple", "Yesterday", "Zebra"]
    assert session.singers() == ["A", "B", "The Beatles"]

    session.set_search("a")
    assert [s.title for s in session.visible_songs()] == ["apple", "Yesterday", "Zebra"]
    session.set_singer("B")
    assert [s.title for s in session.visible_songs()] == ["apple"]

    session.clear_filters()
    session.set_year_from(1990)
    session.set_year_to(1995)
    assert [s.title for s in session.visible_songs()] == ["apple"]
    session.set_year_from(2005)
    assert session.filter.year_range == (2005, 2005)
    assert session.visible_songs() == []

    session.clear_filters()
    session.set_letter("z")
    assert [s.title for s in session.visible_songs()] == ["Zebra"]


def test_logout_clears_everything(session, api):
    session.login("jane@example.com", "secret1")
    api.songs = [song("1", "Old")]
    session.fetch_songs()
    session.logout()
    assert api.logged_out
    assert not session.auth.is_authenticated
    assert session.songs == []
    assert session.state("fetch") is None


def test_client_imports_do_not_build_the_server():
    import os
    import subprocess
    import sys

    root = os.path.join(os.path.dirname(__file__), "..")
    code = (
        "import sys, song_catalog_session; "
        "print('song_catalog_api.app.main' in sys.modules)"
    )
    completed = subprocess.run(
        [sys.executable, "-c", code], cwd=root, capture_output=True, text=True, check=True
    )
    assert completed.stdout.strip() == "False"
