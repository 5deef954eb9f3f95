"""Tests for owner-scoped song CRUD."""

import pytest

from song_catalog_api.app.core.errors import (
    DeleteFailedError,
    ForbiddenError,
    InternalError,
    InvalidYearError,
    NotFoundError,
    UnauthenticatedError,
    ValidationError,
)


class TestCreate:

    def test_trims_and_stamps(self, songs, alice, clock):
        song = songs.create(alice.id, " Imagine ", " John Lennon ", 1971)
        assert song.title == "Imagine"
        assert song.singer == "John Lennon"
        assert song.year == 1971
        assert song.owner_id == alice.id
        assert song.created_at == song.updated_at == clock.now

    def test_year_is_coerced_to_int(self, songs, alice):
        assert songs.create(alice.id, "Song", "Singer", "1999").year == 1999

    def test_whole_float_year_is_accepted(self, songs, alice):
        assert songs.create(alice.id, "Song", "Singer", 1999.0).year == 1999

    @pytest.mark.parametrize("year", [1999.7, True, [1999], {"year": 1999}])
    def test_year_that_is_not_an_integer(self, songs, alice, year):
        with pytest.raises(ValidationError, match="integer"):
            songs.create(alice.id, "Song", "Singer", year)

    @pytest.mark.parametrize("title,singer,year", [
        ("", "Singer", 2000),
        ("   ", "Singer", 2000),
        ("Title", "", 2000),
        ("Title", "Singer", None),
        ("Title", "Singer", ""),
        ("Title", "Singer", "nineteen"),
    ])
    def test_validation(self, songs, alice, title, singer, year):
        with pytest.raises(ValidationError):
            songs.create(alice.id, title, singer, year)

    def test_year_bounds(self, songs, alice, clock):
        current = clock.now.year
        assert songs.create(alice.id, "Old", "Singer", 1900).year == 1900
        assert songs.create(alice.id, "New", "Singer", current).year == current
        with pytest.raises(InvalidYearError):
            songs.create(alice.id, "Too old", "Singer", 1899)
        with pytest.raises(InvalidYearError):
            songs.create(alice.id, "Too new", "Singer", current + 1)

    def test_invalid_year_is_a_validation_error(self):
        assert issubclass(InvalidYearError, ValidationError)

    @pytest.mark.parametrize("caller", ["", None, "   "])
    def test_requires_caller(self, songs, caller):
        with pytest.raises(UnauthenticatedError):
            songs.create(caller, "Title", "Singer", 2000)


class TestRead:

    def test_list_owned_is_scoped_and_ordered(self, songs, alice, bob):
        first = songs.create(alice.id, "Zebra", "A", 2000)
        songs.create(bob.id, "Other", "B", 2000)
        second = songs.create(alice.id, "apple", "B", 1990)
        assert [s.id for s in songs.list_owned(alice.id)] == [first.id, second.id]
        assert len(songs.list_owned(bob.id)) == 1

    def test_list_owned_requires_caller(self, songs):
        with pytest.raises(UnauthenticatedError):
            songs.list_owned("")

    def test_get_owned(self, songs, alice):
        song = songs.create(alice.id, "Title", "Singer", 2000)
        assert songs.get_owned(alice.id, song.id) == song

    def test_missing_song_is_not_found(self, songs, alice):
        with pytest.raises(NotFoundError):
            songs.get_owned(alice.id, "missing")

    def test_foreign_song_is_forbidden(self, songs, alice, bob):
        song = songs.create(alice.id, "Title", "Singer", 2000)
        with pytest.raises(ForbiddenError):
            songs.get_owned(bob.id, song.id)


class TestUpdate:

    def test_replaces_fields_and_keeps_identity(self, songs, alice, clock):
        song = songs.create(alice.id, "Title", "Singer", 2000)
        clock.advance(minutes=5)
        updated = songs.update(alice.id, song.id, " New Title ", "New Singer", "2001")
        assert (updated.title, updated.singer, updated.year) == ("New Title", "New Singer", 2001)
        assert updated.id == song.id
        assert updated.owner_id == song.owner_id
        assert updated.created_at == song.created_at
        assert updated.updated_at == clock.now
        assert updated.updated_at > song.updated_at

    def test_updated_at_increases_without_clock_movement(self, songs, alice):
        song = songs.create(alice.id, "Title", "Singer", 2000)
        first = songs.update(alice.id, song.id, "A", "Singer", 2000)
        second = songs.update(alice.id, song.id, "B", "Singer", 2000)
        assert song.updated_at < first.updated_at < second.updated_at

    def test_not_found_before_validation(self, songs, alice):
        with pytest.raises(NotFoundError):
            songs.update(alice.id, "missing", "", "", None)

    def test_forbidden_before_validation(self, songs, alice, bob):
        song = songs.create(alice.id, "Title", "Singer", 2000)
        with pytest.raises(ForbiddenError):
            songs.update(bob.id, song.id, "", "", 1800)
        assert songs.get_owned(alice.id, song.id).title == "Title"

    def test_validation(self, songs, alice):
        song = songs.create(alice.id, "Title", "Singer", 2000)
        with pytest.raises(InvalidYearError):
            songs.update(alice.id, song.id, "Title", "Singer", 1899)
        with pytest.raises(ValidationError):
            songs.update(alice.id, song.id, "", "Singer", 2000)

    def test_store_losing_record_is_internal_error(self, songs, store, alice, monkeypatch):
        song = songs.create(alice.id, "Title", "Singer", 2000)
        monkeypatch.setattr(store.songs, "update", lambda record_id, changes: None)
        with pytest.raises(InternalError):
            songs.update(alice.id, song.id, "Title", "Singer", 2001)


class TestDelete:

    def test_removes_song(self, songs, alice):
        song = songs.create(alice.id, "Title", "Singer", 2000)
        songs.delete(alice.id, song.id)
        with pytest.raises(NotFoundError):
            songs.get_owned(alice.id, song.id)
        assert songs.list_owned(alice.id) == []

    def test_missing_and_foreign(self, songs, alice, bob):
        song = songs.create(alice.id, "Title", "Singer", 2000)
        with pytest.raises(NotFoundError):
            songs.delete(bob.id, "missing")
        with pytest.raises(ForbiddenError):
            songs.delete(bob.id, song.id)
        assert songs.get_owned(alice.id, song.id) == song

    def test_store_failure_is_delete_failed(self, songs, store, alice, monkeypatch):
        song = songs.create(alice.id, "Title", "Singer", 2000)
        monkeypatch.setattr(store.songs, "delete", lambda record_id: False)
        with pytest.raises(DeleteFailedError):
            songs.delete(alice.id, song.id)
