"""
Song endpoints for API v1.

CRUD over the caller's own songs.  Every route depends on
``verify_caller``; requests without the caller id header are rejected
with 401 before any lookup.  A song that exists but belongs to another
account yields 403, an unknown id yields 404.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from song_catalog_api.app.core.security import verify_caller
from song_catalog_api.app.core.store import RecordStore, get_store
from song_catalog_api.app.schemas.song import MessageResponse, SongRead, SongWrite
from song_catalog_api.app.services.song_service import SongService


router = APIRouter()


def get_song_service(store: RecordStore = Depends(get_store)) -> SongService:
    return SongService(store)


@router.get("/", response_model=List[SongRead])
async def list_songs(
    caller_id: str = Depends(verify_caller),
    service: SongService = Depends(get_song_service),
) -> List[SongRead]:
    """Return the caller's songs in the order they were added."""
    return [SongRead.model_validate(song) for song in service.list_owned(caller_id)]


@router.post("/", response_model=SongRead, status_code=status.HTTP_201_CREATED)
async def create_song(
    song_in: SongWrite,
    caller_id: str = Depends(verify_caller),
    service: SongService = Depends(get_song_service),
) -> SongRead:
    song = service.create(caller_id, song_in.title, song_in.singer, song_in.year)
    return SongRead.model_validate(song)


@router.get("/{song_id}", response_model=SongRead)
async def get_song(
    song_id: str,
    caller_id: str = Depends(verify_caller),
    service: SongService = Depends(get_song_service),
) -> SongRead:
    return SongRead.model_validate(service.get_owned(caller_id, song_id))


@router.put("/{song_id}", response_model=SongRead)
async def update_song(
    song_id: str,
    song_in: SongWrite,
    caller_id: str = Depends(verify_caller),
    service: SongService = Depends(get_song_service),
) -> SongRead:
    """Replace title, singer and year of an owned song.

    Ownership is checked before title, singer and year are validated,
    so a foreign song yields 403 even when those fields are empty.
    """
    song = service.update(caller_id, song_id, song_in.title, song_in.singer, song_in.year)
    return SongRead.model_validate(song)


@router.delete("/{song_id}", response_model=MessageResponse)
async def delete_song(
    song_id: str,
    caller_id: str = Depends(verify_caller),
    service: SongService = Depends(get_song_service),
) -> MessageResponse:
    service.delete(caller_id, song_id)
    return MessageResponse(message="Song deleted successfully")
