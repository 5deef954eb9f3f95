"""
Top‑level router for version 1 of the API.

This router aggregates domain‑specific routers (auth, songs) under a
unified prefix.  When new domains are introduced, update this file to
include their routers.
"""

from fastapi import APIRouter

from .endpoints import auth, songs

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(songs.router, prefix="/songs", tags=["songs"])
