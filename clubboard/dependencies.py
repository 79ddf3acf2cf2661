"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

from clubboard.config import get_settings
from clubboard.db import ClubStore, InMemoryClubStore, SqlClubStore

_club_store: ClubStore | None = None


def get_club_store() -> ClubStore:
    """
    Return a singleton store so submissions persist across requests.
    """
    global _club_store
    if _club_store:
        return _club_store

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.database_url:
        _club_store = InMemoryClubStore()
    else:
        _club_store = SqlClubStore(settings.database_url)
    return _club_store
