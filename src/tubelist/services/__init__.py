"""
Services module for tubelist.

Contains the HTTP transport, the session context cache, the pagination
walker, and the playlist and search services built on them.
"""

from __future__ import annotations

from tubelist.services.pagination import FetchState, PaginationWalker
from tubelist.services.playlist_service import PlaylistService
from tubelist.services.search_service import SearchService
from tubelist.services.session_cache import SessionContextCache
from tubelist.services.transport import HttpxTransport

__all__: list[str] = [
    "FetchState",
    "HttpxTransport",
    "PaginationWalker",
    "PlaylistService",
    "SearchService",
    "SessionContextCache",
]
