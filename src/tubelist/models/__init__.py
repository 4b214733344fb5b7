"""
Pydantic models for tubelist.

Exposes the decoded record types, session context, options, and results.
"""

from __future__ import annotations

from tubelist.models.context import SessionContext
from tubelist.models.enums import ItemKind
from tubelist.models.items import Author, Item, Thumbnail
from tubelist.models.results import (
    PageResult,
    ParsedResponse,
    PlaylistInfo,
    PlaylistOptions,
    SearchOptions,
    SearchResult,
)

__all__ = [
    "Author",
    "Item",
    "ItemKind",
    "PageResult",
    "ParsedResponse",
    "PlaylistInfo",
    "PlaylistOptions",
    "SearchOptions",
    "SearchResult",
    "SessionContext",
    "Thumbnail",
]
