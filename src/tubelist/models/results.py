"""
Pydantic models for request options and assembled results.

Models
------
ParsedResponse
    Bundle produced by the response locator (data tree, API key, context).
PageResult
    One decoded page plus the token for the next one.
PlaylistOptions / SearchOptions
    Per-call configuration for the playlist and search services.
PlaylistInfo
    Playlist metadata and its (bounded) item list.
SearchResult
    Search query, estimated result count, and decoded items.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from tubelist.models.context import SessionContext
from tubelist.models.enums import ItemKind
from tubelist.models.items import Author, Item, Thumbnail
from tubelist.models.youtube_types import ListId


class ParsedResponse(BaseModel):
    """
    Result of locating data inside a page body or API response.

    Attributes
    ----------
    json_data : dict[str, Any] | None
        Initial data tree, or None when the page did not embed one.
    api_key : str | None
        Innertube API key found in the page.
    context : SessionContext | None
        Session context built from the scraped client version.
    body : str
        Raw body the bundle was parsed from ("" for JSON input).
    """

    json_data: dict[str, Any] | None = None
    api_key: str | None = None
    context: SessionContext | None = None
    body: str = ""


class PageResult(BaseModel):
    """Decoded items of one page and the continuation token ("" at the end)."""

    items: list[Item] = Field(default_factory=list)
    continuation: str = ""


class PlaylistOptions(BaseModel):
    """
    Options for fetching a playlist.

    Attributes
    ----------
    limit : int | None
        Maximum number of items; None or non-positive uses the configured default.
    gl : str | None
        Region code passed to the playlist page.
    hl : str | None
        Interface language passed to the playlist page.
    retries : int | None
        Attempts allowed when the data tree cannot be located; None uses the
        configured default.
    """

    limit: int | None = None
    gl: str | None = None
    hl: str | None = None
    retries: int | None = Field(default=None, ge=1)


class SearchOptions(BaseModel):
    """
    Options for a search request.

    Attributes
    ----------
    type : ItemKind
        Result kind to keep; unknown values fall back to ``video``.
    limit : int | None
        Maximum number of items; None or non-positive uses the configured default.
    safe_search : bool
        Request restricted mode; always forces a fresh page fetch.
    gl : str | None
        Region code.
    hl : str | None
        Interface language.
    utc_offset_minutes : int | None
        Caller's UTC offset.
    retries : int | None
        Attempts allowed when no JSON can be obtained; None uses the
        configured default.
    """

    type: ItemKind = ItemKind.VIDEO
    limit: int | None = None
    safe_search: bool = False
    gl: str | None = None
    hl: str | None = None
    utc_offset_minutes: int | None = None
    retries: int | None = Field(default=None, ge=1)

    @field_validator("type", mode="before")
    @classmethod
    def fallback_type(cls, v: Any) -> Any:
        """Coerce unknown result kinds to ``video``."""
        if isinstance(v, ItemKind):
            return v
        if isinstance(v, str) and v.lower() in {k.value for k in ItemKind}:
            return v.lower()
        return ItemKind.VIDEO


class PlaylistInfo(BaseModel):
    """
    Playlist metadata and decoded items.

    Attributes
    ----------
    id : ListId
        Playlist or album ID.
    url : str
        Canonical playlist URL.
    title : str
        Playlist title.
    description : str
        Playlist description.
    thumbnail : Thumbnail | None
        Widest sidebar thumbnail.
    author : Author | None
        Playlist owner from the secondary sidebar.
    total_items : int
        Video count reported by the sidebar stats.
    views : int
        View count reported by the sidebar stats (0 when not shown).
    last_updated : str | None
        "Last updated" stat text.
    items : list[Item]
        Decoded items, at most the requested limit.
    """

    id: ListId
    url: str
    title: str = ""
    description: str = ""
    thumbnail: Thumbnail | None = None
    author: Author | None = None
    total_items: int = 0
    views: int = 0
    last_updated: str | None = None
    items: list[Item] = Field(default_factory=list)


class SearchResult(BaseModel):
    """
    Decoded search results.

    Attributes
    ----------
    query : str
        The query that was searched.
    type : ItemKind
        Result kind kept.
    results : int
        Upstream estimated total result count.
    items : list[Item]
        Decoded items, at most the requested limit.
    continuation : str
        Token for the page after the last one fetched ("" when exhausted).
    """

    query: str
    type: ItemKind = ItemKind.VIDEO
    results: int = 0
    items: list[Item] = Field(default_factory=list)
    continuation: str = ""
