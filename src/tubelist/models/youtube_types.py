"""
ID patterns and validated types for YouTube entities.

Provides the regular expressions used to recognise playlist, album and
channel identifiers, plus the pydantic ``Annotated`` alias that enforces
list IDs on model fields.
"""

from __future__ import annotations

import re
from typing import Annotated

from pydantic import BeforeValidator, Field

# FL: favourites, PL: user playlists, UU: channel uploads, LL: liked videos.
PLAYLIST_ID_RE = re.compile(r"^(FL|PL|UU|LL)[a-zA-Z0-9_-]{16,41}$")
ALBUM_ID_RE = re.compile(r"^OLAK5uy_[a-zA-Z0-9_-]{33}$")
MIX_ID_PREFIX = "RD"
CHANNEL_ID_RE = re.compile(r"^UC[a-zA-Z0-9_-]{22,32}$")

# Channel pages embed their external ID in RSS/feed links.
CHANNEL_ON_PAGE_RE = re.compile(r'channel_id=UC([\w-]{22,32})"')


def is_playlist_id(v: str) -> bool:
    """Return True for playlist or album list IDs (mixes excluded)."""
    return bool(PLAYLIST_ID_RE.match(v) or ALBUM_ID_RE.match(v))


def is_channel_id(v: str) -> bool:
    """Return True for ``UC``-prefixed channel IDs."""
    return bool(CHANNEL_ID_RE.match(v))


def is_mix_id(v: str) -> bool:
    """Return True for auto-generated mix list IDs."""
    return v.startswith(MIX_ID_PREFIX)


def uploads_playlist_id(channel_id: str) -> str:
    """Map a channel ID to the ID of its uploads playlist."""
    return "UU" + channel_id[2:]


def validate_list_id(v: str) -> str:
    """Validate a playlist or album ID."""
    if not isinstance(v, str):
        raise TypeError("ListId must be a string")

    if is_mix_id(v):
        raise ValueError(f"Mix playlists are not supported: {v}")

    if not is_playlist_id(v):
        raise ValueError(f"ListId has an unknown format: {v}")

    return v


# Type aliases for use in Pydantic models
ListId = Annotated[
    str,
    BeforeValidator(validate_list_id),
    Field(description="YouTube playlist or album ID (FL/PL/UU/LL or OLAK5uy_ prefix)"),
]
