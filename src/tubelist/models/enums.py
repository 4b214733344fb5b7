"""
Enums for tubelist models.

Defines enumeration types used across the package for consistent
type safety and validation.
"""

from __future__ import annotations

from enum import Enum


class ItemKind(str, Enum):
    """Kinds of records produced by the item decoder (also the search filter)."""

    VIDEO = "video"
    PLAYLIST = "playlist"
