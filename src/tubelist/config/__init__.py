"""
Configuration management module for tubelist.

Handles application settings loaded from environment variables and ``.env``
files: HTTP identity, timeouts, retry counts, locale defaults, and limits.
"""

from __future__ import annotations

__all__: list[str] = []
