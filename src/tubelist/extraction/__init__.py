"""
Extraction engine for YouTube renderer trees.

Locates data inside pages and API responses, decodes list entries into
``Item`` records, and finds continuation tokens. Nothing in this package
performs I/O.
"""

from __future__ import annotations

from tubelist.extraction.continuation import find_continuation_token, token_from_items
from tubelist.extraction.items import parse_item, parse_items, prepare_thumbnails
from tubelist.extraction.response import (
    continuation_items,
    find_alert_error,
    flatten_sections,
    locate_search_contents,
    parse_response,
)
from tubelist.extraction.text import parse_number, parse_text

__all__ = [
    "continuation_items",
    "find_alert_error",
    "find_continuation_token",
    "flatten_sections",
    "locate_search_contents",
    "parse_item",
    "parse_items",
    "parse_number",
    "parse_response",
    "parse_text",
    "prepare_thumbnails",
    "token_from_items",
]
