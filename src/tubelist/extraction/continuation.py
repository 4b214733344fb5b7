"""
Continuation token locator.

The opaque token that yields the next page sits at different depths
depending on the UI surface that produced the list. Known shapes are tried
first; an unrestricted depth-first scan is the fallback.
"""

from __future__ import annotations

from typing import Any

from tubelist.extraction.tree import as_dict, as_str, dig, find_first

CONTINUATION_RENDERER = "continuationItemRenderer"

_KNOWN_TOKEN_PATHS: tuple[tuple[str, ...], ...] = (
    ("continuationEndpoint", "continuationCommand", "token"),
    ("button", "buttonRenderer", "command", "continuationCommand", "token"),
    ("trigger", "continuationCommand", "token"),
)


def _has_command_token(node: dict[str, Any]) -> bool:
    return isinstance(dig(node, "continuationCommand", "token"), str)


def find_continuation_token(node: Any) -> str:
    """
    Locate a continuation token in ``node``.

    If ``node`` wraps a ``continuationItemRenderer``, the search runs inside
    the renderer. Known shapes are tried in order, then the first
    ``continuationCommand.token`` found by a depth-first scan.

    Parameters
    ----------
    node : Any
        A continuation entry, a renderer, or any subtree.

    Returns
    -------
    str
        The token, or ``""`` when none is present.
    """
    renderer = as_dict(node)
    if renderer is None:
        return ""

    inner = as_dict(renderer.get(CONTINUATION_RENDERER))
    if inner is not None:
        renderer = inner

    for path in _KNOWN_TOKEN_PATHS:
        token = as_str(dig(renderer, *path))
        if token:
            return token

    holder = find_first(renderer, _has_command_token)
    if holder is None:
        return ""
    return holder["continuationCommand"]["token"]


def token_from_items(raw_items: Any) -> str:
    """
    Find the next-page token among a raw entry list.

    Scans entries in order for the first one carrying a
    ``continuationItemRenderer`` that yields a token. Decoded items are not
    consulted: the marker is itself a non-item entry of the raw list.

    Returns
    -------
    str
        The token, or ``""`` when the list is the last page.
    """
    if not isinstance(raw_items, list):
        return ""
    for entry in raw_items:
        if isinstance(entry, dict) and CONTINUATION_RENDERER in entry:
            token = find_continuation_token(entry)
            if token:
                return token
    return ""
