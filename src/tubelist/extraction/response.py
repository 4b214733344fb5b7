"""
Response locator for YouTube pages and innertube responses.

Finds the embedded ``ytInitialData`` tree, the innertube API key, and the
web client version in an HTML page, or accepts an already-decoded API
response. Also locates the item lists inside search and continuation
responses.

Functions
---------
parse_response
    Build a ``ParsedResponse`` from an HTML body or a decoded JSON object.
extract_json_object
    Brace-balanced extraction of a JSON literal embedded in HTML.
locate_search_contents
    Find the section list of a search response.
flatten_sections
    Expand ``itemSectionRenderer`` wrappers into a flat entry list.
continuation_items
    Items appended by a continuation response.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from tubelist.exceptions import UpstreamShapeError
from tubelist.extraction.text import parse_text
from tubelist.extraction.tree import as_dict, as_list, as_str, dig, find_key
from tubelist.models.context import SessionContext
from tubelist.models.results import ParsedResponse

logger = logging.getLogger(__name__)

# Marker variants are tried in order; the value runs to the next quote.
_API_KEY_MARKERS = (
    '"INNERTUBE_API_KEY":"',
    '"innertubeApiKey":"',
)
_CLIENT_VERSION_MARKERS = (
    '"INNERTUBE_CONTEXT_CLIENT_VERSION":"',
    '"innertube_context_client_version":"',
    '"clientVersion":"',
)
# Assignment prefixes of the initial data variable; JSON follows directly.
_INITIAL_DATA_MARKERS = (
    "var ytInitialData = ",
    'window["ytInitialData"] = ',
    "ytInitialData = ",
)

_MAX_JSON_SCAN = 5_000_000


def extract_json_object(html: str, start: int) -> str | None:
    """
    Extract a balanced JSON object from HTML starting at the given position.

    Uses brace-counting to handle arbitrarily nested ``{...}`` structures
    and braces inside string literals.

    Parameters
    ----------
    html : str
        Raw HTML source.
    start : int
        Position of the opening ``{`` in the HTML string.

    Returns
    -------
    str | None
        The balanced JSON string, or None if no opening brace at start
        or braces are unbalanced within the first 5MB of text.
    """
    if start >= len(html) or html[start] != "{":
        return None

    depth = 0
    in_string = False
    escape = False
    limit = min(len(html), start + _MAX_JSON_SCAN)

    for i in range(start, limit):
        ch = html[i]

        if escape:
            escape = False
            continue

        if ch == "\\":
            if in_string:
                escape = True
            continue

        if ch == '"':
            in_string = not in_string
            continue

        if in_string:
            continue

        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return html[start : i + 1]

    return None


def _value_after(body: str, markers: tuple[str, ...]) -> str | None:
    for marker in markers:
        pos = body.find(marker)
        if pos == -1:
            continue
        pos += len(marker)
        end = body.find('"', pos)
        if end != -1 and end > pos:
            return body[pos:end]
    return None


def _initial_data(body: str) -> dict[str, Any] | None:
    for marker in _INITIAL_DATA_MARKERS:
        pos = body.find(marker)
        while pos != -1:
            json_str = extract_json_object(body, pos + len(marker))
            if json_str:
                try:
                    data = json.loads(json_str)
                except (json.JSONDecodeError, ValueError):
                    logger.debug("Malformed initial data after marker %r", marker)
                else:
                    if isinstance(data, dict):
                        return data
            pos = body.find(marker, pos + len(marker))
    return None


def client_version_from_tracking(data: Any) -> str | None:
    """
    Read the ``cver`` service tracking parameter of a response.

    Returns
    -------
    str | None
        The client version reported by the response, if present.
    """
    for service in as_list(dig(data, "responseContext", "serviceTrackingParams")):
        for param in as_list(dig(service, "params")):
            if dig(param, "key") == "cver":
                version = as_str(dig(param, "value"))
                if version:
                    return version
    return None


def parse_response(
    source: str | dict[str, Any],
    *,
    gl: str | None = None,
    hl: str | None = None,
    utc_offset_minutes: int | None = None,
    safe_search: bool = False,
) -> ParsedResponse:
    """
    Locate the data tree, API key and client version in a response.

    Parameters
    ----------
    source : str | dict[str, Any]
        HTML page body, or an already-decoded innertube response.
    gl, hl, utc_offset_minutes, safe_search
        Locale options copied into the resulting session context.

    Returns
    -------
    ParsedResponse
        ``json_data`` is None when the page does not embed initial data;
        callers then POST to the API with ``api_key`` and ``context``.
        ``context`` is None when no client version could be found.
    """
    if isinstance(source, dict):
        json_data: dict[str, Any] | None = source
        body = ""
        api_key = None
        version = client_version_from_tracking(source)
    else:
        body = source
        json_data = _initial_data(body)
        api_key = _value_after(body, _API_KEY_MARKERS)
        version = client_version_from_tracking(json_data) or _value_after(
            body, _CLIENT_VERSION_MARKERS
        )

    context = None
    if version:
        context = SessionContext(
            client_version=version,
            gl=gl,
            hl=hl,
            utc_offset_minutes=utc_offset_minutes,
            safe_search=safe_search,
        )

    logger.debug(
        "Parsed response: initial data %s, api key %s, client version %s",
        "found" if json_data is not None else "missing",
        "found" if api_key else "missing",
        version or "missing",
    )
    return ParsedResponse(
        json_data=json_data, api_key=api_key, context=context, body=body
    )


def locate_search_contents(data: dict[str, Any]) -> list[Any]:
    """
    Find the section list entries of a search response.

    Tries ``contents.twoColumnSearchResultsRenderer``, then any
    ``twoColumnSearchResultsRenderer`` in the tree, then a bare
    ``contents.sectionListRenderer``.

    Raises
    ------
    UpstreamShapeError
        If none of the shapes is present.
    """
    two_column = as_dict(dig(data, "contents", "twoColumnSearchResultsRenderer"))
    if two_column is None:
        two_column = find_key(data, "twoColumnSearchResultsRenderer")

    if two_column is not None:
        section_list = dig(two_column, "primaryContents", "sectionListRenderer")
    else:
        section_list = dig(data, "contents", "sectionListRenderer")

    if as_dict(section_list) is None:
        raise UpstreamShapeError(
            "invalid response format",
            path="contents.twoColumnSearchResultsRenderer.primaryContents",
        )
    return as_list(section_list.get("contents"))


def flatten_sections(entries: Any) -> list[Any]:
    """
    Expand ``itemSectionRenderer`` wrappers in place.

    Entries of every item section are emitted in order; any other entry
    (notably ``continuationItemRenderer``) is kept at its position.
    """
    flat: list[Any] = []
    for entry in as_list(entries):
        section = dig(entry, "itemSectionRenderer")
        if isinstance(section, dict):
            flat.extend(as_list(section.get("contents")))
        else:
            flat.append(entry)
    return flat


def continuation_items(data: Any) -> list[Any]:
    """
    Return the entries appended by a continuation response.

    Browse continuations use ``onResponseReceivedActions``, search
    continuations ``onResponseReceivedCommands``.
    """
    for key in ("onResponseReceivedActions", "onResponseReceivedCommands"):
        items = dig(data, key, 0, "appendContinuationItemsAction", "continuationItems")
        if isinstance(items, list):
            return items
    return []


def find_alert_error(data: Any) -> str | None:
    """
    Return the text of an ``ERROR`` alert when the response has no contents.
    """
    if not isinstance(data, dict) or "alerts" not in data or data.get("contents"):
        return None
    for alert in as_list(data.get("alerts")):
        renderer = dig(alert, "alertRenderer") or dig(alert, "alertWithButtonRenderer")
        if dig(renderer, "type") == "ERROR":
            return parse_text(dig(renderer, "text")) or "Unknown upstream error"
    return None
