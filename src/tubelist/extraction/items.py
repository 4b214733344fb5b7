"""
Item decoder for list entries found in browse and search responses.

Each raw entry is a dict keyed by a renderer name (``videoRenderer``,
``playlistRenderer``, ``lockupViewModel``...). The decoder picks the
renderer by a fixed priority list and extracts every field independently,
so a missing field never prevents the rest of the record from decoding.
Entries whose only renderer is unsupported (channels, shelves,
continuation markers) decode to ``None`` and are dropped by callers.

Functions
---------
parse_item
    Decode one raw entry into an ``Item`` or ``None``.
parse_items
    Decode a raw list, dropping undecodable entries.
prepare_thumbnails
    Normalise a raw thumbnail list (absolute URLs, widest first).
"""

from __future__ import annotations

import logging
from typing import Any, Callable
from urllib.parse import urljoin

from tubelist.extraction.text import parse_number, parse_text
from tubelist.extraction.tree import as_dict, as_int, as_list, as_str, dig
from tubelist.models.enums import ItemKind
from tubelist.models.items import Author, Item, Thumbnail

logger = logging.getLogger(__name__)

BASE_URL = "https://www.youtube.com/"
WATCH_URL = "https://www.youtube.com/watch?v="
PLAYLIST_URL = "https://www.youtube.com/playlist?list="

_LIVE_BADGES = frozenset({"LIVE", "LIVE NOW"})
_VERIFIED_MARKERS = ("VERIFIED", "OFFICIAL")
_OWNER_VERIFIED_MARKERS = ("VERIFIED", "OFFICIAL", "ARTIST")

_LOCKUP_PLAYLIST = "LOCKUP_CONTENT_TYPE_PLAYLIST"

# Renderers recognised but never emitted.
UNSUPPORTED_RENDERERS = frozenset(
    {
        "channelRenderer",
        "gridChannelRenderer",
        "gridShelfViewModel",
        "shelfRenderer",
        "reelShelfRenderer",
        "continuationItemRenderer",
    }
)


def prepare_thumbnails(raw: Any) -> list[Thumbnail]:
    """
    Normalise a raw thumbnail list.

    Relative and protocol-relative URLs are resolved against the site root,
    and the result is sorted by descending width (ties keep upstream order).

    Parameters
    ----------
    raw : Any
        Upstream ``thumbnails`` list.

    Returns
    -------
    list[Thumbnail]
        Thumbnails, widest first. Entries without a URL are skipped.
    """
    thumbnails: list[Thumbnail] = []
    for entry in as_list(raw):
        url = as_str(dig(entry, "url"))
        if not url:
            continue
        thumbnails.append(
            Thumbnail(
                url=urljoin(BASE_URL, url),
                width=as_int(dig(entry, "width")) or 0,
                height=as_int(dig(entry, "height")) or 0,
            )
        )
    thumbnails.sort(key=lambda t: t.width, reverse=True)
    return thumbnails


def _badge_tooltips(renderer: dict[str, Any]) -> list[str]:
    tooltips: list[str] = []
    for badge in as_list(renderer.get("ownerBadges")):
        tooltip = as_str(dig(badge, "metadataBadgeRenderer", "tooltip"))
        if tooltip:
            tooltips.append(tooltip)
    return tooltips


def _is_verified(tooltips: list[str], markers: tuple[str, ...]) -> bool:
    return any(marker in tooltip.upper() for tooltip in tooltips for marker in markers)


def _author_from_run(run: Any) -> Author | None:
    run = as_dict(run)
    if run is None:
        return None

    author = Author(name=as_str(run.get("text")) or "")
    browse = dig(run, "navigationEndpoint", "browseEndpoint")
    author.channel_id = as_str(dig(browse, "browseId"))
    canonical = as_str(dig(browse, "canonicalBaseUrl"))
    if canonical:
        author.url = urljoin(BASE_URL, canonical)
    return author


def _parse_author(renderer: dict[str, Any]) -> Author | None:
    """Video author from ``ownerText``, falling back to byline runs."""
    for key in ("ownerText", "shortBylineText", "longBylineText"):
        runs = as_list(dig(renderer, key, "runs"))
        if runs:
            break
    else:
        return None

    author = _author_from_run(runs[0])
    if author is None:
        return None

    author.avatars = prepare_thumbnails(
        dig(
            renderer,
            "channelThumbnailSupportedRenderers",
            "channelThumbnailWithLinkRenderer",
            "thumbnail",
            "thumbnails",
        )
    )
    author.badges = _badge_tooltips(renderer)
    author.verified = _is_verified(author.badges, _VERIFIED_MARKERS)
    return author


def _parse_owner(renderer: dict[str, Any]) -> Author | None:
    """Playlist owner from ``shortBylineText``, else ``longBylineText``."""
    runs = as_list(dig(renderer, "shortBylineText", "runs")) or as_list(
        dig(renderer, "longBylineText", "runs")
    )
    if not runs:
        return None

    owner = _author_from_run(runs[0])
    if owner is None:
        return None

    owner.badges = _badge_tooltips(renderer)
    owner.verified = _is_verified(owner.badges, _OWNER_VERIFIED_MARKERS)
    return owner


def parse_video_owner(renderer: Any) -> Author | None:
    """
    Decode a ``videoOwnerRenderer`` (playlist page sidebar).

    Returns
    -------
    Author | None
        The owner, or None when the renderer has no title run.
    """
    renderer = as_dict(renderer)
    if renderer is None:
        return None

    owner = _author_from_run(dig(renderer, "title", "runs", 0))
    if owner is None:
        return None

    if owner.channel_id is None:
        owner.channel_id = as_str(
            dig(renderer, "navigationEndpoint", "browseEndpoint", "browseId")
        )
    owner.avatars = prepare_thumbnails(dig(renderer, "thumbnail", "thumbnails"))
    owner.badges = _badge_tooltips(renderer)
    owner.verified = _is_verified(owner.badges, _OWNER_VERIFIED_MARKERS)
    return owner


def _parse_description(renderer: dict[str, Any]) -> str | None:
    if "descriptionSnippet" in renderer:
        return parse_text(renderer["descriptionSnippet"])
    snippet = dig(renderer, "detailedMetadataSnippets", 0, "snippetText")
    if snippet is not None:
        return parse_text(snippet)
    snippet = dig(renderer, "richSnippet", "snippetText")
    if snippet is not None:
        return parse_text(snippet)
    return None


def _parse_video(renderer: dict[str, Any]) -> Item:
    item = Item(type=ItemKind.VIDEO)

    video_id = as_str(renderer.get("videoId"))
    if video_id:
        item.id = video_id
        item.url = WATCH_URL + video_id

    item.title = parse_text(renderer.get("title"))
    item.thumbnails = prepare_thumbnails(dig(renderer, "thumbnail", "thumbnails"))

    if "lengthText" in renderer:
        item.duration = parse_text(renderer["lengthText"]) or None
    item.duration_seconds = as_int(renderer.get("lengthSeconds"))

    item.description = _parse_description(renderer)

    if "viewCountText" in renderer:
        views = parse_number(renderer["viewCountText"])
        item.views = views if views > 0 else None

    if "publishedTimeText" in renderer:
        item.uploaded_at = parse_text(renderer["publishedTimeText"]) or None

    item.author = _parse_author(renderer)

    for badge in as_list(renderer.get("badges")):
        label = as_str(dig(badge, "metadataBadgeRenderer", "label"))
        if label:
            item.badges.append(label)
    item.is_live = any(label in _LIVE_BADGES for label in item.badges)

    upcoming = as_dict(renderer.get("upcomingEventData"))
    if upcoming is not None:
        item.is_upcoming = True
        event_text = parse_text(upcoming.get("upcomingEventText"))
        item.is_premiere = "premiere" in event_text.lower()

    return item


def _parse_playlist(renderer: dict[str, Any]) -> Item:
    item = Item(type=ItemKind.PLAYLIST)

    playlist_id = as_str(renderer.get("playlistId"))
    if playlist_id:
        item.id = playlist_id
        item.url = PLAYLIST_URL + playlist_id

    item.title = parse_text(renderer.get("title"))
    item.author = _parse_owner(renderer)

    raw_thumbnails = dig(renderer, "thumbnails", 0, "thumbnails")
    if raw_thumbnails is None:
        raw_thumbnails = dig(renderer, "thumbnail", "thumbnails")
    item.thumbnails = prepare_thumbnails(raw_thumbnails)

    count = renderer.get("videoCount")
    if count is not None:
        item.video_count = as_int(count)
        if item.video_count is None:
            item.video_count = parse_number(count)

    if "publishedTimeText" in renderer:
        item.uploaded_at = parse_text(renderer["publishedTimeText"]) or None

    return item


def _parse_lockup(view_model: dict[str, Any]) -> Item | None:
    if view_model.get("contentType") != _LOCKUP_PLAYLIST:
        return None

    item = Item(type=ItemKind.PLAYLIST)

    content_id = as_str(view_model.get("contentId"))
    if content_id:
        item.id = content_id
        item.url = PLAYLIST_URL + content_id

    metadata = dig(view_model, "metadata", "lockupMetadataViewModel")
    item.title = parse_text(dig(metadata, "title"))

    item.thumbnails = prepare_thumbnails(
        dig(
            view_model,
            "contentImage",
            "collectionThumbnailViewModel",
            "primaryThumbnail",
            "thumbnailViewModel",
            "image",
            "sources",
        )
    )

    owner_name = parse_text(
        dig(
            metadata,
            "metadata",
            "contentMetadataViewModel",
            "metadataRows",
            0,
            "metadataParts",
            0,
            "text",
        )
    )
    if owner_name:
        item.author = Author(name=owner_name)

    return item


# Priority order: first matching key wins regardless of dict order.
_RENDERER_PRIORITY: list[tuple[str, Callable[[dict[str, Any]], Item | None]]] = [
    ("videoRenderer", _parse_video),
    ("gridVideoRenderer", _parse_video),
    ("playlistVideoRenderer", _parse_video),
    ("playlistRenderer", _parse_playlist),
    ("gridPlaylistRenderer", _parse_playlist),
    ("lockupViewModel", _parse_lockup),
]
_EXACT_KEYS = frozenset(key for key, _ in _RENDERER_PRIORITY)
_VIDEO_KEY_FRAGMENT = "VideoRenderer"


def _select_renderer(
    raw: dict[str, Any],
) -> tuple[str, Callable[[dict[str, Any]], Item | None]] | None:
    for key, handler in _RENDERER_PRIORITY[:3]:
        if key in raw:
            return key, handler

    # Other video-like renderers (compactVideoRenderer, reelVideoRenderer...).
    for key in sorted(raw):
        if _VIDEO_KEY_FRAGMENT in key and key not in _EXACT_KEYS:
            return key, _parse_video

    for key, handler in _RENDERER_PRIORITY[3:]:
        if key in raw:
            return key, handler

    return None


def parse_item(raw: Any) -> Item | None:
    """
    Decode one raw list entry.

    Parameters
    ----------
    raw : Any
        A dict keyed by a renderer name.

    Returns
    -------
    Item | None
        The decoded record, or None for non-dict input, malformed
        renderers, and unsupported kinds (channels, shelves, markers).

    Examples
    --------
    >>> parse_item({"videoRenderer": {"videoId": "dQw4w9WgXcQ"}}).url
    'https://www.youtube.com/watch?v=dQw4w9WgXcQ'
    >>> parse_item({"channelRenderer": {"channelId": "UC..."}}) is None
    True
    """
    raw = as_dict(raw)
    if raw is None:
        return None

    selected = _select_renderer(raw)
    if selected is None:
        if raw.keys() & UNSUPPORTED_RENDERERS:
            logger.debug("Dropping unsupported entry: %s", sorted(raw))
        else:
            logger.debug("Dropping unknown entry: %s", sorted(raw))
        return None

    key, handler = selected
    renderer = as_dict(raw[key])
    if renderer is None:
        logger.debug("Dropping malformed %s entry", key)
        return None

    return handler(renderer)


def parse_items(raw_items: Any, kind: ItemKind | None = None) -> list[Item]:
    """
    Decode a raw entry list, dropping entries that do not decode.

    Parameters
    ----------
    raw_items : Any
        Upstream list of entries.
    kind : ItemKind | None, optional
        Keep only items of this kind (default: keep all).

    Returns
    -------
    list[Item]
        Decoded items in upstream order.
    """
    items: list[Item] = []
    for raw in as_list(raw_items):
        item = parse_item(raw)
        if item is None:
            continue
        if kind is not None and item.type != kind:
            continue
        items.append(item)
    return items
