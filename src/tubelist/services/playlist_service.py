"""
Playlist service.

Resolves playlist, album and channel references to a list ID, fetches the
playlist page (falling back to the innertube browse API when the page does
not embed its data), decodes the sidebar metadata and the first page of
videos, and follows continuation tokens up to the requested limit.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any
from urllib.parse import parse_qs, urlsplit

from tubelist.config.settings import Settings, get_settings
from tubelist.exceptions import (
    ExhaustedRetriesError,
    InputError,
    TransportError,
    UpstreamAlertError,
    UpstreamShapeError,
)
from tubelist.extraction.continuation import token_from_items
from tubelist.extraction.items import (
    parse_items,
    parse_video_owner,
    prepare_thumbnails,
)
from tubelist.extraction.response import find_alert_error, parse_response
from tubelist.extraction.text import parse_number, parse_text
from tubelist.extraction.tree import as_dict, as_list, dig
from tubelist.models.context import SessionContext
from tubelist.models.results import ParsedResponse, PlaylistInfo, PlaylistOptions
from tubelist.models.youtube_types import (
    CHANNEL_ON_PAGE_RE,
    is_channel_id,
    is_mix_id,
    is_playlist_id,
    uploads_playlist_id,
)
from tubelist.services.diagnostics import dump_payload
from tubelist.services.interfaces import HttpTransport
from tubelist.services.pagination import PaginationWalker

logger = logging.getLogger(__name__)

YOUTUBE_HOSTS = frozenset(
    {"www.youtube.com", "youtube.com", "m.youtube.com", "music.youtube.com"}
)

_THUMBNAIL_RENDERERS = (
    "playlistVideoThumbnailRenderer",
    "playlistCustomThumbnailRenderer",
)


class PlaylistService:
    """
    Fetch playlists and resolve playlist references.

    Parameters
    ----------
    transport : HttpTransport
        Transport for page fetches and API calls.
    settings : Settings | None, optional
        Application settings (default: the global settings).

    Examples
    --------
    >>> service = PlaylistService(HttpxTransport())
    >>> options = PlaylistOptions(limit=20)
    >>> info = await service.get_playlist("PLxxxxxxxxxxxxxxxxxx", options)
    >>> len(info.items) <= 20
    True
    """

    def __init__(
        self, transport: HttpTransport, settings: Settings | None = None
    ) -> None:
        self.transport = transport
        self.settings = settings or get_settings()
        self.walker = PaginationWalker(transport, self.settings.browse_api_url)

    # -------------------------------------------------------------------------
    # ID resolution
    # -------------------------------------------------------------------------

    async def get_playlist_id(self, link_or_id: str) -> str:
        """
        Resolve a playlist reference to a list ID.

        Accepts bare playlist/album IDs, channel IDs (mapped to the channel's
        uploads playlist), and YouTube URLs carrying a ``list`` query or a
        ``/channel/``, ``/user/`` or ``/c/`` path.

        Parameters
        ----------
        link_or_id : str
            ID or URL.

        Returns
        -------
        str
            The playlist ID.

        Raises
        ------
        InputError
            If the reference is empty, a mix, not a YouTube URL, or does not
            name a playlist or channel.
        TransportError
            If a ``/user/`` or ``/c/`` page cannot be fetched.
        """
        if not link_or_id:
            raise InputError("the link or id has to be a non-empty string")

        if is_playlist_id(link_or_id):
            return link_or_id
        if is_mix_id(link_or_id):
            raise InputError("mixes not supported", value=link_or_id)
        if is_channel_id(link_or_id):
            return uploads_playlist_id(link_or_id)

        try:
            parts = urlsplit(link_or_id)
        except ValueError as e:
            raise InputError("invalid URL", value=link_or_id) from e
        if (parts.hostname or "") not in YOUTUBE_HOSTS:
            raise InputError("not a known youtube link", value=link_or_id)

        query = parse_qs(parts.query)
        if "list" in query:
            list_id = query["list"][0]
            if is_playlist_id(list_id):
                return list_id
            if is_mix_id(list_id):
                raise InputError("mixes not supported", value=list_id)
            raise InputError("invalid or unknown list query in url", value=link_or_id)

        path = parts.path.strip("/").split("/")
        if len(path) >= 2:
            kind, ref = path[-2], path[-1]
            if kind == "channel" and is_channel_id(ref):
                return uploads_playlist_id(ref)
            if kind in ("user", "c"):
                ref_url = f"{self.settings.base_url}/{kind}/{ref}"
                return await self._resolve_channel(ref_url)

        raise InputError(f'unable to find a id in "{link_or_id}"', value=link_or_id)

    def validate_id(self, link_or_id: str) -> bool:
        """
        Check whether a reference could name a playlist, without network access.

        ``/user/`` and ``/c/`` URLs are accepted on shape alone.
        """
        if not link_or_id:
            return False
        if is_playlist_id(link_or_id) or is_channel_id(link_or_id):
            return True

        try:
            parts = urlsplit(link_or_id)
        except ValueError:
            return False
        if (parts.hostname or "") not in YOUTUBE_HOSTS:
            return False

        query = parse_qs(parts.query)
        if "list" in query:
            return is_playlist_id(query["list"][0])

        path = parts.path.strip("/").split("/")
        if len(path) < 2:
            return False
        kind, ref = path[-2], path[-1]
        if kind == "channel":
            return is_channel_id(ref)
        return kind in ("user", "c")

    async def _resolve_channel(self, ref: str) -> str:
        logger.info("Resolving channel page %s", ref)
        body = await self.transport.get_text(ref)
        match = CHANNEL_ON_PAGE_RE.search(body)
        if match is None:
            raise InputError(f"unable to resolve the ref: {ref}", value=ref)
        return "UU" + match.group(1)

    # -------------------------------------------------------------------------
    # Playlist fetch
    # -------------------------------------------------------------------------

    async def get_playlist(
        self, link_or_id: str, options: PlaylistOptions | None = None
    ) -> PlaylistInfo:
        """
        Fetch playlist metadata and up to ``options.limit`` items.

        Parameters
        ----------
        link_or_id : str
            Playlist ID or URL (see ``get_playlist_id``).
        options : PlaylistOptions | None, optional
            Limit, locale and retry count.

        Returns
        -------
        PlaylistInfo
            Metadata and the decoded items.

        Raises
        ------
        InputError
            If the reference cannot be resolved.
        UpstreamAlertError
            If YouTube reports an error (private or deleted playlist).
        UpstreamShapeError
            If the response has no sidebar or no video list.
        ExhaustedRetriesError
            If no data tree could be recovered within the retry budget.
        TransportError
            On network failure. When raised while paging, ``partial_result``
            holds the playlist with the items fetched so far.
        """
        options = options or PlaylistOptions()
        playlist_id = await self.get_playlist_id(link_or_id)
        limit = options.limit if options.limit and options.limit > 0 else None
        limit = limit or self.settings.playlist_limit

        parsed = await self._fetch_data(playlist_id, options)
        data = parsed.json_data or {}

        alert = find_alert_error(data)
        if alert is not None:
            raise UpstreamAlertError(alert)

        sidebar_items = as_list(dig(data, "sidebar", "playlistSidebarRenderer", "items"))
        if not sidebar_items:
            raise UpstreamShapeError(
                "unknown playlist", path="sidebar.playlistSidebarRenderer"
            )

        info = self._build_info(playlist_id, sidebar_items)

        raw_videos = self._video_list(data)
        info.items = parse_items(raw_videos)[:limit]
        remaining = limit - len(info.items)
        token = token_from_items(raw_videos)
        logger.info(
            "Playlist %s: %d items on first page, %s",
            playlist_id,
            len(info.items),
            "continuing" if token and remaining > 0 else "done",
        )

        if token and remaining > 0:
            context = parsed.context or SessionContext(gl=options.gl, hl=options.hl)
            try:
                info.items.extend(
                    await self.walker.walk(token, context, parsed.api_key, remaining)
                )
            except TransportError as e:
                info.items.extend(e.partial_items)
                e.partial_result = info
                raise

        return info

    async def _fetch_data(
        self, playlist_id: str, options: PlaylistOptions
    ) -> ParsedResponse:
        params = {"list": playlist_id}
        if options.gl:
            params["gl"] = options.gl
        if options.hl:
            params["hl"] = options.hl

        retries = options.retries or self.settings.retry_attempts
        body = ""
        for attempt in range(1, retries + 1):
            body = await self.transport.get_text(
                f"{self.settings.base_url}/playlist", params=params
            )
            parsed = parse_response(body, gl=options.gl, hl=options.hl)

            if parsed.json_data is None:
                parsed = await self._browse_fallback(playlist_id, parsed)

            if parsed.json_data is not None:
                return parsed

            logger.warning(
                "Playlist data not found for %s (attempt %d/%d)",
                playlist_id,
                attempt,
                retries,
            )

        dump_path = self._dump(body)
        raise ExhaustedRetriesError(
            "unsupported playlist", attempts=retries, dump_path=dump_path
        )

    async def _browse_fallback(
        self, playlist_id: str, parsed: ParsedResponse
    ) -> ParsedResponse:
        if not parsed.api_key or parsed.context is None:
            logger.debug("No API key or client version on page, cannot browse")
            return parsed

        payload: dict[str, Any] = {
            "context": parsed.context.to_payload(),
            "browseId": "VL" + playlist_id,
        }
        try:
            data = await self.transport.post_json(
                self.settings.browse_api_url, payload, params={"key": parsed.api_key}
            )
        except TransportError as e:
            logger.warning("Browse fallback for %s failed: %s", playlist_id, e.message)
            return parsed

        logger.info("Recovered playlist %s through the browse API", playlist_id)
        return parsed.model_copy(update={"json_data": data})

    def _dump(self, body: str) -> Path | None:
        if not self.settings.dump_on_failure:
            return None
        return dump_payload(body, self.settings.dump_dir)

    def _build_info(self, playlist_id: str, sidebar_items: list[Any]) -> PlaylistInfo:
        primary: dict[str, Any] | None = None
        secondary: dict[str, Any] | None = None
        for entry in sidebar_items:
            primary = primary or as_dict(dig(entry, "playlistSidebarPrimaryInfoRenderer"))
            secondary = secondary or as_dict(
                dig(entry, "playlistSidebarSecondaryInfoRenderer")
            )

        if primary is None:
            raise UpstreamShapeError(
                "could not find playlist info", path="playlistSidebarPrimaryInfoRenderer"
            )

        info = PlaylistInfo(
            id=playlist_id,
            url=f"{self.settings.base_url}/playlist?list={playlist_id}",
            title=parse_text(primary.get("title")),
            description=parse_text(primary.get("description")),
        )

        for name in _THUMBNAIL_RENDERERS:
            thumbnails = prepare_thumbnails(
                dig(primary, "thumbnailRenderer", name, "thumbnail", "thumbnails")
            )
            if thumbnails:
                info.thumbnail = thumbnails[0]
                break

        stats = as_list(primary.get("stats"))
        if stats:
            info.total_items = parse_number(stats[0])
        if len(stats) >= 3:
            info.views = parse_number(stats[1])
        if len(stats) >= 2:
            info.last_updated = parse_text(stats[-1]) or None

        info.author = parse_video_owner(
            dig(secondary, "videoOwner", "videoOwnerRenderer")
        )
        return info

    def _video_list(self, data: dict[str, Any]) -> list[Any]:
        sections = dig(
            data,
            "contents",
            "twoColumnBrowseResultsRenderer",
            "tabs",
            0,
            "tabRenderer",
            "content",
            "sectionListRenderer",
            "contents",
        )
        if not isinstance(sections, list):
            raise UpstreamShapeError(
                "invalid playlist contents",
                path="contents.twoColumnBrowseResultsRenderer.tabs[0]",
            )

        item_section = next(
            (
                section["itemSectionRenderer"]
                for section in sections
                if as_dict(dig(section, "itemSectionRenderer"))
            ),
            None,
        )
        video_list = next(
            (
                entry["playlistVideoListRenderer"]
                for entry in as_list(dig(item_section, "contents"))
                if as_dict(dig(entry, "playlistVideoListRenderer"))
            ),
            None,
        )
        if video_list is None:
            raise UpstreamShapeError("empty playlist", path="playlistVideoListRenderer")
        return as_list(video_list.get("contents"))
