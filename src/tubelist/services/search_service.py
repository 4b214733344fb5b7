"""
Search service.

Runs a YouTube search for videos or playlists. The first request of a
session fetches the HTML results page to learn the web client version and
the playlist filter params; later searches reuse them from the
``SessionContextCache`` and query the innertube search API directly.
"""

from __future__ import annotations

import logging
import re
from typing import Any
from urllib.parse import parse_qs, unquote, urlsplit

from tubelist.config.settings import Settings, get_settings
from tubelist.exceptions import ExhaustedRetriesError, InputError, TransportError
from tubelist.extraction.continuation import token_from_items
from tubelist.extraction.items import parse_items
from tubelist.extraction.response import (
    flatten_sections,
    locate_search_contents,
    parse_response,
)
from tubelist.extraction.tree import as_int
from tubelist.models.context import DEFAULT_CLIENT_VERSION, SessionContext
from tubelist.models.enums import ItemKind
from tubelist.models.results import ParsedResponse, SearchOptions, SearchResult
from tubelist.services.diagnostics import dump_payload
from tubelist.services.interfaces import HttpTransport
from tubelist.services.pagination import FetchState, PaginationWalker
from tubelist.services.session_cache import SessionContextCache

logger = logging.getLogger(__name__)

DEFAULT_PLAYLIST_PARAMS = "EgIQAw%3D%3D"

# The "Playlist" filter chip on the results page carries the params blob.
_PLAYLIST_PARAMS_RE = re.compile(r'"params":"([^"]+)"},"tooltip":"Search for Playlist"')

_SEARCH_API_PARAMS = {"prettyPrint": "false"}


class _ResolvedOptions:
    """Search options with settings defaults applied."""

    def __init__(self, options: SearchOptions, settings: Settings) -> None:
        self.kind = options.type
        self.limit = options.limit if options.limit and options.limit > 0 else 0
        self.limit = self.limit or settings.search_limit
        self.safe_search = options.safe_search
        self.gl = options.gl or settings.default_gl
        self.hl = options.hl or settings.default_hl
        self.utc_offset_minutes = (
            options.utc_offset_minutes
            if options.utc_offset_minutes is not None
            else settings.default_utc_offset_minutes
        )
        self.retries = options.retries or settings.retry_attempts

    def context(self, client_version: str) -> SessionContext:
        return SessionContext(
            client_version=client_version,
            gl=self.gl,
            hl=self.hl,
            utc_offset_minutes=self.utc_offset_minutes,
            safe_search=self.safe_search,
        )


class SearchService:
    """
    Search YouTube for videos or playlists.

    Parameters
    ----------
    transport : HttpTransport
        Transport for page fetches and API calls.
    cache : SessionContextCache | None, optional
        Shared session cache (default: a new, empty cache).
    settings : Settings | None, optional
        Application settings (default: the global settings).

    Examples
    --------
    >>> service = SearchService(HttpxTransport())
    >>> result = await service.search("lofi", SearchOptions(type="playlist", limit=5))
    >>> [item.type for item in result.items]
    [<ItemKind.PLAYLIST: 'playlist'>, ...]
    """

    def __init__(
        self,
        transport: HttpTransport,
        cache: SessionContextCache | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.transport = transport
        self.cache = cache if cache is not None else SessionContextCache()
        self.settings = settings or get_settings()
        self.walker = PaginationWalker(
            transport, self.settings.search_api_url, params=_SEARCH_API_PARAMS
        )

    def _check_query(self, query: str) -> None:
        if not query or not query.strip():
            raise InputError("search string is mandatory", value=query)

        if query.startswith(self.settings.base_url):
            try:
                parts = urlsplit(query)
            except ValueError as e:
                raise InputError("invalid URL", value=query) from e
            qs = parse_qs(parts.query)
            if parts.path == "/results" and qs.get("sp") and not qs.get("search_query"):
                raise InputError(
                    "filter links have to include a 'search_query' query", value=query
                )

    async def search(self, query: str, options: SearchOptions | None = None) -> SearchResult:
        """
        Search for ``query`` and return up to ``options.limit`` items.

        Parameters
        ----------
        query : str
            Search terms, or a results-page filter link.
        options : SearchOptions | None, optional
            Result kind, limit, safe search, locale and retry count.

        Returns
        -------
        SearchResult
            Decoded items of the requested kind, in result order.

        Raises
        ------
        InputError
            If the query is empty or a filter link lacks ``search_query``.
        TransportError
            If a playlist search request fails, or a video search request
            fails on the last attempt. When raised while paging,
            ``partial_result`` holds the items fetched so far.
        UpstreamShapeError
            If the response has no recognisable results section.
        ExhaustedRetriesError
            If no JSON could be obtained within the retry budget.
        """
        self._check_query(query)
        opts = _ResolvedOptions(options or SearchOptions(), self.settings)

        body = ""
        for attempt in range(1, opts.retries + 1):
            if attempt > 1:
                self.cache.invalidate()

            parsed = await self._initial_data(query, opts)
            body = parsed.body or body
            context = parsed.context or opts.context(DEFAULT_CLIENT_VERSION)
            data = parsed.json_data

            if opts.kind == ItemKind.PLAYLIST:
                data = await self._search_playlists(query, context)
            elif opts.safe_search or data is None:
                try:
                    data = await self._post_search(query, context)
                except TransportError as e:
                    if attempt == opts.retries:
                        raise
                    logger.warning(
                        "Search API request failed (attempt %d/%d): %s",
                        attempt,
                        opts.retries,
                        e.message,
                    )
                    data = None

            if data is not None and data.get("contents"):
                return await self._assemble(query, data, context, opts)

            logger.warning(
                "No search data for %r (attempt %d/%d)", query, attempt, opts.retries
            )

        dump_path = None
        if self.settings.dump_on_failure and body:
            dump_path = dump_payload(body, self.settings.dump_dir)
        raise ExhaustedRetriesError(
            "unable to find JSON", attempts=opts.retries, dump_path=dump_path
        )

    async def _initial_data(self, query: str, opts: _ResolvedOptions) -> ParsedResponse:
        if not self.cache.needs_refresh(opts.safe_search):
            client_version, _ = self.cache.read()
            return ParsedResponse(context=opts.context(client_version))

        logger.info("Fetching results page for %r", query)
        body = await self.transport.get_text(
            f"{self.settings.base_url}/results",
            params={"search_query": query, "gl": opts.gl, "hl": opts.hl},
        )
        parsed = parse_response(
            body,
            gl=opts.gl,
            hl=opts.hl,
            utc_offset_minutes=opts.utc_offset_minutes,
            safe_search=opts.safe_search,
        )

        client_version = (
            parsed.context.client_version if parsed.context else DEFAULT_CLIENT_VERSION
        )
        match = _PLAYLIST_PARAMS_RE.search(body)
        self.cache.write(
            client_version, match.group(1) if match else DEFAULT_PLAYLIST_PARAMS
        )
        return parsed

    async def _post_search(
        self, query: str, context: SessionContext, params: str | None = None
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {"context": context.to_payload(), "query": query}
        if params:
            payload["params"] = params
        return await self.transport.post_json(
            self.settings.search_api_url, payload, params=_SEARCH_API_PARAMS
        )

    async def _search_playlists(
        self, query: str, context: SessionContext
    ) -> dict[str, Any]:
        _, playlist_params = self.cache.read()
        try:
            return await self._post_search(
                query, context, unquote(playlist_params or DEFAULT_PLAYLIST_PARAMS)
            )
        except TransportError as e:
            raise TransportError(
                f"cannot search for playlist: {e.message}",
                url=e.url,
                status_code=e.status_code,
                original_error=e.original_error or e,
            ) from e

    async def _assemble(
        self,
        query: str,
        data: dict[str, Any],
        context: SessionContext,
        opts: _ResolvedOptions,
    ) -> SearchResult:
        raw_items = flatten_sections(locate_search_contents(data))

        result = SearchResult(
            query=query,
            type=opts.kind,
            results=as_int(data.get("estimatedResults")) or 0,
            items=parse_items(raw_items, kind=opts.kind)[: opts.limit],
        )
        token = token_from_items(raw_items)
        state = FetchState(
            remaining=opts.limit - len(result.items), token=token, context=context
        )

        if not state.done:
            try:
                state = await self.walker.run(state, flatten=True, kind=opts.kind)
            except TransportError as e:
                result.items.extend(e.partial_items)
                e.partial_result = result
                raise
            result.items.extend(state.items)

        result.continuation = state.token
        logger.info(
            "Search %r: %d %s results", query, len(result.items), opts.kind.value
        )
        return result
