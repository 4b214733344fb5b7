"""
Continuation-token pagination over the innertube API.

Each page's token is only known after the previous page is decoded, so pages
are fetched strictly one after another in an explicit loop.

Classes
-------
FetchState
    Mutable walk state, updated once per page.
PaginationWalker
    Issues continuation requests until the token runs out or the budget is
    spent; each request decodes into a ``PageResult``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from tubelist.exceptions import TransportError
from tubelist.extraction.continuation import token_from_items
from tubelist.extraction.items import parse_items
from tubelist.extraction.response import continuation_items, flatten_sections
from tubelist.models.context import SessionContext
from tubelist.models.enums import ItemKind
from tubelist.models.items import Item
from tubelist.models.results import PageResult
from tubelist.services.interfaces import HttpTransport

logger = logging.getLogger(__name__)


@dataclass
class FetchState:
    """
    State of one pagination walk.

    Attributes
    ----------
    remaining : int
        Items still wanted.
    token : str
        Token for the next page ("" when done).
    context : SessionContext
        Context sent with every continuation request.
    api_key : str | None
        Innertube API key, sent as the ``key`` query parameter when set.
    items : list[Item]
        Items accumulated so far.
    pages : int
        Pages fetched so far.
    """

    remaining: int
    token: str
    context: SessionContext
    api_key: str | None = None
    items: list[Item] = field(default_factory=list)
    pages: int = 0

    @property
    def done(self) -> bool:
        return not self.token or self.remaining < 1


class PaginationWalker:
    """
    Follow continuation tokens against one innertube endpoint.

    Parameters
    ----------
    transport : HttpTransport
        Transport used for the POST requests.
    endpoint_url : str
        ``/youtubei/v1/browse`` or ``/youtubei/v1/search`` URL.
    params : dict[str, str] | None, optional
        Fixed query parameters (e.g. ``prettyPrint=false``).

    Examples
    --------
    >>> walker = PaginationWalker(transport, settings.browse_api_url)
    >>> more = await walker.walk(token, context, api_key, limit=50)
    """

    def __init__(
        self,
        transport: HttpTransport,
        endpoint_url: str,
        params: dict[str, str] | None = None,
    ) -> None:
        self.transport = transport
        self.endpoint_url = endpoint_url
        self.params = dict(params or {})

    async def walk(
        self,
        token: str,
        context: SessionContext,
        api_key: str | None,
        limit: int,
        *,
        flatten: bool = False,
        kind: ItemKind | None = None,
    ) -> list[Item]:
        """
        Fetch continuation pages and return the decoded items.

        Parameters
        ----------
        token : str
            Token of the first page to fetch; "" returns immediately.
        context : SessionContext
            Session context sent with every request.
        api_key : str | None
            Innertube API key, if known.
        limit : int
            Maximum number of items to return.
        flatten : bool, optional
            Expand item sections before decoding (search responses).
        kind : ItemKind | None, optional
            Keep only items of this kind.

        Returns
        -------
        list[Item]
            At most ``limit`` items in page order.

        Raises
        ------
        TransportError
            If a page fetch fails; ``partial_items`` holds the items
            decoded from earlier pages.
        """
        state = FetchState(remaining=limit, token=token, context=context, api_key=api_key)
        state = await self.run(state, flatten=flatten, kind=kind)
        return state.items

    async def run(
        self,
        state: FetchState,
        *,
        flatten: bool = False,
        kind: ItemKind | None = None,
    ) -> FetchState:
        """
        Advance ``state`` until it is done and return it.

        Same semantics as ``walk()``, but the final state (including the
        token of the first unfetched page) is returned to the caller.
        """
        while not state.done:
            try:
                page = await self.fetch_page(
                    state.token,
                    state.context,
                    state.api_key,
                    flatten=flatten,
                    kind=kind,
                )
            except TransportError as e:
                logger.warning(
                    "Continuation page %d failed after %d items: %s",
                    state.pages + 1,
                    len(state.items),
                    e.message,
                )
                e.partial_items = list(state.items)
                raise

            page_items = page.items[: state.remaining]
            state.items.extend(page_items)
            state.remaining -= len(page_items)
            state.token = page.continuation
            state.pages += 1

            logger.debug(
                "Page %d: %d items, %d remaining, %s",
                state.pages,
                len(page_items),
                state.remaining,
                "more pages" if state.token else "last page",
            )

        return state

    async def fetch_page(
        self,
        token: str,
        context: SessionContext,
        api_key: str | None = None,
        *,
        flatten: bool = False,
        kind: ItemKind | None = None,
    ) -> PageResult:
        """
        Fetch and decode a single continuation page.

        Returns
        -------
        PageResult
            Every decodable item of the page and the next token ("" on the
            last page). The caller applies its own limit.

        Raises
        ------
        TransportError
            If the request fails.
        """
        params = dict(self.params)
        if api_key:
            params["key"] = api_key

        payload: dict[str, Any] = {"context": context.to_payload(), "continuation": token}
        data = await self.transport.post_json(
            self.endpoint_url, payload, params=params or None
        )

        raw_items = continuation_items(data)
        if flatten:
            raw_items = flatten_sections(raw_items)
        return PageResult(
            items=parse_items(raw_items, kind=kind),
            continuation=token_from_items(raw_items),
        )
