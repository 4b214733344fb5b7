"""
httpx-backed HTTP transport.

Wraps a single ``httpx.AsyncClient`` configured with the browser User-Agent
and consent cookie from settings, and maps every failure mode onto
``TransportError``.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from tubelist.config.settings import Settings, get_settings
from tubelist.exceptions import TransportError
from tubelist.services.interfaces import HttpTransport

logger = logging.getLogger(__name__)


class HttpxTransport(HttpTransport):
    """
    HTTP transport on ``httpx.AsyncClient``.

    The client is created lazily on first use and reused for every request
    until ``aclose()``. Can be used as an async context manager.

    Parameters
    ----------
    settings : Settings | None, optional
        Application settings (default: the global settings).
    client : httpx.AsyncClient | None, optional
        Pre-built client, mainly for tests (default: None).

    Examples
    --------
    >>> async with HttpxTransport() as transport:
    ...     html = await transport.get_text("https://www.youtube.com/")
    """

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        """The underlying client, created on first access."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers=self.settings.default_headers,
                timeout=self.settings.request_timeout,
                follow_redirects=True,
            )
        return self._client

    async def __aenter__(self) -> HttpxTransport:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying client if one was created."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _check_status(self, response: httpx.Response, url: str) -> None:
        if response.is_success:
            return
        raise TransportError(
            f"HTTP {response.status_code} from {url}",
            url=url,
            status_code=response.status_code,
        )

    async def get_text(
        self,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> str:
        logger.debug("GET %s params=%s", url, dict(params or {}))
        try:
            response = await self.client.get(
                url, params=dict(params) if params else None, headers=headers
            )
        except httpx.HTTPError as e:
            raise TransportError(
                f"GET {url} failed: {type(e).__name__}",
                url=url,
                original_error=e,
            ) from e

        self._check_status(response, url)
        return response.text

    async def post_json(
        self,
        url: str,
        payload: Mapping[str, Any],
        *,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> dict[str, Any]:
        logger.debug("POST %s", url)
        try:
            response = await self.client.post(
                url,
                json=dict(payload),
                params=dict(params) if params else None,
                headers=headers,
            )
        except httpx.HTTPError as e:
            raise TransportError(
                f"POST {url} failed: {type(e).__name__}",
                url=url,
                original_error=e,
            ) from e

        self._check_status(response, url)

        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(
                f"Invalid JSON from {url}",
                url=url,
                status_code=response.status_code,
                original_error=e,
            ) from e

        if not isinstance(data, dict):
            raise TransportError(
                f"Expected a JSON object from {url}, got {type(data).__name__}",
                url=url,
                status_code=response.status_code,
            )
        return data
