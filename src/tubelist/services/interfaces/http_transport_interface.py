"""
Abstract Base Class for the raw HTTP transport.

The playlist and search services only need two primitives: fetch a page as
text, and POST a JSON body to the innertube API and decode the JSON reply.
Everything else (timeouts, headers, cookies, status handling) belongs to the
implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping


class HttpTransport(ABC):
    """
    Abstract interface for HTTP access to YouTube.

    Implementations must raise ``TransportError`` for network failures,
    non-success statuses, and bodies that cannot be decoded.

    Examples
    --------
    >>> class CannedTransport(HttpTransport):
    ...     async def get_text(self, url, *, params=None, headers=None):
    ...         return "<html></html>"
    ...     async def post_json(self, url, payload, *, params=None, headers=None):
    ...         return {}
    """

    @abstractmethod
    async def get_text(
        self,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> str:
        """
        GET ``url`` and return the response body as text.

        Parameters
        ----------
        url : str
            Absolute URL to fetch.
        params : Mapping[str, str] | None, optional
            Query parameters to append.
        headers : Mapping[str, str] | None, optional
            Extra request headers.

        Returns
        -------
        str
            Decoded response body.

        Raises
        ------
        TransportError
            If the request fails or the status is not a success.
        """
        pass

    @abstractmethod
    async def post_json(
        self,
        url: str,
        payload: Mapping[str, Any],
        *,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> dict[str, Any]:
        """
        POST ``payload`` as JSON and return the decoded JSON object.

        Parameters
        ----------
        url : str
            Absolute API URL.
        payload : Mapping[str, Any]
            Request body.
        params : Mapping[str, str] | None, optional
            Query parameters to append.
        headers : Mapping[str, str] | None, optional
            Extra request headers.

        Returns
        -------
        dict[str, Any]
            Decoded response object.

        Raises
        ------
        TransportError
            If the request fails, the status is not a success, or the body
            is not a JSON object.
        """
        pass

    async def aclose(self) -> None:
        """Release any held connections. No-op by default."""
