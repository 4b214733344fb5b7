"""
Custom exceptions for the tubelist package.

This module defines the error taxonomy used by the extraction engine and the
playlist/search services: invalid caller input, unexpected upstream JSON
shapes, upstream-reported alerts, transport failures, and exhausted retries.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from tubelist.models.items import Item


class TubelistError(Exception):
    """Base exception for all tubelist errors."""

    def __init__(self, message: str) -> None:
        """
        Initialize TubelistError.

        Parameters
        ----------
        message : str
            Human-readable error message.
        """
        self.message = message
        super().__init__(message)


class InputError(TubelistError):
    """
    Exception raised when caller-supplied input cannot be used.

    Covers empty or unrecognized playlist IDs and URLs, hosts that are not
    YouTube, mix playlists (``RD`` prefix), and empty search queries. Input
    errors are never retried.

    Attributes
    ----------
    message : str
        Human-readable error message.
    value : str | None
        The offending input value, if available.

    Examples
    --------
    >>> try:
    ...     get_playlist_id("https://www.youtube.com/watch?v=x&list=RDxyz")
    ... except InputError as e:
    ...     print(e.message)
    mixes not supported
    """

    def __init__(self, message: str = "Invalid input", value: str | None = None) -> None:
        """
        Initialize InputError.

        Parameters
        ----------
        message : str, optional
            Human-readable error message (default: "Invalid input").
        value : str | None, optional
            The offending input value (default: None).
        """
        self.value = value
        super().__init__(message)


class UpstreamShapeError(TubelistError):
    """
    Exception raised when a required structural key is missing upstream.

    Raised at points where no fallback exists, e.g. a playlist page without
    a sidebar, without browse tabs, or with an empty video list section.

    Attributes
    ----------
    message : str
        Human-readable error message.
    path : str | None
        Dotted description of the JSON location that was expected.
    """

    def __init__(
        self, message: str = "Unexpected upstream response shape", path: str | None = None
    ) -> None:
        """
        Initialize UpstreamShapeError.

        Parameters
        ----------
        message : str, optional
            Human-readable error message.
        path : str | None, optional
            JSON location that was expected (default: None).
        """
        self.path = path
        super().__init__(message)


class UpstreamAlertError(TubelistError):
    """
    Exception raised when the upstream response reports an error alert.

    The message is the alert text extracted from the response, e.g.
    ``"The playlist does not exist."``.
    """


class TransportError(TubelistError):
    """
    Exception raised for network, HTTP status, or body decoding failures.

    When raised during pagination, the items decoded from earlier pages are
    attached so callers can keep the partial result.

    Attributes
    ----------
    message : str
        Human-readable error message.
    url : str | None
        The URL that was being requested.
    status_code : int | None
        HTTP status code when the failure was a non-success response.
    original_error : Exception | None
        The underlying exception, if any.
    partial_items : list[Item]
        Items accumulated before the failure (pagination only).
    partial_result : Any
        The partially assembled top-level result (playlist or search).

    Examples
    --------
    >>> try:
    ...     info = await service.get_playlist(playlist_id)
    ... except TransportError as e:
    ...     info = e.partial_result  # pages fetched before the failure
    """

    def __init__(
        self,
        message: str = "Transport error occurred",
        url: str | None = None,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """
        Initialize TransportError.

        Parameters
        ----------
        message : str, optional
            Human-readable error message (default: "Transport error occurred").
        url : str | None, optional
            The requested URL (default: None).
        status_code : int | None, optional
            HTTP status code, if a response was received (default: None).
        original_error : Exception | None, optional
            The underlying exception (default: None).
        """
        self.url = url
        self.status_code = status_code
        self.original_error = original_error
        self.partial_items: list[Item] = []
        self.partial_result: Any = None
        super().__init__(message)


class ExhaustedRetriesError(TubelistError):
    """
    Exception raised when the data tree could not be recovered after retries.

    Attributes
    ----------
    message : str
        Human-readable error message.
    attempts : int
        Number of attempts made.
    dump_path : Path | None
        Location of the diagnostic dump of the last raw body, if written.
    """

    def __init__(
        self,
        message: str = "Retries exhausted",
        attempts: int = 0,
        dump_path: Path | None = None,
    ) -> None:
        """
        Initialize ExhaustedRetriesError.

        Parameters
        ----------
        message : str, optional
            Human-readable error message (default: "Retries exhausted").
        attempts : int, optional
            Number of attempts made (default: 0).
        dump_path : Path | None, optional
            Path of the diagnostic dump (default: None).
        """
        self.attempts = attempts
        self.dump_path = dump_path
        super().__init__(message)


__all__ = [
    "TubelistError",
    "InputError",
    "UpstreamShapeError",
    "UpstreamAlertError",
    "TransportError",
    "ExhaustedRetriesError",
]
