"""
Session context cache shared by search requests.

Holds the scraped web client version and the playlist-search params blob so
consecutive searches can skip the initial results-page fetch. Values are
best-effort: a stale entry costs one extra round-trip, never correctness.

Classes
-------
ReadWriteLock
    Lock allowing concurrent readers and a single exclusive writer.
SessionContextCache
    The two cached fields behind a ``ReadWriteLock``.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """
    Reader/writer lock built on ``threading.Condition``.

    Any number of readers may hold the lock at once; a writer waits until
    all readers have left and excludes everyone while it holds the lock.
    Waiting writers block new readers so writes are not starved.

    Examples
    --------
    >>> lock = ReadWriteLock()
    >>> with lock.read_locked():
    ...     pass
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        """Hold the lock in shared mode for the duration of the block."""
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        """Hold the lock in exclusive mode for the duration of the block."""
        with self._cond:
            self._waiting_writers += 1
            while self._writer or self._readers:
                self._cond.wait()
            self._waiting_writers -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class SessionContextCache:
    """
    Cache of the web client version and the playlist-search params blob.

    Starts empty. Construct one per client (the container holds a single
    instance) rather than relying on module state.

    Examples
    --------
    >>> cache = SessionContextCache()
    >>> cache.needs_refresh(safe_search=False)
    True
    >>> cache.write("2.20240606.06.00", "EgIQAw%3D%3D")
    >>> cache.needs_refresh(safe_search=False)
    False
    >>> cache.needs_refresh(safe_search=True)
    True
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._client_version = ""
        self._playlist_params = ""

    def read(self) -> tuple[str, str]:
        """
        Return ``(client_version, playlist_params)``.

        Either value is ``""`` when not cached.
        """
        with self._lock.read_locked():
            return self._client_version, self._playlist_params

    def is_populated(self) -> bool:
        """Return True when both fields hold a value."""
        with self._lock.read_locked():
            return bool(self._client_version and self._playlist_params)

    def needs_refresh(self, safe_search: bool) -> bool:
        """
        Decide whether the next request must fetch a fresh results page.

        Parameters
        ----------
        safe_search : bool
            Restricted mode always refetches.

        Returns
        -------
        bool
            True when a fresh fetch is required.
        """
        if safe_search:
            logger.debug("Safe search requested, bypassing session cache")
            return True
        populated = self.is_populated()
        logger.debug("Session cache %s", "hit" if populated else "miss")
        return not populated

    def write(self, client_version: str, playlist_params: str) -> None:
        """Overwrite both cached fields."""
        with self._lock.write_locked():
            self._client_version = client_version
            self._playlist_params = playlist_params
        logger.debug("Session cache updated (client version %s)", client_version)

    def invalidate(self) -> None:
        """Clear both cached fields."""
        with self._lock.write_locked():
            self._client_version = ""
            self._playlist_params = ""
        logger.debug("Session cache invalidated")
