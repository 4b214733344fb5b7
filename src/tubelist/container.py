"""
Dependency Injection Container for tubelist.

Wires settings, the HTTP transport, the session context cache and the
services in one place so the CLI and library callers share a single
transport and cache, and tests can swap any of them.

Usage
-----
    >>> from tubelist.container import container
    >>> info = await container.playlist_service.get_playlist("PL...")
    >>> await container.aclose()

Design Principles
-----------------
- Singletons are cached via @cached_property (lazy initialization)
- The session cache lives on the container, never at module level
- Container can be reset for testing isolation
"""

from __future__ import annotations

from functools import cached_property

from tubelist.config.settings import Settings, get_settings
from tubelist.services.interfaces import HttpTransport
from tubelist.services.playlist_service import PlaylistService
from tubelist.services.search_service import SearchService
from tubelist.services.session_cache import SessionContextCache
from tubelist.services.transport import HttpxTransport


class Container:
    """
    Dependency injection container for tubelist.

    Examples
    --------
    Injecting a fake transport in tests:

        >>> container = Container()
        >>> container.__dict__["transport"] = FakeTransport()
        >>> container.search_service.transport is container.transport
        True
    """

    @cached_property
    def settings(self) -> Settings:
        """Application settings, loaded on first access."""
        return get_settings()

    @cached_property
    def transport(self) -> HttpTransport:
        """
        Get the singleton HTTP transport.

        Returns
        -------
        HttpTransport
            An ``HttpxTransport`` configured from settings.
        """
        return HttpxTransport(self.settings)

    @cached_property
    def session_cache(self) -> SessionContextCache:
        """Get the session context cache shared by all searches."""
        return SessionContextCache()

    @cached_property
    def playlist_service(self) -> PlaylistService:
        """
        Get the singleton PlaylistService instance.

        Examples
        --------
        >>> container.playlist_service is container.playlist_service
        True
        """
        return PlaylistService(self.transport, self.settings)

    @cached_property
    def search_service(self) -> SearchService:
        """
        Get the singleton SearchService instance.

        Examples
        --------
        >>> container.search_service.cache is container.session_cache
        True
        """
        return SearchService(self.transport, self.session_cache, self.settings)

    async def aclose(self) -> None:
        """Close the transport if it was created."""
        transport = self.__dict__.get("transport")
        if transport is not None:
            await transport.aclose()

    def reset(self) -> None:
        """
        Reset the container by clearing all cached singleton instances.

        It clears all @cached_property values from the instance __dict__.
        """
        properties_to_clear = [
            "settings",
            "transport",
            "session_cache",
            "playlist_service",
            "search_service",
        ]
        for prop in properties_to_clear:
            self.__dict__.pop(prop, None)


# Global container instance
container = Container()
