"""
Service interfaces (ABCs) for the tubelist package.

These abstract base classes define the contracts the extraction services
depend on, so tests and alternative backends can swap implementations.
"""

from .http_transport_interface import HttpTransport

__all__ = [
    "HttpTransport",
]
