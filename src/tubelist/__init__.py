"""
tubelist - YouTube playlist and search extraction toolkit.

Scrapes playlist listings and search results from YouTube's web pages and
its internal innertube API, decoding the unstable renderer JSON into stable
pydantic records and following continuation tokens across pages.
"""

from __future__ import annotations

__version__ = "0.4.0"
__author__ = "tubelist"
__email__ = "noreply@tubelist.dev"
__license__ = "AGPL-3.0-or-later"

__all__ = ["__version__", "__author__", "__email__", "__license__"]
