"""
Session context models sent with every innertube request.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

DEFAULT_CLIENT_NAME = "WEB"
DEFAULT_CLIENT_VERSION = "2.20240606.06.00"


class SessionContext(BaseModel):
    """
    Locale and client identification for an innertube request.

    Attributes
    ----------
    client_name : str
        Innertube client name (always "WEB" for the desktop site).
    client_version : str
        Web client version scraped from a page or reused from the cache.
    gl : str | None
        Region code.
    hl : str | None
        Interface language.
    utc_offset_minutes : int | None
        Caller's UTC offset.
    safe_search : bool
        Whether restricted mode is requested.
    """

    model_config = ConfigDict(frozen=True)

    client_name: str = DEFAULT_CLIENT_NAME
    client_version: str = DEFAULT_CLIENT_VERSION
    gl: str | None = None
    hl: str | None = None
    utc_offset_minutes: int | None = None
    safe_search: bool = False

    def to_payload(self) -> dict[str, Any]:
        """
        Build the ``context`` object of an innertube request body.

        Returns
        -------
        dict[str, Any]
            ``{"client": {...}, "user": {...}}`` with unset locale fields
            omitted.
        """
        client: dict[str, Any] = {
            "clientName": self.client_name,
            "clientVersion": self.client_version,
        }
        if self.gl is not None:
            client["gl"] = self.gl
        if self.hl is not None:
            client["hl"] = self.hl
        if self.utc_offset_minutes is not None:
            client["utcOffsetMinutes"] = self.utc_offset_minutes

        user: dict[str, Any] = {}
        if self.safe_search:
            user["enableSafetyMode"] = True

        return {"client": client, "user": user}
