"""
Tests for HttpxTransport.

Requests are served by ``httpx.MockTransport`` through an injected client.
"""

from __future__ import annotations

import json
from typing import Callable

import httpx
import pytest

from tubelist.config.settings import Settings
from tubelist.exceptions import TransportError
from tubelist.services.transport import HttpxTransport

URL = "https://www.youtube.com/youtubei/v1/browse"


def _transport(
    handler: Callable[[httpx.Request], httpx.Response], settings: Settings
) -> HttpxTransport:
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler), headers=settings.default_headers
    )
    return HttpxTransport(settings=settings, client=client)


class TestGetText:
    async def test_returns_body_and_sends_params(self, mock_settings: Settings) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, text="<html>ok</html>")

        async with _transport(handler, mock_settings) as transport:
            body = await transport.get_text(
                "https://www.youtube.com/playlist", params={"list": "PL1", "hl": "en"}
            )

        assert body == "<html>ok</html>"
        assert seen[0].url.params["list"] == "PL1"
        assert seen[0].url.params["hl"] == "en"
        assert seen[0].headers["Cookie"] == mock_settings.consent_cookie
        assert seen[0].headers["User-Agent"] == mock_settings.user_agent

    async def test_http_error_status(self, mock_settings: Settings) -> None:
        transport = _transport(lambda request: httpx.Response(429), mock_settings)

        with pytest.raises(TransportError) as exc_info:
            await transport.get_text("https://www.youtube.com/results")

        assert exc_info.value.status_code == 429
        assert exc_info.value.url == "https://www.youtube.com/results"
        await transport.aclose()

    async def test_network_error(self, mock_settings: Settings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        transport = _transport(handler, mock_settings)

        with pytest.raises(TransportError, match="ConnectError") as exc_info:
            await transport.get_text("https://www.youtube.com/")

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.original_error, httpx.ConnectError)
        await transport.aclose()


class TestPostJson:
    async def test_posts_payload(self, mock_settings: Settings) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"ok": True})

        async with _transport(handler, mock_settings) as transport:
            data = await transport.post_json(
                URL, {"continuation": "tok"}, params={"key": "AIza"}
            )

        assert data == {"ok": True}
        assert seen[0].method == "POST"
        assert seen[0].url.params["key"] == "AIza"
        assert json.loads(seen[0].content) == {"continuation": "tok"}

    async def test_invalid_json(self, mock_settings: Settings) -> None:
        transport = _transport(
            lambda request: httpx.Response(200, text="<html>not json"), mock_settings
        )

        with pytest.raises(TransportError, match="Invalid JSON"):
            await transport.post_json(URL, {})
        await transport.aclose()

    async def test_non_object_json(self, mock_settings: Settings) -> None:
        transport = _transport(
            lambda request: httpx.Response(200, json=[1, 2]), mock_settings
        )

        with pytest.raises(TransportError, match="Expected a JSON object"):
            await transport.post_json(URL, {})
        await transport.aclose()

    async def test_server_error(self, mock_settings: Settings) -> None:
        transport = _transport(lambda request: httpx.Response(503), mock_settings)

        with pytest.raises(TransportError) as exc_info:
            await transport.post_json(URL, {})

        assert exc_info.value.status_code == 503
        await transport.aclose()


class TestLifecycle:
    async def test_lazy_client(self, mock_settings: Settings) -> None:
        transport = HttpxTransport(settings=mock_settings)
        client = transport.client

        assert client is transport.client
        assert client.headers["User-Agent"] == mock_settings.user_agent
        assert client.follow_redirects is True

        await transport.aclose()
        assert transport._client is None

    async def test_aclose_without_client(self, mock_settings: Settings) -> None:
        await HttpxTransport(settings=mock_settings).aclose()
