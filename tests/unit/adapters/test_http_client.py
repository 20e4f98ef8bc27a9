"""Unit tests – extension-side QuotaClient."""
from __future__ import annotations

import asyncio
import json

import httpx
import respx

from quota_guard.adapters.fastapi import create_app
from quota_guard.adapters.http import QuotaClient
from quota_guard.adapters.memory import InMemoryExpiringStore
from quota_guard.application.quota import ActionType
from quota_guard.config.quota import QuotaSettings

BASE_URL = "http://quota.test"
ENDPOINT = f"{BASE_URL}/api/daily-limit"


# ---------------------------------------------------------------------------
# Request shape
# ---------------------------------------------------------------------------

class TestRequestShape:
    @respx.mock
    def test_check_posts_payload(self) -> None:
        route = respx.post(ENDPOINT).mock(
            return_value=httpx.Response(200, json={"allowed": True, "remaining": 1})
        )

        async def run() -> None:
            async with QuotaClient(BASE_URL) as client:
                body = await client.check_and_increment("u1", "fp-1", ActionType.POSTS)
            assert body == {"allowed": True, "remaining": 1}
            sent = json.loads(route.calls.last.request.content)
            assert sent == {
                "userId": "u1",
                "action": "check_and_increment",
                "type": "posts",
                "deviceFingerprint": "fp-1",
            }

        asyncio.run(run())

    @respx.mock
    def test_fingerprint_omitted_when_absent(self) -> None:
        route = respx.post(ENDPOINT).mock(return_value=httpx.Response(200, json={"remaining": 7}))

        async def run() -> None:
            async with QuotaClient(BASE_URL) as client:
                assert await client.get_remaining("u1") == 7
            sent = json.loads(route.calls.last.request.content)
            assert sent == {"userId": "u1", "action": "get_remaining", "type": "comments"}

        asyncio.run(run())

    @respx.mock
    def test_custom_path(self) -> None:
        route = respx.post(f"{BASE_URL}/v2/limit").mock(return_value=httpx.Response(200, json={"remaining": 3}))

        async def run() -> None:
            async with QuotaClient(BASE_URL, path="/v2/limit") as client:
                assert await client.get_remaining("u1") == 3

        asyncio.run(run())
        assert route.called


# ---------------------------------------------------------------------------
# Fail-open behaviour
# ---------------------------------------------------------------------------

class TestClientFailOpen:
    @respx.mock
    def test_server_error_allows(self) -> None:
        respx.post(ENDPOINT).mock(return_value=httpx.Response(500))

        async def run() -> None:
            async with QuotaClient(BASE_URL) as client:
                body = await client.check_and_increment("u1")
            assert body == {"allowed": True, "remaining": 9, "error": "Failed to check limit"}

        asyncio.run(run())

    @respx.mock
    def test_connection_error_allows(self) -> None:
        respx.post(ENDPOINT).mock(side_effect=httpx.ConnectError("refused"))

        async def run() -> None:
            async with QuotaClient(BASE_URL, fallback_remaining=4) as client:
                body = await client.check_and_increment("u1")
            assert body["allowed"] is True
            assert body["remaining"] == 4

        asyncio.run(run())

    @respx.mock
    def test_non_json_body_allows(self) -> None:
        respx.post(ENDPOINT).mock(return_value=httpx.Response(200, text="<html>oops</html>"))

        async def run() -> None:
            async with QuotaClient(BASE_URL) as client:
                body = await client.check_and_increment("u1")
            assert body["allowed"] is True

        asyncio.run(run())

    @respx.mock
    def test_remaining_falls_back_on_error(self) -> None:
        respx.post(ENDPOINT).mock(return_value=httpx.Response(503))

        async def run() -> None:
            async with QuotaClient(BASE_URL) as client:
                assert await client.get_remaining("u1") == 9

        asyncio.run(run())

    @respx.mock
    def test_remaining_falls_back_on_malformed_body(self) -> None:
        respx.post(ENDPOINT).mock(return_value=httpx.Response(200, json={"remaining": "lots"}))

        async def run() -> None:
            async with QuotaClient(BASE_URL) as client:
                assert await client.get_remaining("u1") == 9

        asyncio.run(run())

    @respx.mock
    def test_array_body_falls_back(self) -> None:
        respx.post(ENDPOINT).mock(return_value=httpx.Response(200, json=[1, 2]))

        async def run() -> None:
            async with QuotaClient(BASE_URL) as client:
                assert await client.get_remaining("u1") == 9

        asyncio.run(run())


# ---------------------------------------------------------------------------
# End to end against the ASGI app
# ---------------------------------------------------------------------------

class TestAgainstApp:
    def test_posts_exhaust_then_deny(self) -> None:
        app = create_app(QuotaSettings(), store=InMemoryExpiringStore())

        async def run() -> None:
            client = QuotaClient(BASE_URL, transport=httpx.ASGITransport(app=app))
            try:
                first = await client.check_and_increment("u1", "fp", ActionType.POSTS)
                second = await client.check_and_increment("u1", "fp", ActionType.POSTS)
                third = await client.check_and_increment("u1", "fp", ActionType.POSTS)
                remaining = await client.get_remaining("u1", "fp", ActionType.POSTS)
            finally:
                await client.aclose()
            assert [first["allowed"], second["allowed"], third["allowed"]] == [True, True, False]
            assert third["message"] == "Daily limit reached"
            assert remaining == 0

        asyncio.run(run())

    def test_validation_error_is_answered_fail_open_by_client(self) -> None:
        app = create_app(QuotaSettings(), store=InMemoryExpiringStore())

        async def run() -> None:
            async with QuotaClient(BASE_URL, transport=httpx.ASGITransport(app=app)) as client:
                body = await client.check_and_increment("   ")
            assert body["error"] == "Failed to check limit"

        asyncio.run(run())
