"""Tests for the httpx transport using httpx.MockTransport."""

from __future__ import annotations

import asyncio
import json

import httpx

from edgeform.client.session import SessionState
from edgeform.client.transport import (
    GENERIC_ERROR,
    LOGIN_ERROR,
    Err,
    HttpTransport,
    Ok,
)


def run_async(coro):
    """Helper to run async functions in sync tests."""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
    return loop.run_until_complete(coro)


def _transport(handler, session: SessionState | None = None) -> HttpTransport:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpTransport("http://controller.test/", session=session, client=client)


def test_create_posts_json_with_token():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json={"id": "abc"})

    transport = _transport(handler, SessionState(token="jwt-1"))
    result = run_async(transport.create_resource("/traffic_policies", {"name": "default"}))

    assert result == Ok({"id": "abc"})
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "http://controller.test/traffic_policies"
    assert request.headers["Authorization"] == "Bearer jwt-1"
    assert json.loads(request.content) == {"name": "default"}


def test_update_uses_patch_and_no_token_when_logged_out():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    result = run_async(_transport(handler).update_resource("/apps/1", {"name": "x"}))

    assert result == Ok(None)
    assert seen[0].method == "PATCH"
    assert "Authorization" not in seen[0].headers


def test_fetch_decodes_body():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        return httpx.Response(200, json={"name": "default", "traffic_rules": []})

    result = run_async(_transport(handler).fetch_resource("/traffic_policies/1"))

    assert isinstance(result, Ok)
    assert result.value["name"] == "default"


def test_server_text_becomes_error_message():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, text="Validation failed: name cannot be empty")

    result = run_async(_transport(handler).create_resource("/apps", {}))

    assert result == Err(
        "Validation failed: name cannot be empty",
        status=400,
        payload="Validation failed: name cannot be empty",
    )


def test_structured_error_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(409, json={"error": {"message": "duplicate name"}})

    result = run_async(_transport(handler).create_resource("/apps", {}))

    assert isinstance(result, Err)
    assert result.message == "duplicate name"
    assert result.status == 409


def test_empty_error_body_uses_fallback():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500)

    result = run_async(_transport(handler).create_resource("/apps", {}))

    assert result == Err(GENERIC_ERROR, status=500, payload=None)


def test_network_failure_is_an_error_result():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    result = run_async(_transport(handler).fetch_resource("/nodes"))

    assert result == Err(GENERIC_ERROR)


def test_login_stores_token():
    session = SessionState()

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/auth"
        assert json.loads(request.content) == {"username": "admin", "password": "pw"}
        return httpx.Response(201, json={"token": "jwt-2"})

    result = run_async(_transport(handler, session).login("admin", "pw"))

    assert result == Ok("jwt-2")
    assert session.token == "jwt-2"
    assert session.is_authenticated


def test_login_without_token_fails():
    session = SessionState()

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={})

    result = run_async(_transport(handler, session).login("admin", "pw"))

    assert result == Err(LOGIN_ERROR)
    assert not session.is_authenticated


def test_login_rejected_uses_server_text():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text="invalid credentials")

    result = run_async(_transport(handler).login("admin", "bad"))

    assert isinstance(result, Err)
    assert result.message == "invalid credentials"
    assert result.status == 401


def test_context_manager_closes_client():
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))

    async def scenario():
        async with HttpTransport("http://controller.test", client=client):
            pass

    run_async(scenario())
    assert client.is_closed
