# file: tests/test_http.py
import pytest
from unittest.mock import AsyncMock, Mock
from aiohttp.test_utils import TestClient, TestServer

from calendar_mcp.errors import PARSE_ERROR
from calendar_mcp.servers.calendar_server import create_app


def make_backend(payload=None):
    backend = Mock()
    backend.generate = AsyncMock(return_value=payload)
    backend.close = AsyncMock()
    return backend


@pytest.mark.asyncio
async def test_health():
    async with TestClient(TestServer(create_app(backend=make_backend()))) as client:
        resp = await client.get("/health")
        assert resp.status == 200
        assert await resp.text() == "ok"


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/", "/mcp"])
async def test_both_paths_dispatch(path, calendar_payload):
    backend = make_backend(calendar_payload)
    async with TestClient(TestServer(create_app(backend=backend))) as client:
        resp = await client.post(path, json={
            "jsonrpc": "2.0", "id": 1, "method": "tools/call",
            "params": {"name": "generateCalendar", "arguments": {"brand": "Acme", "audience": "CTOs"}},
        })
        assert resp.status == 200
        body = await resp.json()

    assert body["id"] == 1
    assert body["result"]["content"][1]["value"] == calendar_payload


@pytest.mark.asyncio
async def test_malformed_body_gets_parse_error():
    async with TestClient(TestServer(create_app(backend=make_backend()))) as client:
        resp = await client.post("/mcp", data="{not json", headers={"Content-Type": "application/json"})
        body = await resp.json()

    assert body == {"jsonrpc": "2.0", "id": None, "error": {"code": PARSE_ERROR, "message": "Parse error"}}


@pytest.mark.asyncio
async def test_backend_closed_on_shutdown():
    backend = make_backend()
    async with TestClient(TestServer(create_app(backend=backend))) as client:
        await client.post("/mcp", json={"id": 1, "method": "ping"})

    backend.close.assert_awaited_once()
