"""Shared fixtures for the xlwings MCP server tests."""

import json
from unittest.mock import AsyncMock

import httpx
import pytest

from xlwings_mcp_server.client import XlwingsRpcClient
from xlwings_mcp_server.config import Settings


class FakeRpcServer:
    """Scripted xlwings-rpc endpoint for httpx.MockTransport.

    Records every decoded JSON-RPC body and answers with ``result_for`` or a
    fixed ``response``; ``/health`` is answered with ``health_response``.
    """

    def __init__(self):
        self.requests = []
        self.raw_requests = []
        self.response = None
        self.result_for = lambda body: {"ok": True}
        self.health_response = httpx.Response(200, text="ok")

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.raw_requests.append(request)
        if request.url.path == "/health":
            return self.health_response

        body = json.loads(request.content)
        self.requests.append(body)
        if self.response is not None:
            return self.response
        return httpx.Response(
            200,
            json={"jsonrpc": "2.0", "result": self.result_for(body), "id": body["id"]},
        )

    @property
    def last_params(self):
        return self.requests[-1].get("params", "<absent>")


@pytest.fixture
def mock_settings():
    """Settings pointing at a fake host, independent of the environment."""
    return Settings(xlwings_host="excel.test", xlwings_port=8000, http_timeout=5.0)


@pytest.fixture
def fake_rpc_server():
    return FakeRpcServer()


@pytest.fixture
def make_client(mock_settings):
    """Build an XlwingsRpcClient whose HTTP traffic goes to ``handler``."""

    def factory(handler, **kwargs):
        kwargs.setdefault("settings", mock_settings)
        return XlwingsRpcClient(transport=httpx.MockTransport(handler), **kwargs)

    return factory


@pytest.fixture
def rpc_client(make_client, fake_rpc_server):
    return make_client(fake_rpc_server)


@pytest.fixture
def mock_xlwings_client():
    """AsyncMock standing in for the RPC client in tool unit tests."""
    return AsyncMock(spec=XlwingsRpcClient)
