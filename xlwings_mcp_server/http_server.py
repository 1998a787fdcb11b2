"""FastAPI entrypoint serving MCP JSON-RPC over HTTP."""

from __future__ import annotations

import logging
import sys
import uuid
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from xlwings_mcp_server import XlwingsMCPServer, __version__
from xlwings_mcp_server.logging_utils import configure_logging
from xlwings_mcp_server.mcp_api.jsonrpc_models import JSONRPCRequest
from xlwings_mcp_server.mcp_api.mcp_server import XlwingsMCPHandler
from xlwings_mcp_server.mcp_api.settings import mcp_settings
from xlwings_mcp_server.mcp_api.tool_registry import XlwingsToolRegistry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize shared state for the HTTP server and ensure cleanup."""

    configure_logging()
    logger.info("Starting xlwings MCP HTTP server v%s", __version__)

    try:
        xlwings_server = XlwingsMCPServer()
        await xlwings_server.initialize()
    except Exception as exc:  # pragma: no cover - startup validation
        logger.error("Failed to initialize xlwings MCP server: %s", exc)
        sys.exit(1)

    tool_registry = XlwingsToolRegistry(xlwings_server.tools)
    mcp_handler = XlwingsMCPHandler(tool_registry, server_version=__version__)

    app.state.xlwings_server = xlwings_server
    app.state.tool_registry = tool_registry
    app.state.mcp_handler = mcp_handler

    yield

    logger.info("Shutting down xlwings MCP HTTP server")
    try:
        await xlwings_server.cleanup()
    except Exception as exc:  # pragma: no cover - shutdown cleanup
        logger.warning("Cleanup error: %s", exc)


app = FastAPI(
    title="xlwings MCP HTTP Server",
    description="HTTP-based Model Context Protocol server for xlwings-rpc",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=mcp_settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health() -> dict[str, Any]:
    """Liveness probe for this server (not the xlwings-rpc backend)."""

    return {"status": "healthy", "version": __version__, "transport": "http"}


@app.get("/")
async def root() -> dict[str, Any]:
    """Expose service metadata and primary endpoints for ad-hoc inspection."""

    return {
        "name": "xlwings MCP HTTP Server",
        "version": __version__,
        "transport": "http",
        "endpoints": {"mcp": "/mcp", "health": "/health"},
    }


@app.post("/mcp")
async def mcp_endpoint(request: Request, rpc_request: JSONRPCRequest):
    """Handle JSON-RPC traffic for MCP clients."""

    request_id = str(uuid.uuid4())
    logger.info(
        "JSON-RPC %s (%s)",
        rpc_request.method,
        "notification" if rpc_request.id is None else "request",
        extra={"request_id": request_id},
    )

    mcp_handler: XlwingsMCPHandler = request.app.state.mcp_handler
    payload = await mcp_handler.dispatch(rpc_request, request_id)
    if payload is None:
        return Response(status_code=202)
    return JSONResponse(content=payload)
