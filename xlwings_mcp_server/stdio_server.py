"""stdio transport: one JSON-RPC message per line on stdin, responses on stdout."""

from __future__ import annotations

import asyncio
import io
import json
import logging
import sys
import uuid
from typing import Any

from pydantic import ValidationError

from . import XlwingsMCPServer, __version__
from .mcp_api.jsonrpc_models import JSONRPCError, JSONRPCRequest
from .mcp_api.mcp_server import XlwingsMCPHandler
from .mcp_api.tool_registry import XlwingsToolRegistry

logger = logging.getLogger(__name__)


def _error_payload(request_id: Any, code: int, message: str) -> dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "id": request_id,
        "error": JSONRPCError.create_error(code, message),
    }


async def handle_line(handler: XlwingsMCPHandler, line: str) -> dict[str, Any] | None:
    """Decode one input line and dispatch it; returns the response payload, if any."""

    request_id = str(uuid.uuid4())
    try:
        raw = json.loads(line)
    except json.JSONDecodeError:
        logger.warning("Discarding unparseable input line", extra={"request_id": request_id})
        return _error_payload(None, JSONRPCError.PARSE_ERROR, "Parse error")

    if not isinstance(raw, dict):
        return _error_payload(None, JSONRPCError.INVALID_REQUEST, "Invalid Request")

    try:
        rpc_request = JSONRPCRequest.model_validate(raw)
    except ValidationError as exc:
        if "id" not in raw:
            logger.debug("Ignoring invalid notification: %s", exc)
            return None
        return _error_payload(raw.get("id"), JSONRPCError.INVALID_REQUEST, f"Invalid Request: {exc}")

    return await handler.dispatch(rpc_request, request_id)


async def serve_stdio(
    handler: XlwingsMCPHandler,
    stdin: io.TextIOBase | None = None,
    stdout: io.TextIOBase | None = None,
) -> None:
    """Serve MCP over stdio until stdin closes. Requests are handled one at a time."""

    _stdin = stdin if stdin is not None else sys.stdin
    _stdout = stdout if stdout is not None else sys.stdout
    loop = asyncio.get_running_loop()

    while True:
        line = await loop.run_in_executor(None, _stdin.readline)
        if not line:
            logger.info("stdin closed; stopping stdio transport")
            break
        line = line.strip()
        if not line:
            continue

        response = await handle_line(handler, line)
        if response is not None:
            _stdout.write(json.dumps(response, default=str) + "\n")
            _stdout.flush()


async def run_stdio() -> None:
    """Build the server and serve it over stdio."""

    xlwings_server = XlwingsMCPServer()
    await xlwings_server.initialize()
    handler = XlwingsMCPHandler(XlwingsToolRegistry(xlwings_server.tools), server_version=__version__)
    logger.info("xlwings MCP server v%s running on stdio", __version__)

    try:
        await serve_stdio(handler)
    finally:
        await xlwings_server.cleanup()
