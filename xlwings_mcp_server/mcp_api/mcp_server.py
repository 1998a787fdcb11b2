"""JSON-RPC handlers for the xlwings MCP server, shared by all transports."""

from __future__ import annotations

import asyncio
import inspect
import json
import logging
from typing import Any, Dict

import jsonschema

from ..exceptions import XlwingsError
from ..tools.base import TextResult
from .jsonrpc_models import JSONRPCError, JSONRPCRequest, JSONRPCResponse, response_payload
from .tool_registry import XlwingsToolRegistry

logger = logging.getLogger(__name__)

MCP_PROTOCOL_VERSION = "2024-11-05"


class XlwingsMCPHandler:
    """MCP method handlers: initialize, tools/list, tools/call and ping."""

    def __init__(
        self,
        tool_registry: XlwingsToolRegistry,
        server_version: str = "unknown",
    ) -> None:
        self.tool_registry = tool_registry
        self.server_version = server_version

    # ------------------------------------------------------------------
    async def dispatch(self, rpc_request: JSONRPCRequest, request_id: str) -> dict[str, Any] | None:
        """Handle one JSON-RPC message; notifications return None."""

        if rpc_request.id is None:
            logger.debug("Ignoring notification %s", rpc_request.method, extra={"request_id": request_id})
            return None

        try:
            if rpc_request.method == "initialize":
                result = await self.handle_initialize(request_id)
                return response_payload(JSONRPCResponse(id=rpc_request.id, result=result))

            if rpc_request.method == "tools/list":
                result = await self.handle_tools_list(request_id)
                return response_payload(JSONRPCResponse(id=rpc_request.id, result=result))

            if rpc_request.method == "tools/call":
                result = await self.handle_tools_call(rpc_request.params, request_id)
                if "error" in result:
                    return response_payload(JSONRPCResponse(id=rpc_request.id, error=result["error"]))
                return response_payload(JSONRPCResponse(id=rpc_request.id, result=result))

            if rpc_request.method == "ping":
                return response_payload(JSONRPCResponse(id=rpc_request.id, result={}))

            logger.warning("Unknown JSON-RPC method: %s", rpc_request.method)
            return response_payload(
                JSONRPCResponse(
                    id=rpc_request.id,
                    error=JSONRPCError.create_error(
                        JSONRPCError.METHOD_NOT_FOUND,
                        f"Method '{rpc_request.method}' not found",
                    ),
                )
            )

        except Exception as exc:  # pragma: no cover - runtime protection
            logger.exception("Unhandled MCP error", extra={"request_id": request_id})
            return response_payload(
                JSONRPCResponse(
                    id=rpc_request.id,
                    error=JSONRPCError.create_error(
                        JSONRPCError.INTERNAL_ERROR,
                        f"Internal server error: {exc}",
                    ),
                )
            )

    # ------------------------------------------------------------------
    async def handle_initialize(self, request_id: str) -> dict[str, Any]:
        logger.info("initialize called", extra={"request_id": request_id})
        return {
            "protocolVersion": MCP_PROTOCOL_VERSION,
            "capabilities": {"tools": {"listChanged": False}},
            "serverInfo": {
                "name": "xlwings-mcp-server",
                "version": self.server_version,
            },
        }

    # ------------------------------------------------------------------
    async def handle_tools_list(self, request_id: str) -> dict[str, Any]:
        tools = self.tool_registry.get_all_tools()

        logger.info("tools/list returned %s tools", len(tools), extra={"request_id": request_id})

        return {
            "tools": [
                {
                    "name": tool.name,
                    "description": tool.description,
                    "inputSchema": tool.request_schema,
                }
                for tool in tools.values()
            ]
        }

    # ------------------------------------------------------------------
    async def handle_tools_call(self, params: dict[str, Any] | None, request_id: str) -> dict[str, Any]:
        if not params or "name" not in params:
            return {
                "error": JSONRPCError.create_error(
                    JSONRPCError.INVALID_PARAMS, "Missing 'name' parameter"
                )
            }

        tool_name = params["name"]
        arguments = params.get("arguments") or {}

        tool_meta = self.tool_registry.get_tool(tool_name)
        handler = self.tool_registry.get_handler(tool_name)
        if tool_meta is None or handler is None:
            return {
                "error": JSONRPCError.create_error(
                    JSONRPCError.METHOD_NOT_FOUND,
                    f"Tool '{tool_name}' not found",
                )
            }

        try:
            jsonschema.validate(instance=arguments, schema=tool_meta.request_schema)
        except jsonschema.ValidationError as exc:
            return {
                "error": JSONRPCError.create_error(
                    JSONRPCError.INVALID_PARAMS,
                    f"Invalid parameters: {exc.message}",
                    {"path": list(exc.absolute_path)},
                )
            }

        try:
            result = await _invoke_handler(handler, arguments)
        except Exception as exc:
            logger.error(
                "Tool %s failed: %s",
                tool_name,
                exc,
                extra={"request_id": request_id, "tool": tool_name},
            )
            return error_content(_error_text(exc))

        return text_content(result)


def text_content(result: Any) -> dict[str, Any]:
    """Wrap a tool result as MCP text content."""
    text = result if isinstance(result, TextResult) else json.dumps(result, indent=2, default=str)
    return {"content": [{"type": "text", "text": text}], "isError": False}


def _error_text(exc: Exception) -> str:
    """Failure text for a tool; xlwings errors also carry their structured details."""
    if isinstance(exc, XlwingsError):
        return f"Error: {exc}\n{json.dumps(exc.to_dict(), indent=2, default=str)}"
    return f"Error: {exc}"


def error_content(message: str) -> dict[str, Any]:
    """Wrap a failure message as MCP error content."""
    return {"content": [{"type": "text", "text": message}], "isError": True}


async def _invoke_handler(handler, arguments: Dict[str, Any]):
    if inspect.iscoroutinefunction(handler):
        return await handler(**arguments)
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, lambda: handler(**arguments))
