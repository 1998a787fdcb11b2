"""MCP protocol layer: JSON-RPC models, tool registry and method handlers."""

from .mcp_server import XlwingsMCPHandler
from .tool_registry import Tool, XlwingsToolRegistry

__all__ = ["Tool", "XlwingsMCPHandler", "XlwingsToolRegistry"]
