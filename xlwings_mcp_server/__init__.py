"""
xlwings MCP server: exposes an xlwings-rpc JSON-RPC server as MCP tools
"""

__version__ = "1.0.0"

from .server import XlwingsMCPServer  # noqa: E402

__all__ = ["XlwingsMCPServer", "__version__"]
