"""
Passthrough and diagnostic tools
"""

from typing import Any, Dict, List, Optional

from ..exceptions import XlwingsConnectionError, XlwingsTransportError
from .base import BaseTool, TextResult, ToolDefinition, tool_handler


class DirectTools(BaseTool):
    """Raw JSON-RPC access and the server health check"""

    def get_tool_definitions(self) -> List[ToolDefinition]:
        return [
            self._tool(
                "excel.direct",
                self.excel_direct,
                "Send a JSON-RPC request directly to the xlwings-rpc server",
                {
                    "method": {"type": "string", "required": True, "description": "xlwings-rpc method name"},
                    "params": {"required": False, "description": "Parameters passed to the method"}
                }
            ),
            self._tool(
                "excel.batch",
                self.excel_batch,
                "Send several JSON-RPC requests in one batch; results are returned in request order",
                {
                    "requests": {
                        "type": "array",
                        "required": True,
                        "description": "List of {method, params} objects",
                        "items": {
                            "type": "object",
                            "properties": {"method": {"type": "string"}, "params": {}},
                            "required": ["method"]
                        }
                    }
                }
            ),
            self._tool(
                "health.check",
                self.health_check,
                "Check whether the xlwings-rpc server is reachable",
                {}
            ),
        ]

    @tool_handler
    async def excel_direct(self, method: str, params: Optional[Any] = None) -> Any:
        """
        Call an arbitrary xlwings-rpc method

        Args:
            method: Remote method name, e.g. "range.get_value"
            params: Parameter object passed through unchanged
        """
        self.logger.info("Executing direct method %s", method)
        return await self.client.call(method, params)

    @tool_handler
    async def excel_batch(self, requests: List[Dict[str, Any]]) -> List[Any]:
        return await self.client.call_batch(requests)

    @tool_handler
    async def health_check(self) -> TextResult:
        """
        Probe the xlwings-rpc /health endpoint

        Returns:
            Status text including the raw body of the health response

        Raises:
            XlwingsConnectionError: The server could not be reached
            XlwingsTransportError: The server answered with a non-2xx status
        """
        status = await self.client.health_check()
        if status["status_code"] is None:
            raise XlwingsConnectionError(
                f"Failed to connect to the xlwings-rpc server: {status['error']}"
            )
        if not status["healthy"]:
            raise XlwingsTransportError(
                f"xlwings-rpc server health check failed: HTTP {status['status_code']}",
                status_code=status["status_code"],
            )
        return TextResult(f"xlwings-rpc server status: OK\nResponse: {status['body']}")
