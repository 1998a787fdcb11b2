"""
Base class and helpers shared by all xlwings tools
"""

import logging
import re
from functools import wraps
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from ..client import XlwingsRpcClient
from ..config import Settings, get_settings

ToolDefinition = Tuple[str, Callable[..., Any], str, Dict[str, Any]]

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


class TextResult(str):
    """Tool output that is already human-readable text and is sent as-is"""


def to_snake_case(name: str) -> str:
    """Convert a camelCase tool argument name to the snake_case remote name"""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def tool_handler(func):
    """
    Adapt a tool method to MCP-style arguments.

    The handler may be called with keyword arguments or with a single mapping
    of arguments. camelCase argument names are converted to snake_case
    before the method is invoked. Failures are logged and re-raised; turning
    them into error content is the job of the MCP layer.
    """

    @wraps(func)
    async def wrapper(self, *args, **kwargs):
        if args:
            if len(args) != 1 or not isinstance(args[0], Mapping):
                raise TypeError(f"{func.__name__} expects keyword arguments or a single mapping")
            kwargs = {**args[0], **kwargs}

        arguments = {to_snake_case(key): value for key, value in kwargs.items()}
        self.logger.debug("Invoking %s with %s", func.__name__, arguments)
        try:
            return await func(self, **arguments)
        except Exception as exc:
            self.logger.warning("%s failed: %s", func.__name__, exc)
            raise

    return wrapper


class BaseTool:
    """Base class for a group of xlwings tools"""

    def __init__(self, client: XlwingsRpcClient, settings: Optional[Settings] = None):
        self.client = client
        self.settings = settings or get_settings()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def _tool(
        self,
        name: str,
        handler: Callable[..., Any],
        description: str,
        parameters: Dict[str, Any],
    ) -> ToolDefinition:
        return (name, handler, description, parameters)

    def get_tool_definitions(self) -> List[ToolDefinition]:
        """Return ``(name, handler, description, parameters)`` tuples"""
        raise NotImplementedError


PID_PARAM = {
    "type": "integer",
    "required": False,
    "description": "PID of the Excel application (optional, defaults to the active one)",
}
