"""Build MCP tool metadata from the xlwings tool definitions."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict

from pydantic import BaseModel

logger = logging.getLogger(__name__)

# Map tool classes to the registry category of their tools
CATEGORY_MAP: dict[str, str] = {
    "ApplicationTools": "application",
    "WorkbookTools": "workbook",
    "SheetTools": "sheet",
    "RangeTools": "range",
    "DirectTools": "direct",
}


class Tool(BaseModel):
    """Metadata for an xlwings MCP tool."""

    name: str
    description: str
    request_schema: dict[str, Any]
    category: str = "excel"


class XlwingsToolRegistry:
    """Generate Tool metadata and provide access to handlers."""

    def __init__(self, tool_instances: list[Any]):
        self._tools: dict[str, Tool] = {}
        self._handlers: dict[str, Callable[..., Any]] = {}
        self._load_tools(tool_instances)

    # ------------------------------------------------------------------
    def _load_tools(self, tool_instances: list[Any]) -> None:
        for tool in tool_instances:
            class_name = tool.__class__.__name__
            category = CATEGORY_MAP.get(class_name, "excel")

            for name, handler, description, param_schema in tool.get_tool_definitions():
                if name in self._tools:
                    raise ValueError(f"Duplicate tool name '{name}' in {class_name}")

                self._tools[name] = Tool(
                    name=name,
                    description=description,
                    request_schema=self._build_input_schema(param_schema or {}),
                    category=category,
                )
                self._handlers[name] = handler

        logger.info("Registered %s MCP tools", len(self._tools))

    # ------------------------------------------------------------------
    def _build_input_schema(self, params: Dict[str, Any]) -> dict[str, Any]:
        properties: dict[str, Any] = {}
        required: list[str] = []

        for param_name, meta in params.items():
            prop: dict[str, Any] = {}

            # No declared type means any JSON value
            if meta.get("type"):
                prop["type"] = meta["type"]

            for extra_key in ("description", "enum", "items", "format", "default", "minimum", "maximum"):
                if extra_key in meta:
                    prop[extra_key] = meta[extra_key]

            properties[param_name] = prop

            if meta.get("required"):
                required.append(param_name)

        return {
            "type": "object",
            "properties": properties,
            "required": required,
        }

    # ------------------------------------------------------------------
    def get_all_tools(self) -> dict[str, Tool]:
        return self._tools.copy()

    def get_tool(self, tool_name: str) -> Tool | None:
        return self._tools.get(tool_name)

    def get_handler(self, tool_name: str) -> Callable[..., Any] | None:
        return self._handlers.get(tool_name)
