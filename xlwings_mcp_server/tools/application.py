"""
Excel application tools
"""

from typing import Any, List, Optional

from .base import PID_PARAM, BaseTool, ToolDefinition, tool_handler

CALCULATION_MODES = ["automatic", "manual", "semiautomatic"]


class ApplicationTools(BaseTool):
    """Tools for starting, inspecting and quitting Excel applications"""

    def get_tool_definitions(self) -> List[ToolDefinition]:
        """Get tool definitions for application management"""
        return [
            self._tool(
                "app.list",
                self.app_list,
                "List all running Excel applications",
                {}
            ),
            self._tool(
                "app.get",
                self.app_get,
                "Get the Excel application with the given PID, or the active one",
                {"pid": PID_PARAM}
            ),
            self._tool(
                "app.create",
                self.app_create,
                "Start a new Excel application",
                {
                    "visible": {
                        "type": "boolean",
                        "required": False,
                        "description": "Show the application window (default: true)"
                    },
                    "addBook": {
                        "type": "boolean",
                        "required": False,
                        "description": "Open a new empty workbook (default: true)"
                    }
                }
            ),
            self._tool(
                "app.quit",
                self.app_quit,
                "Quit an Excel application",
                {
                    "pid": {"type": "integer", "required": True, "description": "PID of the Excel application"},
                    "saveChanges": {
                        "type": "boolean",
                        "required": False,
                        "description": "Save open workbooks before quitting (default: true)"
                    }
                }
            ),
            self._tool(
                "app.set_calculation",
                self.app_set_calculation,
                "Set the calculation mode of an Excel application",
                {
                    "pid": {"type": "integer", "required": True, "description": "PID of the Excel application"},
                    "mode": {"type": "string", "required": True, "enum": CALCULATION_MODES}
                }
            ),
            self._tool(
                "app.get_calculation",
                self.app_get_calculation,
                "Get the calculation mode of an Excel application",
                {"pid": {"type": "integer", "required": True, "description": "PID of the Excel application"}}
            ),
            self._tool(
                "app.get_books",
                self.app_get_books,
                "List the workbooks open in an Excel application",
                {"pid": {"type": "integer", "required": True, "description": "PID of the Excel application"}}
            ),
        ]

    @tool_handler
    async def app_list(self) -> Any:
        return await self.client.app_list()

    @tool_handler
    async def app_get(self, pid: Optional[int] = None) -> Any:
        return await self.client.app_get(pid)

    @tool_handler
    async def app_create(self, visible: Optional[bool] = None, add_book: Optional[bool] = None) -> Any:
        """
        Start a new Excel application

        Args:
            visible: Show the application window
            add_book: Open a new empty workbook

        Returns:
            Description of the new application as reported by xlwings-rpc
        """
        return await self.client.app_create(visible=visible, add_book=add_book)

    @tool_handler
    async def app_quit(self, pid: int, save_changes: Optional[bool] = None) -> Any:
        return await self.client.app_quit(pid, save_changes=save_changes)

    @tool_handler
    async def app_set_calculation(self, pid: int, mode: str) -> Any:
        if mode not in CALCULATION_MODES:
            raise ValueError(f"mode must be one of {', '.join(CALCULATION_MODES)}")
        return await self.client.app_set_calculation(pid, mode)

    @tool_handler
    async def app_get_calculation(self, pid: int) -> Any:
        return await self.client.app_get_calculation(pid)

    @tool_handler
    async def app_get_books(self, pid: int) -> Any:
        return await self.client.app_get_books(pid)
