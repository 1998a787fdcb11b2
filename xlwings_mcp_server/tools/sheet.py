"""
Sheet tools
"""

from typing import Any, List, Optional

from .base import PID_PARAM, BaseTool, ToolDefinition, tool_handler

BOOK_PARAM = {"type": "string", "required": True, "description": "Workbook name"}
SHEET_NAME_PARAM = {"type": "string", "required": True, "description": "Sheet name"}


class SheetTools(BaseTool):
    """Tools for managing the sheets of a workbook"""

    def _sheet_tool(self, name, handler, description):
        return self._tool(
            name,
            handler,
            description,
            {"book": BOOK_PARAM, "name": SHEET_NAME_PARAM, "pid": PID_PARAM},
        )

    def get_tool_definitions(self) -> List[ToolDefinition]:
        return [
            self._tool(
                "sheet.list",
                self.sheet_list,
                "List all sheets of a workbook",
                {"book": BOOK_PARAM, "pid": PID_PARAM}
            ),
            self._sheet_tool("sheet.get", self.sheet_get, "Get a sheet by name"),
            self._tool(
                "sheet.add",
                self.sheet_add,
                "Add a new sheet to a workbook",
                {
                    "book": BOOK_PARAM,
                    "name": {"type": "string", "required": False, "description": "Name of the new sheet"},
                    "before": {"type": "string", "required": False, "description": "Insert before this sheet"},
                    "after": {"type": "string", "required": False, "description": "Insert after this sheet"},
                    "pid": PID_PARAM
                }
            ),
            self._sheet_tool("sheet.delete", self.sheet_delete, "Delete a sheet"),
            self._tool(
                "sheet.rename",
                self.sheet_rename,
                "Rename a sheet",
                {
                    "book": BOOK_PARAM,
                    "name": {"type": "string", "required": True, "description": "Current sheet name"},
                    "newName": {"type": "string", "required": True, "description": "New sheet name"},
                    "pid": PID_PARAM
                }
            ),
            self._sheet_tool("sheet.clear", self.sheet_clear, "Clear the contents and formatting of a sheet"),
            self._sheet_tool("sheet.get_used_range", self.sheet_get_used_range, "Get the used range of a sheet"),
            self._sheet_tool("sheet.activate", self.sheet_activate, "Activate a sheet"),
        ]

    @tool_handler
    async def sheet_list(self, book: str, pid: Optional[int] = None) -> Any:
        return await self.client.sheet_list(book, pid=pid)

    @tool_handler
    async def sheet_get(self, book: str, name: str, pid: Optional[int] = None) -> Any:
        return await self.client.sheet_get(book, name, pid=pid)

    @tool_handler
    async def sheet_add(
        self,
        book: str,
        name: Optional[str] = None,
        before: Optional[str] = None,
        after: Optional[str] = None,
        pid: Optional[int] = None,
    ) -> Any:
        return await self.client.sheet_add(book, name=name, before=before, after=after, pid=pid)

    @tool_handler
    async def sheet_delete(self, book: str, name: str, pid: Optional[int] = None) -> Any:
        return await self.client.sheet_delete(book, name, pid=pid)

    @tool_handler
    async def sheet_rename(self, book: str, name: str, new_name: str, pid: Optional[int] = None) -> Any:
        return await self.client.sheet_rename(book, name, new_name, pid=pid)

    @tool_handler
    async def sheet_clear(self, book: str, name: str, pid: Optional[int] = None) -> Any:
        return await self.client.sheet_clear(book, name, pid=pid)

    @tool_handler
    async def sheet_get_used_range(self, book: str, name: str, pid: Optional[int] = None) -> Any:
        return await self.client.sheet_get_used_range(book, name, pid=pid)

    @tool_handler
    async def sheet_activate(self, book: str, name: str, pid: Optional[int] = None) -> Any:
        return await self.client.sheet_activate(book, name, pid=pid)
