"""
Workbook tools
"""

from typing import Any, List, Optional

from .base import PID_PARAM, BaseTool, ToolDefinition, tool_handler

BOOK_NAME_PARAM = {"type": "string", "required": True, "description": "Workbook name (e.g. 'Book1.xlsx')"}


class WorkbookTools(BaseTool):
    """Tools for opening, creating, saving and closing workbooks"""

    def get_tool_definitions(self) -> List[ToolDefinition]:
        return [
            self._tool(
                "book.list",
                self.book_list,
                "List all open workbooks",
                {"pid": PID_PARAM}
            ),
            self._tool(
                "book.get",
                self.book_get,
                "Get a workbook by name",
                {"name": BOOK_NAME_PARAM, "pid": PID_PARAM}
            ),
            self._tool(
                "book.open",
                self.book_open,
                "Open a workbook from a file path",
                {
                    "path": {"type": "string", "required": True, "description": "Path of the workbook file"},
                    "pid": PID_PARAM,
                    "readOnly": {"type": "boolean", "required": False, "description": "Open read-only"},
                    "password": {"type": "string", "required": False, "description": "Workbook password"}
                }
            ),
            self._tool(
                "book.create",
                self.book_create,
                "Create a new workbook",
                {"pid": PID_PARAM}
            ),
            self._tool(
                "book.close",
                self.book_close,
                "Close a workbook",
                {
                    "name": BOOK_NAME_PARAM,
                    "pid": PID_PARAM,
                    "save": {
                        "type": "boolean",
                        "required": False,
                        "description": "Save before closing (default: true)"
                    }
                }
            ),
            self._tool(
                "book.save",
                self.book_save,
                "Save a workbook, optionally to a new path",
                {
                    "name": BOOK_NAME_PARAM,
                    "pid": PID_PARAM,
                    "path": {"type": "string", "required": False, "description": "Target path (save as)"}
                }
            ),
            self._tool(
                "book.get_sheets",
                self.book_get_sheets,
                "List the sheets of a workbook",
                {"name": BOOK_NAME_PARAM, "pid": PID_PARAM}
            ),
        ]

    @tool_handler
    async def book_list(self, pid: Optional[int] = None) -> Any:
        return await self.client.book_list(pid)

    @tool_handler
    async def book_get(self, name: str, pid: Optional[int] = None) -> Any:
        return await self.client.book_get(name, pid=pid)

    @tool_handler
    async def book_open(
        self,
        path: str,
        pid: Optional[int] = None,
        read_only: Optional[bool] = None,
        password: Optional[str] = None,
    ) -> Any:
        return await self.client.book_open(path, pid=pid, read_only=read_only, password=password)

    @tool_handler
    async def book_create(self, pid: Optional[int] = None) -> Any:
        return await self.client.book_create(pid)

    @tool_handler
    async def book_close(self, name: str, pid: Optional[int] = None, save: Optional[bool] = None) -> Any:
        return await self.client.book_close(name, pid=pid, save=save)

    @tool_handler
    async def book_save(self, name: str, pid: Optional[int] = None, path: Optional[str] = None) -> Any:
        return await self.client.book_save(name, pid=pid, path=path)

    @tool_handler
    async def book_get_sheets(self, name: str, pid: Optional[int] = None) -> Any:
        return await self.client.book_get_sheets(name, pid=pid)
