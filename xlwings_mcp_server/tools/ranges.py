"""
Cell range tools
"""

from typing import Any, Dict, List, Optional

from .base import PID_PARAM, BaseTool, ToolDefinition, tool_handler


def _range_params(**extra: Dict[str, Any]) -> Dict[str, Any]:
    params = {
        "book": {"type": "string", "required": True, "description": "Workbook name"},
        "sheet": {"type": "string", "required": True, "description": "Sheet name"},
        "address": {"type": "string", "required": True, "description": "Range address (e.g. 'A1:B10')"},
    }
    params.update(extra)
    params["pid"] = PID_PARAM
    return params


DATAFRAME_OPTIONS = {
    "header": {"type": "boolean", "required": False, "description": "Include a header row (default: true)"},
    "index": {"type": "boolean", "required": False, "description": "Include the index column (default: false)"},
}


class RangeTools(BaseTool):
    """Tools for reading and writing cell ranges"""

    def get_tool_definitions(self) -> List[ToolDefinition]:
        return [
            self._tool("range.get", self.range_get, "Get information about a cell range", _range_params()),
            self._tool("range.get_value", self.range_get_value, "Get the values of a cell range", _range_params()),
            self._tool(
                "range.set_value",
                self.range_set_value,
                "Set the values of a cell range",
                _range_params(value={
                    "required": True,
                    "description": "A single value or a 2D list of values"
                })
            ),
            self._tool("range.get_formula", self.range_get_formula, "Get the formulas of a cell range", _range_params()),
            self._tool(
                "range.set_formula",
                self.range_set_formula,
                "Set the formulas of a cell range",
                _range_params(formula={
                    "required": True,
                    "description": "A single formula or a 2D list of formulas"
                })
            ),
            self._tool("range.clear", self.range_clear, "Clear a cell range", _range_params()),
            self._tool(
                "range.get_as_dataframe",
                self.range_get_as_dataframe,
                "Read a cell range as a pandas DataFrame",
                _range_params(**DATAFRAME_OPTIONS)
            ),
            self._tool(
                "range.set_dataframe",
                self.range_set_dataframe,
                "Write a pandas DataFrame (as JSON) to a cell range",
                _range_params(
                    dataframe={"required": True, "description": "DataFrame data as produced by range.get_as_dataframe"},
                    **DATAFRAME_OPTIONS
                )
            ),
        ]

    @tool_handler
    async def range_get(self, book: str, sheet: str, address: str, pid: Optional[int] = None) -> Any:
        return await self.client.range_get(book, sheet, address, pid=pid)

    @tool_handler
    async def range_get_value(self, book: str, sheet: str, address: str, pid: Optional[int] = None) -> Any:
        return await self.client.range_get_value(book, sheet, address, pid=pid)

    @tool_handler
    async def range_set_value(
        self, book: str, sheet: str, address: str, value: Any, pid: Optional[int] = None
    ) -> Any:
        return await self.client.range_set_value(book, sheet, address, value, pid=pid)

    @tool_handler
    async def range_get_formula(self, book: str, sheet: str, address: str, pid: Optional[int] = None) -> Any:
        return await self.client.range_get_formula(book, sheet, address, pid=pid)

    @tool_handler
    async def range_set_formula(
        self, book: str, sheet: str, address: str, formula: Any, pid: Optional[int] = None
    ) -> Any:
        return await self.client.range_set_formula(book, sheet, address, formula, pid=pid)

    @tool_handler
    async def range_clear(self, book: str, sheet: str, address: str, pid: Optional[int] = None) -> Any:
        return await self.client.range_clear(book, sheet, address, pid=pid)

    @tool_handler
    async def range_get_as_dataframe(
        self,
        book: str,
        sheet: str,
        address: str,
        header: Optional[bool] = None,
        index: Optional[bool] = None,
        pid: Optional[int] = None,
    ) -> Any:
        return await self.client.range_get_as_dataframe(
            book, sheet, address, header=header, index=index, pid=pid
        )

    @tool_handler
    async def range_set_dataframe(
        self,
        book: str,
        sheet: str,
        address: str,
        dataframe: Any,
        header: Optional[bool] = None,
        index: Optional[bool] = None,
        pid: Optional[int] = None,
    ) -> Any:
        return await self.client.range_set_dataframe(
            book, sheet, address, dataframe, header=header, index=index, pid=pid
        )
