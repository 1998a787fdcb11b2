"""
MCP tools backed by the xlwings-rpc client
"""

from .application import ApplicationTools
from .base import BaseTool, tool_handler
from .direct import DirectTools
from .ranges import RangeTools
from .sheet import SheetTools
from .workbook import WorkbookTools

TOOL_CLASSES = [ApplicationTools, WorkbookTools, SheetTools, RangeTools, DirectTools]

__all__ = [
    "ApplicationTools",
    "BaseTool",
    "DirectTools",
    "RangeTools",
    "SheetTools",
    "TOOL_CLASSES",
    "WorkbookTools",
    "tool_handler",
]
