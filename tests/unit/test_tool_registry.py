"""Unit tests for tool metadata generation."""

import pytest

from xlwings_mcp_server.mcp_api import XlwingsToolRegistry
from xlwings_mcp_server.tools import TOOL_CLASSES, BaseTool


class DuplicateTools(BaseTool):
    def get_tool_definitions(self):
        return [self._tool("app.list", lambda: [], "Shadow of app.list", {})]


@pytest.fixture
def all_tools(mock_xlwings_client, mock_settings):
    return [tool_class(mock_xlwings_client, mock_settings) for tool_class in TOOL_CLASSES]


def test_registry_categories(all_tools):
    registry = XlwingsToolRegistry(all_tools)

    assert registry.get_tool("app.quit").category == "application"
    assert registry.get_tool("book.open").category == "workbook"
    assert registry.get_tool("sheet.rename").category == "sheet"
    assert registry.get_tool("range.clear").category == "range"
    assert registry.get_tool("excel.direct").category == "direct"


def test_schema_required_and_extras(all_tools):
    registry = XlwingsToolRegistry(all_tools)

    schema = registry.get_tool("app.set_calculation").request_schema
    assert schema["required"] == ["pid", "mode"]
    assert schema["properties"]["mode"]["enum"] == ["automatic", "manual", "semiautomatic"]

    batch = registry.get_tool("excel.batch").request_schema
    assert batch["properties"]["requests"]["items"]["required"] == ["method"]


def test_untyped_parameters_accept_any_value(all_tools):
    registry = XlwingsToolRegistry(all_tools)

    params = registry.get_tool("excel.direct").request_schema["properties"]["params"]
    assert "type" not in params


def test_handlers_are_bound_methods(all_tools):
    registry = XlwingsToolRegistry(all_tools)

    assert registry.get_handler("sheet.add").__name__ == "sheet_add"
    assert registry.get_handler("chart.add") is None
    assert registry.get_tool("chart.add") is None


def test_duplicate_names_are_rejected(all_tools, mock_xlwings_client, mock_settings):
    with pytest.raises(ValueError, match="Duplicate tool name 'app.list'"):
        XlwingsToolRegistry(all_tools + [DuplicateTools(mock_xlwings_client, mock_settings)])
