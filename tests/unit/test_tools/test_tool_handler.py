"""Unit tests for the shared tool plumbing."""

import pytest

from xlwings_mcp_server.tools.base import BaseTool, TextResult, to_snake_case, tool_handler


class EchoTools(BaseTool):
    @tool_handler
    async def echo(self, **kwargs):
        return kwargs

    @tool_handler
    async def fail(self):
        raise RuntimeError("boom")


@pytest.mark.parametrize(
    "name, expected",
    [
        ("addBook", "add_book"),
        ("saveChanges", "save_changes"),
        ("readOnly", "read_only"),
        ("newName", "new_name"),
        ("pid", "pid"),
        ("already_snake", "already_snake"),
    ],
)
def test_to_snake_case(name, expected):
    assert to_snake_case(name) == expected


@pytest.mark.asyncio
async def test_handler_accepts_mapping_and_converts_names(mock_xlwings_client, mock_settings):
    tools = EchoTools(mock_xlwings_client, mock_settings)

    result = await tools.echo({"addBook": False, "visible": None})

    assert result == {"add_book": False, "visible": None}


@pytest.mark.asyncio
async def test_handler_accepts_keyword_arguments(mock_xlwings_client, mock_settings):
    tools = EchoTools(mock_xlwings_client, mock_settings)

    assert await tools.echo(readOnly=True) == {"read_only": True}


@pytest.mark.asyncio
async def test_handler_rejects_positional_values(mock_xlwings_client, mock_settings):
    tools = EchoTools(mock_xlwings_client, mock_settings)

    with pytest.raises(TypeError):
        await tools.echo("Book1", "Sheet1")


@pytest.mark.asyncio
async def test_handler_reraises_failures(mock_xlwings_client, mock_settings, caplog):
    tools = EchoTools(mock_xlwings_client, mock_settings)

    with pytest.raises(RuntimeError, match="boom"):
        await tools.fail()

    assert "fail failed: boom" in caplog.text


def test_base_tool_requires_definitions(mock_xlwings_client, mock_settings):
    with pytest.raises(NotImplementedError):
        BaseTool(mock_xlwings_client, mock_settings).get_tool_definitions()


def test_text_result_is_a_string():
    assert TextResult("ok") == "ok"
    assert isinstance(TextResult("ok"), str)
