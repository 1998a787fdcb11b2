"""Unit tests for the application, workbook, sheet and range tools."""

import pytest
import pytest_asyncio

from xlwings_mcp_server.exceptions import XlwingsRPCError
from xlwings_mcp_server.tools import ApplicationTools, RangeTools, SheetTools, WorkbookTools


@pytest_asyncio.fixture
async def app_tools(mock_xlwings_client, mock_settings):
    return ApplicationTools(client=mock_xlwings_client, settings=mock_settings)


@pytest_asyncio.fixture
async def book_tools(mock_xlwings_client, mock_settings):
    return WorkbookTools(client=mock_xlwings_client, settings=mock_settings)


@pytest_asyncio.fixture
async def sheet_tools(mock_xlwings_client, mock_settings):
    return SheetTools(client=mock_xlwings_client, settings=mock_settings)


@pytest_asyncio.fixture
async def range_tools(mock_xlwings_client, mock_settings):
    return RangeTools(client=mock_xlwings_client, settings=mock_settings)


@pytest.mark.asyncio
async def test_tool_names_match_remote_methods(app_tools, book_tools, sheet_tools, range_tools):
    names = [
        definition[0]
        for tools in (app_tools, book_tools, sheet_tools, range_tools)
        for definition in tools.get_tool_definitions()
    ]

    assert len(names) == 30
    assert len(set(names)) == 30
    assert {name.split(".")[0] for name in names} == {"app", "book", "sheet", "range"}


@pytest.mark.asyncio
async def test_app_create_forwards_camel_case_arguments(app_tools, mock_xlwings_client):
    mock_xlwings_client.app_create.return_value = {"pid": 4242}

    result = await app_tools.app_create({"addBook": False})

    assert result == {"pid": 4242}
    mock_xlwings_client.app_create.assert_awaited_once_with(visible=None, add_book=False)


@pytest.mark.asyncio
async def test_app_quit_forwards_save_changes(app_tools, mock_xlwings_client):
    await app_tools.app_quit({"pid": 10, "saveChanges": False})

    mock_xlwings_client.app_quit.assert_awaited_once_with(10, save_changes=False)


@pytest.mark.asyncio
async def test_app_set_calculation_rejects_unknown_mode(app_tools, mock_xlwings_client):
    with pytest.raises(ValueError, match="automatic"):
        await app_tools.app_set_calculation({"pid": 10, "mode": "sometimes"})

    mock_xlwings_client.app_set_calculation.assert_not_awaited()


@pytest.mark.asyncio
async def test_book_open_forwards_read_only(book_tools, mock_xlwings_client):
    await book_tools.book_open({"path": "C:/reports/q3.xlsx", "readOnly": True})

    mock_xlwings_client.book_open.assert_awaited_once_with(
        "C:/reports/q3.xlsx", pid=None, read_only=True, password=None
    )


@pytest.mark.asyncio
async def test_book_close_keeps_pid_zero(book_tools, mock_xlwings_client):
    await book_tools.book_close({"name": "Book1", "pid": 0, "save": True})

    mock_xlwings_client.book_close.assert_awaited_once_with("Book1", pid=0, save=True)


@pytest.mark.asyncio
async def test_sheet_rename_forwards_new_name(sheet_tools, mock_xlwings_client):
    await sheet_tools.sheet_rename({"book": "Book1", "name": "Sheet1", "newName": "Summary"})

    mock_xlwings_client.sheet_rename.assert_awaited_once_with("Book1", "Sheet1", "Summary", pid=None)


@pytest.mark.asyncio
async def test_sheet_add_with_only_book(sheet_tools, mock_xlwings_client):
    await sheet_tools.sheet_add({"book": "Book1"})

    mock_xlwings_client.sheet_add.assert_awaited_once_with(
        "Book1", name=None, before=None, after=None, pid=None
    )


@pytest.mark.asyncio
async def test_range_set_value_passes_2d_values(range_tools, mock_xlwings_client):
    values = [["Name", "Score"], ["Ada", 99], ["Bob", None]]

    await range_tools.range_set_value(
        {"book": "Book1", "sheet": "Sheet1", "address": "A1:B3", "value": values}
    )

    mock_xlwings_client.range_set_value.assert_awaited_once_with(
        "Book1", "Sheet1", "A1:B3", values, pid=None
    )


@pytest.mark.asyncio
async def test_range_get_as_dataframe_options(range_tools, mock_xlwings_client):
    await range_tools.range_get_as_dataframe(
        {"book": "Book1", "sheet": "Sheet1", "address": "A1:C10", "header": False}
    )

    mock_xlwings_client.range_get_as_dataframe.assert_awaited_once_with(
        "Book1", "Sheet1", "A1:C10", header=False, index=None, pid=None
    )


@pytest.mark.asyncio
async def test_remote_errors_propagate(range_tools, mock_xlwings_client):
    mock_xlwings_client.range_get_value.side_effect = XlwingsRPCError(-32000, "Sheet not found")

    with pytest.raises(XlwingsRPCError):
        await range_tools.range_get_value({"book": "Book1", "sheet": "Missing", "address": "A1"})
