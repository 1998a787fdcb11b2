"""Unit tests for the passthrough and health check tools."""

import pytest
import pytest_asyncio

from xlwings_mcp_server.exceptions import XlwingsConnectionError, XlwingsTransportError
from xlwings_mcp_server.tools import DirectTools
from xlwings_mcp_server.tools.base import TextResult


@pytest_asyncio.fixture
async def direct_tools(mock_xlwings_client, mock_settings):
    return DirectTools(client=mock_xlwings_client, settings=mock_settings)


@pytest.mark.asyncio
async def test_excel_direct_passes_params_unchanged(direct_tools, mock_xlwings_client):
    params = {"book": "Book1", "sheet": "Sheet1", "address": "A1", "extraOption": True}
    mock_xlwings_client.call.return_value = 42

    result = await direct_tools.excel_direct({"method": "range.get_value", "params": params})

    assert result == 42
    mock_xlwings_client.call.assert_awaited_once_with("range.get_value", params)


@pytest.mark.asyncio
async def test_excel_batch_returns_results_in_order(direct_tools, mock_xlwings_client):
    requests = [{"method": "app.list"}, {"method": "book.list", "params": {"pid": 1}}]
    mock_xlwings_client.call_batch.return_value = [[], ["Book1"]]

    result = await direct_tools.excel_batch({"requests": requests})

    assert result == [[], ["Book1"]]
    mock_xlwings_client.call_batch.assert_awaited_once_with(requests)


@pytest.mark.asyncio
async def test_health_check_ok(direct_tools, mock_xlwings_client):
    mock_xlwings_client.health_check.return_value = {"healthy": True, "status_code": 200, "body": "ok"}

    result = await direct_tools.health_check({})

    assert isinstance(result, TextResult)
    assert result == "xlwings-rpc server status: OK\nResponse: ok"


@pytest.mark.asyncio
async def test_health_check_unreachable(direct_tools, mock_xlwings_client):
    mock_xlwings_client.health_check.return_value = {
        "healthy": False,
        "status_code": None,
        "body": "",
        "error": "ConnectError: Connection refused",
    }

    with pytest.raises(XlwingsConnectionError, match="Failed to connect"):
        await direct_tools.health_check({})


@pytest.mark.asyncio
async def test_health_check_bad_status(direct_tools, mock_xlwings_client):
    mock_xlwings_client.health_check.return_value = {
        "healthy": False,
        "status_code": 503,
        "body": "starting",
        "error": "HTTP 503",
    }

    with pytest.raises(XlwingsTransportError) as exc_info:
        await direct_tools.health_check({})

    assert exc_info.value.status_code == 503
