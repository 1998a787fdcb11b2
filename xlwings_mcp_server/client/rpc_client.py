"""
JSON-RPC 2.0 client for the xlwings-rpc server
"""

import json
import logging
import uuid
from typing import Any, Dict, List, Literal, Mapping, Optional, Sequence

import httpx
from httpx import ConnectError, HTTPError, Response, TimeoutException

from ..config import Settings, get_settings
from ..exceptions import (
    XlwingsConnectionError,
    XlwingsDecodeError,
    XlwingsError,
    XlwingsRequestError,
    XlwingsRPCError,
    XlwingsTimeoutError,
    XlwingsTransportError,
)
from . import lenient_json

JSONRPC_VERSION = "2.0"
INTERNAL_ERROR = -32603

CalculationMode = Literal["automatic", "manual", "semiautomatic"]


def build_request(method: str, params: Any, request_id: Any) -> Dict[str, Any]:
    """Build a JSON-RPC 2.0 request object, omitting params when absent"""
    request: Dict[str, Any] = {"jsonrpc": JSONRPC_VERSION, "method": method}
    if params is not None:
        request["params"] = params
    request["id"] = request_id
    return request


def _params(**kwargs: Any) -> Dict[str, Any]:
    """Drop optional arguments that were not supplied"""
    return {key: value for key, value in kwargs.items() if value is not None}


class XlwingsRpcClient:
    """
    HTTP client for the xlwings-rpc JSON-RPC endpoint

    The target URL is resolved once at construction: explicit host/port,
    then XLWINGS_HOST/XLWINGS_PORT, then 0.0.0.0:8000.
    """

    def __init__(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the xlwings-rpc client

        Args:
            host: Server host (falls back to settings)
            port: Server port (falls back to settings)
            settings: Optional Settings instance (uses get_settings() if not provided)
            transport: Optional httpx transport, mainly for tests
            logger: Optional logger for request/response traces
        """
        self.settings = settings or get_settings()
        self.host = host or self.settings.xlwings_host
        self.port = port or self.settings.xlwings_port
        self.url = f"http://{self.host}:{self.port}/rpc"
        self.health_url = f"http://{self.host}:{self.port}/health"
        self.logger = logger or logging.getLogger(__name__)
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._request_count = 0
        self._error_count = 0

    async def __aenter__(self):
        """Async context manager entry"""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()

    async def connect(self):
        """Initialize the HTTP client"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers=self.settings.headers,
                timeout=httpx.Timeout(self.settings.http_timeout),
                transport=self._transport,
            )
            self.logger.info(f"Using xlwings-rpc server at {self.url}")

    async def close(self):
        """Close the HTTP client"""
        if self._client:
            client = self._client
            if not client.is_closed:
                await client.aclose()
            self._client = None
            self.logger.info("Closed xlwings-rpc client")

    async def ensure_connected(self):
        """Ensure the client is connected"""
        if self._client is None or self._client.is_closed:
            await self.connect()

    def _log_request(self, body: str):
        """Log outgoing request"""
        self._request_count += 1
        self.logger.debug(f"Request #{self._request_count}: POST {self.url}")
        self.logger.debug(f"Request body: {body}")

    def _log_response(self, response: Response):
        """Log incoming response"""
        self.logger.debug(f"Response: {response.status_code}")
        self.logger.debug(f"Response body: {response.text}")

    def _handle_error_response(self, response: Response):
        """Reject non-2xx responses without looking at the body"""
        self._error_count += 1
        raise XlwingsTransportError(
            f"HTTP error! status: {response.status_code}",
            status_code=response.status_code,
        )

    async def _post(self, body: str) -> Response:
        """POST a serialized JSON-RPC payload to the rpc endpoint"""
        await self.ensure_connected()
        self._log_request(body)
        try:
            response = await self._client.post(
                self.url,
                content=body.encode("utf-8"),
                headers={"Content-Type": "application/json"},
            )
        except TimeoutException as e:
            self._error_count += 1
            raise XlwingsTimeoutError(f"Request to {self.url} timed out: {e}") from e
        except ConnectError as e:
            self._error_count += 1
            raise XlwingsConnectionError(f"Could not connect to {self.url}: {e}") from e
        except HTTPError as e:
            self._error_count += 1
            raise XlwingsTransportError(f"HTTP request to {self.url} failed: {e}") from e

        self._log_response(response)
        if not response.is_success:
            self._handle_error_response(response)
        return response

    def _decode(self, response: Response) -> Any:
        return lenient_json.loads(response.text, lenient=self.settings.lenient_decoding)

    def _raise_for_error(self, envelope: Mapping[str, Any]):
        """Raise XlwingsRPCError when the envelope carries an error object"""
        error = envelope.get("error")
        if error is None:
            return
        self._error_count += 1
        if isinstance(error, Mapping):
            raise XlwingsRPCError(
                error.get("code", INTERNAL_ERROR),
                error.get("message", "Unknown JSON-RPC error"),
                error.get("data"),
            )
        raise XlwingsRPCError(INTERNAL_ERROR, str(error))

    async def call(self, method: str, params: Any = None) -> Any:
        """
        Send a single JSON-RPC request

        Args:
            method: Remote method name
            params: Optional JSON-serializable parameters

        Returns:
            The ``result`` member of the response

        Raises:
            XlwingsRPCError: The remote method reported an error
            XlwingsTransportError: Non-2xx status or network failure
            XlwingsDecodeError: Body was not a JSON-RPC response object
            XlwingsRequestError: Any other failure
        """
        if not method:
            raise ValueError("method must be a non-empty string")

        request_id = str(uuid.uuid4())
        try:
            body = json.dumps(build_request(method, params, request_id))
            response = await self._post(body)
            data = self._decode(response)

            if not isinstance(data, dict):
                raise XlwingsDecodeError("Expected a JSON-RPC response object", response.text)
            self._raise_for_error(data)
            if data.get("id") is not None and data["id"] != request_id:
                raise XlwingsDecodeError(
                    f"Response id {data['id']!r} does not match request id {request_id!r}",
                    response.text,
                )
            return data.get("result")
        except XlwingsError:
            raise
        except Exception as e:
            self._error_count += 1
            raise XlwingsRequestError(f"Request failed: {e}") from e

    async def call_batch(self, requests: Sequence[Mapping[str, Any]]) -> List[Any]:
        """
        Send several JSON-RPC requests in one HTTP exchange

        Args:
            requests: Ordered ``{"method": ..., "params": ...}`` mappings or
                ``(method, params)`` pairs

        Returns:
            One result per request, in request order

        Raises:
            XlwingsRPCError: Any element of the response carried an error
                (the first one in response order is raised, no partial results)
        """
        if not requests:
            return []

        payload = []
        for index, entry in enumerate(requests, start=1):
            if isinstance(entry, Mapping):
                method, params = entry.get("method"), entry.get("params")
            elif isinstance(entry, (tuple, list)) and len(entry) == 2:
                method, params = entry
            else:
                method, params = None, None
            if not method:
                raise ValueError(f"Batch entry {index} needs a non-empty method")
            payload.append(build_request(method, params, index))

        try:
            body = json.dumps(payload)
            response = await self._post(body)
            data = self._decode(response)

            if not isinstance(data, list):
                raise XlwingsDecodeError("Expected a JSON array of JSON-RPC responses", response.text)
            for item in data:
                if not isinstance(item, dict):
                    raise XlwingsDecodeError("Batch response element is not an object", response.text)
                self._raise_for_error(item)

            expected = list(range(1, len(payload) + 1))
            ids = [item.get("id") for item in data]
            if not all(isinstance(i, int) for i in ids) or sorted(ids) != expected:
                raise XlwingsDecodeError(
                    f"Batch response ids {ids} do not match request ids 1..{len(payload)}",
                    response.text,
                )
            return [item.get("result") for item in sorted(data, key=lambda item: item["id"])]
        except XlwingsError:
            raise
        except Exception as e:
            self._error_count += 1
            raise XlwingsRequestError(f"Batch request failed: {e}") from e

    async def health_check(self) -> Dict[str, Any]:
        """
        Probe the sibling /health endpoint

        Returns:
            Dictionary with ``healthy``, ``status_code``, ``body`` and, on
            failure, ``error``. Network failures are reported, never raised.
        """
        await self.ensure_connected()
        try:
            response = await self._client.get(self.health_url)
        except HTTPError as e:
            self.logger.warning(f"Health check against {self.health_url} failed: {e!r}")
            return {
                "healthy": False,
                "status_code": None,
                "body": "",
                "error": f"{type(e).__name__}: {e}",
            }

        result = {
            "healthy": response.is_success,
            "status_code": response.status_code,
            "body": response.text,
        }
        if not response.is_success:
            result["error"] = f"HTTP {response.status_code}"
        return result

    def get_stats(self) -> Dict[str, Any]:
        """Get client statistics"""
        return {
            "requests": self._request_count,
            "errors": self._error_count,
            "error_rate": self._error_count / max(self._request_count, 1)
        }

    # ------------- Application -------------

    async def app_list(self) -> Any:
        """List all running Excel applications"""
        return await self.call("app.list")

    async def app_get(self, pid: Optional[int] = None) -> Any:
        """Get the application with the given PID, or the active one"""
        return await self.call("app.get", _params(pid=pid) or None)

    async def app_create(self, visible: Optional[bool] = None, add_book: Optional[bool] = None) -> Any:
        """Start a new Excel application"""
        return await self.call("app.create", _params(visible=visible, add_book=add_book))

    async def app_quit(self, pid: int, save_changes: Optional[bool] = None) -> Any:
        return await self.call("app.quit", {"pid": pid, **_params(save_changes=save_changes)})

    async def app_set_calculation(self, pid: int, mode: CalculationMode) -> Any:
        return await self.call("app.set_calculation", {"pid": pid, "mode": mode})

    async def app_get_calculation(self, pid: int) -> Any:
        return await self.call("app.get_calculation", {"pid": pid})

    async def app_get_books(self, pid: int) -> Any:
        return await self.call("app.get_books", {"pid": pid})

    # ------------- Workbook -------------

    async def book_list(self, pid: Optional[int] = None) -> Any:
        """List open workbooks, optionally for a single application"""
        return await self.call("book.list", _params(pid=pid) or None)

    async def book_get(self, name: str, pid: Optional[int] = None) -> Any:
        return await self.call("book.get", {"name": name, **_params(pid=pid)})

    async def book_open(
        self,
        path: str,
        pid: Optional[int] = None,
        read_only: Optional[bool] = None,
        password: Optional[str] = None,
    ) -> Any:
        """Open a workbook from disk"""
        return await self.call(
            "book.open",
            {"path": path, **_params(pid=pid, read_only=read_only, password=password)},
        )

    async def book_create(self, pid: Optional[int] = None) -> Any:
        return await self.call("book.create", _params(pid=pid) or None)

    async def book_close(self, name: str, pid: Optional[int] = None, save: Optional[bool] = None) -> Any:
        return await self.call("book.close", {"name": name, **_params(pid=pid, save=save)})

    async def book_save(self, name: str, pid: Optional[int] = None, path: Optional[str] = None) -> Any:
        return await self.call("book.save", {"name": name, **_params(pid=pid, path=path)})

    async def book_get_sheets(self, name: str, pid: Optional[int] = None) -> Any:
        return await self.call("book.get_sheets", {"name": name, **_params(pid=pid)})

    # ------------- Sheet -------------

    async def sheet_list(self, book: str, pid: Optional[int] = None) -> Any:
        return await self.call("sheet.list", {"book": book, **_params(pid=pid)})

    async def sheet_get(self, book: str, name: str, pid: Optional[int] = None) -> Any:
        return await self.call("sheet.get", {"book": book, "name": name, **_params(pid=pid)})

    async def sheet_add(
        self,
        book: str,
        name: Optional[str] = None,
        before: Optional[str] = None,
        after: Optional[str] = None,
        pid: Optional[int] = None,
    ) -> Any:
        """Add a sheet, optionally positioned before or after an existing one"""
        return await self.call(
            "sheet.add",
            {"book": book, **_params(name=name, before=before, after=after, pid=pid)},
        )

    async def sheet_delete(self, book: str, name: str, pid: Optional[int] = None) -> Any:
        return await self.call("sheet.delete", {"book": book, "name": name, **_params(pid=pid)})

    async def sheet_rename(self, book: str, name: str, new_name: str, pid: Optional[int] = None) -> Any:
        return await self.call(
            "sheet.rename",
            {"book": book, "name": name, "new_name": new_name, **_params(pid=pid)},
        )

    async def sheet_clear(self, book: str, name: str, pid: Optional[int] = None) -> Any:
        return await self.call("sheet.clear", {"book": book, "name": name, **_params(pid=pid)})

    async def sheet_get_used_range(self, book: str, name: str, pid: Optional[int] = None) -> Any:
        return await self.call("sheet.get_used_range", {"book": book, "name": name, **_params(pid=pid)})

    async def sheet_activate(self, book: str, name: str, pid: Optional[int] = None) -> Any:
        return await self.call("sheet.activate", {"book": book, "name": name, **_params(pid=pid)})

    # ------------- Range -------------

    async def range_get(self, book: str, sheet: str, address: str, pid: Optional[int] = None) -> Any:
        return await self.call("range.get", {"book": book, "sheet": sheet, "address": address, **_params(pid=pid)})

    async def range_get_value(self, book: str, sheet: str, address: str, pid: Optional[int] = None) -> Any:
        return await self.call(
            "range.get_value",
            {"book": book, "sheet": sheet, "address": address, **_params(pid=pid)},
        )

    async def range_set_value(
        self, book: str, sheet: str, address: str, value: Any, pid: Optional[int] = None
    ) -> Any:
        """Write a single value or a 2D list of values; ``None`` clears the cells"""
        return await self.call(
            "range.set_value",
            {"book": book, "sheet": sheet, "address": address, "value": value, **_params(pid=pid)},
        )

    async def range_get_formula(self, book: str, sheet: str, address: str, pid: Optional[int] = None) -> Any:
        return await self.call(
            "range.get_formula",
            {"book": book, "sheet": sheet, "address": address, **_params(pid=pid)},
        )

    async def range_set_formula(
        self, book: str, sheet: str, address: str, formula: Any, pid: Optional[int] = None
    ) -> Any:
        return await self.call(
            "range.set_formula",
            {"book": book, "sheet": sheet, "address": address, "formula": formula, **_params(pid=pid)},
        )

    async def range_clear(self, book: str, sheet: str, address: str, pid: Optional[int] = None) -> Any:
        return await self.call(
            "range.clear",
            {"book": book, "sheet": sheet, "address": address, **_params(pid=pid)},
        )

    async def range_get_as_dataframe(
        self,
        book: str,
        sheet: str,
        address: str,
        header: Optional[bool] = None,
        index: Optional[bool] = None,
        pid: Optional[int] = None,
    ) -> Any:
        """Read a range as a pandas DataFrame serialized by the server"""
        return await self.call(
            "range.get_as_dataframe",
            {"book": book, "sheet": sheet, "address": address, **_params(header=header, index=index, pid=pid)},
        )

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
        return await self.call(
            "range.set_dataframe",
            {
                "book": book,
                "sheet": sheet,
                "address": address,
                "dataframe": dataframe,
                **_params(header=header, index=index, pid=pid),
            },
        )
