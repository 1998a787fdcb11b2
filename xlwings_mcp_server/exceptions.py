"""
Custom exceptions for the xlwings MCP server
"""

from typing import Any, Dict, Optional


class XlwingsError(Exception):
    """Base exception for all xlwings-rpc related errors"""

    kind = "error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the error for logs and tool responses"""
        return {"kind": self.kind, "message": self.message, **self.details}


class XlwingsRPCError(XlwingsError):
    """The remote method reported a JSON-RPC error object"""

    kind = "rpc"

    def __init__(self, code: int, message: str, data: Any = None):
        super().__init__(message, {"code": code, "data": data})
        self.code = code
        self.data = data

    def __str__(self) -> str:
        return f"JSON-RPC error {self.code}: {self.message}"


class XlwingsTransportError(XlwingsError):
    """The HTTP exchange failed (status code outside 2xx or network failure)"""

    kind = "transport"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message, {"status_code": status_code})
        self.status_code = status_code


class XlwingsConnectionError(XlwingsTransportError):
    """The xlwings-rpc server could not be reached"""


class XlwingsTimeoutError(XlwingsTransportError):
    """The xlwings-rpc server did not answer in time"""


class XlwingsDecodeError(XlwingsError):
    """Response body was not parseable or lacked the JSON-RPC envelope shape"""

    kind = "decode"
    EXCERPT_LIMIT = 200

    def __init__(self, message: str, body: Optional[str] = None):
        excerpt = (body or "")[: self.EXCERPT_LIMIT]
        super().__init__(message, {"excerpt": excerpt})
        self.excerpt = excerpt

    def __str__(self) -> str:
        if self.excerpt:
            return f"{self.message} (body: {self.excerpt!r})"
        return self.message


class XlwingsRequestError(XlwingsError):
    """Any other failure that prevented the call from completing"""

    kind = "request"
