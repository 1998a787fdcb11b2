"""Environment-driven settings for the MCP transports."""

from __future__ import annotations

import os
from typing import Literal


class MCPServerSettings:
    """Settings loader for the stdio and FastAPI transports."""

    def __init__(self) -> None:
        self.mcp_transport: Literal["stdio", "http"] = self._parse_transport(
            os.getenv("MCP_TRANSPORT", "stdio").strip().lower() or "stdio"
        )
        self.bind_host: str = os.getenv("MCP_BIND_HOST", "127.0.0.1").strip() or "127.0.0.1"
        self.bind_port: int = self._parse_port(os.getenv("MCP_BIND_PORT", "8765"))
        self.allowed_origins: list[str] = self._parse_origins(os.getenv("ALLOWED_ORIGINS", "*").strip())

    # ------------------------------------------------------------------
    @staticmethod
    def _parse_origins(raw: str) -> list[str]:
        if not raw:
            return ["*"]
        return [origin.strip() for origin in raw.split(",") if origin.strip()]

    @staticmethod
    def _parse_transport(value: str) -> Literal["stdio", "http"]:
        if value not in {"stdio", "http"}:
            raise ValueError("MCP_TRANSPORT must be 'stdio' or 'http'")
        return value  # type: ignore[return-value]

    @staticmethod
    def _parse_port(value: str) -> int:
        try:
            port = int(value.strip())
        except ValueError as exc:
            raise ValueError(f"MCP_BIND_PORT must be an integer, got {value!r}") from exc
        if not 0 < port < 65536:
            raise ValueError(f"MCP_BIND_PORT must be between 1 and 65535, got {port}")
        return port


mcp_settings = MCPServerSettings()
