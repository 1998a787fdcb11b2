"""Command line entry point: ``python -m xlwings_mcp_server``."""

import argparse
import asyncio
import logging
import sys

from . import __version__
from .logging_utils import configure_logging

logger = logging.getLogger("xlwings_mcp_server")


def main(argv=None) -> None:
    from .mcp_api.settings import mcp_settings

    parser = argparse.ArgumentParser(description="xlwings MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default=mcp_settings.mcp_transport,
        help="MCP transport (default: MCP_TRANSPORT or stdio)",
    )
    parser.add_argument("--host", default=mcp_settings.bind_host, help="Bind host for HTTP mode")
    parser.add_argument("--port", type=int, default=mcp_settings.bind_port, help="Bind port for HTTP mode")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)

    configure_logging()

    if args.transport == "http":
        import uvicorn

        logger.info("Starting in HTTP mode on %s:%s/mcp", args.host, args.port)
        uvicorn.run("xlwings_mcp_server.http_server:app", host=args.host, port=args.port)
        return

    from .stdio_server import run_stdio

    try:
        asyncio.run(run_stdio())
    except KeyboardInterrupt:
        logger.info("Interrupted")
    except Exception:
        logger.exception("Fatal error in stdio transport")
        sys.exit(1)


if __name__ == "__main__":
    main()
