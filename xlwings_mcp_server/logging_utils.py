"""Logging setup shared by the transports."""

import logging
import sys
from typing import Optional, Union

from .config import LogLevel, get_settings


def configure_logging(level: Optional[Union[LogLevel, str]] = None) -> None:
    """Configure root logging on stderr; stdout belongs to the stdio transport.

    ``level`` defaults to ``XLWINGS_LOG_LEVEL`` from the settings.
    """

    if level is None:
        level = get_settings().log_level
    name = level.value if isinstance(level, LogLevel) else str(level).upper()
    numeric = getattr(logging, name, logging.INFO)

    logging.basicConfig(
        level=numeric,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    # basicConfig leaves an already configured root logger alone
    logging.getLogger().setLevel(numeric)
