"""
Configuration for the xlwings MCP server
"""

from .settings import LogLevel, Settings, get_settings, reload_settings

__all__ = ["LogLevel", "Settings", "get_settings", "reload_settings"]
