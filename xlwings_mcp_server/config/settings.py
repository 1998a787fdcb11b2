"""
Settings configuration using Pydantic for validation
"""

from functools import lru_cache
from typing import Dict
from enum import Enum
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8000


class LogLevel(str, Enum):
    """Logging level enumeration"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """
    Application settings with validation

    Settings are loaded from environment variables with the XLWINGS_ prefix
    """

    # xlwings-rpc Connection Settings
    xlwings_host: str = Field(
        default=DEFAULT_HOST,
        description="Host of the xlwings-rpc server",
        validation_alias="XLWINGS_HOST"
    )

    xlwings_port: int = Field(
        default=DEFAULT_PORT,
        description="Port of the xlwings-rpc server",
        validation_alias="XLWINGS_PORT"
    )

    # Application Settings
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level",
        validation_alias="XLWINGS_LOG_LEVEL"
    )

    # HTTP Client Settings
    http_timeout: float = Field(
        default=60.0,
        description="HTTP request timeout in seconds",
        validation_alias="XLWINGS_HTTP_TIMEOUT"
    )

    lenient_decoding: bool = Field(
        default=True,
        description="Normalize non-standard JSON (Python literals, wrapper calls) in responses",
        validation_alias="XLWINGS_LENIENT_DECODING"
    )

    @field_validator("xlwings_host", mode="before")
    def normalize_host(cls, value):
        """Fall back to the default host for blank values"""
        if value is None or not str(value).strip():
            return DEFAULT_HOST
        return str(value).strip()

    @field_validator("xlwings_port", mode="before")
    def normalize_port(cls, value):
        """Fall back to the default port for blank values"""
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_PORT
        return value

    @field_validator("xlwings_port")
    def validate_port(cls, value):
        if not 0 < value < 65536:
            raise ValueError(f"XLWINGS_PORT must be between 1 and 65535, got {value}")
        return value

    @field_validator("log_level", mode="before")
    def normalize_log_level(cls, value):
        """Accept lower-case level names"""
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("lenient_decoding", mode="before")
    def normalize_lenient_decoding(cls, value):
        """Support string env values like 'false' or '0'."""
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in {"0", "false", "off", "no"}:
                return False
            if lowered in {"1", "true", "on", "yes"}:
                return True
        return value

    @property
    def headers(self) -> Dict[str, str]:
        """Get HTTP headers for xlwings-rpc requests"""
        return {
            "Content-Type": "application/json",
            "User-Agent": f"xlwings-MCP-Server/{self.get_version()}"
        }

    def get_version(self) -> str:
        """Get the package version"""
        from .. import __version__
        return __version__

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
        "use_enum_values": False,
        "populate_by_name": True
    }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance

    Returns a singleton Settings instance that's cached for the application lifetime
    """
    return Settings()


def reload_settings() -> Settings:
    """
    Force reload settings (useful for testing)

    Clears the cache and returns a new Settings instance
    """
    get_settings.cache_clear()
    return get_settings()
