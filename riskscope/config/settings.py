"""Environment-driven settings."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_MAX_CSV_BYTES = 5 * 1024 * 1024


@dataclass(frozen=True)
class Settings:
    """Runtime settings for local/stdio and HTTP-hosted modes."""

    app_name: str = "riskscope"
    app_version: str = "1.0.0"
    transport_mode: str = "auto"
    http_transport: str = "sse"
    host: str = "0.0.0.0"
    port: int = 8000
    mcp_path: str = "/mcp"
    health_path: str = "/health"
    log_level: str = "INFO"
    max_csv_bytes: int = DEFAULT_MAX_CSV_BYTES
    include_extended_data: bool = True


def _as_int(value: str | None, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _as_bool(value: str | None, default: bool) -> bool:
    if value is None or value == "":
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _as_log_level(value: str | None, default: str) -> str:
    level = (value or "").strip().upper()
    return level if level in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} else default


def get_settings() -> Settings:
    """Load runtime settings from environment variables."""
    load_dotenv()

    max_csv_bytes = _as_int(os.getenv("MAX_CSV_BYTES"), DEFAULT_MAX_CSV_BYTES)
    return Settings(
        app_name=os.getenv("APP_NAME", "riskscope"),
        transport_mode=os.getenv("TRANSPORT_MODE", "auto").strip().lower(),
        http_transport=os.getenv("HTTP_TRANSPORT", "sse").strip().lower(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_as_int(os.getenv("PORT"), 8000),
        mcp_path=os.getenv("MCP_PATH", "/mcp"),
        health_path=os.getenv("HEALTH_PATH", "/health"),
        log_level=_as_log_level(os.getenv("LOG_LEVEL"), "INFO"),
        max_csv_bytes=max_csv_bytes if max_csv_bytes > 0 else DEFAULT_MAX_CSV_BYTES,
        include_extended_data=_as_bool(os.getenv("INCLUDE_EXTENDED_DATA"), True),
    )
