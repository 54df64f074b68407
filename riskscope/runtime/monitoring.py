"""Structured tool-call logging."""

from __future__ import annotations

import json
import logging
import time

LOGGER = logging.getLogger(__name__)


def log_tool_event(
    tool: str,
    latency_ms: float,
    success: bool,
    warning_count: int = 0,
    detail: str | None = None,
) -> None:
    payload = {
        "tool": tool,
        "latency_ms": round(latency_ms, 3),
        "success": success,
        "warning_count": warning_count,
        "timestamp": int(time.time()),
    }
    if detail:
        payload["detail"] = detail
    LOGGER.info(json.dumps(payload, ensure_ascii=True))
