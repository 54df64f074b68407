"""Portfolio-domain MCP tools."""

from __future__ import annotations

import json
import time
from typing import TYPE_CHECKING, Any, Callable

from mcp.server.fastmcp import FastMCP

from riskscope.runtime.monitoring import log_tool_event

if TYPE_CHECKING:
    from riskscope.tools.registry import ToolServices


def _run_tool(tool: str, call: Callable[[], dict[str, Any]]) -> str:
    started = time.perf_counter()
    payload = call()
    latency_ms = (time.perf_counter() - started) * 1000.0
    log_tool_event(
        tool=tool,
        latency_ms=latency_ms,
        success=payload.get("ok", True) is not False,
        warning_count=len(payload.get("warnings") or []),
    )
    return json.dumps(payload, ensure_ascii=True)


def _decode_positions(positions_json: str) -> list[Any] | None:
    try:
        decoded = json.loads(positions_json)
    except (TypeError, ValueError):
        return None
    if isinstance(decoded, dict):
        decoded = decoded.get("positions") or decoded.get("holdings")
    return decoded if isinstance(decoded, list) else None


def register_portfolio_tools(mcp: FastMCP, services: ToolServices) -> None:
    @mcp.tool(description="List supported brokerage CSV export formats.")
    def list_csv_formats() -> str:
        return _run_tool("list_csv_formats", services.analysis.list_formats)

    @mcp.tool(description="Parse a brokerage holdings CSV export into normalized holdings JSON.")
    def parse_portfolio_csv(content: str, format: str = "", include_extended_data: bool = True) -> str:
        return _run_tool(
            "parse_portfolio_csv",
            lambda: services.analysis.parse_csv(content, format or None, include_extended_data),
        )

    @mcp.tool(
        description=(
            "Run risk factor alerts and archetype classification for positions JSON "
            "(list of {ticker, shares, price?, value?, name?, sector?, industry?})."
        )
    )
    def analyze_portfolio_risk(positions_json: str) -> str:
        positions = _decode_positions(positions_json)
        if positions is None:
            return _run_tool(
                "analyze_portfolio_risk",
                lambda: {
                    "ok": False,
                    "error": {
                        "type": "validation_error",
                        "errors": [{"field": "positions_json", "message": "Expected a JSON list of positions."}],
                    },
                },
            )
        return _run_tool("analyze_portfolio_risk", lambda: services.analysis.analyze_positions(positions))

    @mcp.tool(description="Classify portfolio aggregate metrics against reference archetypes.")
    def classify_portfolio_metrics(
        sector_concentration: float,
        top_holding_weight: float,
        num_holdings: int,
        tech_exposure: float,
    ) -> str:
        metrics = {
            "sector_concentration": sector_concentration,
            "top_holding_weight": top_holding_weight,
            "num_holdings": num_holdings,
            "tech_exposure": tech_exposure,
        }
        return _run_tool("classify_portfolio_metrics", lambda: services.analysis.classify_metrics(metrics))
