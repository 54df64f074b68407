"""Tool service wiring."""

from __future__ import annotations

from dataclasses import dataclass

from mcp.server.fastmcp import FastMCP

from riskscope.config.settings import Settings
from riskscope.services.analysis_service import AnalysisService
from riskscope.tools.portfolio_tools import register_portfolio_tools


@dataclass
class ToolServices:
    analysis: AnalysisService


def build_tool_services(settings: Settings) -> ToolServices:
    return ToolServices(
        analysis=AnalysisService(
            max_csv_bytes=settings.max_csv_bytes,
            include_extended_data=settings.include_extended_data,
        )
    )


def register_all_tools(mcp: FastMCP, services: ToolServices) -> None:
    register_portfolio_tools(mcp, services)
