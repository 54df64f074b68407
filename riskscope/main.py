"""Application entrypoint for the riskscope MCP server."""

from __future__ import annotations

import asyncio
import logging
import os
import sys

from mcp.server.fastmcp import FastMCP
from starlette.responses import JSONResponse, Response

from riskscope.config.settings import get_settings
from riskscope.ingest.formats import FORMAT_CATALOG
from riskscope.prompts.portfolio_prompts import register_portfolio_prompts
from riskscope.risk.factors import REGISTRY_VERSION, RISK_FACTORS, validate_risk_factors
from riskscope.tools.registry import build_tool_services, register_all_tools

LOGGER = logging.getLogger(__name__)


def resolve_transport_mode(configured_mode: str) -> str:
    if configured_mode in {"stdio", "http"}:
        return configured_mode
    if os.getenv("PORT"):
        return "http"
    return "stdio"


def resolve_http_transport(configured_transport: str) -> str:
    if configured_transport in {"sse", "streamable"}:
        return configured_transport
    return "sse"


async def run() -> None:
    settings = get_settings()
    # stdout carries the stdio protocol stream
    logging.basicConfig(
        stream=sys.stderr,
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    validate_risk_factors(RISK_FACTORS)

    mcp = FastMCP(
        name=settings.app_name,
        host=settings.host,
        port=settings.port,
        streamable_http_path=settings.mcp_path,
    )
    services = build_tool_services(settings)
    register_all_tools(mcp, services)
    register_portfolio_prompts(mcp)
    resolved_mode = resolve_transport_mode(settings.transport_mode)
    resolved_http_transport = resolve_http_transport(settings.http_transport)

    @mcp.custom_route(settings.health_path, methods=["GET"])
    async def health_check(_: object) -> Response:
        tools = await mcp.list_tools()
        prompts = await mcp.list_prompts()
        return JSONResponse(
            {
                "status": "ok",
                "service": settings.app_name,
                "version": settings.app_version,
                "mode": resolved_mode,
                "tool_count": len(tools),
                "prompt_count": len(prompts),
                "format_count": len(FORMAT_CATALOG),
                "risk_factor_count": len(RISK_FACTORS),
                "registry_version": REGISTRY_VERSION,
            }
        )

    LOGGER.info(
        "starting %s: mode=%s http_transport=%s factors=%s",
        settings.app_name,
        resolved_mode,
        resolved_http_transport,
        len(RISK_FACTORS),
    )
    if resolved_mode == "stdio":
        await mcp.run_stdio_async()
    elif resolved_http_transport == "streamable":
        await mcp.run_streamable_http_async()
    else:
        await mcp.run_sse_async()


def main() -> None:
    asyncio.run(run())


if __name__ == "__main__":
    main()
