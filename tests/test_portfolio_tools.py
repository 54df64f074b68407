import asyncio
import json
from types import SimpleNamespace

from mcp.server.fastmcp import FastMCP

from riskscope.config.settings import Settings
from riskscope.prompts.portfolio_prompts import _build_hedge_review_prompt, register_portfolio_prompts
from riskscope.tools.portfolio_tools import _decode_positions, _run_tool, register_portfolio_tools
from riskscope.tools.registry import build_tool_services, register_all_tools


class _MockAnalysisService:
    def list_formats(self):
        return {"formats": [], "auto_detect_supported": True}

    def parse_csv(self, content: str, format_id=None, include_extended_data=None):
        return {"ok": True, "content": content, "format": format_id}

    def analyze_positions(self, positions):
        return {"ok": True, "positions": positions}

    def classify_metrics(self, metrics):
        return {"ok": True, "metrics": metrics}


def test_register_portfolio_tools() -> None:
    mcp = FastMCP(name="test-portfolio-tools")
    services = SimpleNamespace(analysis=_MockAnalysisService())
    register_portfolio_tools(mcp, services)
    names = {tool.name for tool in asyncio.run(mcp.list_tools())}
    assert names == {
        "list_csv_formats",
        "parse_portfolio_csv",
        "analyze_portfolio_risk",
        "classify_portfolio_metrics",
    }


def test_register_all_tools_with_real_services() -> None:
    mcp = FastMCP(name="test-riskscope")
    services = build_tool_services(Settings(max_csv_bytes=1024, include_extended_data=False))
    assert services.analysis.max_csv_bytes == 1024
    assert services.analysis.include_extended_data is False
    register_all_tools(mcp, services)
    assert len(asyncio.run(mcp.list_tools())) == 4


def test_run_tool_returns_ascii_json() -> None:
    result = _run_tool("list_csv_formats", lambda: {"ok": True, "name": "E*Trade €"})
    assert json.loads(result) == {"ok": True, "name": "E*Trade €"}
    assert "\\u20ac" in result


def test_decode_positions() -> None:
    assert _decode_positions('[{"ticker": "AAPL", "shares": 1}]') == [{"ticker": "AAPL", "shares": 1}]
    assert _decode_positions('{"positions": [{"ticker": "AAPL"}]}') == [{"ticker": "AAPL"}]
    assert _decode_positions("not json") is None
    assert _decode_positions('{"ticker": "AAPL"}') is None


def test_register_portfolio_prompts() -> None:
    mcp = FastMCP(name="test-portfolio-prompts")
    register_portfolio_prompts(mcp)
    names = {prompt.name for prompt in asyncio.run(mcp.list_prompts())}
    assert "portfolio_hedge_review" in names


def test_hedge_review_prompt_mentions_broker_and_tools() -> None:
    prompt = _build_hedge_review_prompt("Charles Schwab")
    assert "Charles Schwab" in prompt
    assert "parse_portfolio_csv" in prompt
    assert "analyze_portfolio_risk" in prompt
    assert "an unknown brokerage" in _build_hedge_review_prompt("  ")
