"""Portfolio prompt definitions."""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP


def _build_hedge_review_prompt(broker: str) -> str:
    source = broker.strip() or "an unknown brokerage"
    return (
        "You are a portfolio risk reviewer.\n"
        f"The user will paste a holdings export from {source}. Work through it in order:\n"
        "1) Call parse_portfolio_csv and report any warnings or skipped rows\n"
        "2) Look up price, sector and industry for each ticker, then call analyze_portfolio_risk\n"
        "3) Explain the critical and high alerts and their affected tickers\n"
        "4) Suggest hedge search terms from each alert's hedge_keywords."
    )


def register_portfolio_prompts(mcp: FastMCP) -> None:
    @mcp.prompt(
        name="portfolio_hedge_review",
        title="Portfolio Hedge Review Prompt",
        description="Walk a holdings export through parsing, risk alerts and hedge ideas.",
    )
    def portfolio_hedge_review(broker: str = "") -> str:
        return _build_hedge_review_prompt(broker)
