"""Hand-authored reference portfolios used as classification anchors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import pandas as pd

VolatilityProfile = Literal["low", "medium", "high"]
VOLATILITY_LEVELS: dict[str, int] = {"low": 1, "medium": 2, "high": 3}


@dataclass(frozen=True)
class ReferenceHolding:
    ticker: str
    weight: float
    sector: str


@dataclass(frozen=True)
class ArchetypeMetrics:
    sector_concentration: float
    top_holding_weight: float
    num_holdings: int
    tech_exposure: float
    dividend_yield_avg: float
    volatility_profile: VolatilityProfile


@dataclass(frozen=True)
class ReferencePortfolio:
    profile: str
    description: str
    risk_score: int
    holdings: tuple[ReferenceHolding, ...]
    metrics: ArchetypeMetrics


def _holdings(*rows: tuple[str, float, str]) -> tuple[ReferenceHolding, ...]:
    return tuple(ReferenceHolding(ticker=t, weight=w, sector=s) for t, w, s in rows)


REFERENCE_PORTFOLIOS: tuple[ReferencePortfolio, ...] = (
    ReferencePortfolio(
        profile="conservative_dividend",
        description="Income-focused with blue chip dividend stocks",
        risk_score=3,
        holdings=_holdings(
            ("JNJ", 12, "Healthcare"),
            ("PG", 11, "Consumer Staples"),
            ("KO", 10, "Consumer Staples"),
            ("VZ", 9, "Communication"),
            ("PFE", 8, "Healthcare"),
            ("XOM", 8, "Energy"),
            ("CVX", 7, "Energy"),
            ("T", 7, "Communication"),
            ("MRK", 7, "Healthcare"),
            ("IBM", 6, "Technology"),
            ("MMM", 5, "Industrials"),
            ("CAT", 5, "Industrials"),
            ("DUK", 5, "Utilities"),
        ),
        metrics=ArchetypeMetrics(27, 12, 13, 6, 3.2, "low"),
    ),
    ReferencePortfolio(
        profile="conservative_balanced",
        description="Mix of stable large caps across sectors",
        risk_score=3,
        holdings=_holdings(
            ("BRK.B", 10, "Financials"),
            ("JPM", 9, "Financials"),
            ("UNH", 9, "Healthcare"),
            ("JNJ", 8, "Healthcare"),
            ("PG", 8, "Consumer Staples"),
            ("WMT", 7, "Consumer Staples"),
            ("HD", 7, "Consumer Cyclical"),
            ("COST", 6, "Consumer Staples"),
            ("LMT", 6, "Industrials"),
            ("NEE", 5, "Utilities"),
            ("SO", 5, "Utilities"),
            ("MSFT", 5, "Technology"),
            ("AAPL", 5, "Technology"),
            ("V", 5, "Financials"),
            ("MA", 5, "Financials"),
        ),
        metrics=ArchetypeMetrics(29, 10, 15, 10, 2.1, "low"),
    ),
    ReferencePortfolio(
        profile="moderate_growth",
        description="Balanced growth with some tech exposure",
        risk_score=5,
        holdings=_holdings(
            ("AAPL", 12, "Technology"),
            ("MSFT", 11, "Technology"),
            ("GOOGL", 8, "Communication"),
            ("JPM", 7, "Financials"),
            ("UNH", 7, "Healthcare"),
            ("V", 6, "Financials"),
            ("HD", 6, "Consumer Cyclical"),
            ("PG", 5, "Consumer Staples"),
            ("JNJ", 5, "Healthcare"),
            ("COST", 5, "Consumer Staples"),
            ("LLY", 5, "Healthcare"),
            ("AMZN", 5, "Consumer Cyclical"),
            ("MA", 4, "Financials"),
            ("PEP", 4, "Consumer Staples"),
            ("ABBV", 5, "Healthcare"),
            ("MCD", 5, "Consumer Cyclical"),
        ),
        metrics=ArchetypeMetrics(31, 12, 16, 23, 1.8, "medium"),
    ),
    ReferencePortfolio(
        profile="moderate_index_like",
        description="Roughly tracks S&P 500 top holdings",
        risk_score=5,
        holdings=_holdings(
            ("AAPL", 7, "Technology"),
            ("MSFT", 7, "Technology"),
            ("NVDA", 5, "Technology"),
            ("AMZN", 4, "Consumer Cyclical"),
            ("GOOGL", 4, "Communication"),
            ("META", 3, "Communication"),
            ("BRK.B", 3, "Financials"),
            ("JPM", 3, "Financials"),
            ("LLY", 3, "Healthcare"),
            ("V", 3, "Financials"),
            ("UNH", 3, "Healthcare"),
            ("XOM", 3, "Energy"),
            ("JNJ", 3, "Healthcare"),
            ("MA", 2, "Financials"),
            ("PG", 2, "Consumer Staples"),
            ("HD", 2, "Consumer Cyclical"),
            ("COST", 2, "Consumer Staples"),
            ("ABBV", 2, "Healthcare"),
            ("CVX", 2, "Energy"),
            ("MRK", 2, "Healthcare"),
        ),
        metrics=ArchetypeMetrics(32, 7, 20, 19, 1.5, "medium"),
    ),
    ReferencePortfolio(
        profile="aggressive_tech",
        description="Heavy tech/growth concentration",
        risk_score=8,
        holdings=_holdings(
            ("NVDA", 18, "Technology"),
            ("AAPL", 15, "Technology"),
            ("MSFT", 14, "Technology"),
            ("GOOGL", 10, "Communication"),
            ("META", 10, "Communication"),
            ("AMZN", 10, "Consumer Cyclical"),
            ("TSLA", 8, "Consumer Cyclical"),
            ("AMD", 5, "Technology"),
            ("NFLX", 5, "Communication"),
            ("CRM", 5, "Technology"),
        ),
        metrics=ArchetypeMetrics(57, 18, 10, 57, 0.4, "high"),
    ),
    ReferencePortfolio(
        profile="aggressive_mag7",
        description="Concentrated in Magnificent 7",
        risk_score=8,
        holdings=_holdings(
            ("NVDA", 20, "Technology"),
            ("AAPL", 18, "Technology"),
            ("MSFT", 17, "Technology"),
            ("GOOGL", 13, "Communication"),
            ("AMZN", 12, "Consumer Cyclical"),
            ("META", 12, "Communication"),
            ("TSLA", 8, "Consumer Cyclical"),
        ),
        metrics=ArchetypeMetrics(55, 20, 7, 55, 0.3, "high"),
    ),
    ReferencePortfolio(
        profile="speculative_single_stock",
        description="Dangerously concentrated in one stock",
        risk_score=10,
        holdings=_holdings(
            ("TSLA", 60, "Consumer Cyclical"),
            ("NVDA", 20, "Technology"),
            ("AMD", 10, "Technology"),
            ("PLTR", 10, "Technology"),
        ),
        metrics=ArchetypeMetrics(40, 60, 4, 40, 0, "high"),
    ),
    ReferencePortfolio(
        profile="speculative_meme",
        description="High-volatility meme/speculative stocks",
        risk_score=10,
        holdings=_holdings(
            ("GME", 25, "Consumer Cyclical"),
            ("AMC", 20, "Communication"),
            ("BBBY", 15, "Consumer Cyclical"),
            ("PLTR", 15, "Technology"),
            ("SOFI", 15, "Financials"),
            ("RIVN", 10, "Consumer Cyclical"),
        ),
        metrics=ArchetypeMetrics(50, 25, 6, 15, 0, "high"),
    ),
    ReferencePortfolio(
        profile="speculative_crypto_adjacent",
        description="Bitcoin and crypto-related stocks",
        risk_score=10,
        holdings=_holdings(
            ("MSTR", 30, "Technology"),
            ("COIN", 25, "Financials"),
            ("MARA", 15, "Financials"),
            ("RIOT", 15, "Financials"),
            ("SQ", 10, "Technology"),
            ("HOOD", 5, "Financials"),
        ),
        metrics=ArchetypeMetrics(55, 30, 6, 40, 0, "high"),
    ),
    ReferencePortfolio(
        profile="retirement_income",
        description="High dividend yield for income generation",
        risk_score=2,
        holdings=_holdings(
            ("O", 10, "Real Estate"),
            ("VZ", 9, "Communication"),
            ("T", 9, "Communication"),
            ("MO", 8, "Consumer Staples"),
            ("PM", 8, "Consumer Staples"),
            ("XOM", 7, "Energy"),
            ("CVX", 7, "Energy"),
            ("KO", 6, "Consumer Staples"),
            ("PEP", 6, "Consumer Staples"),
            ("DUK", 5, "Utilities"),
            ("SO", 5, "Utilities"),
            ("ED", 5, "Utilities"),
            ("ABBV", 5, "Healthcare"),
            ("PFE", 5, "Healthcare"),
            ("IBM", 5, "Technology"),
        ),
        metrics=ArchetypeMetrics(28, 10, 15, 5, 4.5, "low"),
    ),
    ReferencePortfolio(
        profile="sector_healthcare",
        description="Healthcare sector focused",
        risk_score=6,
        holdings=_holdings(
            ("UNH", 18, "Healthcare"),
            ("LLY", 16, "Healthcare"),
            ("JNJ", 14, "Healthcare"),
            ("ABBV", 12, "Healthcare"),
            ("MRK", 10, "Healthcare"),
            ("PFE", 8, "Healthcare"),
            ("TMO", 7, "Healthcare"),
            ("ABT", 7, "Healthcare"),
            ("DHR", 5, "Healthcare"),
            ("BMY", 3, "Healthcare"),
        ),
        metrics=ArchetypeMetrics(100, 18, 10, 0, 1.8, "medium"),
    ),
    ReferencePortfolio(
        profile="sector_financials",
        description="Financial sector focused",
        risk_score=6,
        holdings=_holdings(
            ("JPM", 18, "Financials"),
            ("BAC", 14, "Financials"),
            ("WFC", 12, "Financials"),
            ("GS", 10, "Financials"),
            ("MS", 10, "Financials"),
            ("BLK", 8, "Financials"),
            ("C", 8, "Financials"),
            ("SCHW", 7, "Financials"),
            ("AXP", 7, "Financials"),
            ("USB", 6, "Financials"),
        ),
        metrics=ArchetypeMetrics(100, 18, 10, 0, 2.5, "medium"),
    ),
    ReferencePortfolio(
        profile="sector_energy",
        description="Energy sector focused",
        risk_score=7,
        holdings=_holdings(
            ("XOM", 22, "Energy"),
            ("CVX", 18, "Energy"),
            ("COP", 12, "Energy"),
            ("SLB", 10, "Energy"),
            ("EOG", 10, "Energy"),
            ("PXD", 8, "Energy"),
            ("OXY", 7, "Energy"),
            ("DVN", 7, "Energy"),
            ("HAL", 6, "Energy"),
        ),
        metrics=ArchetypeMetrics(100, 22, 9, 0, 3.2, "high"),
    ),
)


def get_reference_portfolio(profile: str) -> ReferencePortfolio | None:
    for portfolio in REFERENCE_PORTFOLIOS:
        if portfolio.profile == profile:
            return portfolio
    return None


def reference_frame() -> pd.DataFrame:
    """Flatten the catalog to one row per reference holding with its archetype's metrics."""
    rows = [
        {
            "ticker": holding.ticker,
            "weight": float(holding.weight),
            "sector": holding.sector,
            "profile": portfolio.profile,
            "risk_score": portfolio.risk_score,
            "sector_concentration": float(portfolio.metrics.sector_concentration),
            "top_holding_weight": float(portfolio.metrics.top_holding_weight),
            "num_holdings": portfolio.metrics.num_holdings,
            "tech_exposure": float(portfolio.metrics.tech_exposure),
            "volatility": VOLATILITY_LEVELS[portfolio.metrics.volatility_profile],
        }
        for portfolio in REFERENCE_PORTFOLIOS
        for holding in portfolio.holdings
    ]
    return pd.DataFrame(rows)


def metric_benchmarks() -> dict[str, dict[str, dict[str, float]]]:
    return {
        "sector_concentration": {
            "conservative": {"min": 25, "max": 35},
            "moderate": {"min": 30, "max": 40},
            "aggressive": {"min": 40, "max": 60},
            "speculative": {"min": 40, "max": 100},
        },
        "top_holding_weight": {
            "conservative": {"min": 5, "max": 12},
            "moderate": {"min": 7, "max": 15},
            "aggressive": {"min": 15, "max": 25},
            "speculative": {"min": 25, "max": 70},
        },
        "num_holdings": {
            "conservative": {"min": 12, "max": 20},
            "moderate": {"min": 10, "max": 20},
            "aggressive": {"min": 7, "max": 12},
            "speculative": {"min": 3, "max": 8},
        },
        "tech_exposure": {
            "conservative": {"min": 0, "max": 15},
            "moderate": {"min": 15, "max": 30},
            "aggressive": {"min": 40, "max": 70},
        },
    }
