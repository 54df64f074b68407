"""Static risk factor registry.

Rules favour specific, non-obvious exposures over market-wide risks. The two
concentration factors carry no triggers: the engine evaluates them from the
snapshot's largest position and sector weights.
"""

from __future__ import annotations

from typing import Iterable, get_args

from riskscope.risk.models import Category, RiskFactor, SeverityCalc, Thresholds, Triggers

REGISTRY_VERSION = "2025.1"
SINGLE_STOCK_FACTOR_ID = "single_stock_concentration"
SECTOR_FACTOR_ID = "sector_concentration"


class RiskRegistryError(ValueError):
    """Raised when the static registry is malformed."""


def _tickers(*symbols: str) -> Triggers:
    return Triggers(tickers=frozenset(symbols))


_FACTORS: tuple[RiskFactor, ...] = (
    # Concentration
    RiskFactor(
        id=SINGLE_STOCK_FACTOR_ID,
        name="Single Stock Risk",
        category="concentration",
        description="One position dominates your portfolio",
        severity_calc="concentration",
        thresholds=Thresholds(low=20, medium=30, high=40, critical=55),
        impact="A single earnings miss, lawsuit, or executive departure could cause outsized losses.",
        recommendation="Consider trimming to below 15% of portfolio or hedging with put options.",
    ),
    RiskFactor(
        id=SECTOR_FACTOR_ID,
        name="Sector Concentration",
        category="concentration",
        description="Portfolio heavily weighted in one sector",
        severity_calc="concentration",
        thresholds=Thresholds(low=40, medium=55, high=70, critical=85),
        impact="Sector-specific regulation, demand shifts, or input cost changes hit your whole portfolio.",
        recommendation="Diversify across 3-4 sectors to reduce correlation.",
    ),
    # Geopolitical
    RiskFactor(
        id="china_tariff_exposure",
        name="China Tariff Exposure",
        category="geopolitical",
        description="Companies with China manufacturing that face tariff risk",
        triggers=_tickers("AAPL", "NVDA", "TSLA", "QCOM", "AMD", "MU", "AVGO", "NKE", "SBUX", "LULU"),
        severity_calc="exposure_pct",
        thresholds=Thresholds(low=15, medium=30, high=45, critical=60),
        impact=(
            "New tariffs could add 10-25% to product costs. Apple assembles most iPhones in China "
            "and Nike sources a quarter of its footwear there."
        ),
        recommendation="Tariff prediction markets are active. Consider positions on higher tariff brackets if exposed.",
        hedge_keywords=("china", "tariff", "trade"),
    ),
    RiskFactor(
        id="taiwan_chip_dependency",
        name="TSMC Dependency",
        category="geopolitical",
        description="Companies reliant on Taiwan Semiconductor Manufacturing",
        triggers=_tickers("NVDA", "AMD", "AAPL", "QCOM", "AVGO", "MRVL", "INTC"),
        severity_calc="exposure_pct",
        thresholds=Thresholds(low=15, medium=30, high=50, critical=70),
        impact=(
            "TSMC makes about 90% of advanced chips. Leading GPU designers depend on it entirely, "
            "so any Taiwan Strait disruption halts production."
        ),
        recommendation="Watch China-Taiwan tensions. Domestic fabs are years away from replacing TSMC capacity.",
        hedge_keywords=("taiwan", "china", "TSMC", "invasion"),
    ),
    # Regulatory
    RiskFactor(
        id="google_antitrust",
        name="Google Antitrust Ruling",
        category="regulatory",
        description="DOJ won its antitrust case - remedies pending",
        triggers=_tickers("GOOGL", "GOOG"),
        severity_calc="exposure_pct",
        thresholds=Thresholds(low=5, medium=12, high=20, critical=30),
        impact=(
            "Google was ruled an illegal monopoly. Remedies could include selling Chrome, "
            "ending the Apple search deal, or breaking up the company."
        ),
        recommendation="Remedy phase carries high uncertainty on outcome.",
        hedge_keywords=("google", "antitrust", "DOJ", "breakup", "Chrome"),
    ),
    RiskFactor(
        id="meta_ftc_case",
        name="Meta FTC Lawsuit",
        category="regulatory",
        description="FTC seeking to unwind Instagram and WhatsApp acquisitions",
        triggers=_tickers("META"),
        severity_calc="exposure_pct",
        thresholds=Thresholds(low=5, medium=12, high=20, critical=30),
        impact="A forced divestiture of Instagram or WhatsApp would dramatically change the company.",
        recommendation="Low probability of a full breakup but the case creates headline risk.",
        hedge_keywords=("meta", "facebook", "instagram", "FTC", "antitrust"),
    ),
    RiskFactor(
        id="ai_chip_export_controls",
        name="AI Chip Export Bans",
        category="regulatory",
        description="US restricting AI chip sales to China",
        triggers=_tickers("NVDA", "AMD", "INTC", "AVGO", "QCOM"),
        severity_calc="exposure_pct",
        thresholds=Thresholds(low=10, medium=25, high=40, critical=55),
        impact="Export controls removed billions in quarterly China revenue. Each new restriction moves the group 5-10%.",
        recommendation="Watch for new export control announcements; compliant chip designs keep getting restricted.",
        hedge_keywords=("nvidia", "china", "export", "chip", "AI"),
    ),
    RiskFactor(
        id="tiktok_ban_impact",
        name="TikTok Ban Spillover",
        category="regulatory",
        description="Companies affected by potential TikTok ban/sale",
        triggers=_tickers("META", "SNAP", "GOOGL", "GOOG", "PINS"),
        severity_calc="exposure_pct",
        thresholds=Thresholds(low=10, medium=20, high=35, critical=50),
        impact="A TikTok ban would shift ad budgets toward Reels, Shorts and Spotlight.",
        recommendation="This is a positive catalyst. Consider it when sizing positions.",
        hedge_keywords=("tiktok", "ban", "bytedance", "social media"),
    ),
    # Event-driven
    RiskFactor(
        id="musk_attention_risk",
        name="Musk Attention Risk",
        category="event",
        description="Tesla exposure while Musk runs multiple companies",
        triggers=_tickers("TSLA"),
        severity_calc="exposure_pct",
        thresholds=Thresholds(low=8, medium=15, high=25, critical=40),
        impact="Divided attention across several companies and political involvement create brand risk.",
        recommendation="Tesla trades on Musk sentiment. Watch his posts and political statements.",
        hedge_keywords=("musk", "tesla", "twitter", "doge"),
    ),
    RiskFactor(
        id="nvidia_earnings_concentration",
        name="NVDA Earnings Binary Event",
        category="event",
        description="Portfolio exposed to NVIDIA earnings volatility",
        triggers=_tickers("NVDA"),
        severity_calc="exposure_pct",
        thresholds=Thresholds(low=8, medium=15, high=25, critical=40),
        impact="NVDA moves 8-15% on earnings and can move the whole index with it.",
        recommendation="Consider reducing the position before earnings or hedging with options.",
        hedge_keywords=("nvidia", "earnings", "AI", "data center"),
    ),
    RiskFactor(
        id="weight_loss_drug_competition",
        name="GLP-1 Drug Competition",
        category="event",
        description="Exposure to weight-loss drug market dynamics",
        triggers=_tickers("LLY", "NVO", "AMGN", "PFE", "VKTX"),
        severity_calc="exposure_pct",
        thresholds=Thresholds(low=10, medium=20, high=35, critical=50),
        impact="New entrants could disrupt the GLP-1 leaders. Each trial readout moves these stocks 10-20%.",
        recommendation="Watch FDA approval dates and clinical trial results. High binary risk.",
        hedge_keywords=("ozempic", "wegovy", "mounjaro", "weight loss", "GLP-1"),
    ),
    # Hidden correlation
    RiskFactor(
        id="mag7_correlation",
        name="Magnificent 7 Correlation",
        category="correlation",
        description="Stocks that trade together despite different businesses",
        triggers=_tickers("AAPL", "MSFT", "GOOGL", "GOOG", "AMZN", "META", "NVDA", "TSLA"),
        severity_calc="exposure_pct",
        thresholds=Thresholds(low=25, medium=40, high=60, critical=75),
        impact="These names are about 30% of the S&P 500 and correlate near 0.7 during selloffs.",
        recommendation="Owning several of these names is not diversification. Consider non-tech exposure.",
        hedge_keywords=("magnificent 7", "tech", "nasdaq", "S&P"),
    ),
    RiskFactor(
        id="bitcoin_proxy_stocks",
        name="Hidden Bitcoin Exposure",
        category="correlation",
        description="Stocks that move with Bitcoin price",
        triggers=_tickers("COIN", "MSTR", "SQ", "PYPL", "HOOD", "MARA", "RIOT", "CLSK"),
        severity_calc="exposure_pct",
        thresholds=Thresholds(low=8, medium=18, high=30, critical=45),
        impact="Treasury holders and exchanges track crypto prices and can drop 30% or more when Bitcoin crashes.",
        recommendation="Hold Bitcoin directly if that exposure is intended; otherwise reduce these positions.",
        hedge_keywords=("bitcoin", "crypto", "BTC"),
    ),
    RiskFactor(
        id="interest_rate_growth_stocks",
        name="Rate-Sensitive Growth Stocks",
        category="correlation",
        description="High-multiple stocks that sell off when rates rise",
        triggers=_tickers("TSLA", "SNOW", "PLTR", "NET", "DDOG", "CRWD", "ZS", "SHOP", "SQ"),
        severity_calc="exposure_pct",
        thresholds=Thresholds(low=15, medium=30, high=45, critical=60),
        impact="High revenue multiples sell off together when 10-year yields spike.",
        recommendation="Monitor Fed announcements and Treasury yields. These positions are effectively a rates bet.",
        hedge_keywords=("federal reserve", "interest rate", "rate cut", "rate hike", "Powell"),
    ),
)


def validate_risk_factors(factors: Iterable[RiskFactor]) -> tuple[RiskFactor, ...]:
    validated = tuple(factors)
    seen: set[str] = set()
    for factor in validated:
        if factor.id in seen:
            raise RiskRegistryError(f"Duplicate risk factor id: {factor.id}")
        seen.add(factor.id)
        if factor.category not in get_args(Category):
            raise RiskRegistryError(f"{factor.id}: unknown category {factor.category!r}")
        if factor.severity_calc not in get_args(SeverityCalc):
            raise RiskRegistryError(f"{factor.id}: unknown severity mode {factor.severity_calc!r}")
        if not factor.thresholds.is_increasing():
            raise RiskRegistryError(f"{factor.id}: thresholds must be strictly increasing (low < medium < high < critical)")
    return validated


RISK_FACTORS: tuple[RiskFactor, ...] = validate_risk_factors(_FACTORS)
