"""Typed risk registry, snapshot and alert models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

Category = Literal["concentration", "geopolitical", "regulatory", "event", "correlation"]
SeverityCalc = Literal["exposure_pct", "count", "concentration"]
Severity = Literal["low", "medium", "high", "critical"]

UNKNOWN_SECTOR = "Unknown"


@dataclass(frozen=True)
class Thresholds:
    low: float
    medium: float
    high: float
    critical: float

    def is_increasing(self) -> bool:
        return self.low < self.medium < self.high < self.critical


@dataclass(frozen=True)
class Triggers:
    tickers: frozenset[str] = frozenset()
    sectors: frozenset[str] = frozenset()
    industries: frozenset[str] = frozenset()
    keywords: tuple[str, ...] = ()


@dataclass(frozen=True)
class RiskFactor:
    id: str
    name: str
    category: Category
    description: str
    severity_calc: SeverityCalc
    thresholds: Thresholds
    impact: str
    recommendation: str
    triggers: Triggers = field(default_factory=Triggers)
    hedge_keywords: tuple[str, ...] = ()


@dataclass(frozen=True)
class Quote:
    name: str | None = None
    sector: str | None = None
    industry: str | None = None
    price: float | None = None


@dataclass(frozen=True)
class Position:
    ticker: str
    shares: float
    name: str
    sector: str
    industry: str
    price: float
    value: float
    weight: float = 0.0


@dataclass(frozen=True)
class LargestPosition:
    ticker: str
    weight: float


@dataclass(frozen=True)
class PortfolioSnapshot:
    total_value: float
    positions: tuple[Position, ...]
    sector_weights: dict[str, float]
    largest_position: LargestPosition


@dataclass(frozen=True)
class RiskAlert:
    factor: RiskFactor
    title: str
    severity: Severity
    severity_score: float
    exposure_percent: float
    affected_tickers: list[str]
    affected_value: float
    hedge_keywords: list[str]
