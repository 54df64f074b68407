"""Point-rubric portfolio classification and archetype similarity."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Literal

from riskscope.classify.archetypes import REFERENCE_PORTFOLIOS, ReferencePortfolio
from riskscope.risk.models import PortfolioSnapshot
from riskscope.risk.report import TECH_SECTOR, top_known_sector_weight

Profile = Literal["conservative", "moderate", "aggressive", "speculative"]

MAX_SIMILAR = 3
SIMILAR_SECTOR_DELTA = 15
SIMILAR_TOP_HOLDING_DELTA = 10
SIMILAR_COUNT_DELTA = 5


@dataclass(frozen=True)
class PortfolioMetrics:
    sector_concentration: float
    top_holding_weight: float
    num_holdings: int
    tech_exposure: float


@dataclass
class ClassificationResult:
    profile: Profile
    confidence: int
    similar_to: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def metrics_from_snapshot(snapshot: PortfolioSnapshot) -> PortfolioMetrics:
    return PortfolioMetrics(
        sector_concentration=top_known_sector_weight(snapshot),
        top_holding_weight=snapshot.largest_position.weight,
        num_holdings=len(snapshot.positions),
        tech_exposure=snapshot.sector_weights.get(TECH_SECTOR, 0.0),
    )


def score_metrics(metrics: PortfolioMetrics) -> tuple[int, list[str]]:
    score = 0
    warnings: list[str] = []

    if metrics.top_holding_weight > 50:
        score += 4
        warnings.append("Extremely concentrated in a single position")
    elif metrics.top_holding_weight > 30:
        score += 3
        warnings.append("High single-stock concentration")
    elif metrics.top_holding_weight > 20:
        score += 2
    elif metrics.top_holding_weight > 12:
        score += 1

    if metrics.sector_concentration > 70:
        score += 3
        warnings.append("Heavily concentrated in one sector")
    elif metrics.sector_concentration > 50:
        score += 2
    elif metrics.sector_concentration > 35:
        score += 1

    # Fewer holdings means more idiosyncratic risk.
    if metrics.num_holdings < 5:
        score += 3
        warnings.append("Very few holdings increases idiosyncratic risk")
    elif metrics.num_holdings < 8:
        score += 2
    elif metrics.num_holdings < 12:
        score += 1

    if metrics.tech_exposure > 60:
        score += 2
        warnings.append("Heavy technology sector exposure")
    elif metrics.tech_exposure > 40:
        score += 1

    return score, warnings


def profile_for_score(score: int) -> tuple[Profile, int]:
    if score >= 8:
        return "speculative", min(95, 70 + score * 2)
    if score >= 5:
        return "aggressive", min(90, 65 + score * 3)
    if score >= 2:
        return "moderate", min(85, 60 + score * 5)
    return "conservative", min(90, 75 + (3 - score) * 5)


def find_similar(
    metrics: PortfolioMetrics,
    catalog: Iterable[ReferencePortfolio] = REFERENCE_PORTFOLIOS,
    limit: int = MAX_SIMILAR,
) -> list[str]:
    similar: list[str] = []
    for reference in catalog:
        ref = reference.metrics
        if (
            abs(ref.sector_concentration - metrics.sector_concentration) < SIMILAR_SECTOR_DELTA
            and abs(ref.top_holding_weight - metrics.top_holding_weight) < SIMILAR_TOP_HOLDING_DELTA
            and abs(ref.num_holdings - metrics.num_holdings) < SIMILAR_COUNT_DELTA
        ):
            similar.append(reference.profile)
    return similar[:limit]


def classify_portfolio(metrics: PortfolioMetrics) -> ClassificationResult:
    score, warnings = score_metrics(metrics)
    profile, confidence = profile_for_score(score)
    return ClassificationResult(
        profile=profile,
        confidence=confidence,
        similar_to=find_similar(metrics),
        warnings=warnings,
    )
