"""Two-phase risk factor evaluation against a portfolio snapshot."""

from __future__ import annotations

import logging
from typing import Iterable

from riskscope.risk.factors import RISK_FACTORS, SECTOR_FACTOR_ID, SINGLE_STOCK_FACTOR_ID
from riskscope.risk.models import (
    UNKNOWN_SECTOR,
    PortfolioSnapshot,
    Position,
    RiskAlert,
    RiskFactor,
    Severity,
    Thresholds,
)

LOGGER = logging.getLogger(__name__)

SEVERITY_RANK: dict[str, int] = {"critical": 4, "high": 3, "medium": 2, "low": 1}


def severity_level(score: float, thresholds: Thresholds) -> Severity:
    if score >= thresholds.critical:
        return "critical"
    if score >= thresholds.high:
        return "high"
    if score >= thresholds.medium:
        return "medium"
    return "low"


def clamp_score(score: float) -> float:
    return max(0.0, min(100.0, score))


def _structural_alert(
    factor: RiskFactor,
    title: str,
    exposure: float,
    tickers: list[str],
    hedge_keyword: str,
    total_value: float,
) -> RiskAlert:
    return RiskAlert(
        factor=factor,
        title=title,
        severity=severity_level(exposure, factor.thresholds),
        severity_score=clamp_score(exposure),
        exposure_percent=exposure,
        affected_tickers=tickers,
        affected_value=exposure / 100.0 * total_value,
        hedge_keywords=[hedge_keyword.lower()],
    )


def check_single_stock(factor: RiskFactor, snapshot: PortfolioSnapshot) -> RiskAlert | None:
    largest = snapshot.largest_position
    if not largest.ticker or largest.weight < factor.thresholds.low:
        return None
    return _structural_alert(
        factor,
        title=f"{factor.name}: {largest.ticker}",
        exposure=largest.weight,
        tickers=[largest.ticker],
        hedge_keyword=largest.ticker,
        total_value=snapshot.total_value,
    )


def check_sector_concentration(factor: RiskFactor, snapshot: PortfolioSnapshot) -> RiskAlert | None:
    # Holdings without sector data are not evidence of clustering.
    known = [(sector, weight) for sector, weight in snapshot.sector_weights.items() if sector != UNKNOWN_SECTOR]
    if not known:
        return None
    top_sector, top_weight = max(known, key=lambda item: item[1])
    if top_weight < factor.thresholds.low:
        return None
    return _structural_alert(
        factor,
        title=f"{top_sector} {factor.name}",
        exposure=top_weight,
        tickers=[p.ticker for p in snapshot.positions if p.sector == top_sector],
        hedge_keyword=top_sector,
        total_value=snapshot.total_value,
    )


STRUCTURAL_CHECKS = {
    SINGLE_STOCK_FACTOR_ID: check_single_stock,
    SECTOR_FACTOR_ID: check_sector_concentration,
}


def matches_triggers(factor: RiskFactor, position: Position) -> bool:
    triggers = factor.triggers
    if position.ticker in triggers.tickers:
        return True
    if position.sector in triggers.sectors:
        return True
    if position.industry in triggers.industries:
        return True
    name = position.name.lower()
    return any(keyword.lower() in name for keyword in triggers.keywords)


def check_triggered_factor(factor: RiskFactor, snapshot: PortfolioSnapshot) -> RiskAlert | None:
    if snapshot.total_value <= 0:
        return None
    matched = [position for position in snapshot.positions if matches_triggers(factor, position)]
    if not matched:
        return None

    exposure_value = sum(position.value for position in matched)
    exposure_percent = exposure_value / snapshot.total_value * 100.0
    if exposure_percent < factor.thresholds.low:
        return None

    if factor.severity_calc == "count":
        score = len(matched) / len(snapshot.positions) * 100.0
    else:
        score = exposure_percent

    return RiskAlert(
        factor=factor,
        title=factor.name,
        severity=severity_level(score, factor.thresholds),
        severity_score=clamp_score(score),
        exposure_percent=exposure_percent,
        affected_tickers=[position.ticker for position in matched],
        affected_value=exposure_value,
        hedge_keywords=list(factor.hedge_keywords),
    )


def sort_alerts(alerts: Iterable[RiskAlert]) -> list[RiskAlert]:
    return sorted(alerts, key=lambda alert: (-SEVERITY_RANK[alert.severity], -alert.exposure_percent))


def evaluate_structural(snapshot: PortfolioSnapshot, factors: Iterable[RiskFactor] = RISK_FACTORS) -> list[RiskAlert]:
    alerts: list[RiskAlert] = []
    for factor in factors:
        check = STRUCTURAL_CHECKS.get(factor.id)
        if check is None:
            continue
        alert = check(factor, snapshot)
        if alert is not None:
            alerts.append(alert)
    return alerts


def evaluate_triggers(snapshot: PortfolioSnapshot, factors: Iterable[RiskFactor] = RISK_FACTORS) -> list[RiskAlert]:
    alerts: list[RiskAlert] = []
    for factor in factors:
        if factor.id in STRUCTURAL_CHECKS:
            continue
        alert = check_triggered_factor(factor, snapshot)
        if alert is not None:
            alerts.append(alert)
    return alerts


def evaluate_risk_factors(
    snapshot: PortfolioSnapshot,
    factors: Iterable[RiskFactor] = RISK_FACTORS,
) -> list[RiskAlert]:
    """
    Evaluate the registry against a snapshot.

    Structural concentration checks run first, then every remaining factor's
    ticker/sector/industry/keyword triggers. Alerts come back ordered by
    severity tier and then exposure, both descending.
    """
    registry = tuple(factors)
    alerts = evaluate_structural(snapshot, registry) + evaluate_triggers(snapshot, registry)
    LOGGER.debug(
        "risk factors evaluated: factors=%s positions=%s alerts=%s",
        len(registry),
        len(snapshot.positions),
        len(alerts),
    )
    return sort_alerts(alerts)
