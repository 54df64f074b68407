"""Alert summary and typical-portfolio comparison."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from riskscope.risk.models import UNKNOWN_SECTOR, PortfolioSnapshot, RiskAlert

Assessment = Literal["better", "similar", "worse"]
TECH_SECTOR = "Technology"


@dataclass(frozen=True)
class BenchmarkComparison:
    metric: str
    your_value: str
    typical: str
    assessment: Assessment


def _plural(count: int, label: str) -> str:
    return f"{count} {label}{'s' if count > 1 else ''}"


def summarize_alerts(alerts: list[RiskAlert], snapshot: PortfolioSnapshot) -> str:
    counts = {level: sum(1 for alert in alerts if alert.severity == level) for level in ("critical", "high", "medium")}
    parts: list[str] = []
    if counts["critical"]:
        parts.append(_plural(counts["critical"], "critical risk"))
    if counts["high"]:
        parts.append(_plural(counts["high"], "high risk"))
    if counts["medium"]:
        parts.append(_plural(counts["medium"], "moderate risk"))

    holding_count = len(snapshot.positions)
    if not parts:
        return (
            f"Your portfolio of {holding_count} stocks shows good diversification "
            "with no major risk concentrations detected."
        )
    return (
        f"Risk analysis identified {', '.join(parts)} across your {holding_count}-stock portfolio "
        f"worth ${snapshot.total_value:,.2f}."
    )


def top_known_sector_weight(snapshot: PortfolioSnapshot) -> float:
    known = [weight for sector, weight in snapshot.sector_weights.items() if sector != UNKNOWN_SECTOR]
    return max(known) if known else 0.0


def compare_to_typical(snapshot: PortfolioSnapshot) -> list[BenchmarkComparison]:
    comparisons: list[BenchmarkComparison] = []

    top_sector = top_known_sector_weight(snapshot)
    comparisons.append(
        BenchmarkComparison(
            metric="Top Sector Weight",
            your_value=f"{top_sector:.1f}%",
            typical="25-35%",
            assessment="worse" if top_sector > 50 else "better" if top_sector < 35 else "similar",
        )
    )

    largest = snapshot.largest_position.weight
    comparisons.append(
        BenchmarkComparison(
            metric="Largest Position",
            your_value=f"{largest:.1f}%",
            typical="5-10%",
            assessment="worse" if largest > 20 else "better" if largest < 10 else "similar",
        )
    )

    known_count = sum(1 for position in snapshot.positions if position.sector != UNKNOWN_SECTOR)
    holding_count = known_count or len(snapshot.positions)
    if holding_count < 5:
        count_assessment: Assessment = "worse"
    elif holding_count > 30 or holding_count < 10:
        count_assessment = "similar"
    else:
        count_assessment = "better"
    comparisons.append(
        BenchmarkComparison(
            metric="Holdings (Known Sectors)",
            your_value=str(holding_count),
            typical="15-30",
            assessment=count_assessment,
        )
    )

    tech = snapshot.sector_weights.get(TECH_SECTOR, 0.0)
    comparisons.append(
        BenchmarkComparison(
            metric="Tech Exposure",
            your_value=f"{tech:.1f}%",
            typical="20-30%",
            assessment="worse" if tech > 50 else "better" if tech < 30 else "similar",
        )
    )
    return comparisons
