"""Portfolio archetype classification package."""

from riskscope.classify.archetypes import REFERENCE_PORTFOLIOS, ReferencePortfolio, reference_frame
from riskscope.classify.classifier import (
    ClassificationResult,
    PortfolioMetrics,
    classify_portfolio,
    metrics_from_snapshot,
)

__all__ = [
    "REFERENCE_PORTFOLIOS",
    "ClassificationResult",
    "PortfolioMetrics",
    "ReferencePortfolio",
    "classify_portfolio",
    "metrics_from_snapshot",
    "reference_frame",
]
