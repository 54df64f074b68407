"""Risk factor registry, snapshot builder and scoring engine."""

from riskscope.risk.engine import evaluate_risk_factors
from riskscope.risk.factors import RISK_FACTORS, RiskRegistryError, validate_risk_factors
from riskscope.risk.models import PortfolioSnapshot, Position, Quote, RiskAlert, RiskFactor
from riskscope.risk.snapshot import build_snapshot, enrich_holdings

__all__ = [
    "RISK_FACTORS",
    "PortfolioSnapshot",
    "Position",
    "Quote",
    "RiskAlert",
    "RiskFactor",
    "RiskRegistryError",
    "build_snapshot",
    "enrich_holdings",
    "evaluate_risk_factors",
    "validate_risk_factors",
]
