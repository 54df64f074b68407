"""Holdings ingestion and risk analysis orchestration service."""

from __future__ import annotations

import logging
import math
from dataclasses import asdict
from typing import Any

from riskscope.classify.archetypes import get_reference_portfolio, metric_benchmarks, reference_frame
from riskscope.classify.classifier import (
    ClassificationResult,
    PortfolioMetrics,
    classify_portfolio,
    metrics_from_snapshot,
)
from riskscope.config.settings import DEFAULT_MAX_CSV_BYTES
from riskscope.ingest.formats import FORMAT_CATALOG, format_display_name
from riskscope.ingest.models import Holding, ParseResult
from riskscope.ingest.normalizer import clean_ticker, merge_into
from riskscope.ingest.pipeline import parse_holdings
from riskscope.risk.engine import evaluate_risk_factors
from riskscope.risk.factors import REGISTRY_VERSION
from riskscope.risk.models import PortfolioSnapshot, Quote, RiskAlert
from riskscope.risk.report import compare_to_typical, summarize_alerts
from riskscope.risk.snapshot import build_snapshot, enrich_holdings

LOGGER = logging.getLogger(__name__)

_METRIC_FIELDS = ("sector_concentration", "top_holding_weight", "num_holdings", "tech_exposure")
_TEXT_FIELDS = ("name", "sector", "industry")


def _json_validation_error(errors: list[dict[str, Any]]) -> dict[str, Any]:
    return {"ok": False, "error": {"type": "validation_error", "errors": errors}}


def _as_float(value: Any) -> float | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _parse_payload(result: ParseResult) -> dict[str, Any]:
    return {
        "ok": True,
        "holdings": [asdict(holding) for holding in result.holdings],
        "detected_format": result.detected_format,
        "format_name": format_display_name(result.detected_format),
        "warnings": result.warnings,
        "stats": {
            "total_rows": result.total_rows,
            "parsed_rows": len(result.holdings),
            "skipped_rows": result.skipped_rows,
        },
    }


def _alert_payload(alert: RiskAlert) -> dict[str, Any]:
    factor = alert.factor
    return {
        "id": factor.id,
        "title": alert.title,
        "category": factor.category,
        "description": factor.description,
        "impact": factor.impact,
        "recommendation": factor.recommendation,
        "severity": alert.severity,
        "severity_score": round(alert.severity_score, 4),
        "exposure_percent": round(alert.exposure_percent, 4),
        "affected_tickers": alert.affected_tickers,
        "affected_value": round(alert.affected_value, 2),
        "hedge_keywords": alert.hedge_keywords,
    }


def _classification_payload(result: ClassificationResult) -> dict[str, Any]:
    frame = reference_frame()
    similar = []
    for profile in result.similar_to:
        reference = get_reference_portfolio(profile)
        members = frame[frame["profile"] == profile].nlargest(3, "weight")
        similar.append(
            {
                "profile": profile,
                "description": reference.description if reference else "",
                "risk_score": reference.risk_score if reference else None,
                "top_holdings": members["ticker"].tolist(),
            }
        )
    return {**asdict(result), "similar_portfolios": similar, "benchmarks": metric_benchmarks()}


def _snapshot_payload(snapshot: PortfolioSnapshot) -> dict[str, Any]:
    return {
        "total_value": snapshot.total_value,
        "holding_count": len(snapshot.positions),
        "sector_weights": snapshot.sector_weights,
        "largest_position": asdict(snapshot.largest_position),
        "positions": [asdict(position) for position in snapshot.positions],
    }


class AnalysisService:
    def __init__(self, max_csv_bytes: int = DEFAULT_MAX_CSV_BYTES, include_extended_data: bool = True) -> None:
        self.max_csv_bytes = max_csv_bytes
        self.include_extended_data = include_extended_data

    def list_formats(self) -> dict[str, Any]:
        return {
            "formats": [{"id": profile.id, "name": profile.display_name} for profile in FORMAT_CATALOG],
            "auto_detect_supported": True,
        }

    def parse_csv(
        self,
        content: str,
        format_id: str | None = None,
        include_extended_data: bool | None = None,
    ) -> dict[str, Any]:
        if not isinstance(content, str) or not content:
            return _json_validation_error([{"field": "content", "message": "content is required and must be a string."}])
        size = len(content.encode("utf-8"))
        if size > self.max_csv_bytes:
            LOGGER.warning("csv rejected: size=%s limit=%s", size, self.max_csv_bytes)
            return _json_validation_error(
                [
                    {
                        "field": "content",
                        "message": f"CSV content too large. Maximum size is {self.max_csv_bytes} bytes.",
                    }
                ]
            )
        extended = self.include_extended_data if include_extended_data is None else include_extended_data
        result = parse_holdings(content, format_hint=format_id or None, include_extended_data=extended)
        return _parse_payload(result)

    def _positions_to_inputs(
        self, positions: list[Any]
    ) -> tuple[list[Holding], dict[str, Quote], list[dict[str, Any]]]:
        holdings: list[Holding] = []
        quotes: dict[str, Quote] = {}
        errors: list[dict[str, Any]] = []
        for idx, item in enumerate(positions):
            if not isinstance(item, dict):
                errors.append({"field": "positions", "row": idx, "message": "Each position must be an object."})
                continue
            ticker = clean_ticker(str(item.get("ticker") or ""))
            shares = _as_float(item.get("shares"))
            if not ticker:
                errors.append({"field": "ticker", "row": idx, "message": f"Invalid ticker: {item.get('ticker')!r}"})
                continue
            if shares is None or shares <= 0:
                errors.append({"field": "shares", "row": idx, "message": "shares must be a positive number."})
                continue
            bad_text = [
                name for name in _TEXT_FIELDS if item.get(name) is not None and not isinstance(item.get(name), str)
            ]
            if bad_text:
                errors.extend({"field": name, "row": idx, "message": f"{name} must be a string."} for name in bad_text)
                continue
            merge_into(
                holdings,
                Holding(
                    ticker=ticker,
                    shares=shares,
                    average_price=_as_float(item.get("average_price")),
                    current_value=_as_float(item.get("value")),
                ),
            )
            if ticker not in quotes:
                quotes[ticker] = Quote(
                    name=item.get("name") or None,
                    sector=item.get("sector") or None,
                    industry=item.get("industry") or None,
                    price=_as_float(item.get("price")),
                )
        return holdings, quotes, errors

    def analyze_positions(self, positions: list[Any]) -> dict[str, Any]:
        """
        Score enriched positions against the risk registry and archetype catalog.

        Each position needs ``ticker`` and ``shares``; ``price``, ``value``,
        ``name``, ``sector`` and ``industry`` come from the caller's market-data
        source and are optional.
        """
        if not isinstance(positions, list) or not positions:
            return _json_validation_error([{"field": "positions", "message": "Portfolio is required."}])
        holdings, quotes, errors = self._positions_to_inputs(positions)
        if errors:
            return _json_validation_error(errors)

        snapshot = build_snapshot(enrich_holdings(holdings, quotes))
        alerts = evaluate_risk_factors(snapshot)
        classification = classify_portfolio(metrics_from_snapshot(snapshot))
        LOGGER.info(
            "portfolio analyzed: holdings=%s total_value=%.2f alerts=%s profile=%s",
            len(snapshot.positions),
            snapshot.total_value,
            len(alerts),
            classification.profile,
        )
        return {
            "ok": True,
            "summary": summarize_alerts(alerts, snapshot),
            "alerts": [_alert_payload(alert) for alert in alerts],
            "portfolio_stats": _snapshot_payload(snapshot),
            "benchmark_comparison": [asdict(item) for item in compare_to_typical(snapshot)],
            "classification": _classification_payload(classification),
            "registry_version": REGISTRY_VERSION,
        }

    def classify_metrics(self, metrics: dict[str, Any]) -> dict[str, Any]:
        values: dict[str, float] = {}
        errors: list[dict[str, Any]] = []
        for name in _METRIC_FIELDS:
            value = _as_float((metrics or {}).get(name))
            if value is None or value < 0:
                errors.append({"field": name, "message": f"{name} must be a non-negative number."})
                continue
            values[name] = value
        if errors:
            return _json_validation_error(errors)
        result = classify_portfolio(
            PortfolioMetrics(
                sector_concentration=values["sector_concentration"],
                top_holding_weight=values["top_holding_weight"],
                num_holdings=int(values["num_holdings"]),
                tech_exposure=values["tech_exposure"],
            )
        )
        return {"ok": True, **_classification_payload(result)}
