import pytest

from riskscope.risk.engine import (
    SEVERITY_RANK,
    clamp_score,
    evaluate_risk_factors,
    severity_level,
)
from riskscope.risk.factors import RISK_FACTORS
from riskscope.risk.models import Position, RiskFactor, Thresholds, Triggers
from riskscope.risk.snapshot import build_snapshot


def _snapshot(*rows: tuple[str, float, str], names: dict[str, str] | None = None):
    positions = [
        Position(
            ticker=ticker,
            shares=1,
            name=(names or {}).get(ticker, ticker),
            sector=sector,
            industry="Unknown",
            price=value,
            value=value,
        )
        for ticker, value, sector in rows
    ]
    return build_snapshot(positions)


def _alert(alerts, factor_id: str):
    matches = [alert for alert in alerts if alert.factor.id == factor_id]
    return matches[0] if matches else None


def test_single_stock_alert_for_dominant_position() -> None:
    snapshot = _snapshot(("NVDA", 62_000, "Technology"), ("KO", 38_000, "Consumer Staples"))
    alert = _alert(evaluate_risk_factors(snapshot), "single_stock_concentration")
    assert alert is not None
    assert alert.severity == "critical"
    assert alert.severity_score == pytest.approx(62)
    assert alert.affected_tickers == ["NVDA"]
    assert alert.affected_value == pytest.approx(62_000)
    assert alert.title == "Single Stock Risk: NVDA"
    assert alert.hedge_keywords == ["nvda"]


@pytest.mark.parametrize(
    ("weight", "expected"),
    [(15, None), (19, None), (25, "low"), (35, "medium"), (45, "high"), (60, "critical")],
)
def test_single_stock_tiers_rise_with_weight(weight: float, expected: str | None) -> None:
    rows = [("ZZZ", weight, "Industrials")]
    remaining = 100 - weight
    idx = 0
    while remaining > 0:
        chunk = min(10, remaining)
        rows.append((f"F{chr(65 + idx)}", chunk, f"Sector {idx}"))
        remaining -= chunk
        idx += 1
    alert = _alert(evaluate_risk_factors(_snapshot(*rows)), "single_stock_concentration")
    if expected is None:
        assert alert is None
    else:
        assert alert is not None
        assert alert.severity == expected
        assert alert.severity_score == pytest.approx(weight)


def test_severity_level_boundaries_are_inclusive() -> None:
    thresholds = RISK_FACTORS[0].thresholds
    assert severity_level(19.99, thresholds) == "low"
    assert severity_level(30, thresholds) == "medium"
    assert severity_level(40, thresholds) == "high"
    assert severity_level(55, thresholds) == "critical"


def test_clamp_score() -> None:
    assert clamp_score(120) == 100
    assert clamp_score(-3) == 0


def test_sector_concentration_ignores_unknown_sector() -> None:
    snapshot = _snapshot(("AAA", 50, "Unknown"), ("BBB", 30, "Technology"), ("CCC", 20, "Energy"))
    assert _alert(evaluate_risk_factors(snapshot), "sector_concentration") is None

    snapshot = _snapshot(("AAA", 30, "Unknown"), ("BBB", 25, "Technology"), ("CCC", 20, "Technology"), ("DDD", 25, "Energy"))
    alert = _alert(evaluate_risk_factors(snapshot), "sector_concentration")
    assert alert is not None
    assert alert.title == "Technology Sector Concentration"
    assert alert.affected_tickers == ["BBB", "CCC"]
    assert alert.hedge_keywords == ["technology"]
    assert alert.severity == "low"


def test_count_mode_scores_by_matched_holdings() -> None:
    factor = RiskFactor(
        id="paired_names",
        name="Paired Names",
        category="correlation",
        description="",
        severity_calc="count",
        thresholds=Thresholds(low=10, medium=30, high=50, critical=70),
        impact="",
        recommendation="",
        triggers=Triggers(tickers=frozenset({"AAA", "BBB"})),
    )
    snapshot = _snapshot(("AAA", 10, "Energy"), ("BBB", 10, "Energy"), ("CCC", 80, "Utilities"))
    alerts = evaluate_risk_factors(snapshot, factors=(factor,))
    assert len(alerts) == 1
    assert alerts[0].severity_score == pytest.approx(200 / 3)
    assert alerts[0].exposure_percent == pytest.approx(20)
    assert alerts[0].severity == "high"


def test_keyword_trigger_matches_display_name() -> None:
    factor = RiskFactor(
        id="crypto_names",
        name="Crypto Names",
        category="correlation",
        description="",
        severity_calc="exposure_pct",
        thresholds=Thresholds(low=5, medium=10, high=20, critical=40),
        impact="",
        recommendation="",
        triggers=Triggers(keywords=("bitcoin",)),
        hedge_keywords=("bitcoin", "BTC"),
    )
    snapshot = _snapshot(
        ("MINR", 30, "Financial Services"),
        ("KO", 70, "Consumer Staples"),
        names={"MINR": "Bitcoin Miner Corp"},
    )
    alerts = evaluate_risk_factors(snapshot, factors=(factor,))
    assert [alert.affected_tickers for alert in alerts] == [["MINR"]]
    assert alerts[0].severity == "high"
    assert alerts[0].hedge_keywords == ["bitcoin", "BTC"]


def test_trigger_below_low_threshold_produces_no_alert() -> None:
    snapshot = _snapshot(("GOOGL", 4, "Communication Services"), ("KO", 96, "Consumer Staples"))
    assert _alert(evaluate_risk_factors(snapshot), "google_antitrust") is None


def test_zero_total_value_produces_no_alerts() -> None:
    assert evaluate_risk_factors(_snapshot(("NVDA", 0, "Technology"))) == []
    assert evaluate_risk_factors(_snapshot()) == []


def test_alerts_ordered_by_tier_then_exposure() -> None:
    snapshot = _snapshot(
        ("NVDA", 40_000, "Technology"),
        ("TSLA", 20_000, "Consumer Cyclical"),
        ("META", 15_000, "Communication Services"),
        ("KO", 25_000, "Consumer Staples"),
    )
    alerts = evaluate_risk_factors(snapshot)
    assert alerts
    keys = [(SEVERITY_RANK[alert.severity], alert.exposure_percent) for alert in alerts]
    for current, following in zip(keys, keys[1:]):
        assert current[0] >= following[0]
        if current[0] == following[0]:
            assert current[1] >= following[1]


def test_evaluate_is_deterministic() -> None:
    snapshot = _snapshot(("AAPL", 50, "Technology"), ("TSLA", 50, "Consumer Cyclical"))
    assert evaluate_risk_factors(snapshot) == evaluate_risk_factors(snapshot)
