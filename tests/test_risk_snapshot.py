import pytest

from riskscope.ingest.models import Holding
from riskscope.risk.models import Quote
from riskscope.risk.snapshot import build_snapshot, enrich_holdings


def test_enrich_holdings_defaults_missing_quote_data() -> None:
    positions = enrich_holdings([Holding(ticker="abc", shares=4, current_value=400)], {})
    position = positions[0]
    assert position.ticker == "ABC"
    assert position.name == "ABC"
    assert position.sector == "Unknown"
    assert position.industry == "Unknown"
    assert position.price == 0
    assert position.value == 400


def test_enrich_holdings_prefers_quote_price() -> None:
    quotes = {"AAPL": Quote(name="Apple Inc.", sector="Technology", industry="Consumer Electronics", price=200)}
    positions = enrich_holdings([Holding(ticker="AAPL", shares=3, current_value=450)], quotes)
    assert positions[0].value == 600
    assert positions[0].name == "Apple Inc."


def test_enrich_holdings_falls_back_to_average_price() -> None:
    positions = enrich_holdings([Holding(ticker="KO", shares=10, average_price=60)], {})
    assert positions[0].value == 600


def test_build_snapshot_weights() -> None:
    quotes = {
        "NVDA": Quote(sector="Technology", price=100),
        "MSFT": Quote(sector="Technology", price=100),
        "KO": Quote(sector="Consumer Staples", price=100),
    }
    holdings = [Holding("NVDA", 5), Holding("MSFT", 3), Holding("KO", 2)]
    snapshot = build_snapshot(enrich_holdings(holdings, quotes))
    assert snapshot.total_value == 1000
    assert [p.weight for p in snapshot.positions] == pytest.approx([50, 30, 20])
    assert snapshot.sector_weights == pytest.approx({"Technology": 80, "Consumer Staples": 20})
    assert list(snapshot.sector_weights) == ["Technology", "Consumer Staples"]
    assert snapshot.largest_position.ticker == "NVDA"
    assert snapshot.largest_position.weight == pytest.approx(50)


def test_build_snapshot_largest_position_tie_keeps_input_order() -> None:
    holdings = [Holding("KO", 1, current_value=100), Holding("PEP", 1, current_value=100)]
    snapshot = build_snapshot(enrich_holdings(holdings, {}))
    assert snapshot.largest_position.ticker == "KO"


def test_build_snapshot_empty() -> None:
    snapshot = build_snapshot([])
    assert snapshot.total_value == 0
    assert snapshot.positions == ()
    assert snapshot.sector_weights == {}
    assert snapshot.largest_position.ticker == ""


def test_build_snapshot_zero_total_value() -> None:
    snapshot = build_snapshot(enrich_holdings([Holding("AAPL", 1)], {}))
    assert snapshot.total_value == 0
    assert snapshot.positions[0].weight == 0
