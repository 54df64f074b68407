import pytest

from riskscope.ingest.models import ColumnMapping, Holding
from riskscope.ingest.normalizer import (
    clean_ticker,
    is_percentage,
    merge_holdings,
    merge_into,
    parse_number,
    parse_row,
    validate_holdings,
)

_MAPPING = ColumnMapping(ticker=0, shares=1, price=2, value=3)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("aapl", "AAPL"),
        ("  msft ", "MSFT"),
        ("BRK.B", "BRK"),
        ("*TSLA", "TSLA"),
        ("CASH", None),
        ("Cash & Cash Investments", None),
        ("Money Market", None),
        ("Pending Activity", None),
        ("GOOGLE", None),
        ("123", None),
        ("", None),
    ],
)
def test_clean_ticker(raw: str, expected: str | None) -> None:
    assert clean_ticker(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("$1,234.50", 1234.5),
        ("(12.5)", -12.5),
        ("4%", 0.04),
        ("€ 1 000", 1000.0),
        ("12abc", 12.0),
        ("abc", 0.0),
        ("", 0.0),
        ("1e999", 0.0),
    ],
)
def test_parse_number(raw: str, expected: float) -> None:
    assert parse_number(raw) == pytest.approx(expected)


def test_is_percentage() -> None:
    assert is_percentage(" 12.5 %")
    assert not is_percentage("12.5")


@pytest.mark.parametrize("row", [["AAPL", "0"], ["AAPL", "-5"], ["ABCDEF", "10"], ["CASH", "10"]])
def test_parse_row_rejects_invalid_rows(row: list[str]) -> None:
    assert parse_row(row, ColumnMapping(ticker=0, shares=1)) is None


def test_parse_row_infers_shares_from_value_and_price() -> None:
    holding = parse_row(["AAPL", "", "$150.00", "$1,500.00"], _MAPPING)
    assert holding is not None
    assert holding.shares == 10
    assert holding.average_price == 150
    assert holding.current_value == 1500


def test_parse_row_rounds_shares() -> None:
    holding = parse_row(["AAPL", "1.234567"], ColumnMapping(ticker=0, shares=1))
    assert holding is not None
    assert holding.shares == 1.2346


def test_parse_row_without_extended_data() -> None:
    holding = parse_row(["AAPL", "10", "150", "1500"], _MAPPING, include_extended_data=False)
    assert holding == Holding(ticker="AAPL", shares=10)


def test_parse_row_reads_currency_code() -> None:
    mapping = ColumnMapping(ticker=0, shares=1, currency=2)
    assert parse_row(["SAP", "3", "eur"], mapping).currency == "EUR"
    assert parse_row(["SAP", "3", "Euro"], mapping).currency is None


def test_parse_row_warns_on_percentage_cells() -> None:
    warnings: list[str] = []
    holding = parse_row(["AAPL", "10", "5%"], _MAPPING, row_number=4, warnings=warnings)
    assert holding is not None
    assert holding.average_price == pytest.approx(0.05)
    assert len(warnings) == 1
    assert warnings[0].startswith("Row 4: percentage '5%' in price column")


def test_merge_holdings_weights_average_price() -> None:
    merged = merge_holdings(
        Holding(ticker="AAPL", shares=10, average_price=100, current_value=1000),
        Holding(ticker="AAPL", shares=30, average_price=200, current_value=6000),
    )
    assert merged.shares == 40
    assert merged.average_price == pytest.approx(175)
    assert merged.current_value == 7000
    assert merged.cost_basis is None


def test_merge_holdings_keeps_single_known_price() -> None:
    merged = merge_holdings(Holding(ticker="AAPL", shares=10), Holding(ticker="AAPL", shares=5, average_price=90))
    assert merged.average_price == 90


def test_merge_into_preserves_first_appearance_order() -> None:
    holdings: list[Holding] = []
    for holding in (Holding("NVDA", 50), Holding("MSFT", 30), Holding("NVDA", 25)):
        merge_into(holdings, holding)
    assert [(h.ticker, h.shares) for h in holdings] == [("NVDA", 75), ("MSFT", 30)]


def test_validate_holdings() -> None:
    assert validate_holdings([]) == ["No holdings found"]
    assert validate_holdings([Holding("AAPL", 1)]) == []
    issues = validate_holdings([Holding("AAPL", 20_000_000), Holding("AAPL", 1)])
    assert issues == ["Unusually large position in AAPL: 20000000 shares", "Duplicate tickers found"]


def test_parse_row_rejects_overflowing_shares() -> None:
    assert parse_row(["AAPL", "1e999"], ColumnMapping(ticker=0, shares=1)) is None
