from riskscope.ingest.column_mapper import find_column, find_header_row, map_columns
from riskscope.ingest.formats import (
    FORMAT_CATALOG,
    GENERIC_FORMAT,
    detect_format,
    format_display_name,
    get_profile,
    supported_formats,
)
from riskscope.ingest.models import ColumnMapping


def test_supported_formats_ends_with_generic() -> None:
    formats = supported_formats()
    assert len(formats) == len(FORMAT_CATALOG) == 9
    assert formats[0] == "fidelity"
    assert formats[-1] == GENERIC_FORMAT


def test_detect_format_matches_case_insensitively() -> None:
    assert detect_format("SCHWAB positions export\nSymbol,Quantity\nAAPL,1") == "schwab"
    assert detect_format("Account Total,,$10,000") == "schwab"
    assert detect_format("Webull holdings\nSymbol,Shares") == "webull"


def test_detect_format_first_catalog_match_wins() -> None:
    content = "Transferred from Schwab to Fidelity\nSymbol,Quantity\nAAPL,1"
    assert detect_format(content) == "fidelity"


def test_detect_format_schwab_banner_and_total_row() -> None:
    content = "Charles Schwab positions\nSymbol,Quantity,Price\nAAPL,10,150\nAccount Total,,1500\n"
    assert detect_format(content) == "schwab"


def test_detect_format_uses_fund_tickers() -> None:
    assert detect_format("Symbol,Shares\nVTSAX,12") == "vanguard"


def test_detect_format_falls_back_to_generic() -> None:
    assert detect_format("Symbol,Shares\nNVDA,10") == GENERIC_FORMAT


def test_get_profile_is_case_insensitive() -> None:
    profile = get_profile(" Schwab ")
    assert profile is not None
    assert profile.id == "schwab"
    assert get_profile("unknown_broker") is None
    assert get_profile(None) is None


def test_format_display_name() -> None:
    assert format_display_name("schwab") == "Charles Schwab"
    assert format_display_name("etrade") == "E*Trade"
    assert format_display_name("nope") == "Generic CSV"


def test_find_header_row_skips_banner_rows() -> None:
    rows = [["Positions for account ...1234"], ["Symbol", "Quantity", "Price"], ["AAPL", "1", "150"]]
    assert find_header_row(rows, get_profile("schwab")) == 1


def test_find_header_row_returns_minus_one_when_missing() -> None:
    rows = [["foo", "bar"], ["1", "2"]]
    assert find_header_row(rows, get_profile(GENERIC_FORMAT)) == -1


def test_find_header_row_only_scans_leading_rows() -> None:
    rows = [["banner"]] * 10 + [["Symbol", "Quantity"]]
    assert find_header_row(rows, get_profile("schwab")) == -1


def test_map_columns_takes_first_matching_header() -> None:
    headers = ["Symbol", "Description", "Quantity", "Last Price", "Current Value", "Cost Basis Total"]
    mapping = map_columns(headers, get_profile(GENERIC_FORMAT))
    assert mapping == ColumnMapping(ticker=0, shares=2, price=3, value=4, cost_basis=5, currency=-1)


def test_map_columns_currency_column() -> None:
    mapping = map_columns(["Ticker", "Qty", "CCY"], get_profile(GENERIC_FORMAT))
    assert mapping.currency == 2


def test_find_column_without_keywords() -> None:
    assert find_column(["Symbol"], ()) == -1
