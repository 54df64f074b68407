"""Row validation, numeric coercion and duplicate-ticker merging."""

from __future__ import annotations

import logging
import math
import re

from riskscope.ingest.models import ColumnMapping, Holding

LOGGER = logging.getLogger(__name__)

MAX_TICKER_LENGTH = 5
MAX_REASONABLE_SHARES = 10_000_000
SHARE_DECIMALS = 4
NON_SECURITY_MARKERS = ("CASH", "MONEYMARKET", "PENDING")

_CURRENCY_SYMBOLS = re.compile(r"[$€£¥]")
_NON_TICKER_CHARS = re.compile(r"[^A-Za-z.]")
_CLASS_SUFFIX = re.compile(r"\.[A-Z]$")
_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_CURRENCY_CODE = re.compile(r"^[A-Z]{3}$")


def clean_ticker(raw: str) -> str | None:
    cleaned = (raw or "").upper().strip().removeprefix("*")
    # Whitespace goes with the other non-ticker characters, so "MONEY MARKET" arrives as "MONEYMARKET".
    cleaned = _NON_TICKER_CHARS.sub("", cleaned)
    if any(marker in cleaned for marker in NON_SECURITY_MARKERS):
        return None
    cleaned = _CLASS_SUFFIX.sub("", cleaned)
    if not 1 <= len(cleaned) <= MAX_TICKER_LENGTH:
        return None
    if not re.search(r"[A-Z]", cleaned):
        return None
    return cleaned


def _strip_number(value: str) -> str:
    cleaned = _CURRENCY_SYMBOLS.sub("", value or "")
    return re.sub(r"\s", "", cleaned.replace(",", ""))


def is_percentage(value: str) -> bool:
    return _strip_number(value).endswith("%")


def parse_number(value: str) -> float:
    """Coerce a brokerage cell like '$1,234.50', '(12.5)' or '4%' into a float; 0.0 when not numeric."""
    cleaned = _strip_number(value)
    if cleaned.startswith("(") and cleaned.endswith(")"):
        cleaned = "-" + cleaned[1:-1]

    divisor = 1.0
    if cleaned.endswith("%"):
        cleaned = cleaned[:-1]
        divisor = 100.0

    match = _LEADING_NUMBER.match(cleaned)
    if not match:
        return 0.0
    number = float(match.group(0)) / divisor
    return number if math.isfinite(number) else 0.0


def _cell(row: list[str], idx: int) -> str:
    if 0 <= idx < len(row):
        return row[idx]
    return ""


def _note_percentages(
    row: list[str],
    mapping: ColumnMapping,
    row_number: int | None,
    warnings: list[str] | None,
) -> None:
    if warnings is None:
        return
    for column, idx in (
        ("shares", mapping.shares),
        ("price", mapping.price),
        ("value", mapping.value),
        ("cost basis", mapping.cost_basis),
    ):
        raw = _cell(row, idx)
        if raw and is_percentage(raw):
            where = f"Row {row_number}" if row_number is not None else "Row"
            warnings.append(
                f"{where}: percentage '{raw}' in {column} column was read as a fraction ({parse_number(raw)})"
            )


def parse_row(
    row: list[str],
    mapping: ColumnMapping,
    include_extended_data: bool = True,
    row_number: int | None = None,
    warnings: list[str] | None = None,
) -> Holding | None:
    ticker = clean_ticker(_cell(row, mapping.ticker))
    if not ticker:
        return None

    shares = 0.0
    if mapping.shares >= 0 and _cell(row, mapping.shares):
        shares = parse_number(_cell(row, mapping.shares))

    if shares <= 0 and mapping.value >= 0 and mapping.price >= 0:
        value = parse_number(_cell(row, mapping.value))
        price = parse_number(_cell(row, mapping.price))
        if value > 0 and price > 0:
            shares = value / price

    if shares <= 0:
        return None

    _note_percentages(row, mapping, row_number, warnings)
    holding = Holding(ticker=ticker, shares=round(shares, SHARE_DECIMALS))
    if not include_extended_data:
        return holding

    price = parse_number(_cell(row, mapping.price)) if mapping.price >= 0 else 0.0
    if price > 0:
        holding.average_price = price
    value = parse_number(_cell(row, mapping.value)) if mapping.value >= 0 else 0.0
    if value > 0:
        holding.current_value = value
    cost_basis = parse_number(_cell(row, mapping.cost_basis)) if mapping.cost_basis >= 0 else 0.0
    if cost_basis > 0:
        holding.cost_basis = cost_basis
    currency = _cell(row, mapping.currency).strip().upper() if mapping.currency >= 0 else ""
    if _CURRENCY_CODE.match(currency):
        holding.currency = currency
    return holding


def _sum_optional(first: float | None, second: float | None) -> float | None:
    total = (first or 0.0) + (second or 0.0)
    return total or None


def merge_holdings(existing: Holding, incoming: Holding) -> Holding:
    total_shares = existing.shares + incoming.shares
    if existing.average_price and incoming.average_price:
        average_price = (
            existing.shares * existing.average_price + incoming.shares * incoming.average_price
        ) / total_shares
    else:
        average_price = existing.average_price or incoming.average_price

    return Holding(
        ticker=existing.ticker,
        shares=total_shares,
        average_price=average_price,
        current_value=_sum_optional(existing.current_value, incoming.current_value),
        cost_basis=_sum_optional(existing.cost_basis, incoming.cost_basis),
        currency=existing.currency or incoming.currency,
    )


def merge_into(holdings: list[Holding], incoming: Holding) -> None:
    for idx, existing in enumerate(holdings):
        if existing.ticker == incoming.ticker:
            LOGGER.debug("merging duplicate ticker row: ticker=%s", incoming.ticker)
            holdings[idx] = merge_holdings(existing, incoming)
            return
    holdings.append(incoming)


def validate_holdings(holdings: list[Holding]) -> list[str]:
    issues: list[str] = []
    if not holdings:
        issues.append("No holdings found")
        return issues

    for holding in holdings:
        if holding.shares > MAX_REASONABLE_SHARES:
            issues.append(f"Unusually large position in {holding.ticker}: {holding.shares} shares")

    tickers = [holding.ticker for holding in holdings]
    if len(tickers) != len(set(tickers)):
        issues.append("Duplicate tickers found")
    return issues
