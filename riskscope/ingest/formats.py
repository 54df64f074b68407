"""Brokerage export format catalog and content-based detection.

Profiles are plain data: per-field header keywords and the regular expressions
that identify a brokerage from the raw export. Detection walks the catalog in
declaration order and the first matching profile wins, so the order below is
part of the contract.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

GENERIC_FORMAT = "generic"


@dataclass(frozen=True)
class FormatProfile:
    id: str
    display_name: str
    ticker: tuple[str, ...]
    shares: tuple[str, ...]
    price: tuple[str, ...] = ()
    value: tuple[str, ...] = ()
    cost_basis: tuple[str, ...] = ()
    currency: tuple[str, ...] = ("currency",)
    detection_patterns: tuple[str, ...] = ()


FORMAT_CATALOG: tuple[FormatProfile, ...] = (
    FormatProfile(
        id="fidelity",
        display_name="Fidelity",
        ticker=("symbol", "ticker"),
        shares=("quantity", "shares"),
        price=("last price", "current price", "price"),
        value=("current value", "market value", "value"),
        cost_basis=("cost basis", "cost basis total", "total cost"),
        detection_patterns=(r"fidelity", r"account number.*\d{3}-\d{6}"),
    ),
    FormatProfile(
        id="schwab",
        display_name="Charles Schwab",
        ticker=("symbol",),
        shares=("quantity",),
        price=("price",),
        value=("market value",),
        cost_basis=("cost basis",),
        detection_patterns=(r"schwab", r"account total"),
    ),
    FormatProfile(
        id="robinhood",
        display_name="Robinhood",
        ticker=("symbol", "instrument"),
        shares=("quantity", "shares"),
        price=("average cost", "price"),
        value=("equity", "market value"),
        detection_patterns=(r"robinhood",),
    ),
    FormatProfile(
        id="vanguard",
        display_name="Vanguard",
        ticker=("symbol", "ticker symbol"),
        shares=("shares", "quantity", "units"),
        price=("share price", "price"),
        value=("total value", "value"),
        cost_basis=("cost basis", "total cost basis"),
        detection_patterns=(r"vanguard", r"vgslx|vtsax|vfiax"),
    ),
    FormatProfile(
        id="td_ameritrade",
        display_name="TD Ameritrade",
        ticker=("symbol",),
        shares=("qty", "quantity"),
        price=("mark", "price"),
        value=("value",),
        cost_basis=("cost", "cost basis"),
        detection_patterns=(r"td ameritrade", r"tda", r"ameritrade"),
    ),
    FormatProfile(
        id="etrade",
        display_name="E*Trade",
        ticker=("symbol",),
        shares=("quantity",),
        price=("price", "last price"),
        value=("market value", "value"),
        cost_basis=("cost basis", "total cost"),
        detection_patterns=(r"e\*trade", r"etrade"),
    ),
    FormatProfile(
        id="interactive_brokers",
        display_name="Interactive Brokers",
        ticker=("symbol", "financial instrument"),
        shares=("quantity", "position"),
        price=("close price", "price"),
        value=("market value", "value"),
        cost_basis=("cost basis", "avg cost"),
        detection_patterns=(r"interactive brokers", r"ibkr"),
    ),
    FormatProfile(
        id="webull",
        display_name="Webull",
        ticker=("symbol", "ticker"),
        shares=("shares", "qty"),
        price=("avg cost", "price"),
        value=("market value", "mkt value"),
        detection_patterns=(r"webull",),
    ),
    FormatProfile(
        id=GENERIC_FORMAT,
        display_name="Generic CSV",
        ticker=("symbol", "ticker", "stock", "name", "security", "holding", "asset", "code"),
        shares=("shares", "quantity", "qty", "units", "amount", "position", "holdings", "count"),
        price=("price", "last", "close", "current", "market price", "share price"),
        value=("value", "market value", "total", "worth", "balance"),
        cost_basis=("cost", "cost basis", "purchase price", "avg cost", "average cost"),
        currency=("currency", "ccy"),
    ),
)

_PROFILES_BY_ID = {profile.id: profile for profile in FORMAT_CATALOG}


def supported_formats() -> list[str]:
    return [profile.id for profile in FORMAT_CATALOG]


def get_profile(format_id: str | None) -> FormatProfile | None:
    if not format_id:
        return None
    return _PROFILES_BY_ID.get(format_id.strip().lower())


def format_display_name(format_id: str) -> str:
    profile = get_profile(format_id)
    return profile.display_name if profile else _PROFILES_BY_ID[GENERIC_FORMAT].display_name


def detect_format(content: str) -> str:
    """Return the id of the first catalog profile whose patterns match ``content``."""
    for profile in FORMAT_CATALOG:
        if profile.id == GENERIC_FORMAT:
            continue
        for pattern in profile.detection_patterns:
            if re.search(pattern, content, re.IGNORECASE):
                return profile.id
    return GENERIC_FORMAT
