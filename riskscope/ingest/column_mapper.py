"""
Header discovery and keyword-based column resolution.

Brokerage exports often carry account banners above the real header, so the
header is searched for in the first rows rather than assumed to be row 0.
"""

from __future__ import annotations

from riskscope.ingest.formats import FormatProfile
from riskscope.ingest.models import ColumnMapping

HEADER_SCAN_ROWS = 10


def _contains_keyword(cell: str, keywords: tuple[str, ...]) -> bool:
    lowered = cell.lower()
    return any(keyword.lower() in lowered for keyword in keywords)


def find_header_row(rows: list[list[str]], profile: FormatProfile) -> int:
    """
    Locate the header row for a profile.

    Returns:
        Index of the first of the leading rows that has a cell containing a
        ticker or shares keyword, or -1 when none qualifies.
    """
    for idx, row in enumerate(rows[:HEADER_SCAN_ROWS]):
        has_ticker = any(_contains_keyword(cell, profile.ticker) for cell in row)
        has_shares = any(_contains_keyword(cell, profile.shares) for cell in row)
        if has_ticker or has_shares:
            return idx
    return -1


def find_column(headers: list[str], keywords: tuple[str, ...]) -> int:
    if not keywords:
        return -1
    for idx, header in enumerate(headers):
        if _contains_keyword(header, keywords):
            return idx
    return -1


def map_columns(headers: list[str], profile: FormatProfile) -> ColumnMapping:
    return ColumnMapping(
        ticker=find_column(headers, profile.ticker),
        shares=find_column(headers, profile.shares),
        price=find_column(headers, profile.price),
        value=find_column(headers, profile.value),
        cost_basis=find_column(headers, profile.cost_basis),
        currency=find_column(headers, profile.currency),
    )
