"""Portfolio snapshot construction from enriched holdings."""

from __future__ import annotations

from dataclasses import asdict, fields
from typing import Iterable, Mapping

import pandas as pd

from riskscope.ingest.models import Holding
from riskscope.risk.models import UNKNOWN_SECTOR, LargestPosition, PortfolioSnapshot, Position, Quote

_POSITION_COLUMNS = [f.name for f in fields(Position)]


def _holding_value(holding: Holding, price: float) -> float:
    if price > 0:
        return price * holding.shares
    if holding.current_value:
        return float(holding.current_value)
    if holding.average_price:
        return float(holding.average_price) * holding.shares
    return 0.0


def enrich_holdings(holdings: Iterable[Holding], quotes: Mapping[str, Quote]) -> list[Position]:
    """Attach externally supplied name/sector/industry/price data to parsed holdings."""
    positions: list[Position] = []
    for holding in holdings:
        ticker = holding.ticker.upper()
        quote = quotes.get(ticker) or Quote()
        price = float(quote.price or 0.0)
        positions.append(
            Position(
                ticker=ticker,
                shares=holding.shares,
                name=quote.name or ticker,
                sector=quote.sector or UNKNOWN_SECTOR,
                industry=quote.industry or UNKNOWN_SECTOR,
                price=price,
                value=_holding_value(holding, price),
            )
        )
    return positions


def build_snapshot(positions: Iterable[Position]) -> PortfolioSnapshot:
    frame = pd.DataFrame([asdict(position) for position in positions], columns=_POSITION_COLUMNS)
    if frame.empty:
        return PortfolioSnapshot(
            total_value=0.0,
            positions=(),
            sector_weights={},
            largest_position=LargestPosition(ticker="", weight=0.0),
        )

    frame["value"] = frame["value"].astype(float)
    total_value = float(frame["value"].sum())
    frame["weight"] = frame["value"] / total_value * 100.0 if total_value > 0 else 0.0

    sector_totals = frame.groupby("sector", sort=False)["value"].sum()
    sector_weights = {
        str(sector): (float(value) / total_value * 100.0 if total_value > 0 else 0.0)
        for sector, value in sector_totals.items()
    }

    largest = frame.sort_values("weight", ascending=False, kind="mergesort").iloc[0]
    weighted = tuple(
        Position(
            ticker=str(row.ticker),
            shares=float(row.shares),
            name=str(row.name),
            sector=str(row.sector),
            industry=str(row.industry),
            price=float(row.price),
            value=float(row.value),
            weight=float(row.weight),
        )
        for row in frame.itertuples(index=False)
    )
    return PortfolioSnapshot(
        total_value=total_value,
        positions=weighted,
        sector_weights=sector_weights,
        largest_position=LargestPosition(ticker=str(largest["ticker"]), weight=float(largest["weight"])),
    )
