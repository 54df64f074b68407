"""Typed holdings ingestion models."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Holding:
    ticker: str
    shares: float
    average_price: float | None = None
    current_value: float | None = None
    cost_basis: float | None = None
    currency: str | None = None


@dataclass(frozen=True)
class ColumnMapping:
    ticker: int = -1
    shares: int = -1
    price: int = -1
    value: int = -1
    cost_basis: int = -1
    currency: int = -1


@dataclass
class ParseResult:
    holdings: list[Holding] = field(default_factory=list)
    detected_format: str = "generic"
    warnings: list[str] = field(default_factory=list)
    total_rows: int = 0
    skipped_rows: int = 0
