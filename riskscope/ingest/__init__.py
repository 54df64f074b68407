"""Brokerage holdings ingestion package."""

from riskscope.ingest.formats import FORMAT_CATALOG, detect_format, format_display_name, supported_formats
from riskscope.ingest.models import ColumnMapping, Holding, ParseResult
from riskscope.ingest.normalizer import validate_holdings
from riskscope.ingest.pipeline import parse_holdings

__all__ = [
    "FORMAT_CATALOG",
    "ColumnMapping",
    "Holding",
    "ParseResult",
    "detect_format",
    "format_display_name",
    "parse_holdings",
    "supported_formats",
    "validate_holdings",
]
