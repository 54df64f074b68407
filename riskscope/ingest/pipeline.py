"""Holdings ingestion: raw brokerage export text to a merged holdings list."""

from __future__ import annotations

import logging

from riskscope.ingest.column_mapper import find_header_row, map_columns
from riskscope.ingest.formats import GENERIC_FORMAT, detect_format, get_profile
from riskscope.ingest.models import Holding, ParseResult
from riskscope.ingest.normalizer import merge_into, parse_row, validate_holdings
from riskscope.ingest.tokenizer import split_lines, tokenize

LOGGER = logging.getLogger(__name__)


def _finish(result: ParseResult) -> ParseResult:
    result.warnings.extend(validate_holdings(result.holdings))
    LOGGER.info(
        "holdings parsed: format=%s holdings=%s total_rows=%s skipped_rows=%s warnings=%s",
        result.detected_format,
        len(result.holdings),
        result.total_rows,
        result.skipped_rows,
        len(result.warnings),
    )
    return result


def _resolve_format(content: str, format_hint: str | None, warnings: list[str]) -> str:
    if not format_hint:
        return detect_format(content)
    profile = get_profile(format_hint)
    if profile is None:
        warnings.append(f"Unknown format '{format_hint}', using generic column mapping")
        return GENERIC_FORMAT
    return profile.id


def parse_holdings(
    content: str,
    format_hint: str | None = None,
    include_extended_data: bool = True,
) -> ParseResult:
    """
    Parse a brokerage holdings export into canonical holdings.

    Args:
        content: Raw CSV/TSV/semicolon-separated export text.
        format_hint: Catalog format id; skips content-based detection when given.
        include_extended_data: Also populate price, value, cost basis and currency.

    Returns:
        ParseResult. Malformed input never raises: problems surface as
        ``warnings`` and ``skipped_rows``.
    """
    lines = split_lines(content or "")
    if not lines:
        return _finish(ParseResult(detected_format=GENERIC_FORMAT, warnings=["Empty or invalid CSV content"]))

    warnings: list[str] = []
    detected_format = _resolve_format(content, format_hint, warnings)
    profile = get_profile(detected_format)

    rows, delimiter = tokenize(lines)
    LOGGER.debug("tokenized export: rows=%s delimiter=%r format=%s", len(rows), delimiter, detected_format)
    if len(rows) < 2:
        warnings.append("CSV must have at least a header row and one data row")
        return _finish(ParseResult(detected_format=detected_format, warnings=warnings, total_rows=len(rows)))

    header_index = find_header_row(rows, profile)
    if header_index == -1:
        warnings.append("Could not identify header row, using first row")
        header_index = 0

    mapping = map_columns(rows[header_index], profile)
    if mapping.ticker == -1:
        warnings.append("Could not identify ticker/symbol column")
        return _finish(
            ParseResult(
                detected_format=detected_format,
                warnings=warnings,
                total_rows=len(rows),
                skipped_rows=len(rows) - 1,
            )
        )
    if mapping.shares == -1:
        warnings.append("Could not identify shares/quantity column")

    holdings: list[Holding] = []
    skipped_rows = 0
    data_rows = rows[header_index + 1 :]
    for offset, row in enumerate(data_rows, start=header_index + 2):
        holding = parse_row(row, mapping, include_extended_data, row_number=offset, warnings=warnings)
        if holding is None:
            skipped_rows += 1
            continue
        merge_into(holdings, holding)

    return _finish(
        ParseResult(
            holdings=holdings,
            detected_format=detected_format,
            warnings=warnings,
            total_rows=len(data_rows),
            skipped_rows=skipped_rows,
        )
    )
