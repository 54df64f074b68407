"""Delimiter-aware, quote-aware splitting of raw export text."""

from __future__ import annotations

import csv
import logging
import re

LOGGER = logging.getLogger(__name__)

_BOM = "\ufeff"
_SURROUNDING_QUOTES = re.compile(r"^[\"']|[\"']$")


def clean_content(content: str) -> str:
    cleaned = content[1:] if content.startswith(_BOM) else content
    return cleaned.replace("\r\n", "\n").replace("\r", "\n")


def split_lines(content: str) -> list[str]:
    return [line for line in clean_content(content).split("\n") if line.strip()]


def detect_delimiter(first_line: str) -> str:
    if "\t" in first_line:
        return "\t"
    if ";" in first_line and "," not in first_line:
        return ";"
    return ","


def _clean_cell(cell: str) -> str:
    return _SURROUNDING_QUOTES.sub("", cell.strip()).strip()


def parse_line(line: str, delimiter: str) -> list[str]:
    # One reader per line: an unbalanced quote must not swallow the next row.
    reader = csv.reader([line], delimiter=delimiter, quotechar='"', doublequote=True, skipinitialspace=True)
    try:
        cells = next(reader, [])
    except csv.Error as error:
        # Oversized fields exceed csv.field_size_limit(); fall back to a plain split.
        LOGGER.warning("csv reader failed, splitting on delimiter: error=%s length=%s", error, len(line))
        cells = line.split(delimiter)
    return [_clean_cell(cell) for cell in cells] or [""]


def tokenize(lines: list[str]) -> tuple[list[list[str]], str]:
    if not lines:
        return [], ","
    delimiter = detect_delimiter(lines[0])
    return [parse_line(line, delimiter) for line in lines], delimiter
