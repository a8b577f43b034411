from __future__ import annotations

import logging
import math
import re
from typing import List

from core.dataset import Cell, Dataset, Row
from core.errors import FormatError

logger = logging.getLogger(__name__)

DELIMITER = ","
QUOTE = '"'

# Locale-invariant decimal: optional sign, ASCII digits with optional fraction, optional exponent.
_NUMBER_RE = re.compile(r"^[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$")
_LINE_BREAK_RE = re.compile(r"\r?\n")


def clean_field(raw: str) -> str:
    return raw.strip().strip(QUOTE)


def parse_cell(raw: str) -> Cell:
    """Return a float for a finite decimal literal, else the cleaned text."""
    value = clean_field(raw)
    if not _NUMBER_RE.match(value):
        return value
    number = float(value)
    if not math.isfinite(number):
        return value
    return number


def split_fields(line: str) -> List[str]:
    # Plain split: quoted fields containing the delimiter are not supported.
    return line.split(DELIMITER)


def parse_csv(text: str) -> Dataset:
    lines = _LINE_BREAK_RE.split(text.strip())
    if len(lines) < 2:
        raise FormatError("CSV must have at least a header and one data row")

    columns = [clean_field(h) for h in split_fields(lines[0])]
    seen = set()
    for col in columns:
        if col in seen:
            raise FormatError(f"Duplicate column name '{col}' in header", row=1)
        seen.add(col)
    expected = len(columns)

    rows: List[Row] = []
    for index, line in enumerate(lines[1:], start=2):
        values = split_fields(line)
        if len(values) != expected:
            raise FormatError(
                f"Row {index} has {len(values)} columns, expected {expected}",
                row=index,
                found=len(values),
                expected=expected,
            )
        rows.append({col: parse_cell(v) for col, v in zip(columns, values)})

    logger.debug("Parsed CSV with %d rows and %d columns", len(rows), expected)
    return Dataset(columns=tuple(columns), rows=tuple(rows))
