from __future__ import annotations

from typing import Any, Dict, List

from core.config import CHART_COLORS, LABEL_KEY
from core.dataset import Cell, Dataset, is_number
from core.errors import InvalidSelectionError, ProjectionError
from core.selection import ChartSelection


def format_label(value: Cell) -> str:
    """Stringify an X value: no locale grouping, integral numbers without '.0'."""
    if isinstance(value, str):
        return value
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def project(dataset: Dataset, selection: ChartSelection, strict: bool = True) -> List[Dict[str, Any]]:
    if not selection.renderable:
        return []

    x = selection.x
    for col in (x, *selection.y):
        if col not in dataset.columns:
            raise InvalidSelectionError(f"Unknown column '{col}'", column=col)

    records: List[Dict[str, Any]] = []
    for index, row in enumerate(dataset.rows, start=2):
        item: Dict[str, Any] = {LABEL_KEY: format_label(row[x])}
        for col in selection.y:
            value = row[col]
            if strict and not is_number(value):
                raise ProjectionError(
                    f"Column '{col}' has non-numeric value {value!r} in row {index}",
                    column=col,
                    row=index,
                )
            item[col] = value
        records.append(item)
    return records


def series_specs(selection: ChartSelection) -> List[Dict[str, str]]:
    return [
        {"column": col, "color": CHART_COLORS[i % len(CHART_COLORS)], "name": col}
        for i, col in enumerate(selection.y)
    ]


def table_payload(dataset: Dataset) -> Dict[str, Any]:
    return {
        "columns": [{"key": col, "label": col} for col in dataset.columns],
        "rows": dataset.records(),
    }
