from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import pandas as pd

from core.charts import build_chart, chart_subtitle, to_vega_spec
from core.config import CSV_SUFFIX, LABEL_KEY
from core.errors import FormatError, PipelineError
from core.projection import project, series_specs, table_payload
from core.selection import SelectionState

logger = logging.getLogger(__name__)

CHART_TITLE = "Data Visualization"


def summary_label(rows: int, columns: int) -> str:
    return f"{rows} rows × {columns} columns"


def compute_chart(state: SelectionState, *, strict_projection: bool = True) -> Optional[Dict[str, Any]]:
    selection = state.selection
    if state.dataset.is_empty or not selection.renderable:
        return None
    records = project(state.dataset, selection, strict=strict_projection)
    series = series_specs(selection)
    chart = build_chart(records, series, selection.kind, x_title=selection.x)
    return {
        "title": CHART_TITLE,
        "subtitle": chart_subtitle(selection),
        "kind": selection.kind,
        "records": records,
        "series": series,
        "spec": to_vega_spec(chart),
    }


def compute_data_page(state: SelectionState, *, strict_projection: bool = True) -> Dict[str, Any]:
    """Page payload. A chart that cannot be projected leaves the rest of the page intact."""
    dataset = state.dataset
    chart: Optional[Dict[str, Any]] = None
    chart_error: Optional[Dict[str, Any]] = None
    try:
        chart = compute_chart(state, strict_projection=strict_projection)
    except PipelineError as exc:
        logger.warning("Chart unavailable: %s", exc.message)
        chart_error = exc.to_dict()
    return {
        "summary": {
            "rows": dataset.row_count,
            "columns": dataset.column_count,
            "label": summary_label(dataset.row_count, dataset.column_count),
        },
        "table": table_payload(dataset),
        "numeric_columns": state.numeric_columns,
        "selection": state.selection.to_dict(),
        "chart": chart,
        "chart_error": chart_error,
    }


def upload_csv(state: SelectionState, filename: str, content: bytes | str) -> Dict[str, Any]:
    """Validate an uploaded file and replace the state's dataset with its contents."""
    if not filename or not filename.endswith(CSV_SUFFIX):
        logger.warning("Rejected upload %r: not a CSV file", filename)
        raise FormatError("Please upload a CSV file")

    if isinstance(content, bytes):
        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            logger.warning("Rejected upload %r: %s", filename, exc)
            raise FormatError("CSV file is not valid UTF-8 text") from exc
    else:
        text = content.lstrip("\ufeff")

    try:
        dataset = state.load_text(text)
    except FormatError as exc:
        logger.warning("Rejected upload %r: %s", filename, exc.message)
        raise

    return {
        "filename": filename,
        "rows": dataset.row_count,
        "columns": list(dataset.columns),
        "message": f"Parsed {dataset.row_count} rows with {dataset.column_count} columns",
    }


def export_rows_csv(state: SelectionState) -> bytes:
    return state.dataset.to_frame().to_csv(index=False).encode("utf-8")


def export_chart_csv(state: SelectionState, *, strict_projection: bool = True) -> bytes:
    selection = state.selection
    records = project(state.dataset, selection, strict=strict_projection)
    columns = [LABEL_KEY, *selection.y] if selection.renderable else []
    return pd.DataFrame(records, columns=columns).to_csv(index=False).encode("utf-8")
