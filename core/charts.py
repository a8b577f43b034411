from __future__ import annotations

from typing import Any, Dict, List, Optional

import altair as alt
import pandas as pd

from core.config import LABEL_KEY
from core.selection import ChartSelection

alt.data_transformers.disable_max_rows()

SERIES_FIELD = "series"
VALUE_FIELD = "value"


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def chart_subtitle(selection: ChartSelection) -> str:
    return f"{', '.join(selection.y)} by {selection.x}"


def _long_form(records: List[Dict[str, Any]], series: List[Dict[str, str]]) -> pd.DataFrame:
    # Long form keeps arbitrary CSV column names out of Vega field expressions.
    rows = []
    for order, record in enumerate(records):
        for s in series:
            rows.append(
                {
                    "order": order,
                    LABEL_KEY: record.get(LABEL_KEY),
                    SERIES_FIELD: s["name"],
                    VALUE_FIELD: record.get(s["column"]),
                }
            )
    return pd.DataFrame(rows, columns=["order", LABEL_KEY, SERIES_FIELD, VALUE_FIELD])


def build_chart(
    records: List[Dict[str, Any]],
    series: List[Dict[str, str]],
    kind: str = "bar",
    *,
    x_title: Optional[str] = None,
    title: Optional[str] = None,
) -> alt.Chart:
    data = _long_form(records, series)
    # Labels may repeat, so keep first-seen order explicitly instead of letting Vega sort.
    x_order = list(dict.fromkeys(data[LABEL_KEY].tolist()))
    color = alt.Color(
        f"{SERIES_FIELD}:N",
        title=None,
        scale=alt.Scale(domain=[s["name"] for s in series], range=[s["color"] for s in series]),
    )
    x = alt.X(f"{LABEL_KEY}:N", title=x_title, sort=x_order, axis=alt.Axis(labelAngle=0, grid=False))
    y = alt.Y(f"{VALUE_FIELD}:Q", title=None, axis=alt.Axis(gridDash=[3, 3], domain=False, ticks=False))
    tooltip = [
        alt.Tooltip(f"{LABEL_KEY}:N", title=x_title or LABEL_KEY),
        alt.Tooltip(f"{SERIES_FIELD}:N", title="Series"),
        alt.Tooltip(f"{VALUE_FIELD}:Q", title="Value", format=","),
    ]

    base = alt.Chart(data)
    if kind == "line":
        chart = base.mark_line(point={"filled": True, "size": 50}, strokeWidth=2).encode(
            x=x, y=y, color=color, tooltip=tooltip
        )
    else:
        chart = base.mark_bar(cornerRadiusTopLeft=4, cornerRadiusTopRight=4).encode(
            x=x, y=y, color=color, xOffset=f"{SERIES_FIELD}:N", tooltip=tooltip
        )
    chart = chart.properties(height=320)
    if title:
        chart = chart.properties(title=title)
    return chart
