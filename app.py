import json
from contextlib import contextmanager
from typing import Optional

import pandas as pd
import streamlit as st

from core.config import configure_logging, load_settings
from core.data_page import CHART_TITLE, compute_chart, export_chart_csv, export_rows_csv, summary_label, upload_csv
from core.errors import PipelineError
from core.selection import CHART_KINDS, SelectionState

settings = load_settings()
configure_logging(settings.log_level)


# ---------- UI / layout helpers ----------
def inject_page_styles():
    if st.session_state.get("_page_css_injected"):
        return
    st.markdown(
        """
        <style>
        .page-header {padding: 6px 0 4px;margin-bottom: 10px;}
        .page-header .page-title {font-size: 1.6rem;font-weight: 700;color: #111827;}
        .page-header .page-subtitle {color: #6b7280;font-size: 0.95rem;}
        .chart-card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px 16px 4px;margin-bottom: 12px;}
        .chart-card .chart-title {font-weight: 600;font-size: 1.1rem;color: #111827;}
        .chart-card .chart-subtitle {font-size: 0.85rem;color: #6b7280;}
        .empty-state {border: 1px dashed #d1d5db;border-radius: 12px;padding: 48px;text-align: center;color: #6b7280;}
        .empty-state h3 {color: #111827;font-size: 1.1rem;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_page_css_injected"] = True


@contextmanager
def chart_card(title: str, subtitle: Optional[str] = None):
    container = st.container()
    container.markdown(
        f"<div class='chart-card'><div class='chart-title'>{title}</div>"
        f"<div class='chart-subtitle'>{subtitle or ''}</div></div>",
        unsafe_allow_html=True,
    )
    with container:
        yield container


def get_state() -> SelectionState:
    if "data_page" not in st.session_state:
        st.session_state["data_page"] = SelectionState(strict=settings.strict_selection)
    return st.session_state["data_page"]


def handle_upload(state: SelectionState) -> None:
    uploaded = st.file_uploader("Upload CSV Data", type=["csv"], help="Drag & drop your CSV file here, or browse.")
    if uploaded is None:
        st.session_state.pop("_last_upload", None)
        return
    key = (uploaded.name, uploaded.size)
    if st.session_state.get("_last_upload") == key:
        return
    st.session_state["_last_upload"] = key
    try:
        result = upload_csv(state, uploaded.name, uploaded.getvalue())
    except PipelineError as exc:
        st.session_state["_upload_message"] = ("error", exc.message)
    else:
        st.session_state["_upload_message"] = ("success", result["message"])
        st.rerun()


def render_upload_message() -> None:
    msg = st.session_state.get("_upload_message")
    if not msg:
        return
    level, text = msg
    if level == "error":
        st.error(f"Parse error: {text}")
    else:
        st.success(f"CSV uploaded successfully. {text}")


def render_chart_controls(state: SelectionState) -> None:
    selection = state.selection
    c1, c2, c3 = st.columns(3)
    columns = state.columns
    x = c1.selectbox("X-Axis", options=columns, index=columns.index(selection.x) if selection.x in columns else 0)
    numeric = state.numeric_columns
    y = c2.multiselect("Y-Axis", options=numeric, default=[c for c in selection.y if c in numeric])
    kind = c3.radio(
        "Chart Type",
        options=list(CHART_KINDS),
        index=CHART_KINDS.index(selection.kind),
        format_func=lambda k: f"{k.title()} Chart",
        horizontal=True,
    )
    try:
        state.apply({"x": x, "y": y, "kind": kind})
    except PipelineError as exc:
        st.warning(exc.message)


def render_chart(state: SelectionState) -> None:
    try:
        payload = compute_chart(state, strict_projection=settings.strict_projection)
    except PipelineError as exc:
        st.error(exc.message)
        return
    if payload is None:
        st.info("Select an X column and at least one numeric Y column to draw a chart.")
        return
    with chart_card(CHART_TITLE, payload["subtitle"]):
        st.vega_lite_chart(payload["spec"], use_container_width=True)
        b1, b2 = st.columns(2)
        b1.download_button(
            "Export chart data (CSV)",
            data=export_chart_csv(state, strict_projection=settings.strict_projection),
            file_name="csv-data-chart.csv",
            mime="text/csv",
        )
        b2.download_button(
            "Export chart spec (Vega-Lite JSON)",
            data=json.dumps(payload["spec"], indent=2).encode("utf-8"),
            file_name="csv-data-chart.vl.json",
            mime="application/json",
        )


# ---------- UI setup ----------
st.set_page_config(page_title="Data Management", layout="wide")
inject_page_styles()
state = get_state()

h1, h2 = st.columns([8, 2])
with h1:
    st.markdown(
        "<div class='page-header'><div class='page-title'>Data Management</div>"
        "<div class='page-subtitle'>Upload, view, and visualize your CSV data</div></div>",
        unsafe_allow_html=True,
    )
with h2:
    if not state.dataset.is_empty:
        st.download_button(
            "Export", data=export_rows_csv(state), file_name="csv-data.csv", mime="text/csv"
        )
        if st.button("Clear Data", type="primary"):
            state.clear()
            st.session_state.pop("_upload_message", None)
            st.rerun()

handle_upload(state)
render_upload_message()

if state.dataset.is_empty:
    st.markdown(
        "<div class='empty-state'><h3>No data uploaded</h3>"
        "<p>Upload a CSV file to view your data in a table format and create visualizations.</p></div>",
        unsafe_allow_html=True,
    )
    st.stop()

st.caption(summary_label(state.dataset.row_count, state.dataset.column_count))
table_tab, chart_tab = st.tabs(["Table View", "Chart View"])

with table_tab:
    frame: pd.DataFrame = state.dataset.to_frame()
    st.dataframe(frame, use_container_width=True, hide_index=True)

with chart_tab:
    render_chart_controls(state)
    render_chart(state)
