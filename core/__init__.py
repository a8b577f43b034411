"""Core (UI-agnostic) data page logic.

This package contains:
- CSV text parsing (text -> Dataset)
- numeric column inference and chart selection state
- chart projection and page compute functions (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
