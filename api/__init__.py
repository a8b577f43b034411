"""HTTP API exposing the data page (FastAPI)."""
