from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from api.schemas import MetaColumnsResponse, SelectionModel, UploadRequest, UploadResponse
from core.config import configure_logging, load_settings
from core.data_page import compute_data_page, export_chart_csv, export_rows_csv, upload_csv
from core.errors import FormatError, InvalidSelectionError, PipelineError, ProjectionError
from core.selection import SelectionState


settings = load_settings()
configure_logging(settings.log_level)

app = FastAPI(title="Data Page API", version="0.1.0")
app.state.data_page = SelectionState(strict=settings.strict_selection)
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _state() -> SelectionState:
    return app.state.data_page


def _json(data: object) -> JSONResponse:
    return JSONResponse(content=jsonable_encoder(data))


def _error(exc: PipelineError) -> JSONResponse:
    status = 422 if isinstance(exc, ProjectionError) else 400
    return JSONResponse(status_code=status, content=exc.to_dict())


def _page() -> JSONResponse:
    return _json(compute_data_page(_state(), strict_projection=settings.strict_projection))


@app.post("/data/upload")
def data_upload(body: UploadRequest):
    try:
        result = upload_csv(_state(), body.filename, body.content)
        return _json(UploadResponse(**result))
    except FormatError as exc:
        return _error(exc)
    except Exception as exc:
        logger.exception("data_upload failed")
        return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


@app.get("/data")
def data_page():
    try:
        return _page()
    except PipelineError as exc:
        return _error(exc)
    except Exception as exc:
        logger.exception("data_page failed")
        return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


@app.put("/data/selection")
def data_selection(body: SelectionModel):
    try:
        _state().apply(body.model_dump())
        return _page()
    except PipelineError as exc:
        return _error(exc)
    except Exception as exc:
        logger.exception("data_selection failed")
        return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


@app.delete("/data")
def data_clear():
    try:
        _state().clear()
        return _page()
    except Exception as exc:
        logger.exception("data_clear failed")
        return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


@app.get("/meta/columns")
def meta_columns():
    try:
        state = _state()
        return _json(MetaColumnsResponse(columns=state.columns, numeric_columns=state.numeric_columns))
    except Exception as exc:
        logger.exception("meta_columns failed")
        return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


@app.get("/export/{what}")
def export(what: str):
    state = _state()
    try:
        if what == "data":
            csv_bytes = export_rows_csv(state)
            filename = "csv-data.csv"
        elif what == "chart":
            csv_bytes = export_chart_csv(state, strict_projection=settings.strict_projection)
            filename = "csv-data-chart.csv"
        else:
            return JSONResponse(status_code=404, content={"error": f"Unknown export '{what}'", "type": "NotFound"})
    except (InvalidSelectionError, ProjectionError) as exc:
        return _error(exc)
    return Response(content=csv_bytes, media_type="text/csv", headers={"Content-Disposition": f"attachment; filename={filename}"})
