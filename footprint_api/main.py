"""
main.py – FastAPI service for activity footprint reports.

Start:
    cd /path/to/activity-footprint
    uvicorn footprint_api.main:app --reload --port 8000

Reports are computed in-process by the footprint package; nothing is stored.
"""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from footprint.calculations import ActivityRow, aggregate
from footprint.config import get_config
from footprint.constants import ALLOWED_EXTENSIONS
from footprint.emission_factors import DEFAULT_REGISTRY
from footprint.io_utils import IngestError, build_report_payload, decode_upload, records_to_rows
from footprint.recommendations import suggest

from .schemas import FactorOut, HealthOut, ReportRequest

logger = logging.getLogger(__name__)

config = get_config()

app = FastAPI(
    title="Activity Footprint – Report API",
    version="1.0.0",
    description="Emission estimates, category breakdowns and suggestions for activity data.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _report_payload(rows: list[ActivityRow], source_file: str | None = None) -> dict[str, Any]:
    report = aggregate(rows)
    suggestions = suggest(report.total_emission, report.aggregates)
    return build_report_payload(report=report, suggestions=suggestions, source_file=source_file)


def _parse_and_report(contents: bytes, filename: str) -> dict[str, Any]:
    rows = decode_upload(contents, filename)
    return _report_payload(rows, source_file=filename)


@app.get("/health", response_model=HealthOut)
def health():
    return HealthOut(status="ok", factor_count=len(DEFAULT_REGISTRY))


@app.get("/api/factors", response_model=list[FactorOut], summary="Emission factor table")
def factors():
    """Factors in lookup order; earlier entries win partial-name matches."""
    return [FactorOut(**f.to_dict()) for f in DEFAULT_REGISTRY.factors]


@app.post("/api/report", summary="Compute a report from JSON rows")
def report(body: ReportRequest):
    """
    Returns total_emission, per-activity aggregates, suggestions, and the
    derived chart / table views. Rows with a blank activity are ignored.
    """
    try:
        return _report_payload(records_to_rows(body.rows))
    except HTTPException:
        raise
    except Exception as exc:
        logger.exception("Report computation failed")
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@app.post("/api/upload", summary="Compute a report from an uploaded CSV")
async def upload(file: UploadFile = File(...)):
    """
    Receive an activity CSV → parse → compute → return the report payload.
    Parsing and computation run in a worker thread.
    """
    filename = file.filename or "upload.csv"
    suffix = Path(filename).suffix.lower()
    if suffix and suffix not in ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type '{suffix}'. Upload a CSV file.",
        )

    contents = await file.read()
    if not contents:
        raise HTTPException(status_code=400, detail="Uploaded file is empty.")
    if len(contents) > config.max_upload_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"Uploaded file exceeds {config.max_upload_bytes} bytes.",
        )

    try:
        return await asyncio.to_thread(_parse_and_report, contents, filename)
    except IngestError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        logger.exception("Upload processing failed for %s", filename)
        raise HTTPException(status_code=500, detail=str(e)) from e
