"""
io_utils.py – CSV ingestion and report artefact writers.

Activity CSVs need a header row. Column names are matched against a few
spelling variants (``Activity``/``activity``, ``Quantity``/``quantity``/
``Qty``, ``Unit``/``unit``); values are passed on raw and parsed by the
calculation engine.

Report artefacts are written to a sub-directory of *outdir* named after the
CSV stem:
    outdir/<stem>/
        report.json
"""
from __future__ import annotations

import csv
import io
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Mapping

from footprint.calculations import ActivityRow, EmissionReport
from footprint.constants import (
    ACTIVITY_FIELDS,
    OUT_REPORT,
    QUANTITY_FIELDS,
    UNIT_FIELDS,
)
from footprint.views import build_views

logger = logging.getLogger(__name__)


class IngestError(ValueError):
    """Raised when uploaded content cannot be turned into activity rows."""


# ─────────────────────────────────────────────────────────────
# Record → ActivityRow
# ─────────────────────────────────────────────────────────────

def _first_present(record: Mapping[str, Any], keys: Iterable[str], default: Any) -> Any:
    """Return the first value under *keys* that is not None, zero or blank."""
    for key in keys:
        value = record.get(key)
        if value is None:
            continue
        if isinstance(value, str):
            if not value.strip():
                continue
        elif not value:
            # 0, 0.0 and False count as absent, so a later alias can supply it.
            continue
        return value
    return default


def record_to_row(record: Mapping[str, Any]) -> ActivityRow:
    """Map one parsed record (any supported field spelling) to an ActivityRow."""
    activity = _first_present(record, ACTIVITY_FIELDS, "")
    quantity = _first_present(record, QUANTITY_FIELDS, 0)
    unit = _first_present(record, UNIT_FIELDS, "")
    return ActivityRow(
        activity=str(activity).strip(),
        quantity=quantity,
        unit=str(unit).strip(),
    )


def records_to_rows(records: Iterable[Mapping[str, Any]]) -> list[ActivityRow]:
    return [record_to_row(r) for r in records]


# ─────────────────────────────────────────────────────────────
# CSV parsing
# ─────────────────────────────────────────────────────────────

def parse_csv_text(text: str) -> list[ActivityRow]:
    """
    Parse CSV *text* into activity rows.

    Blank lines are skipped and a leading UTF-8 BOM is ignored. Header names
    are trimmed before matching.

    Raises
    ------
    IngestError
        If the text has no header row, or the header has no activity column.
    """
    text = text.lstrip("\ufeff")
    reader = csv.DictReader(io.StringIO(text))
    if not reader.fieldnames:
        raise IngestError("CSV has no header row.")

    fieldnames = [(name or "").strip() for name in reader.fieldnames]
    if not any(name in ACTIVITY_FIELDS for name in fieldnames):
        raise IngestError(
            f"CSV header has no activity column (expected one of: {', '.join(ACTIVITY_FIELDS)})."
        )
    reader.fieldnames = fieldnames

    rows = records_to_rows(reader)
    logger.debug("Parsed %d CSV rows (columns: %s)", len(rows), fieldnames)
    return rows


def read_activity_csv(path: Path) -> list[ActivityRow]:
    """
    Read an activity CSV file from disk.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    IngestError
        If the file is not UTF-8 text or has no usable header.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"CSV file not found: {path}")
    try:
        text = path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as exc:
        raise IngestError(f"{path.name} is not valid UTF-8 text: {exc}") from exc
    return parse_csv_text(text)


def decode_upload(contents: bytes, filename: str = "upload.csv") -> list[ActivityRow]:
    """Decode uploaded bytes and parse them as an activity CSV."""
    try:
        text = contents.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise IngestError(f"{filename} is not valid UTF-8 text: {exc}") from exc
    return parse_csv_text(text)


# ─────────────────────────────────────────────────────────────
# Report artefacts
# ─────────────────────────────────────────────────────────────

def _write_json(path: Path, data: Any, indent: int = 2) -> None:
    """Serialise *data* to JSON at *path*, creating parents as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        json.dump(data, fh, indent=indent, ensure_ascii=False, default=str)


def build_report_payload(
    *,
    report: EmissionReport,
    suggestions: list[str],
    source_file: str | None = None,
) -> dict[str, Any]:
    """
    Assemble the canonical report dict (as returned by the API and written
    to report.json).
    """
    payload: dict[str, Any] = {}
    if source_file is not None:
        payload["source_file"] = source_file
    payload.update(report.to_dict())
    payload["suggestions"] = list(suggestions)
    payload["views"] = build_views(report)
    payload["created_at"] = datetime.now(tz=timezone.utc).isoformat()
    return payload


def write_report_json(
    *,
    report: EmissionReport,
    suggestions: list[str],
    source_file: Path,
    outdir: Path,
) -> Path:
    """Write ``outdir/<stem>/report.json`` and return its path."""
    dest = Path(outdir) / Path(source_file).stem / OUT_REPORT
    payload = build_report_payload(
        report=report,
        suggestions=suggestions,
        source_file=str(source_file),
    )
    _write_json(dest, payload)
    return dest
