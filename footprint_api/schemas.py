"""
schemas.py – Pydantic request / response models for the footprint API.

Row records are accepted loosely: any of the supported field spellings
(``Activity``/``activity``, ``Quantity``/``quantity``/``Qty``,
``Unit``/``unit``) may be used, and quantities may be numbers or text such
as ``"1,234"``.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


class ReportRequest(BaseModel):
    """Body of POST /api/report."""

    rows: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Activity records, e.g. {\"Activity\": \"Electricity\", \"Quantity\": \"1,200\", \"Unit\": \"kWh\"}",
    )


class FactorOut(BaseModel):
    """One entry of the emission factor table."""

    source: str = Field(..., description="Activity source name")
    unit: str = Field(..., description="Declared unit of the factor")
    factor: float = Field(..., description="kg CO₂e per unit")


class HealthOut(BaseModel):
    status: str = "ok"
    factor_count: Optional[int] = None
