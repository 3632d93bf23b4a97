"""
calculations.py – Emission calculation and aggregation engine.

Each activity row is multiplied by the emission factor resolved from the
factor table, then folded into per-activity totals.

Emission formula
────────────────
 emission (kg CO₂e) = quantity × factor (kg CO₂e / unit)

Noisy spreadsheet data degrades silently instead of failing:

 Input problem              Handling
 ─────────────────────────────────────────────────────────────
 Blank activity             row dropped before aggregation
 Missing / invalid quantity quantity treated as 0
 Unknown activity           factor 0, row still aggregated

Units are carried through but never converted or checked against the
factor's declared unit.

Usage
──────
    from footprint.calculations import aggregate
    from footprint.recommendations import suggest

    report = aggregate(rows)
    messages = suggest(report.total_emission, report.aggregates)
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Any, Iterable

from footprint.constants import PLACEHOLDER_UNIT, TOTAL_DECIMALS
from footprint.emission_factors import DEFAULT_REGISTRY, FactorRegistry

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Data classes (plain data, no rendering dependency)
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class ActivityRow:
    """One input record. ``quantity`` is raw: a number or numeric text."""
    activity: str
    quantity: Any = 0
    unit: str = ""


@dataclass
class ComputedRow:
    """A retained row with its resolved factor and emission."""
    activity: str
    quantity: float
    unit: str
    resolved_factor: float
    emission: float
    factor_source: str | None = None   # canonical factor name, None if unmapped
    factor_unit: str | None = None     # unit declared by the matched factor

    def to_dict(self) -> dict[str, Any]:
        return {
            "activity": self.activity,
            "quantity": self.quantity,
            "unit": self.unit,
            "factor": self.resolved_factor,
            "emission": self.emission,
            "factor_source": self.factor_source,
            "factor_unit": self.factor_unit,
        }


@dataclass
class CategoryAggregate:
    """Running totals for one activity string."""
    unit: str
    quantity: float = 0.0
    emission: float = 0.0
    rows: list[ComputedRow] = field(default_factory=list)

    def add(self, row: ComputedRow) -> None:
        self.quantity += row.quantity
        self.emission += row.emission
        self.rows.append(row)

    def to_dict(self) -> dict[str, Any]:
        return {
            "quantity": self.quantity,
            "unit": self.unit,
            "emission": self.emission,
            "rows": [r.to_dict() for r in self.rows],
        }


@dataclass
class EmissionReport:
    """Top-level result of :func:`aggregate`."""
    total_emission: float = 0.0
    aggregates: dict[str, CategoryAggregate] = field(default_factory=dict)

    def ranked(self) -> list[tuple[str, CategoryAggregate]]:
        return rank_categories(self.aggregates)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_emission": self.total_emission,
            "aggregates": {k: v.to_dict() for k, v in self.aggregates.items()},
        }


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round *value* to *ndigits* places, halves away from zero."""
    scale = 10 ** ndigits
    scaled = abs(value) * scale
    if not math.isfinite(scaled):
        # Values this large have no fractional digits left to round.
        return value
    return math.copysign(math.floor(scaled + 0.5) / scale, value)


def parse_quantity(raw: Any) -> float:
    """
    Parse a possibly comma-grouped quantity.

    ``"1,234.5"`` → 1234.5; empty, non-numeric, NaN, infinite or
    float-overflowing input → 0.0.
    """
    if raw is None or isinstance(raw, bool):
        return 0.0
    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            return 0.0
    else:
        text = str(raw).replace(",", "").strip()
        if not text or "_" in text:
            return 0.0
        try:
            value = float(text)
        except ValueError:
            return 0.0
    if not math.isfinite(value):
        return 0.0
    return value


def rank_categories(
    aggregates: dict[str, CategoryAggregate],
) -> list[tuple[str, CategoryAggregate]]:
    """Categories by emission, highest first; ties keep first-seen order."""
    # sorted() is stable, and reverse=True keeps equal items in input order.
    return sorted(aggregates.items(), key=lambda kv: kv[1].emission, reverse=True)


# ─────────────────────────────────────────────────────────────────────────────
# 1. Per-row calculation
# Formula: emission = quantity × factor
# ─────────────────────────────────────────────────────────────────────────────

def compute_row(
    row: ActivityRow,
    registry: FactorRegistry = DEFAULT_REGISTRY,
) -> ComputedRow | None:
    """
    Compute the emission for a single row.

    Returns ``None`` when the activity is blank; the caller must then ignore
    the row entirely.
    """
    activity = str(row.activity or "").strip()
    if not activity:
        logger.debug("Skipping row with blank activity: %r", row)
        return None

    quantity = parse_quantity(row.quantity)
    unit = str(row.unit or "").strip()

    factor = registry.lookup(activity)
    if factor is None:
        logger.debug("No emission factor for activity '%s'; using 0", activity)
        resolved = 0.0
    else:
        resolved = float(factor.factor_value)

    emission = quantity * resolved
    if not math.isfinite(emission):
        logger.warning("Emission for '%s' overflows (quantity %r); using 0", activity, quantity)
        emission = 0.0

    return ComputedRow(
        activity=activity,
        quantity=quantity,
        unit=unit,
        resolved_factor=resolved,
        emission=emission,
        factor_source=factor.source_name if factor else None,
        factor_unit=factor.unit if factor else None,
    )


# ─────────────────────────────────────────────────────────────────────────────
# 2. Aggregation by activity
# ─────────────────────────────────────────────────────────────────────────────

def aggregate(
    rows: Iterable[ActivityRow],
    registry: FactorRegistry = DEFAULT_REGISTRY,
) -> EmissionReport:
    """
    Fold all rows into per-activity aggregates and a rounded grand total.

    Aggregates are keyed by the trimmed activity text as written in the
    input, not by the matched factor name. Only the grand total is rounded.
    """
    aggregates: dict[str, CategoryAggregate] = {}
    total = 0.0
    skipped = 0

    for row in rows:
        computed = compute_row(row, registry)
        if computed is None:
            skipped += 1
            continue

        bucket = aggregates.get(computed.activity)
        if bucket is None:
            # Unit is fixed by the first row: its own unit, else the factor's.
            unit = computed.unit or computed.factor_unit or PLACEHOLDER_UNIT
            bucket = CategoryAggregate(unit=unit)
            aggregates[computed.activity] = bucket

        # Sums stay finite: a row that would overflow one contributes zero.
        if not all(math.isfinite(v) for v in (
            total + computed.emission,
            bucket.emission + computed.emission,
            bucket.quantity + computed.quantity,
        )):
            logger.warning("Totals for '%s' would overflow; counting row as 0", computed.activity)
            computed = replace(computed, quantity=0.0, emission=0.0)

        total += computed.emission
        bucket.add(computed)

    report = EmissionReport(
        total_emission=round_half_up(total, TOTAL_DECIMALS),
        aggregates=aggregates,
    )
    logger.info(
        "Aggregated %d categories (%d blank rows skipped): total %.2f kg CO₂e",
        len(aggregates), skipped, report.total_emission,
    )
    return report
