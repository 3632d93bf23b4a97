"""
views.py – Display-ready payloads derived from an EmissionReport.

The report keeps per-category emissions unrounded; every rounding for
charts, tables and KPI cards happens here.
"""
from __future__ import annotations

from typing import Any

from footprint.calculations import EmissionReport, round_half_up
from footprint.constants import DISPLAY_DECIMALS, EMISSIONS_NODE_LABEL


def chart_series(report: EmissionReport) -> dict[str, list]:
    """Bar / doughnut series: labels ranked by emission, values to 2 dp."""
    ranked = report.ranked()
    return {
        "labels": [name for name, _ in ranked],
        "values": [round_half_up(agg.emission, DISPLAY_DECIMALS) for _, agg in ranked],
    }


def sankey_links(report: EmissionReport) -> dict[str, list]:
    """
    Flow-diagram feed: every category flows into one emissions node.

    Nodes are the categories in first-seen order followed by the emissions
    node; link values are whole kg CO₂e.
    """
    nodes = list(report.aggregates)
    target = len(nodes)
    nodes.append(EMISSIONS_NODE_LABEL)

    sources: list[int] = []
    targets: list[int] = []
    values: list[int] = []
    for idx, agg in enumerate(report.aggregates.values()):
        sources.append(idx)
        targets.append(target)
        values.append(int(round_half_up(agg.emission)))

    return {"nodes": nodes, "source": sources, "target": targets, "value": values}


def breakdown_table(report: EmissionReport) -> list[dict[str, Any]]:
    """Rows of the breakdown table, in first-seen order."""
    return [
        {
            "activity": name,
            "quantity": agg.quantity,
            "unit": agg.unit,
            "emission": round_half_up(agg.emission, DISPLAY_DECIMALS),
        }
        for name, agg in report.aggregates.items()
    ]


def kpis(report: EmissionReport) -> dict[str, Any]:
    ranked = report.ranked()
    top_name, top_emission = None, None
    if ranked:
        top_name = ranked[0][0]
        top_emission = int(round_half_up(ranked[0][1].emission))
    return {
        "total_emission": report.total_emission,
        "top_source": top_name,
        "top_source_emission": top_emission,
        "category_count": len(report.aggregates),
    }


def build_views(report: EmissionReport) -> dict[str, Any]:
    """All derived views in a single JSON-serialisable dict."""
    return {
        "kpis": kpis(report),
        "chart": chart_series(report),
        "sankey": sankey_links(report),
        "table": breakdown_table(report),
    }
