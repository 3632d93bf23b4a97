"""
main.py – CLI entry point for the activity footprint calculator.

Usage
-----
Report on one CSV file:
    footprint report --file "samples/activity.csv"
    python -m footprint.main report --file "samples/activity.csv" --json

List the built-in emission factors:
    footprint factors

Common options:
    --outdir "out/"   (report.json destination when --json is given)
    --verbose
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from footprint.calculations import EmissionReport, aggregate
from footprint.config import get_config
from footprint.emission_factors import DEFAULT_REGISTRY
from footprint.io_utils import IngestError, read_activity_csv, write_report_json
from footprint.recommendations import suggest
from footprint.views import breakdown_table, kpis

console = Console()


def _setup_logging(level: int) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(levelname)-8s  %(message)s",
        datefmt="%H:%M:%S",
    )


# ─────────────────────────────────────────────────────────────
# Rendering helpers
# ─────────────────────────────────────────────────────────────

def _print_kpis(report: EmissionReport) -> None:
    cards = kpis(report)
    if cards["top_source"] is None:
        top = "-"
    else:
        top = f"{cards['top_source']} ({cards['top_source_emission']:,} kg)"
    console.print(
        Panel(
            f"[bold]Total CO₂e:[/] {cards['total_emission']:,} kg\n"
            f"[bold]Top source:[/] {top}\n"
            f"[bold]Categories:[/] {cards['category_count']}",
            title="Emissions summary",
            expand=False,
        )
    )


def _print_breakdown(report: EmissionReport) -> None:
    table = Table(title="Breakdown by activity", show_lines=False)
    table.add_column("Activity", style="bold")
    table.add_column("Quantity", justify="right")
    table.add_column("Unit", style="cyan")
    table.add_column("CO₂e (kg)", justify="right")
    for row in breakdown_table(report):
        table.add_row(
            row["activity"],
            f"{row['quantity']:,}",
            row["unit"],
            f"{row['emission']:,}",
        )
    console.print(table)


def _print_suggestions(suggestions: list[str]) -> None:
    console.print("[bold]Suggestions[/]")
    for text in suggestions:
        console.print(f"  • {text}")


# ─────────────────────────────────────────────────────────────
# Sub-commands
# ─────────────────────────────────────────────────────────────

def cmd_report(args: argparse.Namespace) -> int:
    """Handle: footprint report --file data.csv"""
    csv_path = Path(args.file)
    try:
        rows = read_activity_csv(csv_path)
    except FileNotFoundError as exc:
        console.print(f"[red]Error:[/] {exc}")
        return 1
    except IngestError as exc:
        console.print(f"[red]Could not read {csv_path.name}:[/] {exc}")
        return 1

    if args.verbose:
        console.print(f"  [cyan]→[/] Loaded {len(rows)} rows from [bold]{csv_path.name}[/]")

    report = aggregate(rows)
    suggestions = suggest(report.total_emission, report.aggregates)

    _print_kpis(report)
    if report.aggregates:
        _print_breakdown(report)
    else:
        console.print("[yellow]No activity rows with a name were found.[/]")
    _print_suggestions(suggestions)

    if args.json:
        dest = write_report_json(
            report=report,
            suggestions=suggestions,
            source_file=csv_path,
            outdir=Path(args.outdir),
        )
        console.print(f"  [green]✓[/] Wrote {dest}")
    return 0


def cmd_factors(_args: argparse.Namespace) -> int:
    """Handle: footprint factors"""
    table = Table(title="Emission factors (kg CO₂e / unit)")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Source", style="bold")
    table.add_column("Unit", style="cyan")
    table.add_column("Factor", justify="right")
    for idx, factor in enumerate(DEFAULT_REGISTRY.factors, start=1):
        table.add_row(str(idx), factor.source_name, factor.unit, f"{factor.factor_value:.2f}")
    console.print(table)
    return 0


# ─────────────────────────────────────────────────────────────
# Argument parsing
# ─────────────────────────────────────────────────────────────

def build_parser(default_outdir: str = "out") -> argparse.ArgumentParser:
    """Construct and return the top-level argument parser."""
    root = argparse.ArgumentParser(
        prog="footprint",
        description="Activity footprint – emission estimates from activity CSVs.",
    )
    sub = root.add_subparsers(dest="command", required=True)

    # ── report (single CSV) ────────────────────────────────────
    p_report = sub.add_parser("report", help="Compute emissions for one activity CSV.")
    p_report.add_argument(
        "--file",
        required=True,
        help='Path to a CSV with Activity, Quantity and Unit columns, e.g. "samples/activity.csv"',
    )
    p_report.add_argument(
        "--outdir",
        default=default_outdir,
        help=f"Root output directory for report.json (default: {default_outdir}/)",
    )
    p_report.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Also write <outdir>/<stem>/report.json",
    )
    p_report.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Print detailed progress and debug logging",
    )

    # ── factors (list the factor table) ────────────────────────
    sub.add_parser("factors", help="List the built-in emission factors.")

    return root


# ─────────────────────────────────────────────────────────────
# Entry point
# ─────────────────────────────────────────────────────────────

def main(argv: list[str] | None = None) -> None:
    """Parse arguments and dispatch to the correct sub-command."""
    try:
        config = get_config()
    except EnvironmentError as exc:
        console.print(f"[red]Configuration error:[/] {exc}")
        sys.exit(1)

    parser = build_parser(default_outdir=str(config.outdir))
    args = parser.parse_args(argv)

    verbose = getattr(args, "verbose", False)
    _setup_logging(logging.DEBUG if verbose else config.log_level_value)

    dispatch = {
        "report": cmd_report,
        "factors": cmd_factors,
    }
    handler = dispatch.get(args.command)
    if handler is None:
        parser.print_help()
        sys.exit(1)

    sys.exit(handler(args))


if __name__ == "__main__":
    main()
