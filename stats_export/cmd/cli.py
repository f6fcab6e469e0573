from __future__ import annotations
import argparse
import logging
from datetime import date
from typing import Callable, Sequence
from stats_export.cmd.export_deps import ExportDeps, build_export_deps
from stats_export.cmd.spinner import Spinner
from stats_export.domain.export import ExportOutcome
from stats_export.infrastructure.chart_catalog import ChartSpec
from stats_export.infrastructure.chart_surfaces import MatplotlibChartSurface, build_chart_surfaces


logger = logging.getLogger(__name__)

def logging_conf(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="stats-export",
        description="Export ticket statistics as CSV/XLSX, chart images, or a PDF report.",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    tabular = sub.add_parser("csv", help="download the detailed ticket table")
    tabular.add_argument("--format", dest="fmt", choices=("csv", "xlsx"), default="csv")

    chart = sub.add_parser("chart", help="download one chart as PNG")
    chart.add_argument("slug", help="chart slug or id from the chart catalog")

    sub.add_parser("pdf", help="download the PDF report with every chart")
    sub.add_parser("all", help="download the CSV table and the PDF report")
    sub.add_parser("charts", help="list the available chart slugs")
    return p

def _load_surfaces(deps: ExportDeps) -> list[MatplotlibChartSurface]:
    with Spinner("Carregando estatísticas"):
        result = deps.record_source.fetch_records(deps.settings.user_email)

    if not result.ok:
        logger.error("Charts cannot be drawn without statistics: %s", result.error)
    records = result.records if result.ok else None
    return build_chart_surfaces(deps.chart_catalog, records, date.today())

def _export_tabular(deps: ExportDeps, fmt: str) -> list[ExportOutcome]:
    return [deps.orchestrator.export_tabular(fmt)]

def _export_chart(deps: ExportDeps, spec: ChartSpec) -> list[ExportOutcome]:
    surfaces = {surface.surface_id: surface for surface in _load_surfaces(deps)}
    return [deps.orchestrator.export_single_raster(surfaces[spec.chart_id], spec.slug)]

def _export_document(deps: ExportDeps) -> list[ExportOutcome]:
    return [deps.orchestrator.export_document(_load_surfaces(deps))]

def run(
    argv: Sequence[str] | None = None,
    deps_factory: Callable[[], ExportDeps] = build_export_deps,
) -> int:
    args = build_parser().parse_args(argv)
    logging_conf(args.verbose)

    try:
        deps = deps_factory()
    except RuntimeError as exc:
        # missing configuration or an unreadable chart catalog
        logger.error("Cannot start export: %s", exc)
        return 1

    if args.command == "charts":
        for chart in deps.chart_catalog.charts:
            print(f"{chart.slug}\t{chart.title}")
        return 0

    if args.command == "chart":
        try:
            spec = deps.chart_catalog.get(args.slug)
        except KeyError:
            logger.error(
                "Unknown chart %r; available: %s",
                args.slug,
                ", ".join(deps.chart_catalog.slugs),
            )
            return 2
        outcomes = _export_chart(deps, spec)
    elif args.command == "csv":
        outcomes = _export_tabular(deps, args.fmt)
    elif args.command == "pdf":
        outcomes = _export_document(deps)
    else:
        outcomes = _export_tabular(deps, "csv") + _export_document(deps)

    for outcome in outcomes:
        if outcome.degraded:
            logger.warning("%s export used an empty dataset", outcome.kind.value)
    return 0 if all(outcome.ok for outcome in outcomes) else 1

def main() -> None:
    raise SystemExit(run())
