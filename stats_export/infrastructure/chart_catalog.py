from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List
import yaml
from stats_export.application.chart_data import AGGREGATIONS
from stats_export.shared.errors import ChartCatalogError


logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "charts.yaml"
CHART_KINDS = frozenset({"bar", "barh", "line", "pie"})


@dataclass(frozen=True)
class ChartSpec:
    chart_id: str
    slug: str
    title: str
    kind: str
    source: str


@dataclass(frozen=True)
class ChartCatalog:
    charts: tuple[ChartSpec, ...]

    def get(self, slug_or_id: str) -> ChartSpec:
        for chart in self.charts:
            if slug_or_id in (chart.slug, chart.chart_id):
                return chart
        raise KeyError(slug_or_id)

    @property
    def slugs(self) -> list[str]:
        return [chart.slug for chart in self.charts]


def load_chart_catalog(path: Path | None = None) -> ChartCatalog:
    """Read the chart catalog YAML and validate it into ChartSpec objects.
        The order of the ``charts`` list is the order charts appear in the PDF
        report. Raises ChartCatalogError on I/O, YAML, or schema problems.
        """

    catalog_path = path or DEFAULT_CATALOG_PATH
    try:
        text = catalog_path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot read chart catalog {catalog_path}"
        logger.error("%s: %s", msg, exc)
        raise ChartCatalogError(msg) from exc

    try:
        data: Any = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        msg = "Failed to parse chart catalog YAML"
        logger.error(msg)
        raise ChartCatalogError(msg) from exc

    try:
        charts_raw = data["charts"]
        if not isinstance(charts_raw, list):
            raise TypeError("'charts' is not a list")
    except (TypeError, KeyError) as exc:
        msg = "Unexpected chart catalog shape; expected a 'charts' list"
        logger.error("%s: %s", msg, exc)
        raise ChartCatalogError(msg) from exc

    charts: List[ChartSpec] = []
    try:
        for raw in charts_raw:
            chart = ChartSpec(
                chart_id=str(raw["id"]),
                slug=str(raw["slug"]),
                title=str(raw["title"]),
                kind=str(raw["kind"]),
                source=str(raw["source"]),
            )
            if chart.kind not in CHART_KINDS:
                raise ValueError(f"unknown chart kind {chart.kind!r}")
            if chart.source not in AGGREGATIONS:
                raise ValueError(f"unknown chart source {chart.source!r}")
            charts.append(chart)
    except (KeyError, TypeError, ValueError) as exc:
        msg = "Failed to map chart catalog entries"
        logger.error("%s: %s", msg, exc)
        raise ChartCatalogError(msg) from exc

    slugs = [chart.slug for chart in charts]
    if len(set(slugs)) != len(slugs):
        raise ChartCatalogError("Chart catalog contains duplicate slugs")

    logger.info("Loaded chart catalog with %d chart(s) from %s", len(charts), catalog_path)
    return ChartCatalog(charts=tuple(charts))
