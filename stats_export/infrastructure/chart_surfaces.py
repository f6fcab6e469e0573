from __future__ import annotations
import logging
from datetime import date
from io import BytesIO
from typing import Sequence
import matplotlib

matplotlib.use("Agg")

from matplotlib.axes import Axes
from matplotlib.figure import Figure
from stats_export.application.chart_data import ChartSeries, aggregate
from stats_export.domain.records import RecordRow
from stats_export.infrastructure.chart_catalog import ChartCatalog, ChartSpec
from stats_export.shared.errors import SurfaceUnavailable


logger = logging.getLogger(__name__)

FIGURE_SIZE = (8.0, 4.0)
BASE_DPI = 100
PALETTE = ("#3b82f6", "#10b981", "#f59e0b", "#ef4444", "#8b5cf6", "#06b6d4", "#ec4899", "#84cc16")


class MatplotlibChartSurface:
    """Chart surface drawn by matplotlib from pre-aggregated series.

        A surface built without data (``series=None``) behaves like a chart
        that never got rendered on the dashboard: it is unavailable and
        refuses to produce a snapshot.
        """

    def __init__(self, spec: ChartSpec, series: ChartSeries | None) -> None:
        self.surface_id = spec.chart_id
        self.title = spec.title
        self._spec = spec
        self._series = series

    @property
    def slug(self) -> str:
        return self._spec.slug

    def is_available(self) -> bool:
        return self._series is not None

    def produce_raster(
        self,
        scale: float,
        background: str,
        allow_cross_origin: bool,
    ) -> bytes:
        # every element is drawn locally, so allow_cross_origin has nothing to gate
        if self._series is None:
            raise SurfaceUnavailable(f"Chart '{self.title}' has no rendered data")

        figure = Figure(figsize=FIGURE_SIZE, dpi=BASE_DPI, facecolor=background)
        axes = figure.add_subplot(1, 1, 1)
        axes.set_facecolor(background)
        _draw(axes, self._spec.kind, self._series)
        axes.set_title(self.title)
        figure.tight_layout()

        with BytesIO() as buffer:
            figure.savefig(buffer, format="png", dpi=BASE_DPI * scale, facecolor=background)
            payload = buffer.getvalue()

        logger.debug("Drew chart %s (%s) at %.1fx", self.surface_id, self._spec.kind, scale)
        return payload


def _draw(axes: Axes, kind: str, data: ChartSeries) -> None:
    if data.is_empty:
        axes.text(0.5, 0.5, "Sem dados", ha="center", va="center", transform=axes.transAxes)
        axes.set_axis_off()
        return

    labels = list(data.labels)
    if kind == "pie":
        values = next(iter(data.series.values()))
        axes.pie(values, labels=labels, colors=PALETTE, autopct="%1.0f%%", startangle=90)
        axes.axis("equal")
    elif kind == "line":
        for index, (name, values) in enumerate(data.series.items()):
            axes.plot(labels, values, marker="o", label=name, color=PALETTE[index % len(PALETTE)])
        axes.legend()
        axes.grid(True, alpha=0.3)
    elif kind == "barh":
        values = next(iter(data.series.values()))
        axes.barh(labels[::-1], list(values)[::-1], color=PALETTE[4])
        axes.grid(True, axis="x", alpha=0.3)
    else:
        values = next(iter(data.series.values()))
        axes.bar(labels, values, color=PALETTE[0])
        axes.grid(True, axis="y", alpha=0.3)


def build_chart_surfaces(
    catalog: ChartCatalog,
    records: Sequence[RecordRow] | None,
    today: date,
) -> list[MatplotlibChartSurface]:
    """Build one surface per catalog chart, in catalog order.

        ``records=None`` means the data never loaded, and every surface is
        returned unavailable.
        """

    surfaces: list[MatplotlibChartSurface] = []
    for spec in catalog.charts:
        series = aggregate(spec.source, records, today) if records is not None else None
        surfaces.append(MatplotlibChartSurface(spec, series))
    return surfaces
