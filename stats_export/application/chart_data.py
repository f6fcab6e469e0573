from __future__ import annotations
import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Iterable, Sequence
from stats_export.domain.records import RecordRow


logger = logging.getLogger(__name__)

MONTH_LABELS = ("Jan", "Fev", "Mar", "Abr", "Mai", "Jun", "Jul", "Ago", "Set", "Out", "Nov", "Dez")
NO_CATEGORY = "Sem Categoria"


@dataclass(frozen=True)
class ChartSeries:
    labels: tuple[str, ...]
    series: dict[str, tuple[int, ...]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.labels


def _last_months(today: date, count: int) -> list[tuple[int, int]]:
    months: list[tuple[int, int]] = []
    year, month = today.year, today.month
    for _ in range(count):
        months.append((year, month))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    months.reverse()
    return months

def _month_label(year_month: tuple[int, int]) -> str:
    return MONTH_LABELS[year_month[1] - 1]

# tickets opened per month over the last 6 months (bar chart)
def tickets_per_month(records: Sequence[RecordRow], today: date) -> ChartSeries:
    months = _last_months(today, 6)
    opened = Counter(
        (r.opened_at.year, r.opened_at.month) for r in records if r.opened_at is not None
    )
    return ChartSeries(
        labels=tuple(_month_label(m) for m in months),
        series={"Chamados": tuple(opened.get(m, 0) for m in months)},
    )

# share of tickets per category, largest first (pie chart)
def tickets_by_category(records: Sequence[RecordRow], today: date) -> ChartSeries:
    counts = Counter((r.category or "").strip() or NO_CATEGORY for r in records)
    ranked = counts.most_common()
    return ChartSeries(
        labels=tuple(name for name, _ in ranked),
        series={"Chamados": tuple(value for _, value in ranked)},
    )

# opened vs resolved over the last 12 months (line chart)
def annual_trend(records: Sequence[RecordRow], today: date) -> ChartSeries:
    months = _last_months(today, 12)
    opened = Counter(
        (r.opened_at.year, r.opened_at.month) for r in records if r.opened_at is not None
    )
    resolved = Counter(
        (r.resolved_at.year, r.resolved_at.month) for r in records if r.resolved_at is not None
    )
    return ChartSeries(
        labels=tuple(_month_label(m) for m in months),
        series={
            "Abertos": tuple(opened.get(m, 0) for m in months),
            "Resolvidos": tuple(resolved.get(m, 0) for m in months),
        },
    )

# top 10 analysts by resolved tickets (horizontal bar chart)
def tickets_by_analyst(records: Sequence[RecordRow], today: date, limit: int = 10) -> ChartSeries:
    counts = Counter(
        r.assignee.strip()
        for r in records
        if r.resolved_at is not None and r.assignee and r.assignee.strip()
    )
    ranked = counts.most_common(limit)
    return ChartSeries(
        labels=tuple(name for name, _ in ranked),
        series={"Resolvidos": tuple(value for _, value in ranked)},
    )


AGGREGATIONS: dict[str, Callable[[Sequence[RecordRow], date], ChartSeries]] = {
    "tickets_per_month": tickets_per_month,
    "tickets_by_category": tickets_by_category,
    "annual_trend": annual_trend,
    "tickets_by_analyst": tickets_by_analyst,
}


def aggregate(source: str, records: Iterable[RecordRow], today: date) -> ChartSeries:
    try:
        aggregation = AGGREGATIONS[source]
    except KeyError as exc:
        raise ValueError(f"Unknown chart data source {source!r}") from exc

    series = aggregation(list(records), today)
    logger.debug("Aggregated %s: %d label(s)", source, len(series.labels))
    return series
