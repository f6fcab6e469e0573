from __future__ import annotations
import logging
from typing import Any, Iterable
from stats_export.domain.records import RecordRow, TabularDocument


logger = logging.getLogger(__name__)

TABULAR_HEADER: tuple[str, ...] = (
    "ID",
    "Título",
    "Categoria",
    "Problema",
    "Status",
    "Prioridade",
    "Usuário Abertura",
    "Data Abertura",
    "Analista Responsável",
    "Data Resolução",
    "Tempo Resolução (dias)",
    "Motivo Abertura",
)

NO_TITLE = "Sem título"
NOT_AVAILABLE = "N/A"
NOT_RESOLVED = "Não resolvido"
NOT_INFORMED = "Não informado"

DATE_FORMATS: dict[str, str] = {
    "pt-BR": "%d/%m/%Y",
    "en-GB": "%d/%m/%Y",
    "en-US": "%m/%d/%Y",
}
_ISO_DATE_FORMAT = "%Y-%m-%d"


def format_records(records: Iterable[RecordRow], locale: str = "pt-BR") -> TabularDocument:
    """Turn raw ticket records into the fixed 12-column export table.

        Row order follows the input. Missing values are replaced by the
        fallback tokens of each column; the header is emitted even when there
        are no records.
        """

    date_format = DATE_FORMATS.get(locale)
    if date_format is None:
        logger.warning("Unknown locale %r; dates will be rendered as ISO", locale)
        date_format = _ISO_DATE_FORMAT

    rows = tuple(_format_row(record, date_format) for record in records)
    logger.debug("Formatted %d records for tabular export", len(rows))
    return TabularDocument(header=TABULAR_HEADER, rows=rows)

def _format_row(record: RecordRow, date_format: str) -> tuple[Any, ...]:
    return (
        record.record_id,
        _or(record.title, NO_TITLE),
        _or(record.category, NOT_AVAILABLE),
        _or(record.problem, NOT_AVAILABLE),
        _or(record.status, NOT_AVAILABLE),
        _or(record.priority, NOT_AVAILABLE),
        _or(record.requester, NOT_AVAILABLE),
        _format_opened_at(record, date_format),
        _or(record.assignee, NOT_AVAILABLE),
        record.resolved_at.strftime(date_format) if record.resolved_at else NOT_RESOLVED,
        _resolution_days(record.resolution_days),
        _or(record.opening_reason, NOT_INFORMED),
    )

def _or(value: str | None, fallback: str) -> str:
    if value is None or not value.strip():
        return fallback
    return value

def _format_opened_at(record: RecordRow, date_format: str) -> str:
    # the API always sends an opening date; a missing one means a broken row
    if record.opened_at is None:
        logger.warning("Record %s has no opening date", record.record_id)
        return NOT_AVAILABLE
    return record.opened_at.strftime(date_format)

def _resolution_days(value: float | int | None) -> float | int:
    if not value:
        return 0
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value
