from __future__ import annotations
from datetime import datetime
import pytest
from stats_export.application.tabular_formatter import TABULAR_HEADER, format_records
from stats_export.domain.records import RecordRow


def _make_record(record_id: str, **fields) -> RecordRow:
    fields.setdefault("opened_at", datetime(2024, 1, 2, 9, 30))
    return RecordRow(record_id=record_id, **fields)

def _column(name: str) -> int:
    return TABULAR_HEADER.index(name)

def test_header_has_twelve_fixed_columns_without_rows() -> None:
    document = format_records([])

    assert document.header == (
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
    assert document.rows == ()

def test_header_is_the_same_with_rows() -> None:
    document = format_records([_make_record("1"), _make_record("2")])

    assert document.header == TABULAR_HEADER
    assert all(len(row) == 12 for row in document.rows)

def test_missing_optional_fields_use_fallback_tokens() -> None:
    row = format_records([_make_record("9")]).rows[0]

    assert row[_column("ID")] == "9"
    assert row[_column("Título")] == "Sem título"
    for name in ("Categoria", "Problema", "Status", "Prioridade", "Usuário Abertura", "Analista Responsável"):
        assert row[_column(name)] == "N/A"
    assert row[_column("Data Resolução")] == "Não resolvido"
    assert row[_column("Tempo Resolução (dias)")] == 0
    assert row[_column("Motivo Abertura")] == "Não informado"

@pytest.mark.parametrize("blank", ["", "   "])
def test_blank_strings_count_as_missing(blank: str) -> None:
    row = format_records([_make_record("3", title=blank, category=blank)]).rows[0]

    assert row[_column("Título")] == "Sem título"
    assert row[_column("Categoria")] == "N/A"

def test_present_values_are_kept_and_dates_use_locale_format() -> None:
    record = _make_record(
        "5",
        title="VPN fora do ar",
        category="Rede",
        problem="Sem conexão",
        status="Resolvido",
        priority="Alta",
        requester="Maria",
        assignee="João",
        resolved_at=datetime(2024, 1, 10, 18, 0),
        resolution_days=8,
        opening_reason="Home office",
    )

    row = format_records([record]).rows[0]

    assert row == (
        "5",
        "VPN fora do ar",
        "Rede",
        "Sem conexão",
        "Resolvido",
        "Alta",
        "Maria",
        "02/01/2024",
        "João",
        "10/01/2024",
        8,
        "Home office",
    )

def test_us_locale_switches_month_and_day() -> None:
    row = format_records([_make_record("1")], locale="en-US").rows[0]

    assert row[_column("Data Abertura")] == "01/02/2024"

def test_integral_float_resolution_time_is_rendered_as_int() -> None:
    rows = format_records(
        [_make_record("1", resolution_days=5.0), _make_record("2", resolution_days=2.5)]
    ).rows

    assert rows[0][_column("Tempo Resolução (dias)")] == 5
    assert rows[1][_column("Tempo Resolução (dias)")] == 2.5

def test_row_order_follows_input() -> None:
    records = [_make_record(str(i)) for i in (3, 1, 2)]

    document = format_records(records)

    assert [row[0] for row in document.rows] == ["3", "1", "2"]
