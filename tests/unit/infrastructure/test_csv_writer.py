from __future__ import annotations
import csv
import io
from datetime import datetime
from stats_export.application.tabular_formatter import format_records
from stats_export.domain.records import RecordRow
from stats_export.infrastructure.csv_writer import build_csv


def _decode(payload: bytes) -> list[list[str]]:
    text = payload.decode("utf-8-sig")
    return list(csv.reader(io.StringIO(text), delimiter=";"))

def test_three_records_produce_header_plus_three_lines() -> None:
    records = [
        RecordRow(record_id="1", opened_at=datetime(2024, 1, 2), resolved_at=datetime(2024, 1, 10), resolution_days=8),
        RecordRow(record_id="2", opened_at=datetime(2024, 1, 3)),
        RecordRow(record_id="3", opened_at=datetime(2024, 1, 4)),
    ]

    payload = build_csv(format_records(records))

    lines = payload.decode("utf-8-sig").splitlines()
    assert len(lines) == 4

    rows = _decode(payload)
    assert rows[0][0] == "ID"
    assert rows[1][9] == "10/01/2024"
    for row in rows[2:]:
        assert row[9] == "Não resolvido"
        assert row[10] == "0"

def test_header_only_for_no_records() -> None:
    rows = _decode(build_csv(format_records([])))

    assert len(rows) == 1
    assert len(rows[0]) == 12

def test_output_starts_with_bom_and_uses_semicolons() -> None:
    payload = build_csv(format_records([]))

    assert payload.startswith(b"\xef\xbb\xbf")
    assert payload.decode("utf-8-sig").count(";") == 11

def test_values_containing_delimiter_are_quoted() -> None:
    records = [RecordRow(record_id="1", title="a;b", opened_at=datetime(2024, 1, 2))]

    rows = _decode(build_csv(format_records(records)))

    assert rows[1][1] == "a;b"
