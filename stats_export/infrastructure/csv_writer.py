from __future__ import annotations
import csv
import io
import logging
from stats_export.domain.records import RecordRow, TabularDocument


logger = logging.getLogger(__name__)

DELIMITER = ";"


def build_csv(
    document: TabularDocument,
    records: list[RecordRow] | None = None,
    generated_by: str = "",
) -> bytes:
    """Encode the table as semicolon-separated UTF-8 with a BOM so spreadsheet apps pick the encoding."""

    with io.StringIO(newline="") as buffer:
        writer = csv.writer(buffer, delimiter=DELIMITER, lineterminator="\n")
        writer.writerow(document.header)
        writer.writerows(document.rows)
        text = buffer.getvalue()

    logger.debug("Encoded %d CSV rows", len(document.rows))
    return text.encode("utf-8-sig")
