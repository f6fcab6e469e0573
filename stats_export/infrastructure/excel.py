from __future__ import annotations
import logging
from collections import Counter
from datetime import date
from io import BytesIO
from typing import Any, Iterable
from openpyxl import Workbook
from openpyxl.styles import Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet
from stats_export.domain.records import RecordRow, TabularDocument
from stats_export.application.errors import AssemblyError


logger = logging.getLogger(__name__)

NO_STATUS = "Sem Status"


class ExcelReportError(AssemblyError):
    """Raised when the Excel workbook cannot be generated."""

def build_excel(
    document: TabularDocument,
    records: list[RecordRow] | None = None,
    generated_by: str = "Sistema",
    report_date: date | None = None,
) -> bytes:
    """Build a two-sheet workbook: a summary ("Resumo") and the ticket table ("Chamados")."""

    records = records or []
    report_date = report_date or date.today()

    try:
        wb = Workbook()

        ws_raw = wb.active
        if ws_raw is None or not isinstance(ws_raw, Worksheet):
            logger.error("Active sheet is not a Worksheet or is None: %r", ws_raw)
            raise ExcelReportError("Failed to get active worksheet")
        ws_summary: Worksheet = ws_raw
        ws_summary.title = "Resumo"

        status_counts = Counter((r.status or "").strip() or NO_STATUS for r in records)
        ws_summary.append(["Métrica", "Valor"])
        ws_summary.append(["Total de Chamados", len(document.rows)])
        ws_summary.append(["Data do Relatório", report_date.strftime("%d/%m/%Y")])
        ws_summary.append(["Gerado por", generated_by])
        ws_summary.append(["", ""])
        ws_summary.append(["DISTRIBUIÇÃO POR STATUS", ""])
        for status, total in status_counts.most_common():
            ws_summary.append([status, total])

        ws_tickets = wb.create_sheet("Chamados")
        ws_tickets.append(list(document.header))
        for row in document.rows:
            ws_tickets.append(list(row))

        for ws in (ws_summary, ws_tickets):
            _style_header_and_borders(ws)
            _autofit_columns(ws.columns)

        # save workbook into an in-memory buffer and return bytes
        with BytesIO() as buffer:
            wb.save(buffer)
            return buffer.getvalue()

    except ExcelReportError:
        raise
    except Exception as exc:
        logger.exception("Failed to build Excel report")
        raise ExcelReportError("Failed to build Excel report") from exc

def _style_header_and_borders(ws: Worksheet) -> None:
    header_font = Font(bold=True, size=12)
    default_font = Font(size=11)
    header_fill = PatternFill(fill_type="solid", fgColor="10B981")
    border_side = Side(border_style="thin", color="000000")
    default_border = Border(
        left=border_side,
        right=border_side,
        top=border_side,
        bottom=border_side,
    )

    for row_idx, row in enumerate(
            ws.iter_rows(
                min_row=1,
                max_row=ws.max_row,
                max_col=ws.max_column,
            ),
            start=1,
    ):
        for cell in row:
            cell.border = default_border
            if row_idx == 1:
                cell.font = header_font
                cell.fill = header_fill
            else:
                cell.font = default_font

    ws.freeze_panes = "A2"

# auto-fit by setting column width from max content length
def _autofit_columns(columns: Iterable[Any]) -> None:
    for column_cells in columns:
        first_cell = column_cells[0]
        col_index: Any = first_cell.column
        if not isinstance(col_index, int):
            logger.warning("Unexpected column index type: %r (%r)", col_index, type(col_index))
            continue

        max_length = max(
            (len(str(cell.value)) for cell in column_cells if cell.value is not None),
            default=0,
        )
        worksheet = first_cell.parent
        # padding
        worksheet.column_dimensions[get_column_letter(col_index)].width = max_length + 2
