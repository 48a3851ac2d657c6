"""Consolidated workbook assembly with openpyxl."""

import io
from collections.abc import Sequence
from dataclasses import dataclass, field

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from certextract.extraction.models import ColumnDefinition, ExtractedRecord
from certextract.logging.logger import Log
from certextract.processor.messages import strip_markup
from certextract.processor.models import BatchResult

DATA_SHEET = "Datos"
STATS_SHEET = "Estadisticas"
FILE_NAME_HEADER = "Nombre PDF"
EMPTY_MESSAGE = "No se encontraron datos para generar el Excel."

_MIN_WIDTH = 10
_WIDTH_FACTOR = 1.2

_HEADER_FONT = Font(bold=True, color="FFFFFF")
_HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
_WHITE_FILL = PatternFill(start_color="FFFFFF", end_color="FFFFFF", fill_type="solid")
_SUCCESS_FILL = PatternFill(start_color="C6EFCE", end_color="C6EFCE", fill_type="solid")
_FAILURE_FILL = PatternFill(start_color="FFC7CE", end_color="FFC7CE", fill_type="solid")


@dataclass(frozen=True)
class SourceRecord:
    """One extracted record together with the PDF it came from."""

    file_name: str
    fields: ExtractedRecord


@dataclass(frozen=True)
class WorkbookStats:
    total_processed: int
    total_succeeded: int
    total_failed: int
    failed: list[tuple[str, str]] = field(default_factory=list)

    @classmethod
    def from_batch(cls, result: BatchResult) -> "WorkbookStats":
        failures = result.failures
        return cls(
            total_processed=len(result.outcomes),
            total_succeeded=len(result.successes),
            total_failed=len(failures),
            failed=[(f.file_name, f.error_message) for f in failures],
        )


def source_records(result: BatchResult) -> list[SourceRecord]:
    return [SourceRecord(s.file_name, s.fields) for s in result.successes]


def build_workbook(
    records: Sequence[SourceRecord],
    columns: Sequence[ColumnDefinition],
    *,
    storage_headers: bool = False,
    stats: WorkbookStats | None = None,
) -> bytes:
    """Build the consolidated workbook and return it as xlsx bytes.

    Args:
        records: Extracted records, one row each, in output order.
        columns: Column layout of the format the records belong to.
        storage_headers: Use storage column names instead of labels as headers,
            so the workbook can be imported back into the database.
        stats: When given, an "Estadisticas" sheet is added.
    """
    wb = Workbook()
    ws = wb.active
    ws.title = DATA_SHEET

    if not records:
        ws.cell(row=1, column=1, value=EMPTY_MESSAGE)
    else:
        headers = [FILE_NAME_HEADER] + [
            column.column if storage_headers else column.label for column in columns
        ]
        ws.append(headers)
        _style_header(ws, len(headers))
        for record in records:
            ws.append(
                [record.file_name]
                + [record.fields.get(column.field, "") or "" for column in columns]
            )
        _set_widths(ws, len(headers))

    if stats is not None:
        _write_stats(wb.create_sheet(STATS_SHEET), stats)
    else:
        Log.debug("No statistics given, skipping the statistics sheet")

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def _style_header(ws: Worksheet, num_cols: int) -> None:
    for col in range(1, num_cols + 1):
        cell = ws.cell(row=1, column=col)
        cell.font = _HEADER_FONT
        cell.fill = _HEADER_FILL
        cell.alignment = Alignment(horizontal="center")


def _set_widths(ws: Worksheet, num_cols: int) -> None:
    for index in range(1, num_cols + 1):
        longest = max(len(str(cell.value or "")) for cell in ws[get_column_letter(index)])
        width = max(longest * _WIDTH_FACTOR, _MIN_WIDTH)
        ws.column_dimensions[get_column_letter(index)].width = width


def _write_stats(ws: Worksheet, stats: WorkbookStats) -> None:
    bold = Font(bold=True)

    title = ws.cell(row=1, column=1, value="Estadísticas de Conversión")
    title.font = bold
    title.fill = _WHITE_FILL

    totals = (
        ("Total Procesados:", stats.total_processed, _WHITE_FILL),
        ("Total Exitosos:", stats.total_succeeded, _SUCCESS_FILL),
        ("Total Fallidos:", stats.total_failed, _FAILURE_FILL),
    )
    for row, (label, value, fill) in enumerate(totals, start=3):
        ws.cell(row=row, column=1, value=label)
        ws.cell(row=row, column=2, value=value).fill = fill

    heading = ws.cell(row=7, column=1, value="Archivos Fallidos")
    heading.font = bold
    heading.fill = _WHITE_FILL
    ws.cell(row=8, column=1, value="Nombre Archivo")
    ws.cell(row=8, column=2, value="Error")

    for row, (file_name, error) in enumerate(stats.failed, start=9):
        ws.cell(row=row, column=1, value=file_name)
        ws.cell(row=row, column=2, value=strip_markup(error))

    ws.column_dimensions["A"].width = 30
    ws.column_dimensions["B"].width = 80
