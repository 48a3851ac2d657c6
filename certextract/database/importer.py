import io
import zipfile
from typing import Any

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from certextract.database.exceptions import SpreadsheetImportError
from certextract.database.repositories.certificate_repository import CertificateRepository
from certextract.extraction.formats import FormatHandler
from certextract.logging.logger import Log


class SpreadsheetImporter:
    """Loads a consolidated workbook with storage headers into a format's table."""

    def __init__(self, repository: CertificateRepository) -> None:
        self._repository = repository

    def import_workbook(self, workbook_bytes: bytes, handler: FormatHandler) -> str:
        """Insert every data row of the first sheet and return a confirmation message.

        Raises:
            SpreadsheetImportError: if the workbook is unreadable, has no data
                rows, or lacks a required header.
        """
        rows = self._read_rows(workbook_bytes)
        if len(rows) < 2:
            raise SpreadsheetImportError("El archivo Excel no contiene suficientes filas.")

        headers = ["" if h is None else str(h).strip() for h in rows[0]]
        for column in handler.columns:
            if column.required and column.column not in headers:
                raise SpreadsheetImportError(
                    f'El encabezado requerido "{column.column}" no se encontró.'
                )

        positions = {name: i for i, name in enumerate(headers) if name}
        records = [
            {
                column.column: _cell(row, positions.get(column.column))
                for column in handler.columns
            }
            for row in rows[1:]
            if any(value not in (None, "") for value in row)
        ]

        Log.info(f"Importing {len(records)} rows into {handler.table_name}")
        self._repository.insert_rows(handler, records)
        return f"Datos ingresados correctamente en {handler.table_name}."

    @staticmethod
    def _read_rows(workbook_bytes: bytes) -> list[tuple[Any, ...]]:
        try:
            wb = load_workbook(io.BytesIO(workbook_bytes), read_only=True, data_only=True)
        except (zipfile.BadZipFile, InvalidFileException, KeyError, ValueError, OSError) as exc:
            raise SpreadsheetImportError(f"No se pudo leer el archivo Excel: {exc}") from exc
        try:
            ws = wb.worksheets[0]
            return [tuple(row) for row in ws.iter_rows(values_only=True)]
        finally:
            wb.close()


def _cell(row: tuple[Any, ...], index: int | None) -> Any:
    if index is None or index >= len(row):
        return ""
    value = row[index]
    return "" if value is None else value
