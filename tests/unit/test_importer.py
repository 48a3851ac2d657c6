import io
from unittest.mock import MagicMock

import pytest
from openpyxl import Workbook

from certextract.database.exceptions import SpreadsheetImportError
from certextract.database.importer import SpreadsheetImporter
from certextract.database.repositories.certificate_repository import CertificateRepository
from certextract.extraction.formats import handler_for
from certextract.extraction.models import DocumentFormat
from certextract.spreadsheet.workbook import SourceRecord, build_workbook

TECH_REVIEW = handler_for(DocumentFormat.TECH_REVIEW)


def _workbook(*rows: list[object]) -> bytes:
    wb = Workbook()
    ws = wb.active
    for row in rows:
        ws.append(row)
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


def _importer() -> tuple[SpreadsheetImporter, MagicMock]:
    repository = MagicMock(spec=CertificateRepository)
    return SpreadsheetImporter(repository), repository


class TestImportWorkbook:
    def test_imports_consolidated_workbook_with_storage_headers(self) -> None:
        content = build_workbook(
            [
                SourceRecord(
                    "crt.pdf",
                    {
                        "ReviewDate": "12 MAYO 2023",
                        "Plant": "AB-1",
                        "PlateNumber": "XYZ789",
                        "ValidUntil": "MAYO 2024",
                    },
                )
            ],
            TECH_REVIEW.columns,
            storage_headers=True,
        )
        importer, repository = _importer()

        message = importer.import_workbook(content, TECH_REVIEW)

        assert message == "Datos ingresados correctamente en certificado_revision_tecnica."
        repository.insert_rows.assert_called_once_with(
            TECH_REVIEW,
            [
                {
                    "FechaRevision": "12 MAYO 2023",
                    "Planta": "AB-1",
                    "PlacaPatente": "XYZ789",
                    "ValidoHasta": "MAYO 2024",
                }
            ],
        )

    def test_optional_columns_may_be_missing(self) -> None:
        handler = handler_for(DocumentFormat.INSURANCE)
        content = _workbook(
            ["InscripcionRVM", "RUT", "RigeDesde", "Hasta"],
            ["AB12", "97006000-6", "01-04-2024", "31-03-2025"],
        )
        importer, repository = _importer()

        importer.import_workbook(content, handler)

        rows = repository.insert_rows.call_args.args[1]
        assert rows[0]["Prima"] == ""
        assert rows[0]["RUT"] == "97006000-6"

    def test_requires_a_data_row(self) -> None:
        importer, repository = _importer()
        with pytest.raises(SpreadsheetImportError, match="suficientes filas"):
            importer.import_workbook(_workbook(["FechaRevision"]), TECH_REVIEW)
        repository.insert_rows.assert_not_called()

    def test_rejects_missing_required_header(self) -> None:
        content = _workbook(["FechaRevision", "Planta"], ["12 MAYO 2023", "AB-1"])
        importer, _ = _importer()
        with pytest.raises(SpreadsheetImportError, match='"PlacaPatente"'):
            importer.import_workbook(content, TECH_REVIEW)

    def test_rejects_unreadable_file(self) -> None:
        importer, _ = _importer()
        with pytest.raises(SpreadsheetImportError):
            importer.import_workbook(b"not a workbook", TECH_REVIEW)
