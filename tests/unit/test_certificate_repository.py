from datetime import date
from unittest.mock import MagicMock, patch

import psycopg
import pytest

from certextract.database.exceptions import PersistenceError
from certextract.database.repositories.certificate_repository import CertificateRepository
from certextract.extraction.formats import handler_for
from certextract.extraction.models import DocumentFormat

PERMIT = handler_for(DocumentFormat.CIRCULATION_PERMIT)
PERMIT_RECORD = {
    "UniquePlate": "ABCD12",
    "SIICode": "XY123",
    "PermitValue": "45000",
    "FullPayment": "X",
    "Installment1Payment": "No aplica",
    "Installment2Payment": "No aplica",
    "TotalDue": "45000",
    "IssueDate": "15/03/2024",
    "DueDate": "31/03/2024",
    "PaymentMethod": "CONTADO",
}


def _mock_connection(mock_get_conn: MagicMock) -> tuple[MagicMock, MagicMock]:
    """Wire up a mock connection + cursor and return (mock_conn, mock_cursor)."""
    mock_cursor = MagicMock()
    mock_conn = MagicMock()
    mock_conn.cursor.return_value.__enter__ = MagicMock(return_value=mock_cursor)
    mock_conn.cursor.return_value.__exit__ = MagicMock(return_value=False)
    mock_get_conn.return_value.__enter__ = MagicMock(return_value=mock_conn)
    mock_get_conn.return_value.__exit__ = MagicMock(return_value=False)
    return mock_conn, mock_cursor


class TestSaveRecords:
    @patch("certextract.database.repositories.certificate_repository.get_connection")
    def test_inserts_coerced_values_in_column_order(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)

        inserted = CertificateRepository().save_records(PERMIT, [PERMIT_RECORD])

        assert inserted == 1
        query, params = mock_cursor.executemany.call_args.args
        assert "permiso_circulacion" in repr(query)
        assert "CreatedAt" in repr(query)
        assert params == [
            (
                "ABCD12",
                "XY123",
                45000,
                True,
                False,
                False,
                45000,
                date(2024, 3, 15),
                date(2024, 3, 31),
                "CONTADO",
            )
        ]
        mock_conn.commit.assert_called_once()

    @patch("certextract.database.repositories.certificate_repository.get_connection")
    def test_empty_input_does_not_touch_the_database(self, mock_get_conn: MagicMock) -> None:
        assert CertificateRepository().save_records(PERMIT, []) == 0
        mock_get_conn.assert_not_called()


class TestInsertRows:
    @patch("certextract.database.repositories.certificate_repository.get_connection")
    def test_missing_columns_get_empty_values(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        handler = handler_for(DocumentFormat.TECH_REVIEW)

        CertificateRepository().insert_rows(handler, [{"PlacaPatente": "XYZ789"}])

        _query, params = mock_cursor.executemany.call_args.args
        assert params == [(None, "", "XYZ789", None)]

    @patch("certextract.database.repositories.certificate_repository.get_connection")
    def test_database_errors_become_persistence_errors(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.executemany.side_effect = psycopg.errors.UndefinedTable("no table")

        with pytest.raises(PersistenceError, match="permiso_circulacion"):
            CertificateRepository().save_records(PERMIT, [PERMIT_RECORD])

        mock_conn.commit.assert_not_called()
