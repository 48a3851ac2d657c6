from collections.abc import Mapping, Sequence
from typing import Any

import psycopg
from psycopg import sql

from certextract.database.coercion import coerce
from certextract.database.connection import get_connection
from certextract.database.exceptions import PersistenceError
from certextract.extraction.formats import FormatHandler
from certextract.extraction.models import ExtractedRecord
from certextract.logging.logger import Log

CREATED_AT_COLUMN = "CreatedAt"


class CertificateRepository:
    """Database operations for the per-format certificate tables."""

    def insert_rows(self, handler: FormatHandler, rows: Sequence[Mapping[str, Any]]) -> int:
        """Insert rows keyed by storage column name into the format's table.

        Values are coerced to the column types; missing columns are stored as
        their empty value. All rows go in one transaction.

        Raises:
            PersistenceError: if the database rejects the insert.
        """
        if not rows:
            return 0

        columns = handler.columns
        query = sql.SQL("INSERT INTO {table} ({columns}) VALUES ({values})").format(
            table=sql.Identifier(handler.table_name),
            columns=sql.SQL(", ").join(
                [sql.Identifier(c.column) for c in columns] + [sql.Identifier(CREATED_AT_COLUMN)]
            ),
            values=sql.SQL(", ").join(
                [sql.Placeholder()] * len(columns) + [sql.SQL("NOW()")]
            ),
        )
        params = [
            tuple(coerce(row.get(c.column), c.column_type) for c in columns) for row in rows
        ]

        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.executemany(query, params)
                conn.commit()
        except psycopg.Error as exc:
            raise PersistenceError(
                f"Could not insert {len(rows)} rows into {handler.table_name}: {exc}"
            ) from exc

        Log.info(f"Inserted {len(rows)} rows into {handler.table_name}")
        return len(rows)

    def save_records(self, handler: FormatHandler, records: Sequence[ExtractedRecord]) -> int:
        """Persist extracted records, mapping field keys to storage columns."""
        rows = [
            {c.column: record.get(c.field, "") for c in handler.columns} for record in records
        ]
        return self.insert_rows(handler, rows)
