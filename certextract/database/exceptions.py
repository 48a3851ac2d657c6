class PersistenceError(Exception):
    """Raised when extracted rows cannot be written to the database."""


class SpreadsheetImportError(Exception):
    """Raised when a consolidated workbook cannot be imported."""
