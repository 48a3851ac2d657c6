"""Conversion of extracted string values into database column values."""

import re
from datetime import date, datetime
from typing import Any

from certextract.extraction.models import ColumnType

_MONTHS: dict[str, int] = {
    "JAN": 1, "FEB": 2, "MAR": 3, "APR": 4, "MAY": 5, "JUN": 6,
    "JUL": 7, "AUG": 8, "SEP": 9, "OCT": 10, "NOV": 11, "DEC": 12,
    "ENE": 1, "ABR": 4, "AGO": 8, "SET": 9, "DIC": 12,
    "ENERO": 1, "FEBRERO": 2, "MARZO": 3, "ABRIL": 4, "MAYO": 5, "JUNIO": 6,
    "JULIO": 7, "AGOSTO": 8, "SEPTIEMBRE": 9, "SETIEMBRE": 9, "OCTUBRE": 10,
    "NOVIEMBRE": 11, "DICIEMBRE": 12,
}

_DAY_MON_YEAR_RE = re.compile(r"^(\d{1,2})/([A-Z]{3})/(\d{4})$")
_MON_YEAR_RE = re.compile(r"^([A-Z]{3})/(\d{4})$")
_COMPACT_RE = re.compile(r"^(\d{4})(\d{2})(\d{2})$")
_NUMERIC_RE = re.compile(r"^(\d{1,2})[/-](\d{1,2})[/-](\d{4})$")
_WORDY_RE = re.compile(r"^(?:(\d{1,2})\s+)?([A-ZÁÉÍÓÚÑ]+)\s+(\d{4})$")

_INT_PREFIX_RE = re.compile(r"^[+-]?\d+")
_FLOAT_PREFIX_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_date(value: str) -> date | None:
    """Parse the date layouts found on the certificates; None when unparseable.

    Supported: "19/JUL/2022", "JUL/2024" (day 1), "20250319", "19/03/2025",
    "19-03-2025", "15 MARZO 2024" and "MARZO 2025" (day 1).
    """
    if not value:
        return None
    text = value.strip().upper()

    if match := _DAY_MON_YEAR_RE.match(text):
        return _build(match.group(3), _MONTHS.get(match.group(2)), match.group(1))
    if match := _MON_YEAR_RE.match(text):
        return _build(match.group(2), _MONTHS.get(match.group(1)), 1)
    if match := _COMPACT_RE.match(text):
        return _build(match.group(1), match.group(2), match.group(3))
    if match := _NUMERIC_RE.match(text):
        return _build(match.group(3), match.group(2), match.group(1))
    if match := _WORDY_RE.match(text):
        return _build(match.group(3), _MONTHS.get(match.group(2)), match.group(1) or 1)
    return None


def _build(year: str | int, month: str | int | None, day: str | int) -> date | None:
    if month is None:
        return None
    try:
        return date(int(year), int(month), int(day))
    except ValueError:
        return None


def parse_int(value: str) -> int:
    match = _INT_PREFIX_RE.match(value.strip()) if value else None
    return int(match.group(0)) if match else 0


def parse_float(value: str) -> float:
    match = _FLOAT_PREFIX_RE.match(value.strip()) if value else None
    return float(match.group(0)) if match else 0.0


def parse_bit(value: str) -> bool:
    return value.strip().lower() in ("x", "1") if value else False


def coerce(value: Any, column_type: ColumnType) -> date | int | float | bool | str | None:
    """Convert one extracted or imported value to the value stored for its column.

    Spreadsheet cells may already hold dates or numbers; those are kept as they are.
    """
    if isinstance(value, datetime) and column_type is ColumnType.DATE:
        return value.date()
    if isinstance(value, date) and column_type is ColumnType.DATE:
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if column_type is ColumnType.INT:
            return int(value)
        if column_type is ColumnType.FLOAT:
            return float(value)
    text = "" if value is None else str(value)
    if column_type is ColumnType.DATE:
        return parse_date(text)
    if column_type is ColumnType.INT:
        return parse_int(text)
    if column_type is ColumnType.FLOAT:
        return parse_float(text)
    if column_type is ColumnType.BIT:
        return parse_bit(text)
    return text.strip()
