"""Technical revision certificate (CRT) extraction.

Only four fields are taken from these certificates.
"""

import re

from certextract.extraction.models import ColumnDefinition, ColumnType, Extraction
from certextract.extraction.text import search

_I = re.IGNORECASE

_REVIEW_DATE_RE = re.compile(r"FECHA REVISIÓN:\s*(\d{1,2}\s+[A-ZÁÉÍÓÚÑ]+\s+\d{4})", _I)
_PLANT_RE = re.compile(r"PLANTA:\s*([A-Z0-9\-]+)", _I)
_PLATE_RE = re.compile(r"PLACA PATENTE\s+([\w\-]+(?:\s+[\w\-]+){0,2})", _I)
# Some layouts repeat the review date label between "VÁLIDO HASTA" and the value.
_VALID_UNTIL_RES = (
    re.compile(
        r"VÁLIDO HASTA\s*FECHA REVISIÓN:\s*(?:\d{1,2}\s+[A-ZÁÉÍÓÚÑ]+\s+\d{4}\s+)?"
        r".*?\b([A-Z]+\s+\d{4})",
        _I,
    ),
    re.compile(r"VÁLIDO HASTA\s*:?\s*([A-Z]+\s+\d{4})", _I),
)
_PLATE_NOISE = ("FIRMA", "ELECTR")

VALIDATION_PATTERNS: dict[str, re.Pattern[str]] = {
    "ReviewDate": re.compile(r"^\d{1,2}\s+[A-ZÁÉÍÓÚÑ]+\s+\d{4}$"),
    "Plant": re.compile(r"^.+$"),
    "PlateNumber": re.compile(r"^[A-Z0-9]+$"),
    "ValidUntil": re.compile(r"^[A-Z\s]+[0-9]{4}$", _I),
}

COLUMNS: tuple[ColumnDefinition, ...] = (
    ColumnDefinition("ReviewDate", "Fecha de Revisión", "FechaRevision", ColumnType.DATE, True),
    ColumnDefinition("Plant", "Planta", "Planta", required=True),
    ColumnDefinition("PlateNumber", "Placa Patente", "PlacaPatente", required=True),
    ColumnDefinition("ValidUntil", "Válido Hasta", "ValidoHasta", ColumnType.DATE, True),
)


def extract(text: str) -> Extraction:
    valid_until = ""
    for pattern in _VALID_UNTIL_RES:
        found = search(text, pattern)
        if found:
            valid_until = found
            break

    return Extraction(
        fields={
            "ReviewDate": search(text, _REVIEW_DATE_RE) or "",
            "Plant": search(text, _PLANT_RE) or "",
            "PlateNumber": _plate_number(text),
            "ValidUntil": valid_until,
        }
    )


def _plate_number(text: str) -> str:
    raw = search(text, _PLATE_RE) or ""
    tokens = [
        token
        for token in raw.split()
        if not any(noise in token.upper() for noise in _PLATE_NOISE)
    ]
    return tokens[0] if tokens else ""
