"""Compulsory insurance certificate (SOAP) extraction."""

import re

from certextract.extraction.models import ColumnDefinition, ColumnType, Extraction
from certextract.extraction.text import ABSENT_MARKER, search

_I = re.IGNORECASE

# "R.V.M.", "R V M" and "RVM" all appear in the wild.
_RVM_RE = re.compile(r"INSCRIPCION\s*R\s*\.?\s*V\s*\.?\s*M\s*\.?\s*:\s*([A-Z0-9\-]+)", _I)
_UNDER_CODE_RE = re.compile(r"Bajo\s+el\s+c[óo]digo\s*[:\-]?\s*([A-Z0-9\-]+)", _I)
_TAX_ID_RE = re.compile(r"RUT\s*[:\-]?\s*((?:\d{1,3}(?:\.\d{3})+)|\d{7,8})\s*-\s*([0-9kK])", _I)
_EFFECTIVE_FROM_RE = re.compile(r"RIGE\s+DESDE\s*[:\-]?\s*(\d{2}[-/]\d{2}[-/]\d{4})", _I)
_EFFECTIVE_UNTIL_RE = re.compile(
    r"HAST(?:\s*A)?\s*[:\-]?\s*(\d{2}[-/]\d{2}[-/]\d{4}|\b[A-Z]+\s+\d{4})", _I
)
_POLICY_RE = re.compile(r"POLI[ZS]A\s*N[°º]?\s*[:\-]?\s*([A-Z0-9\-]+)", _I)
_PREMIUM_RE = re.compile(r"PRIMA\s*[:\-]?\s*([\d.]+)", _I)
_TAX_ID_SEPARATORS_RE = re.compile(r"[.\s]")

VALIDATION_PATTERNS: dict[str, re.Pattern[str]] = {
    "RVMRegistration": re.compile(r"^[A-Z0-9]+(?:-[A-Z0-9]+)*$"),
    "UnderCode": re.compile(r"^[A-Z0-9\-]+$"),
    "TaxId": re.compile(r"^(?:\d{7,8}|\d{1,3}(?:\.\d{3})+)-[0-9kK]$"),
    "EffectiveFrom": re.compile(r"^\d{2}[-/]\d{2}[-/]\d{4}$"),
    "EffectiveUntil": re.compile(r"^(?:\d{2}[-/]\d{2}[-/]\d{4}|[A-Z]+\s+\d{4})$", _I),
    "PolicyNumber": re.compile(r"^[A-Z0-9\-]+$"),
    "Premium": re.compile(r"^[\d.]+$"),
}

COLUMNS: tuple[ColumnDefinition, ...] = (
    ColumnDefinition("RVMRegistration", "INSCRIPCION R.V.M", "InscripcionRVM", required=True),
    ColumnDefinition("UnderCode", "Bajo el codigo", "BajoElCodigo"),
    ColumnDefinition("TaxId", "RUT", "RUT", required=True),
    ColumnDefinition("EffectiveFrom", "RIGE DESDE", "RigeDesde", ColumnType.DATE, True),
    ColumnDefinition("EffectiveUntil", "HASTA", "Hasta", ColumnType.DATE, True),
    ColumnDefinition("PolicyNumber", "POLIZA N°", "PolizaN"),
    ColumnDefinition("Premium", "PRIMA", "Prima", ColumnType.FLOAT),
)


def extract(text: str) -> Extraction:
    fields = {
        "RVMRegistration": search(text, _RVM_RE),
        "UnderCode": search(text, _UNDER_CODE_RE),
        "TaxId": _tax_id(text),
        "EffectiveFrom": search(text, _EFFECTIVE_FROM_RE),
        "EffectiveUntil": search(text, _EFFECTIVE_UNTIL_RE),
        "PolicyNumber": search(text, _POLICY_RE),
        "Premium": search(text, _PREMIUM_RE),
    }
    return Extraction(fields={name: value or ABSENT_MARKER for name, value in fields.items()})


def _tax_id(text: str) -> str | None:
    """Return the RUT as <digits>-<check>, whatever grouping the document used."""
    match = _TAX_ID_RE.search(text)
    if match is None:
        return None
    digits = _TAX_ID_SEPARATORS_RE.sub("", match.group(1))
    return f"{digits}-{match.group(2)}"
