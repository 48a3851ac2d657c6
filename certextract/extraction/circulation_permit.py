"""Circulation permit ("Permiso de Circulación") extraction.

Unchecked payment boxes and missing optional fields are reported as
"No aplica" rather than as an empty value.
"""

import re

from certextract.extraction.models import ColumnDefinition, ColumnType, Extraction
from certextract.extraction.text import NOT_APPLICABLE, search

_I = re.IGNORECASE

_PATTERNS: dict[str, re.Pattern[str]] = {
    "UniquePlate": re.compile(r"Placa\s+Única\s*[:\-]?\s*([A-Z0-9\-]+)", _I),
    "SIICode": re.compile(r"Codigo\s+SII\s*[:\-]?\s*([A-Z0-9]+)", _I),
    "PermitValue": re.compile(r"Valor\s+Permiso\s*[:\-]?\s*(\d+)", _I),
    "FullPayment": re.compile(r"Pago\s+total\s*[:\-]?\s*(X)?", _I),
    "Installment1Payment": re.compile(r"Pago\s+cuota\s+1\s*[:\-]?\s*(X)?", _I),
    "Installment2Payment": re.compile(r"Pago\s+cuota\s+2\s*[:\-]?\s*(X)?", _I),
    "TotalDue": re.compile(r"Total\s+a\s+pagar\s*[:\-]?\s*(\d+)", _I),
    "IssueDate": re.compile(r"Fecha\s+emisi[oó]n\s*[:\-]?\s*(\d{2}/\d{2}/\d{4})", _I),
    "DueDate": re.compile(r"Fecha\s+Vencimiento\s*[:\-]?\s*(\d{2}/\d{2}/\d{4})", _I),
    "PaymentMethod": re.compile(r"Forma\s+de\s+Pago\s*[:\-]?\s*(\w+)", _I),
}

VALIDATION_PATTERNS: dict[str, re.Pattern[str]] = {
    "UniquePlate": re.compile(r"^[A-Z0-9\-]+$", _I),
    "SIICode": re.compile(r"^[A-Z0-9]+$", _I),
    "PermitValue": re.compile(r"^\d+$"),
    "FullPayment": re.compile(r"^(X|No aplica)$", _I),
    "Installment1Payment": re.compile(r"^(X|No aplica)$", _I),
    "Installment2Payment": re.compile(r"^(X|No aplica)$", _I),
    "TotalDue": re.compile(r"^\d+$"),
    "IssueDate": re.compile(r"^(\d{2}/\d{2}/\d{4}|No aplica)$", _I),
    "DueDate": re.compile(r"^(\d{2}/\d{2}/\d{4}|No aplica)$", _I),
    "PaymentMethod": re.compile(r"^(\w+|No aplica)$", _I),
}

COLUMNS: tuple[ColumnDefinition, ...] = (
    ColumnDefinition("UniquePlate", "Placa Única", "PlacaUnica", required=True),
    ColumnDefinition("SIICode", "Código SII", "CodigoSII"),
    ColumnDefinition("PermitValue", "Valor Permiso", "ValorPermiso", ColumnType.INT),
    ColumnDefinition("FullPayment", "Pago total", "PagoTotal", ColumnType.BIT),
    ColumnDefinition("Installment1Payment", "Pago Cuota 1", "PagoCuota1", ColumnType.BIT),
    ColumnDefinition("Installment2Payment", "Pago Cuota 2", "PagoCuota2", ColumnType.BIT),
    ColumnDefinition("TotalDue", "Total a pagar", "TotalAPagar", ColumnType.INT),
    ColumnDefinition("IssueDate", "Fecha de emisión", "FechaEmision", ColumnType.DATE, True),
    ColumnDefinition(
        "DueDate", "Fecha de vencimiento", "FechaVencimiento", ColumnType.DATE, True
    ),
    ColumnDefinition("PaymentMethod", "Forma de Pago", "FormaDePago"),
)


def extract(text: str) -> Extraction:
    fields: dict[str, str] = {}
    for name, pattern in _PATTERNS.items():
        value = search(text, pattern) or ""
        fields[name] = value if value.strip() else NOT_APPLICABLE
    return Extraction(
        fields=fields,
        patterns={name: pattern.pattern for name, pattern in _PATTERNS.items()},
    )
