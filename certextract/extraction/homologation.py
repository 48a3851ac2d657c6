"""Homologation certificate ("Certificado de Homologación") extraction."""

import re

from certextract.extraction.models import ColumnDefinition, ColumnType, Extraction
from certextract.extraction.text import search

_I = re.IGNORECASE

TITLE_RE = re.compile(r"CERTIFICADO DE HOMOLOGACIÓN\s+(.*?)\s+REEMPLAZA", _I)

_PATTERNS: dict[str, re.Pattern[str]] = {
    "EmissionDate": re.compile(r"FECHA DE EMISIÓN\s+([0-9A-Z/]+)", _I),
    "CorrelativeNumber": re.compile(r"N[°º]\s*CORRELATIVO\s+([A-Z0-9\-]+)", _I),
    "TechnicalReportCode": re.compile(r"CÓDIGO DE INFORME TÉCNICO\s+([A-Z0-9\-]+)", _I),
    "PlateNumber": re.compile(r"PATENTE\s+([A-Z0-9\-]+)", _I),
    "ValidUntil": re.compile(r"VÁLIDO HASTA\s+([0-9A-Z/]+)", _I),
    "VehicleType": re.compile(r"TIPO DE VEHÍCULO\s+([A-ZÑ]+)", _I),
    "Brand": re.compile(r"MARCA\s+([A-Z]+)", _I),
    "Year": re.compile(r"AÑO\s+([0-9]{4})", _I),
    "Model": re.compile(r"MODELO\s+(.+?)[ \t]+COLOR", _I),
    "Color": re.compile(r"COLOR\s+([A-Z\s()0-9.\-]+?)(?=\s+VIN\b|$)", _I),
    "VIN": re.compile(r"VIN\s+([A-Z0-9]+)", _I),
    "EngineNumber": re.compile(r"N[°º]\s*MOTOR\s+([A-Z0-9]+(?:\s+[A-Z0-9]+)?)", _I),
    "SignedBy": re.compile(r"Firmado por:\s+(.+?)(?=\s+AUDITORÍA|\r?\n|$)", _I),
}

_ENGINE_NOISE_RE = re.compile(r"\s+(C|El)$", _I)
_EMBEDDED_DATE_RE = re.compile(r"\d{2}/\d{2}/\d{4}")

VALIDATION_PATTERNS: dict[str, re.Pattern[str]] = {
    "EmissionDate": re.compile(r"^\d{1,2}/[A-Z]{3}/\d{4}$"),
    "CorrelativeNumber": re.compile(r"^[A-Z0-9\-]+$"),
    "TechnicalReportCode": re.compile(r"^[A-Z0-9\-]+$"),
    "PlateNumber": re.compile(r"^[A-Z0-9\-]+$"),
    "ValidUntil": re.compile(r"^[A-Z]{3}/\d{4}$"),
    "VehicleType": re.compile(r"^[A-ZÑ]+$"),
    "Brand": re.compile(r"^[A-Z]+$"),
    "Year": re.compile(r"^\d{4}$"),
    "Model": re.compile(r"^.+$"),
    "Color": re.compile(r"^[A-Z\s()0-9.\-]+\.?$"),
    "VIN": re.compile(r"^[A-Z0-9]+$"),
    "EngineNumber": re.compile(r"^[A-Z0-9 ]+(?:\s*[A-Za-z]+)?$"),
    "SignedBy": re.compile(r"^.+$"),
}

COLUMNS: tuple[ColumnDefinition, ...] = (
    ColumnDefinition("EmissionDate", "Fecha de Emisión", "FechaDeEmision", ColumnType.DATE, True),
    ColumnDefinition("CorrelativeNumber", "Nº Correlativo", "NumeroCorrelativo", required=True),
    ColumnDefinition(
        "TechnicalReportCode", "Código Informe Técnico", "CodigoInformeTecnico", required=True
    ),
    ColumnDefinition("PlateNumber", "Patente", "Patente", required=True),
    ColumnDefinition("ValidUntil", "Válido Hasta", "ValidoHasta", ColumnType.DATE, True),
    ColumnDefinition("VehicleType", "Tipo de Vehículo", "TipoDeVehiculo"),
    ColumnDefinition("Brand", "Marca", "Marca"),
    ColumnDefinition("Year", "Año", "Ano", ColumnType.INT),
    ColumnDefinition("Model", "Modelo", "Modelo"),
    ColumnDefinition("Color", "Color", "Color"),
    ColumnDefinition("VIN", "VIN", "VIN"),
    ColumnDefinition("EngineNumber", "Nº Motor", "NumeroMotor"),
    ColumnDefinition("SignedBy", "Firmado por", "FirmadoPor"),
)


def extract(text: str) -> Extraction:
    fields = {name: search(text, pattern) or "" for name, pattern in _PATTERNS.items()}
    fields["EngineNumber"] = _ENGINE_NOISE_RE.sub("", fields["EngineNumber"]).strip()
    fields["SignedBy"] = _EMBEDDED_DATE_RE.split(fields["SignedBy"], maxsplit=1)[0].strip()
    return Extraction(fields=fields, title=search(text, TITLE_RE) or None)
