"""Marker-based document format detection.

Rules are evaluated in order and the first hit wins: markers overlap across
families (homologation certificates may mention a policy, insurance
certificates say "PLANTA"), so the order is part of the contract.
"""

from certextract.extraction.models import DocumentFormat

_HOMOLOGATION_MARKER = "CERTIFICADO DE HOMOLOGACIÓN"
_TECH_REVIEW_MARKER_PAIRS = (
    ("CERTIFICADO DE REVISIÓN TÉCNICA", "NOMBRE DEL PROPIETARIO"),
    ("FECHA REVISIÓN", "PLANTA:"),
)
_INSURANCE_MARKERS = ("SEGURO OBLIGATORIO", "SOAP", "INSCRIPCION R.V.M", "POLIZA")
_CIRCULATION_PERMIT_MARKERS = ("permiso de circulación", "placa")


def classify(text: str) -> DocumentFormat:
    upper = text.upper()
    if _HOMOLOGATION_MARKER in upper:
        return DocumentFormat.HOMOLOGATION
    if any(a in upper and b in upper for a, b in _TECH_REVIEW_MARKER_PAIRS):
        return DocumentFormat.TECH_REVIEW
    if any(marker in upper for marker in _INSURANCE_MARKERS):
        return DocumentFormat.INSURANCE
    lower = text.lower()
    if all(marker in lower for marker in _CIRCULATION_PERMIT_MARKERS):
        return DocumentFormat.CIRCULATION_PERMIT
    return DocumentFormat.UNKNOWN
