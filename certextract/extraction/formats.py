"""Per-format wiring: extractor, validation table, policy and storage layout."""

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from certextract.extraction import circulation_permit, homologation, insurance, tech_review
from certextract.extraction.models import (
    ColumnDefinition,
    DocumentFormat,
    Extraction,
    ValidationPolicy,
)
from certextract.extraction.text import NOT_APPLICABLE


@dataclass(frozen=True)
class FormatHandler:
    document_format: DocumentFormat
    extractor: Callable[[str], Extraction]
    validation_patterns: Mapping[str, re.Pattern[str]]
    columns: tuple[ColumnDefinition, ...]
    table_name: str
    consolidated_name: str
    no_success_hint: str
    policy: ValidationPolicy = ValidationPolicy.SOFT
    always_valid_values: tuple[str, ...] = ()


HANDLERS: Mapping[DocumentFormat, FormatHandler] = {
    DocumentFormat.HOMOLOGATION: FormatHandler(
        document_format=DocumentFormat.HOMOLOGATION,
        extractor=homologation.extract,
        validation_patterns=homologation.VALIDATION_PATTERNS,
        columns=homologation.COLUMNS,
        table_name="certificado_homologacion",
        consolidated_name="Certificado de Homologación",
        no_success_hint=(
            "No document was recognised as a homologation certificate. "
            "Check that the files are 'Certificado de Homologación' PDFs or pick another format."
        ),
    ),
    DocumentFormat.TECH_REVIEW: FormatHandler(
        document_format=DocumentFormat.TECH_REVIEW,
        extractor=tech_review.extract,
        validation_patterns=tech_review.VALIDATION_PATTERNS,
        columns=tech_review.COLUMNS,
        table_name="certificado_revision_tecnica",
        consolidated_name="Certificado de Revisión Técnica (CRT)",
        no_success_hint=(
            "No document was recognised as a technical revision certificate (CRT). "
            "Check that the files are CRT PDFs or pick another format."
        ),
    ),
    DocumentFormat.INSURANCE: FormatHandler(
        document_format=DocumentFormat.INSURANCE,
        extractor=insurance.extract,
        validation_patterns=insurance.VALIDATION_PATTERNS,
        columns=insurance.COLUMNS,
        table_name="seguro_obligatorio_soap",
        consolidated_name="Seguro Obligatorio (SOAP)",
        no_success_hint=(
            "No document was recognised as a compulsory insurance (SOAP) certificate. "
            "Check that the files are SOAP PDFs or pick another format."
        ),
    ),
    DocumentFormat.CIRCULATION_PERMIT: FormatHandler(
        document_format=DocumentFormat.CIRCULATION_PERMIT,
        extractor=circulation_permit.extract,
        validation_patterns=circulation_permit.VALIDATION_PATTERNS,
        columns=circulation_permit.COLUMNS,
        table_name="permiso_circulacion",
        consolidated_name="Permiso de Circulación",
        no_success_hint=(
            "No document was recognised as a circulation permit. "
            "Check that the files are 'Permiso de Circulación' PDFs or pick another format."
        ),
        always_valid_values=(NOT_APPLICABLE,),
    ),
}


def handler_for(document_format: DocumentFormat) -> FormatHandler:
    """Return the handler of a known format.

    Raises:
        KeyError: for UNKNOWN, which has no handler.
    """
    return HANDLERS[document_format]
