from certextract.extraction.classifier import classify
from certextract.extraction.formats import HANDLERS, FormatHandler, handler_for
from certextract.extraction.models import DocumentFormat, Extraction, ValidationPolicy
from certextract.extraction.text import normalize_text, search
from certextract.extraction.validator import validate_record

__all__ = [
    "HANDLERS",
    "DocumentFormat",
    "Extraction",
    "FormatHandler",
    "ValidationPolicy",
    "classify",
    "handler_for",
    "normalize_text",
    "search",
    "validate_record",
]
