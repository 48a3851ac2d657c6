from certextract.extraction.classifier import classify
from certextract.extraction.exceptions import (
    DecodeError,
    FormatMismatchError,
    UnidentifiedFormatError,
)
from certextract.extraction.formats import handler_for
from certextract.extraction.models import DocumentFormat
from certextract.extraction.text import normalize_text
from certextract.extraction.validator import validate_record
from certextract.logging.logger import Log
from certextract.pdf.base import BasePdfExtractor
from certextract.pdf.exceptions import PdfExtractionError
from certextract.processor.pipeline import PipelineContext, PipelineStep


class DecodeTextStep(PipelineStep):
    def __init__(self, pdf_extractor: BasePdfExtractor) -> None:
        self._pdf_extractor = pdf_extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        try:
            text = self._pdf_extractor.extract(context.raw_bytes)
        except PdfExtractionError as exc:
            raise DecodeError(f"File {context.file_name} could not be decoded: {exc}") from exc
        if not text.strip():
            raise DecodeError(f"File {context.file_name} has no extractable text")
        context.extracted_text = text
        Log.debug(f"Extracted {len(text)} chars from {context.file_name}")
        return context


class NormalizeTextStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        context.normalized_text = normalize_text(context.extracted_text)
        return context


class ClassifyStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        context.document_format = classify(context.normalized_text)
        Log.debug(f"{context.file_name} classified as {context.document_format.value}")
        return context


class CheckExpectedFormatStep(PipelineStep):
    """Rejects documents whose detected format is not the declared one."""

    def run(self, context: PipelineContext) -> PipelineContext:
        expected = context.expected_format
        detected = context.document_format
        if expected is not None and detected is not expected:
            raise FormatMismatchError(context.file_name, expected, detected)
        if detected is DocumentFormat.UNKNOWN:
            raise UnidentifiedFormatError(context.file_name)
        return context


class ExtractFieldsStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        handler = handler_for(context.document_format)
        context.extraction = handler.extractor(context.normalized_text)
        return context


class ValidateFieldsStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        if context.extraction is None:
            raise ValueError("PipelineContext.extraction must be set before validation")
        handler = handler_for(context.document_format)
        context.validation_report = validate_record(
            context.extraction.fields,
            context.file_name,
            handler.validation_patterns,
            policy=handler.policy,
            skip_values=handler.always_valid_values,
        )
        return context
