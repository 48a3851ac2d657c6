from certextract.config.settings import Settings
from certextract.extraction.models import DocumentFormat
from certextract.pdf.base import BasePdfExtractor
from certextract.pdf.factory import PdfExtractorFactory
from certextract.processor.models import DocumentResult
from certextract.processor.pipeline import PipelineContext, PipelineStep
from certextract.processor.steps import (
    CheckExpectedFormatStep,
    ClassifyStep,
    DecodeTextStep,
    ExtractFieldsStep,
    NormalizeTextStep,
    ValidateFieldsStep,
)


class DocumentPipeline:
    """Turns one PDF into a structured record.

    Pipeline: decode -> normalize -> classify -> check format -> extract -> validate.
    Any step may raise a DocumentError; nothing is caught here.
    """

    def __init__(self, steps: list[PipelineStep]) -> None:
        self._steps = steps

    def process(
        self,
        file_bytes: bytes,
        file_name: str,
        expected_format: DocumentFormat | None = None,
        want_patterns: bool = False,
    ) -> DocumentResult:
        context = PipelineContext(
            file_name=file_name,
            raw_bytes=file_bytes,
            expected_format=expected_format,
            want_patterns=want_patterns,
        )
        for step in self._steps:
            context = step.run(context)

        if context.extraction is None:
            raise ValueError("Pipeline finished without an extraction")
        extraction = context.extraction
        report = context.validation_report
        return DocumentResult(
            document_format=context.document_format,
            fields=extraction.fields,
            title=extraction.title,
            patterns=extraction.patterns if context.want_patterns else None,
            warnings=list(report.warnings) if report is not None else [],
        )


def default_steps(pdf_extractor: BasePdfExtractor) -> list[PipelineStep]:
    return [
        DecodeTextStep(pdf_extractor),
        NormalizeTextStep(),
        ClassifyStep(),
        CheckExpectedFormatStep(),
        ExtractFieldsStep(),
        ValidateFieldsStep(),
    ]


def build_pipeline(settings: Settings) -> DocumentPipeline:
    """Build a DocumentPipeline around the configured PDF adapter."""
    return DocumentPipeline(default_steps(PdfExtractorFactory.create(settings.pdf_engine)))
