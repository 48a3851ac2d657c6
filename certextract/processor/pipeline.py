from abc import ABC, abstractmethod
from dataclasses import dataclass

from certextract.extraction.models import DocumentFormat, Extraction, ValidationReport


@dataclass(slots=True)
class PipelineContext:
    file_name: str
    raw_bytes: bytes
    expected_format: DocumentFormat | None = None
    want_patterns: bool = False
    extracted_text: str = ""
    normalized_text: str = ""
    document_format: DocumentFormat = DocumentFormat.UNKNOWN
    extraction: Extraction | None = None
    validation_report: ValidationReport | None = None


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
