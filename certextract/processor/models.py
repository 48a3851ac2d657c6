from dataclasses import dataclass, field
from typing import Any, ClassVar

from certextract.extraction.formats import handler_for
from certextract.extraction.models import (
    DocumentFormat,
    ExtractedRecord,
    ValidationWarning,
)


@dataclass(frozen=True)
class InputDocument:
    """One file submitted for extraction."""

    file_name: str
    content: bytes


@dataclass(frozen=True)
class DocumentResult:
    """Structured result of the document pipeline for one file."""

    document_format: DocumentFormat
    fields: ExtractedRecord
    title: str | None = None
    patterns: dict[str, str] | None = None
    warnings: list[ValidationWarning] = field(default_factory=list)


@dataclass(frozen=True)
class ProcessingSuccess:
    index: int
    file_name: str
    fields: ExtractedRecord
    title: str | None = None
    patterns: dict[str, str] | None = None

    status: ClassVar[str] = "fulfilled"


@dataclass(frozen=True)
class ProcessingFailure:
    index: int
    file_name: str
    error_message: str

    status: ClassVar[str] = "rejected"


ProcessingOutcome = ProcessingSuccess | ProcessingFailure


@dataclass
class BatchProgress:
    """Running counters of one batch; mutated only by the coordinating thread."""

    total: int
    processed: int = 0
    succeeded: int = 0
    failed: int = 0
    total_time_ms: float = 0.0

    def record(self, outcome: ProcessingOutcome, elapsed_ms: float) -> None:
        self.processed += 1
        if isinstance(outcome, ProcessingSuccess):
            self.succeeded += 1
        else:
            self.failed += 1
        self.total_time_ms += elapsed_ms

    @property
    def estimated_ms_remaining(self) -> int:
        if self.processed == 0:
            return 0
        average = self.total_time_ms / self.processed
        return round(average * (self.total - self.processed))


@dataclass(frozen=True)
class ProgressEvent:
    progress: int
    total: int
    file: str
    status: str
    estimated_ms_remaining: int
    successes_so_far: int
    failures_so_far: int
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "progress": self.progress,
            "total": self.total,
            "file": self.file,
            "status": self.status,
            "estimatedMsRemaining": self.estimated_ms_remaining,
            "successesSoFar": self.successes_so_far,
            "failuresSoFar": self.failures_so_far,
        }
        if self.error is not None:
            payload["error"] = self.error
        return payload


@dataclass(frozen=True)
class BatchResult:
    outcomes: list[ProcessingOutcome]
    total: int
    cancelled: bool = False

    @property
    def successes(self) -> list[ProcessingSuccess]:
        return [o for o in self.outcomes if isinstance(o, ProcessingSuccess)]

    @property
    def failures(self) -> list[ProcessingFailure]:
        return [o for o in self.outcomes if isinstance(o, ProcessingFailure)]

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "cancelled": self.cancelled,
            "successes": [
                {"fileName": s.file_name, "fields": s.fields, "title": s.title}
                for s in self.successes
            ],
            "failures": [
                {"fileName": f.file_name, "error": f.error_message} for f in self.failures
            ],
        }

    def summary_message(self, expected_format: DocumentFormat | None) -> str | None:
        """Guidance shown when no document succeeded, else None."""
        if self.successes:
            return None
        if expected_format is None or expected_format is DocumentFormat.UNKNOWN:
            return (
                "No document could be processed. "
                "Check that the files are supported certificates."
            )
        return handler_for(expected_format).no_success_hint


@dataclass(frozen=True)
class BatchCompletedEvent:
    result: BatchResult

    def to_dict(self) -> dict[str, Any]:
        return {"final": self.result.to_dict()}


BatchEvent = ProgressEvent | BatchCompletedEvent
