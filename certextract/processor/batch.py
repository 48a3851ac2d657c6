"""Bounded-concurrency fan-out of the document pipeline over many files.

Each document runs on the configured executor; outcomes are gathered on the
calling thread, which is the only place the batch counters change.
"""

import pickle
import threading
import time
from collections.abc import Callable, Iterator, Sequence
from concurrent.futures import FIRST_COMPLETED, BrokenExecutor, Executor, Future, wait
from functools import partial

from certextract.config.settings import Settings
from certextract.extraction.models import DocumentFormat
from certextract.logging.logger import Log
from certextract.processor.executors import ExecutorFactory, InlineExecutor
from certextract.processor.messages import highlight_detected_format
from certextract.processor.models import (
    BatchCompletedEvent,
    BatchEvent,
    BatchProgress,
    BatchResult,
    InputDocument,
    ProcessingFailure,
    ProcessingOutcome,
    ProcessingSuccess,
    ProgressEvent,
)
from certextract.processor.processor import DocumentPipeline, build_pipeline

EventListener = Callable[[BatchEvent], None]

# Failures of the isolated executor itself, as opposed to failures of a document.
_EXECUTOR_FAILURES = (BrokenExecutor, pickle.PicklingError)


def run_document(
    pipeline: DocumentPipeline,
    index: int,
    document: InputDocument,
    expected_format: DocumentFormat | None,
    want_patterns: bool,
) -> tuple[ProcessingOutcome, float]:
    """Run the pipeline for one document; never raises for document errors.

    Returns the outcome and the elapsed time in milliseconds.
    """
    started = time.perf_counter()
    outcome: ProcessingOutcome
    try:
        result = pipeline.process(
            document.content,
            document.file_name,
            expected_format=expected_format,
            want_patterns=want_patterns,
        )
        outcome = ProcessingSuccess(
            index=index,
            file_name=document.file_name,
            fields=result.fields,
            title=result.title,
            patterns=result.patterns,
        )
    except Exception as exc:
        Log.error(f"Document {document.file_name} failed: {exc}")
        outcome = ProcessingFailure(
            index=index,
            file_name=document.file_name,
            error_message=str(exc) or "Unknown error",
        )
    return outcome, (time.perf_counter() - started) * 1000


class BatchProcessor:
    """Processes a list of documents with bounded parallelism and progress events."""

    def __init__(
        self,
        pipeline: DocumentPipeline,
        executor_factory: Callable[[], Executor],
        max_in_flight: int = 1,
    ) -> None:
        if max_in_flight < 1:
            raise ValueError("max_in_flight must be at least 1")
        self._pipeline = pipeline
        self._executor_factory = executor_factory
        self._max_in_flight = max_in_flight

    def process(
        self,
        documents: Sequence[InputDocument],
        expected_format: DocumentFormat | None = None,
        want_patterns: bool = False,
        on_event: EventListener | None = None,
        cancel_event: threading.Event | None = None,
    ) -> BatchResult:
        """Process every document and return one outcome per input.

        At most max_in_flight documents are submitted at a time and the next
        one is submitted only after an earlier one is collected, so progress
        events are emitted in completion order as documents finish. When
        cancel_event is set, nothing more is submitted or reported and the
        partial result is returned with cancelled=True.
        """
        total = len(documents)
        progress = BatchProgress(total=total)
        outcomes: list[ProcessingOutcome] = []
        cancelled = False
        Log.info(f"Starting batch of {total} documents")

        executor = self._executor_factory()
        remaining = enumerate(documents)
        pending: dict[Future[tuple[ProcessingOutcome, float]], int] = {}
        try:
            while True:
                self._fill(
                    executor, pending, remaining, expected_format, want_patterns, cancel_event
                )
                if not pending or _cancel_requested(cancel_event):
                    break
                done, _ = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    if _cancel_requested(cancel_event):
                        break
                    index = pending.pop(future)
                    outcome, elapsed_ms = self._collect(
                        future, documents[index], index, expected_format, want_patterns
                    )
                    progress.record(outcome, elapsed_ms)
                    outcomes.append(outcome)
                    self._emit(on_event, _progress_event(outcome, progress))
            cancelled = _cancel_requested(cancel_event) and progress.processed < total
        finally:
            executor.shutdown(wait=not cancelled, cancel_futures=cancelled)

        result = BatchResult(
            outcomes=sorted(outcomes, key=lambda o: o.index),
            total=total,
            cancelled=cancelled,
        )
        if cancelled:
            Log.warning(f"Batch cancelled after {progress.processed} of {total} documents")
            return result

        Log.info(
            f"Batch finished: {progress.succeeded} succeeded, {progress.failed} failed "
            f"in {progress.total_time_ms:.0f} ms"
        )
        self._emit(on_event, BatchCompletedEvent(result=result))
        return result

    def _fill(
        self,
        executor: Executor,
        pending: dict[Future[tuple[ProcessingOutcome, float]], int],
        remaining: Iterator[tuple[int, InputDocument]],
        expected_format: DocumentFormat | None,
        want_patterns: bool,
        cancel_event: threading.Event | None,
    ) -> None:
        # A future that is already done (inline runs, fallbacks) is reported
        # before anything else is started.
        while len(pending) < self._max_in_flight and not _cancel_requested(cancel_event):
            item = next(remaining, None)
            if item is None:
                return
            index, document = item
            task = partial(
                run_document, self._pipeline, index, document, expected_format, want_patterns
            )
            future = self._submit(executor, task)
            pending[future] = index
            if future.done():
                return

    def _submit(
        self,
        executor: Executor,
        task: Callable[[], tuple[ProcessingOutcome, float]],
    ) -> Future[tuple[ProcessingOutcome, float]]:
        try:
            return executor.submit(task)
        except _EXECUTOR_FAILURES as exc:
            Log.warning(f"Executor rejected a document, running it inline: {exc}")
            return InlineExecutor().submit(task)

    def _collect(
        self,
        future: Future[tuple[ProcessingOutcome, float]],
        document: InputDocument,
        index: int,
        expected_format: DocumentFormat | None,
        want_patterns: bool,
    ) -> tuple[ProcessingOutcome, float]:
        try:
            return future.result()
        except _EXECUTOR_FAILURES as exc:
            Log.warning(f"Executor failed on {document.file_name}, running it inline: {exc}")
            return run_document(self._pipeline, index, document, expected_format, want_patterns)

    @staticmethod
    def _emit(on_event: EventListener | None, event: BatchEvent) -> None:
        if on_event is not None:
            on_event(event)


def _cancel_requested(cancel_event: threading.Event | None) -> bool:
    return cancel_event is not None and cancel_event.is_set()


def _progress_event(outcome: ProcessingOutcome, progress: BatchProgress) -> ProgressEvent:
    error = None
    if isinstance(outcome, ProcessingFailure):
        error = highlight_detected_format(outcome.error_message)
    return ProgressEvent(
        progress=progress.processed,
        total=progress.total,
        file=outcome.file_name,
        status=outcome.status,
        estimated_ms_remaining=progress.estimated_ms_remaining,
        successes_so_far=progress.succeeded,
        failures_so_far=progress.failed,
        error=error,
    )


def build_batch_processor(settings: Settings) -> BatchProcessor:
    """Build a BatchProcessor using the configured PDF engine and executor."""
    pipeline = build_pipeline(settings)
    return BatchProcessor(
        pipeline=pipeline,
        executor_factory=partial(
            ExecutorFactory.create, settings.batch_executor, settings.batch_concurrency
        ),
        max_in_flight=settings.batch_concurrency,
    )
