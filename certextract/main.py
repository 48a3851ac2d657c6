import argparse
import json
import sys
from pathlib import Path

from tqdm import tqdm

from certextract.config.settings import Settings
from certextract.database.connection import close_pool, init_pool
from certextract.database.exceptions import PersistenceError, SpreadsheetImportError
from certextract.database.importer import SpreadsheetImporter
from certextract.database.repositories.certificate_repository import CertificateRepository
from certextract.extraction.formats import handler_for
from certextract.extraction.models import DocumentFormat
from certextract.logging.logger import Log
from certextract.pdf.factory import PdfExtractorFactory
from certextract.processor.batch import build_batch_processor
from certextract.processor.exceptions import FileLoadError
from certextract.processor.file_loader import FileLoader
from certextract.processor.models import (
    BatchCompletedEvent,
    BatchEvent,
    BatchResult,
    InputDocument,
    ProgressEvent,
)
from certextract.spreadsheet.naming import output_file_name
from certextract.spreadsheet.workbook import WorkbookStats, build_workbook, source_records

FORMAT_CHOICES = [f.name for f in DocumentFormat.known()]


class TqdmProgressListener:
    """Advances a tqdm bar for every progress event of a batch."""

    def __init__(self, progress_bar: tqdm) -> None:
        self._bar = progress_bar

    def __call__(self, event: BatchEvent) -> None:
        if isinstance(event, ProgressEvent):
            self._bar.set_postfix(ok=event.successes_so_far, failed=event.failures_so_far)
            self._bar.update(1)
        elif isinstance(event, BatchCompletedEvent):
            self._bar.set_description("Done")


def setup_argparser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="certextract",
        description="Extract vehicle certificate data from PDF files into a workbook",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    subparsers.required = True

    convert_parser = subparsers.add_parser(
        "convert", help="Extract the fields of PDF certificates into a consolidated workbook"
    )
    convert_parser.add_argument(
        "paths", metavar="PATH", nargs="+", type=Path, help="PDF files or folders of PDFs"
    )
    convert_parser.add_argument(
        "--format", required=True, choices=FORMAT_CHOICES, help="Certificate format of the files"
    )
    convert_parser.add_argument(
        "--patterns",
        action="store_true",
        help="Print the diagnostic pattern table of each document, when the format has one",
    )
    convert_parser.add_argument(
        "-o", "--output-dir", metavar="DIR", type=Path, default=None,
        help="Directory for the workbook (default: settings output_dir)",
    )
    convert_parser.add_argument(
        "--persist", action="store_true", help="Also insert the extracted records into the database"
    )
    convert_parser.add_argument(
        "--engine",
        choices=PdfExtractorFactory.engines(),
        default=None,
        help="PDF text engine (default: settings pdf_engine)",
    )

    import_parser = subparsers.add_parser(
        "import", help="Insert a consolidated workbook with storage headers into the database"
    )
    import_parser.add_argument("workbook", metavar="WORKBOOK", type=Path)
    import_parser.add_argument("--format", required=True, choices=FORMAT_CHOICES)
    return parser


def load_documents(loader: FileLoader, paths: list[Path]) -> list[InputDocument]:
    documents: list[InputDocument] = []
    for path in loader.collect(paths):
        try:
            documents.append(loader.load(path))
        except (FileNotFoundError, FileLoadError) as exc:
            Log.error(f"Skipping {path}: {exc}")
    return documents


def run_convert(args: argparse.Namespace, settings: Settings) -> int:
    document_format = DocumentFormat[args.format]
    handler = handler_for(document_format)

    documents = load_documents(FileLoader(settings.max_file_size_bytes), args.paths)
    if not documents:
        Log.error("No PDF files to process")
        return 1

    if args.engine:
        settings = settings.model_copy(update={"pdf_engine": args.engine})
    processor = build_batch_processor(settings)
    with tqdm(total=len(documents), desc=handler.consolidated_name, unit="pdf") as bar:
        result = processor.process(
            documents,
            expected_format=document_format,
            want_patterns=args.patterns,
            on_event=TqdmProgressListener(bar),
        )

    output_dir = args.output_dir or Path(settings.output_dir)
    output_path = write_workbook(result, document_format, output_dir, settings)
    Log.info(f"Workbook written to {output_path}")

    if args.patterns:
        for success in result.successes:
            if success.patterns:
                payload = {"file": success.file_name, "patterns": success.patterns}
                print(json.dumps(payload, ensure_ascii=False))

    if result.successes and (args.persist or settings.persist_results):
        init_pool(settings)
        try:
            CertificateRepository().save_records(handler, [s.fields for s in result.successes])
        except PersistenceError as exc:
            Log.error(str(exc))
            return 1
        finally:
            close_pool()

    message = result.summary_message(document_format)
    if message:
        Log.warning(message)
        return 1
    return 0


def write_workbook(
    result: BatchResult,
    document_format: DocumentFormat,
    output_dir: Path,
    settings: Settings,
) -> Path:
    handler = handler_for(document_format)
    content = build_workbook(
        source_records(result),
        handler.columns,
        storage_headers=settings.storage_headers,
        stats=WorkbookStats.from_batch(result) if settings.include_statistics else None,
    )
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / output_file_name(handler, result.successes)
    output_path.write_bytes(content)
    return output_path


def run_import(args: argparse.Namespace, settings: Settings) -> int:
    handler = handler_for(DocumentFormat[args.format])
    if not args.workbook.is_file():
        Log.error(f"File not found: {args.workbook}")
        return 1

    init_pool(settings)
    try:
        message = SpreadsheetImporter(CertificateRepository()).import_workbook(
            args.workbook.read_bytes(), handler
        )
    except (SpreadsheetImportError, PersistenceError) as exc:
        Log.error(str(exc))
        return 1
    finally:
        close_pool()

    Log.info(message)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings, configure logging, dispatch the subcommand."""
    args = setup_argparser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level, settings.app_env)

    if args.command == "convert":
        return run_convert(args, settings)
    return run_import(args, settings)


if __name__ == "__main__":
    sys.exit(main())
