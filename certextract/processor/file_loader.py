from collections.abc import Iterable
from pathlib import Path

from certextract.processor.exceptions import InvalidPdfFileError
from certextract.processor.models import InputDocument


class FileLoader:
    """Reads PDF files from disk after checking extension and size."""

    DEFAULT_MAX_SIZE_BYTES = 5 * 1024 * 1024

    def __init__(self, max_size_bytes: int | None = None) -> None:
        self._max_size_bytes = (
            max_size_bytes if max_size_bytes is not None else self.DEFAULT_MAX_SIZE_BYTES
        )

    def collect(self, paths: Iterable[Path]) -> list[Path]:
        """Expand directories into their *.pdf children, keeping file arguments as given."""
        collected: list[Path] = []
        for path in paths:
            if path.is_dir():
                collected.extend(
                    sorted(p for p in path.iterdir() if p.is_file() and _is_pdf_name(p.name))
                )
            else:
                collected.append(path)
        return collected

    def load(self, path: Path) -> InputDocument:
        """Read a PDF file into an InputDocument.

        Raises:
            FileNotFoundError: if the file does not exist.
            InvalidPdfFileError: if the name is not *.pdf or the file is too large.
        """
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        if not _is_pdf_name(path.name):
            raise InvalidPdfFileError(f"{path.name} is not a PDF file")
        size = path.stat().st_size
        if size > self._max_size_bytes:
            raise InvalidPdfFileError(
                f"{path.name} is {size} bytes, above the {self._max_size_bytes} byte limit"
            )
        return InputDocument(file_name=path.name, content=path.read_bytes())


def _is_pdf_name(name: str) -> bool:
    return name.lower().endswith(".pdf")
