from abc import ABC, abstractmethod
from collections.abc import Iterable


class BasePdfExtractor(ABC):
    """Contract for the adapters that decode a certificate PDF into text."""

    PAGE_SEPARATOR = "\n"

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> str:
        """Extract the text layer of a PDF.

        Text runs are concatenated in reading order, pages separated by a
        newline. An image-only PDF yields an empty string.

        Args:
            pdf_bytes: Raw PDF file content.

        Raises:
            PdfExtractionError: if the bytes cannot be parsed as a PDF.
        """

    @classmethod
    def join_pages(cls, pages: Iterable[str]) -> str:
        return cls.PAGE_SEPARATOR.join(pages).strip()
