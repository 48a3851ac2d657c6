import pymupdf

from certextract.pdf.base import BasePdfExtractor
from certextract.pdf.exceptions import PdfExtractionError


class PyMuPdfAdapter(BasePdfExtractor):
    """Extracts the text layer of a PDF using PyMuPDF, in reading order."""

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [page.get_text(sort=True) for page in doc]
            return self.join_pages(pages)
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf could not read the PDF: {exc}") from exc
