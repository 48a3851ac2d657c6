import io

import pdfplumber

from certextract.pdf.base import BasePdfExtractor
from certextract.pdf.exceptions import PdfExtractionError


class PdfPlumberAdapter(BasePdfExtractor):
    """Extracts the text layer of a PDF using pdfplumber."""

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
            return self.join_pages(pages)
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber could not read the PDF: {exc}") from exc
