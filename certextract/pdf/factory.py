from certextract.pdf.base import BasePdfExtractor
from certextract.pdf.pdfplumber_adapter import PdfPlumberAdapter
from certextract.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Maps a text decoding engine name to its adapter."""

    ENGINES: dict[str, type[BasePdfExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def engines(cls) -> list[str]:
        return sorted(cls.ENGINES)

    @classmethod
    def create(cls, engine: str) -> BasePdfExtractor:
        adapter_cls = cls.ENGINES.get(engine.strip().lower())
        if adapter_cls is None:
            raise ValueError(f"Unknown PDF engine '{engine}'. Choose from: {cls.engines()}")
        return adapter_cls()
