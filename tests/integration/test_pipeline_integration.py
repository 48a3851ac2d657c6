import pytest

from certextract.config.settings import Settings
from certextract.extraction.exceptions import DecodeError, FormatMismatchError
from certextract.extraction.models import DocumentFormat
from certextract.processor.batch import build_batch_processor
from certextract.processor.models import InputDocument
from certextract.processor.processor import build_pipeline


@pytest.fixture(params=["pdfplumber", "pymupdf"])
def engine_settings(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch) -> Settings:
    monkeypatch.setenv("PDF_ENGINE", request.param)
    return Settings()


@pytest.mark.integration
class TestPipelineOnRealPdf:
    def test_extracts_insurance_certificate(
        self, engine_settings: Settings, insurance_pdf_bytes: bytes
    ) -> None:
        pipeline = build_pipeline(engine_settings)

        result = pipeline.process(
            insurance_pdf_bytes, "soap.pdf", expected_format=DocumentFormat.INSURANCE
        )

        assert result.document_format is DocumentFormat.INSURANCE
        assert result.fields["TaxId"] == "97006000-6"
        assert result.fields["RVMRegistration"] == "ABCD12-3"
        assert result.fields["EffectiveUntil"] == "31-03-2025"
        assert result.warnings == []

    def test_blank_pdf_is_a_decode_error(
        self, engine_settings: Settings, empty_pdf_bytes: bytes
    ) -> None:
        with pytest.raises(DecodeError):
            build_pipeline(engine_settings).process(empty_pdf_bytes, "scan.pdf")

    def test_wrong_expected_format(
        self, engine_settings: Settings, insurance_pdf_bytes: bytes
    ) -> None:
        with pytest.raises(FormatMismatchError, match="TECH_REVIEW"):
            build_pipeline(engine_settings).process(
                insurance_pdf_bytes, "soap.pdf", expected_format=DocumentFormat.TECH_REVIEW
            )


@pytest.mark.integration
class TestBatchOnRealPdfs:
    @pytest.mark.parametrize("executor", ["thread", "process", "inline"])
    def test_mixed_batch(
        self,
        executor: str,
        monkeypatch: pytest.MonkeyPatch,
        insurance_pdf_bytes: bytes,
        empty_pdf_bytes: bytes,
    ) -> None:
        monkeypatch.setenv("BATCH_EXECUTOR", executor)
        monkeypatch.setenv("BATCH_CONCURRENCY", "2")
        documents = [
            InputDocument("soap1.pdf", insurance_pdf_bytes),
            InputDocument("blank1.pdf", empty_pdf_bytes),
            InputDocument("soap2.pdf", insurance_pdf_bytes),
            InputDocument("blank2.pdf", b"not a pdf at all"),
            InputDocument("soap3.pdf", insurance_pdf_bytes),
        ]

        result = build_batch_processor(Settings()).process(
            documents, expected_format=DocumentFormat.INSURANCE
        )

        assert len(result.outcomes) == 5
        assert [f.file_name for f in result.failures] == ["blank1.pdf", "blank2.pdf"]
        assert [s.file_name for s in result.successes] == ["soap1.pdf", "soap2.pdf", "soap3.pdf"]
