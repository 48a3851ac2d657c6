import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

INSURANCE_LINES = [
    "SEGURO OBLIGATORIO DE ACCIDENTES PERSONALES",
    "INSCRIPCION R.V.M: ABCD12-3",
    "Bajo el codigo: 1234",
    "RUT: 97.006.000-6",
    "RIGE DESDE: 01-04-2024",
    "HASTA: 31-03-2025",
    "POLIZA N: 556677",
    "PRIMA: 8950",
]


def _pdf_with_lines(*pages: list[str]) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for lines in pages:
        y = 720
        for line in lines:
            c.drawString(72, y, line)
            y -= 18
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    return _pdf_with_lines(["Hello PDF World"])


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    return _pdf_with_lines(["Page one content"], ["Page two content"])


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def insurance_pdf_bytes() -> bytes:
    """A compulsory insurance certificate with every field present."""
    return _pdf_with_lines(INSURANCE_LINES)
