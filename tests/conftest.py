import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas


def render_pdf(*pages: str) -> bytes:
    """Render one PDF page per string, text drawn on a single line."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for text in pages:
        if text:
            c.drawString(72, 720, text)
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Single-page analyzer report with known text."""
    return render_pdf("No policy violations detected")


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    return render_pdf("Page one content", "Page two content")


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Valid PDF with a blank page."""
    return render_pdf("")
