import pytest

from video_tracker.pdf.exceptions import PdfExtractionError
from video_tracker.pdf.pdfplumber_adapter import PdfPlumberReportExtractor


class TestPdfPlumberReportExtractor:
    def test_extract_returns_text(self, sample_pdf_bytes: bytes) -> None:
        result = PdfPlumberReportExtractor().extract(sample_pdf_bytes)
        assert "No policy violations detected" in result

    def test_extract_multi_page(self, multi_page_pdf_bytes: bytes) -> None:
        result = PdfPlumberReportExtractor().extract(multi_page_pdf_bytes)
        assert "Page one content" in result
        assert "Page two content" in result

    def test_page_limit_skips_later_pages(self, multi_page_pdf_bytes: bytes) -> None:
        result = PdfPlumberReportExtractor(page_limit=1).extract(multi_page_pdf_bytes)
        assert "Page one content" in result
        assert "Page two content" not in result

    def test_extract_blank_pdf_returns_empty_string(self, empty_pdf_bytes: bytes) -> None:
        assert PdfPlumberReportExtractor().extract(empty_pdf_bytes) == ""

    def test_extract_raises_on_invalid_bytes(self) -> None:
        with pytest.raises(PdfExtractionError):
            PdfPlumberReportExtractor().extract(b"not a pdf")

    def test_extract_raises_on_empty_bytes(self) -> None:
        with pytest.raises(PdfExtractionError, match="empty"):
            PdfPlumberReportExtractor().extract(b"")
