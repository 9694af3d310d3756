import io

import pdfplumber

from video_tracker.pdf.base import BaseReportTextExtractor
from video_tracker.pdf.exceptions import PdfExtractionError


class PdfPlumberReportExtractor(BaseReportTextExtractor):
    """Reads report text with pdfplumber."""

    def extract(self, pdf_bytes: bytes) -> str:
        if not pdf_bytes:
            raise PdfExtractionError("Report artifact is empty")
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = self._limit(list(pdf.pages))
                texts = [page.extract_text() or "" for page in pages]
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber could not read report: {exc}") from exc
        return "\n".join(texts).strip()
