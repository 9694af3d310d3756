import pymupdf

from video_tracker.pdf.base import BaseReportTextExtractor
from video_tracker.pdf.exceptions import PdfExtractionError


class PyMuPdfReportExtractor(BaseReportTextExtractor):
    """Reads report text with PyMuPDF."""

    def extract(self, pdf_bytes: bytes) -> str:
        if not pdf_bytes:
            raise PdfExtractionError("Report artifact is empty")
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                texts = self._limit([page.get_text() for page in doc])
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf could not read report: {exc}") from exc
        return "\n".join(texts).strip()
