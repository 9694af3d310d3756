from abc import ABC, abstractmethod


class BaseReportTextExtractor(ABC):
    """Contract for adapters that read text out of an analyzer report PDF."""

    def __init__(self, page_limit: int | None = None) -> None:
        self._page_limit = page_limit

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> str:
        """Extract plain text from the first pages of a PDF.

        Args:
            pdf_bytes: Report artifact as returned by the analyzer.

        Returns:
            Page texts joined by newlines, stripped.

        Raises:
            PdfExtractionError: if the bytes are not a readable PDF.
        """

    def _limit(self, pages: list[str]) -> list[str]:
        if self._page_limit is None:
            return pages
        return pages[: self._page_limit]
