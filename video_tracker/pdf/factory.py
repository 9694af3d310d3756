from video_tracker.config.settings import Settings
from video_tracker.pdf.base import BaseReportTextExtractor
from video_tracker.pdf.pdfplumber_adapter import PdfPlumberReportExtractor
from video_tracker.pdf.pymupdf_adapter import PyMuPdfReportExtractor


class ReportTextExtractorFactory:
    """Creates the PDF text extractor named by settings.pdf_engine."""

    ADAPTERS: dict[str, type[BaseReportTextExtractor]] = {
        "pdfplumber": PdfPlumberReportExtractor,
        "pymupdf": PyMuPdfReportExtractor,
    }

    # Analyzer reports carry the verdict summary up front.
    DEFAULT_PAGE_LIMIT = 3

    @classmethod
    def create(cls, settings: Settings) -> BaseReportTextExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls(page_limit=cls.DEFAULT_PAGE_LIMIT)
