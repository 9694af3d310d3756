from video_tracker.analysis.base import BaseAnalysisClient
from video_tracker.analysis.example_client_adapter import ExampleAnalysisClient
from video_tracker.analysis.http_client_adapter import HttpAnalysisClient
from video_tracker.config.settings import Settings
from video_tracker.pdf.factory import ReportTextExtractorFactory


class AnalysisClientFactory:
    """Creates the configured analyzer adapter."""

    PROVIDERS = ("http", "example")

    @classmethod
    def create(cls, settings: Settings) -> BaseAnalysisClient:
        provider = settings.analysis_provider.lower()
        if provider == "example":
            return ExampleAnalysisClient()
        if provider == "http":
            return HttpAnalysisClient(
                url=settings.analyzer_url,
                timeout_seconds=settings.analyzer_timeout_seconds,
                text_extractor=ReportTextExtractorFactory.create(settings),
                upload_filename=settings.analyzer_upload_filename,
                summary_max_chars=settings.analysis_summary_max_chars,
            )
        raise ValueError(
            f"Unknown analysis provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
