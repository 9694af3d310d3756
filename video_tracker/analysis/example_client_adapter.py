"""Example analysis adapter.

Use this module for local development and as a reference when wiring a new
analyzer backend: implement BaseAnalysisClient and register it in
AnalysisClientFactory.
"""

from video_tracker.analysis.base import BaseAnalysisClient
from video_tracker.workflow.models import AnalysisOutcome, AnalysisResult, Verdict


class ExampleAnalysisClient(BaseAnalysisClient):
    """Approves every video without touching the network."""

    DESCRIPTION = "Analysis complete. PDF downloaded."
    SUMMARY = "Example analyzer: no issues detected."

    def __init__(self, report_artifact: bytes = b"%PDF-1.4 example") -> None:
        self._report_artifact = report_artifact

    async def analyze(self, blob: bytes) -> AnalysisResult:
        _ = blob
        return AnalysisOutcome(
            verdict=Verdict.APPROVED,
            description=self.DESCRIPTION,
            summary_text=self.SUMMARY,
            report_artifact=self._report_artifact,
        )
