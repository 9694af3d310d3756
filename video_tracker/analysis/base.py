from abc import ABC, abstractmethod

from video_tracker.workflow.models import AnalysisResult


class BaseAnalysisClient(ABC):
    """Contract for all video analyzer adapters."""

    @abstractmethod
    async def analyze(self, blob: bytes) -> AnalysisResult:
        """Upload a video and classify the analyzer's answer.

        Args:
            blob: Raw video bytes.

        Returns:
            AnalysisOutcome for a well-formed response, otherwise an
            AnalysisFailure carrying a readable message. Implementations
            never raise for transport or payload problems.
        """
