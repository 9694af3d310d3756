from video_tracker.analysis.base import BaseAnalysisClient
from video_tracker.analysis.factory import AnalysisClientFactory
from video_tracker.analysis.http_client_adapter import HttpAnalysisClient

__all__ = ["AnalysisClientFactory", "BaseAnalysisClient", "HttpAnalysisClient"]
