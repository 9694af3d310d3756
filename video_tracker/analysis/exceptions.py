class AnalysisError(Exception):
    """Raised when an analysis attempt yields no usable outcome."""


class AnalysisNetworkError(AnalysisError):
    """Raised when the analyzer cannot be reached or answers with a non-2xx status."""


class AnalysisResponseError(AnalysisError):
    """Raised when the analyzer answers 2xx but the payload is malformed."""
