class WorkflowError(Exception):
    """Base exception for all workflow-related errors."""


class FingerprintError(WorkflowError):
    """Raised when a content fingerprint cannot be computed from the input."""


class FileReadError(WorkflowError):
    """Raised when a video file cannot be read from disk."""
