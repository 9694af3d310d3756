class ReportGenerationError(Exception):
    """Raised when the offline analysis report cannot be written."""
