class RecordingError(Exception):
    """Raised when a metadata record cannot be written to the document store."""
