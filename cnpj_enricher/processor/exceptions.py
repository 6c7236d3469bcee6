class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class FileReadError(ProcessorError):
    """Raised when an uploaded file cannot be read from disk."""


class StaleRunError(ProcessorError):
    """Raised when a newer run has superseded the one being processed."""
