class FileLoadError(Exception):
    """Base exception for input files that cannot be handed to the pipeline."""


class InvalidPdfFileError(FileLoadError):
    """Raised when a file is not a PDF or exceeds the configured size limit."""
