from certextract.extraction.models import DocumentFormat

DETECTED_CLAUSE = "detected as belonging to:"


class DocumentError(Exception):
    """Base exception for a document that cannot be turned into a record."""


class DecodeError(DocumentError):
    """Raised when a document has no extractable text."""


class FormatMismatchError(DocumentError):
    """Raised when the detected format differs from the one the caller declared."""

    def __init__(
        self,
        file_name: str,
        expected: DocumentFormat,
        detected: DocumentFormat,
    ) -> None:
        self.file_name = file_name
        self.expected = expected
        self.detected = detected
        super().__init__(
            f"File {file_name} does not match the expected format ({expected.value}); "
            f"it was {DETECTED_CLAUSE} {detected.value}."
        )


class UnidentifiedFormatError(DocumentError):
    """Raised when no classifier rule matches the document text."""

    def __init__(self, file_name: str) -> None:
        self.file_name = file_name
        super().__init__(f"File {file_name} could not be identified as a known format.")


class ValidationError(DocumentError):
    """Raised by the strict policy; lists every failing field."""

    def __init__(self, file_name: str, problems: list[str]) -> None:
        self.file_name = file_name
        self.problems = problems
        details = "\n - ".join(problems)
        super().__init__(f"File {file_name} failed validation:\n - {details}")
