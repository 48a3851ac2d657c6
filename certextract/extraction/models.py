from dataclasses import dataclass, field
from enum import Enum

ExtractedRecord = dict[str, str]


class DocumentFormat(str, Enum):
    """Document families the extractor knows about.

    UNKNOWN is only ever produced by the classifier; it never reaches an
    extractor, a validator or a storage table.
    """

    HOMOLOGATION = "HOMOLOGATION"
    TECH_REVIEW = "TECH_REVIEW"
    INSURANCE = "INSURANCE"
    CIRCULATION_PERMIT = "CIRCULATION_PERMIT"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def known(cls) -> list["DocumentFormat"]:
        return [member for member in cls if member is not cls.UNKNOWN]


class ValidationPolicy(str, Enum):
    SOFT = "soft"
    STRICT = "strict"


class ColumnType(str, Enum):
    DATE = "date"
    INT = "int"
    FLOAT = "float"
    BIT = "bit"
    TEXT = "text"


@dataclass(frozen=True)
class ColumnDefinition:
    """One extracted field as seen by the spreadsheet and the storage table."""

    field: str
    label: str
    column: str
    column_type: ColumnType = ColumnType.TEXT
    required: bool = False


@dataclass(frozen=True)
class Extraction:
    """Output of a per-format extractor."""

    fields: ExtractedRecord
    title: str | None = None
    patterns: dict[str, str] | None = None


@dataclass(frozen=True)
class ValidationWarning:
    """A single field that is missing or does not have the expected shape."""

    field: str
    value: str
    reason: str

    def describe(self) -> str:
        if self.reason == "missing":
            return f'Missing field "{self.field}".'
        return f'Field "{self.field}" with value "{self.value}" does not match the expected format.'


@dataclass(frozen=True)
class ValidationReport:
    file_name: str
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.warnings
