"""Field shape validation with a soft (warn) or strict (reject) policy."""

import re
from collections.abc import Collection, Mapping

from certextract.extraction.exceptions import ValidationError
from certextract.extraction.models import (
    ExtractedRecord,
    ValidationPolicy,
    ValidationReport,
    ValidationWarning,
)
from certextract.extraction.text import ABSENT_MARKER
from certextract.logging.logger import Log

_MISSING_VALUES = frozenset({"", ABSENT_MARKER})


def validate_record(
    record: ExtractedRecord,
    file_name: str,
    patterns: Mapping[str, re.Pattern[str]],
    policy: ValidationPolicy = ValidationPolicy.SOFT,
    skip_values: Collection[str] = (),
) -> ValidationReport:
    """Check every field of the pattern table against the record.

    The record is never modified. Under the soft policy the problems are
    logged and returned; under the strict policy they are raised together.

    Raises:
        ValidationError: strict policy only, listing every failing field.
    """
    warnings: list[ValidationWarning] = []
    for field, pattern in patterns.items():
        value = record.get(field, "")
        if value in skip_values:
            continue
        if value.strip() in _MISSING_VALUES:
            warnings.append(ValidationWarning(field=field, value=value, reason="missing"))
        elif not pattern.search(value):
            warnings.append(ValidationWarning(field=field, value=value, reason="mismatch"))

    if not warnings:
        return ValidationReport(file_name=file_name)

    problems = [w.describe() for w in warnings]
    if policy is ValidationPolicy.STRICT:
        raise ValidationError(file_name, problems)

    details = "\n - ".join(problems)
    Log.warning(f"BEST-EFFORT: file {file_name} has data problems:\n - {details}")
    return ValidationReport(file_name=file_name, warnings=warnings)
