"""Text primitives shared by every extractor."""

import re

from certextract.logging.logger import Log

ABSENT_MARKER = "No encontrado"
NOT_APPLICABLE = "No aplica"

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def normalize_text(text: str) -> str:
    """Collapse every line break variant into a single space."""
    return _LINE_BREAK_RE.sub(" ", text)


def search(text: str, pattern: re.Pattern[str] | str) -> str | None:
    """Return the stripped first capture group of pattern in text.

    None means "no match" (or the group did not take part in the match); an
    empty string is a legitimate captured value. Pattern strings are compiled
    case-insensitively. Never raises.
    """
    if isinstance(pattern, str):
        try:
            pattern = re.compile(pattern, re.IGNORECASE)
        except re.error as exc:
            Log.warning(f"Invalid pattern {pattern!r}: {exc}")
            return None
    match = pattern.search(text)
    if match is None or pattern.groups < 1:
        return None
    value = match.group(1)
    return value.strip() if value is not None else None
