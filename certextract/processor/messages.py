"""Presentation helpers for failure messages shown to end users."""

import re

from certextract.extraction.exceptions import DETECTED_CLAUSE

_DETECTED_RE = re.compile(rf"({re.escape(DETECTED_CLAUSE)}\s*.*)", re.IGNORECASE)
_MARKUP_RE = re.compile(r"<[^>]*>")

HIGHLIGHT_OPEN = '<span style="background-color: yellow; font-weight: bold;">'
HIGHLIGHT_CLOSE = "</span>"


def highlight_detected_format(message: str) -> str:
    """Wrap the "detected as belonging to: X" clause of a mismatch message."""
    return _DETECTED_RE.sub(rf"{HIGHLIGHT_OPEN}\1{HIGHLIGHT_CLOSE}", message, count=1)


def strip_markup(message: str) -> str:
    return _MARKUP_RE.sub("", message)
