import re
import unicodedata
from collections.abc import Sequence

from certextract.extraction.formats import FormatHandler
from certextract.processor.models import ProcessingSuccess

_UNSAFE_RE = re.compile(r"[^\w\s\-().]")
_TRAILING_A_RE = re.compile(r"\s+A$")

WORKBOOK_SUFFIX = ".xlsx"


def sanitize_name(text: str) -> str:
    """Make a document title safe to use as a file name.

    Diacritics are removed, characters other than letters, digits,
    whitespace and "-_()." become "_", and trailing " A" tokens left over
    from the title layout are dropped.
    """
    decomposed = unicodedata.normalize("NFD", text)
    without_marks = "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")
    name = _UNSAFE_RE.sub("_", without_marks).strip()
    while _TRAILING_A_RE.search(name):
        name = _TRAILING_A_RE.sub("", name).strip()
    return name


def output_file_name(handler: FormatHandler, successes: Sequence[ProcessingSuccess]) -> str:
    """Name of the consolidated workbook for a batch of one format.

    A single success with a title is named after its title; anything else
    gets the format's consolidated name.
    """
    if len(successes) == 1 and successes[0].title:
        base = sanitize_name(successes[0].title)
    else:
        base = sanitize_name(handler.consolidated_name)
    return base if base.endswith(WORKBOOK_SUFFIX) else f"{base}{WORKBOOK_SUFFIX}"
