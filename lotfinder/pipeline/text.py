"""
Text normalization for catalog search.
"""
import re
import unicodedata
from typing import Optional

_COMBINING_MARKS = re.compile("[\u0300-\u036f]")
_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize(text: Optional[str]) -> str:
    """
    Normalize text for matching.

    Lower-cases, strips accents (so "Citroën" matches "citroen"), collapses
    every run of non-alphanumeric characters into one space and trims.
    """
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFKD", text.lower())
    stripped = _COMBINING_MARKS.sub("", decomposed)
    return _NON_ALNUM.sub(" ", stripped).strip()


def tokenize(text: Optional[str]) -> list[str]:
    """Split normalized text into words."""
    normalized = normalize(text)
    return normalized.split() if normalized else []
