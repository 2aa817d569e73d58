"""Token normalization utilities for alignment."""
from __future__ import annotations

import re
import unicodedata
from typing import Iterator

# Characters kept inside a word besides letters and digits
WORD_JOINERS = "'-"

# Anything that is not a letter, digit, whitespace, apostrophe or hyphen.
# \w also matches "_", which is not a word character for reading purposes.
_NON_WORD_RE = re.compile(r"[^\w\s'\-]|_")


def scrub_text(text: str) -> str:
    """Lowercase text and blank out every character that can't be part of a word.

    Text is NFC-composed first so an "e" plus combining accent from a recognizer
    keeps its accent and matches the composed passage word.

    Args:
        text: Raw passage or transcript text

    Returns:
        Lowercased text where punctuation has been replaced by spaces
    """
    return _NON_WORD_RE.sub(" ", unicodedata.normalize("NFC", text).lower())


def iter_words(text: str) -> Iterator[str]:
    """Yield normalized words from text.

    Leading and trailing apostrophes/hyphens are stripped, internal ones kept:
    "'tis" -> "tis", "well-known" -> "well-known", "--" -> nothing.
    """
    for chunk in scrub_text(text).split():
        word = chunk.strip(WORD_JOINERS)
        if word:
            yield word


def normalize_token(token: str) -> str:
    """Normalize a single spoken or written word for character-level comparison.

    Args:
        token: The token string to normalize

    Returns:
        Normalized token string, words joined by one space (may be empty)
    """
    return " ".join(iter_words(token or ""))
