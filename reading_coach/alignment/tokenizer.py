"""Passage and transcript tokenization for alignment."""
from __future__ import annotations

from typing import List, Optional

from .normalizer import iter_words


def tokenize(text: Optional[str]) -> List[str]:
    """Tokenize raw text into normalized word tokens.

    Example: "The cat's hat -- isn't it red?" -> ["the", "cat's", "hat", "isn't", "it", "red"]

    The same function is used for the reference passage and for every
    transcript fragment, so both sides compare on identical terms.

    Args:
        text: The text to tokenize (None is treated as empty)

    Returns:
        List of tokens, empty for empty or punctuation-only input
    """
    if not text:
        return []
    return list(iter_words(text))
