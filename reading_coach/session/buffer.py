"""Append-only buffer of finalized transcript tokens."""
from __future__ import annotations

from typing import List, Tuple

from ..alignment.tokenizer import tokenize


class TranscriptBuffer:
    """Finalized recognition results only.

    Interim results are display-only data owned by the UI and never enter the
    buffer. `version` increases on every mutation so readers can cache work
    derived from the tokens.
    """

    def __init__(self) -> None:
        self._tokens: List[str] = []
        self.version = 0

    def __len__(self) -> int:
        return len(self._tokens)

    @property
    def tokens(self) -> Tuple[str, ...]:
        return tuple(self._tokens)

    def append(self, fragment: str, is_final: bool = True) -> int:
        """Tokenize and append a finalized fragment. Returns the number of tokens added."""
        if not is_final:
            return 0
        tokens = tokenize(fragment)
        if tokens:
            self._tokens.extend(tokens)
            self.version += 1
        return len(tokens)

    def clear(self) -> None:
        self._tokens = []
        self.version += 1
