"""Immutable reference token sequence for one passage."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple, Union, overload

from reading_coach.alignment.tokenizer import tokenize


@dataclass(frozen=True)
class ReferenceSequence:
    """Ordered tokens of the passage being read.

    Created once at passage/tier selection and never mutated during a
    reading session. Behaves like a read-only sequence of tokens.

    Attributes:
        tokens: Normalized passage tokens
        text: The raw passage text the tokens came from
    """
    tokens: Tuple[str, ...]
    text: str = ""

    @classmethod
    def from_text(cls, text: str) -> "ReferenceSequence":
        return cls(tokens=tuple(tokenize(text)), text=text)

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(self.tokens)

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[str, ...]: ...

    def __getitem__(self, index: Union[int, slice]) -> Union[str, Tuple[str, ...]]:
        return self.tokens[index]
