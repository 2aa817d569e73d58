"""Data model for the per-position alignment of a transcript to a reference."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class AlignmentState:
    """Alignment of the transcript against every reference position.

    Attributes:
        matched: True where the reference word was read correctly
        errors: Discrepancy count per reference position (the heatmap)
        read_pointer: Furthest reference index believed reached (highlighting)
    """
    matched: Tuple[bool, ...]
    errors: Tuple[int, ...]
    read_pointer: int = 0

    @property
    def error_total(self) -> int:
        return sum(self.errors)
