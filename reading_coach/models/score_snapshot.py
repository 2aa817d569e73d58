"""Data model for a point-in-time reading score."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class ScoreSnapshot:
    """Scores derived from the current transcript; recomputed on every update.

    Attributes:
        accuracy: 0-100, share of read words that matched the reference prefix
        wpm: Words per minute since the session started
        words_read: Number of finalized transcript tokens
        progress_percent: 0-100, read pointer relative to passage length
    """
    accuracy: int = 0
    wpm: int = 0
    words_read: int = 0
    progress_percent: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
