"""Position sources driving the passage highlight.

Live recognition (event-paced) and model reading playback (timer-paced)
both answer the same question: which reference word is current now.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ..adaptive.rules import MIN_PLAYBACK_SECONDS
from ..adaptive.tiers import DifficultyTier
from ..alignment.aligner import progress_pointer
from .buffer import TranscriptBuffer


class PositionSource(ABC):
    """Answers which reference word is current at a given time."""

    kind = "none"

    @abstractmethod
    def position(self, now: float) -> int:
        ...

    def finished(self, now: float) -> bool:
        return False


class RecognitionPositionSource(PositionSource):
    """Pointer follows the finalized transcript."""

    kind = "recognition"

    def __init__(self, reference: Sequence[str], buffer: TranscriptBuffer) -> None:
        self.reference = reference
        self.buffer = buffer

    def position(self, now: float) -> int:
        return progress_pointer(self.reference, self.buffer.tokens)


class PlaybackPositionSource(PositionSource):
    """Pointer advances one word per step while the model reading plays.

    The whole passage takes max(MIN_PLAYBACK_SECONDS, words * tier pace),
    split evenly across words.
    """

    kind = "playback"

    def __init__(self, reference: Sequence[str], tier: DifficultyTier, started_at: float) -> None:
        self.reference = reference
        self.tier = tier
        self.started_at = started_at
        self.word_count = len(reference)
        self.total_seconds = max(MIN_PLAYBACK_SECONDS, self.word_count * tier.seconds_per_word)
        self.step_seconds = self.total_seconds / max(1, self.word_count)

    @property
    def speech_rate(self) -> float:
        return self.tier.speech_rate

    def position(self, now: float) -> int:
        elapsed = now - self.started_at
        if elapsed <= 0:
            return 0
        return min(self.word_count, int(elapsed // self.step_seconds))

    def finished(self, now: float) -> bool:
        return self.position(now) >= self.word_count
