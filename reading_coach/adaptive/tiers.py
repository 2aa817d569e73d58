"""Ordered difficulty tiers."""
from __future__ import annotations

from enum import IntEnum
from typing import Optional

from .rules import TIER_SECONDS_PER_WORD, TIER_SPEECH_RATE


class DifficultyTier(IntEnum):
    """Reading level; the integer order is the promotion order."""

    BEGINNER = 0
    INTERMEDIATE = 1
    ADVANCED = 2

    @property
    def label(self) -> str:
        return self.name.lower()

    @property
    def is_top(self) -> bool:
        return self == max(DifficultyTier)

    @property
    def is_bottom(self) -> bool:
        return self == min(DifficultyTier)

    def promoted(self) -> "DifficultyTier":
        """One tier up, or self at the top."""
        return self if self.is_top else DifficultyTier(self + 1)

    def demoted(self) -> "DifficultyTier":
        """One tier down, or self at the bottom."""
        return self if self.is_bottom else DifficultyTier(self - 1)

    @property
    def speech_rate(self) -> float:
        return TIER_SPEECH_RATE[self.label]

    @property
    def seconds_per_word(self) -> float:
        return TIER_SECONDS_PER_WORD[self.label]

    @classmethod
    def parse(cls, value: object, default: Optional["DifficultyTier"] = None) -> Optional["DifficultyTier"]:
        """Accept a tier, its label ("beginner") or its integer value; default when unknown."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            if key in cls.__members__:
                return cls[key]
            if key.isdecimal():
                value = int(key)
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                return default
        return default
