"""Passage catalog: picks the passage for a difficulty tier."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from .adaptive.tiers import DifficultyTier
from .models.reference_sequence import ReferenceSequence


class EmptyPassageError(ValueError):
    """Raised when a passage has no readable words."""


@dataclass(frozen=True)
class Passage:
    id: str
    title: str
    tier: DifficultyTier
    text: str
    target_words: Tuple[str, ...] = field(default_factory=tuple)
    focus_areas: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "title": self.title,
            "tier": self.tier.label,
            "text": self.text,
            "target_words": list(self.target_words),
            "focus_areas": list(self.focus_areas),
        }


DEFAULT_PASSAGES: Tuple[Passage, ...] = (
    Passage(
        id="cat-in-the-sun",
        title="The Cat in the Sun",
        tier=DifficultyTier.BEGINNER,
        text=(
            "The cat sits on the mat. It likes the sun. The cat purrs softly and blinks. "
            "It watches a red bird hop by. The cat stretches and yawns."
        ),
        target_words=("cat", "sits", "mat", "sun", "bird"),
        focus_areas=("Short vowel sounds", "Simple consonants", "Basic sight words"),
    ),
    Passage(
        id="fox-and-feather",
        title="The Fox and the Feather",
        tier=DifficultyTier.INTERMEDIATE,
        text=(
            "When the little fox found the bright blue feather, it wondered who it belonged to. "
            "It sniffed the wind, listened to the trees, and followed tiny footprints across the soft ground. "
            "With every careful step, the fox grew braver."
        ),
        target_words=("feather", "wondered", "listened", "footprints", "braver"),
        focus_areas=("Multi-syllable words", "Vowel combinations", "Reading fluency"),
    ),
    Passage(
        id="feathers-story",
        title="The Feather's Story",
        tier=DifficultyTier.ADVANCED,
        text=(
            "Under a sky mottled with passing clouds, the curious fox examined the delicate "
            "feather's spine and barbs. It traced faint trails in the loam, untangling clues "
            "with patient focus and steady breath. Each discovery sharpened its resolve to "
            "uncover the feather's winding story."
        ),
        target_words=("mottled", "delicate", "untangling", "discovery", "resolve"),
        focus_areas=("Complex vocabulary", "Advanced phonics", "Expression and intonation"),
    ),
)


class PassageCatalog:
    """Tier-indexed passages; each tier must have at least one readable passage."""

    def __init__(self, passages: Iterable[Passage] = DEFAULT_PASSAGES) -> None:
        self._by_tier: Dict[DifficultyTier, List[Passage]] = {}
        self._by_id: Dict[str, Passage] = {}
        for passage in passages:
            if len(ReferenceSequence.from_text(passage.text)) == 0:
                raise EmptyPassageError(f"Passage {passage.id!r} has no readable words")
            self._by_tier.setdefault(passage.tier, []).append(passage)
            self._by_id[passage.id] = passage

    def __len__(self) -> int:
        return len(self._by_id)

    def all(self) -> List[Passage]:
        return list(self._by_id.values())

    def get(self, passage_id: str) -> Optional[Passage]:
        return self._by_id.get(passage_id)

    def select(self, tier: DifficultyTier, index: int = 0) -> Passage:
        """Passage for a tier; falls back to the nearest lower, then higher tier."""
        order = sorted(DifficultyTier, key=lambda t: (abs(t - tier), t))
        for candidate in order:
            passages = self._by_tier.get(candidate)
            if passages:
                return passages[index % len(passages)]
        raise EmptyPassageError("Passage catalog is empty")

    def reference_for(self, tier: DifficultyTier, index: int = 0) -> Tuple[Passage, ReferenceSequence]:
        passage = self.select(tier, index)
        return passage, ReferenceSequence.from_text(passage.text)


def reference_from_text(text: str) -> ReferenceSequence:
    """Build a reference for custom text, rejecting text with no words."""
    reference = ReferenceSequence.from_text(text)
    if len(reference) == 0:
        raise EmptyPassageError("Passage has no readable words")
    return reference
