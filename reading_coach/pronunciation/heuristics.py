"""Advisory per-word pronunciation scores.

Words are paired by position (the n-th spoken word with the n-th passage
word), not through the lookahead alignment used for the heatmap. After a
skipped word the two can point at different words; the hints are advisory.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..alignment.edit_distance import levenshtein
from ..alignment.normalizer import normalize_token
from .rules import (
    DIGRAPHS,
    LENGTH_DELTA,
    PENALTY_PER_EDIT,
    SUGGESTION_THRESHOLD,
    SUGGESTIONS,
    VOWELS,
)


@dataclass(frozen=True)
class PronunciationFeedback:
    """Score and optional hint for one spoken word.

    Attributes:
        index: Position of the word in both sequences
        target: Passage word expected at this position
        spoken: Word heard at this position
        distance: Character edit distance between the normalized words
        score: 0-100, 100 minus 25 per edit
        suggestion: Canned tip when score is below the threshold, else None
    """
    index: int
    target: str
    spoken: str
    distance: int
    score: int
    suggestion: Optional[str] = None


def word_score(spoken: str, target: str) -> tuple[int, int]:
    """Return (distance, score) for a spoken word against its target."""
    distance = levenshtein(normalize_token(spoken), normalize_token(target))
    return distance, max(0, 100 - PENALTY_PER_EDIT * distance)


def _vowels(word: str) -> List[str]:
    return [c for c in word if c in VOWELS]


def suggest(spoken: str, target: str) -> str:
    """Pick one canned suggestion by the first rule that applies."""
    spoken = normalize_token(spoken)
    target = normalize_token(target)

    for digraph in DIGRAPHS:
        if digraph in target and digraph not in spoken:
            return SUGGESTIONS["digraph"].format(digraph=digraph, word=target)

    if spoken and target and len(spoken) < len(target) and target.startswith(spoken):
        return SUGGESTIONS["final_sound"].format(word=target)
    if len(target) - len(spoken) >= LENGTH_DELTA:
        return SUGGESTIONS["dropped"].format(word=target)
    if len(spoken) - len(target) >= LENGTH_DELTA:
        return SUGGESTIONS["added"].format(word=target)
    if _vowels(spoken) != _vowels(target):
        return SUGGESTIONS["vowel"].format(word=target)
    return SUGGESTIONS["default"].format(word=target)


def pronunciation_feedback(
    reference: Sequence[str], transcript: Sequence[str]
) -> List[PronunciationFeedback]:
    """Score every transcript word against the passage word at the same index.

    Spoken words past the end of the passage are not scored.

    Args:
        reference: Reference tokens
        transcript: Finalized transcript tokens

    Returns:
        One PronunciationFeedback per paired word
    """
    results: List[PronunciationFeedback] = []
    for index, (spoken, target) in enumerate(zip(transcript, reference)):
        distance, score = word_score(spoken, target)
        suggestion = suggest(spoken, target) if score < SUGGESTION_THRESHOLD else None
        results.append(
            PronunciationFeedback(
                index=index,
                target=target,
                spoken=spoken,
                distance=distance,
                score=score,
                suggestion=suggestion,
            )
        )
    return results
