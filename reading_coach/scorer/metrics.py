"""Accuracy, speed and progress metrics for a live reading session.

Every function here is pure and cheap enough to run on each transcript
update, several times per second.
"""
from __future__ import annotations

import math
from typing import Dict, Optional, Sequence

from ..alignment.aligner import progress_pointer
from ..alignment.edit_distance import align_sequences, levenshtein
from ..models.score_snapshot import ScoreSnapshot

SECONDS_PER_MINUTE = 60.0

# Each finalized word adds this much to the confidence ramp
CONFIDENCE_PER_WORD = 10


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))


def _clamp_percent(value: float) -> int:
    return max(0, min(100, round_half_up(value)))


def accuracy(reference: Sequence[str], transcript: Sequence[str]) -> int:
    """Percentage of read words that agree with the same-length reference prefix.

    The prefix comparison uses plain edit distance, so it can disagree with
    the lookahead heatmap after a skipped or inserted word.

    Args:
        reference: Reference tokens
        transcript: Finalized transcript tokens

    Returns:
        Accuracy 0-100; 0 for an empty transcript
    """
    read_count = len(transcript)
    distance = levenshtein(list(reference[:read_count]), list(transcript))
    correct = max(0, read_count - distance)
    return _clamp_percent(100 * correct / max(1, read_count))


def wpm(start_time: Optional[float], transcript_length: int, now: float) -> int:
    """Words per minute since start_time (seconds); 0 if not started or no time elapsed."""
    if start_time is None:
        return 0
    elapsed = now - start_time
    if elapsed <= 0:
        return 0
    return max(0, round_half_up(transcript_length / (elapsed / SECONDS_PER_MINUTE)))


def progress_percent(read_pointer: int, reference_length: int) -> int:
    return _clamp_percent(100 * read_pointer / max(1, reference_length))


def confidence(transcript_length: int) -> int:
    """Saturating 0-100 ramp on the number of words heard.

    Heuristic only, not a probability: it says how much evidence the other
    scores are based on.
    """
    return max(0, min(100, transcript_length * CONFIDENCE_PER_WORD))


def score(
    reference: Sequence[str],
    transcript: Sequence[str],
    start_time: Optional[float],
    now: float,
) -> ScoreSnapshot:
    """Build the full ScoreSnapshot for the current buffers.

    Args:
        reference: Reference tokens
        transcript: Finalized transcript tokens
        start_time: Recording start (seconds) or None if not started
        now: Current time on the same clock as start_time

    Returns:
        ScoreSnapshot with accuracy, wpm, words_read and progress_percent
    """
    pointer = progress_pointer(reference, transcript)
    return ScoreSnapshot(
        accuracy=accuracy(reference, transcript),
        wpm=wpm(start_time, len(transcript), now),
        words_read=len(transcript),
        progress_percent=progress_percent(pointer, len(reference)),
    )


def error_breakdown(reference: Sequence[str], transcript: Sequence[str]) -> Dict[str, int]:
    """Count the edit operations behind the accuracy score.

    Uses the same reference prefix as accuracy(), so
    substitutions + deletions + insertions == the distance accuracy() used.

    Returns:
        Dict with "matches", "substitutions", "deletions", "insertions"
    """
    counts = {"matches": 0, "substitutions": 0, "deletions": 0, "insertions": 0}
    names = {"match": "matches", "sub": "substitutions", "del": "deletions", "ins": "insertions"}
    prefix = list(reference[: len(transcript)])
    for op, _ri, _hj in align_sequences(prefix, list(transcript)):
        counts[names[op]] += 1
    return counts
