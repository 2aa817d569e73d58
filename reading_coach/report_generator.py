from __future__ import annotations

from typing import Any, Dict, List, Sequence

from .adaptive.rules import DEMOTE_MAX_WPM, PROMOTE_MIN_ACCURACY, PROMOTE_MIN_WPM
from .alignment.aligner import align, heatmap_intensity
from .models.score_snapshot import ScoreSnapshot
from .pronunciation.heuristics import pronunciation_feedback
from .scorer.metrics import confidence, error_breakdown


def word_statuses(reference: Sequence[str], transcript: Sequence[str]) -> List[Dict[str, Any]]:
    """Per passage word: status, error count and heat level from the lookahead alignment.

    Status is "correct" for matched words, "needs_practice" for words with
    errors and "not_reached" for words past the last spoken one.
    """
    state = align(reference, transcript)
    heat = heatmap_intensity(state.errors)
    last_matched = max((i for i, ok in enumerate(state.matched) if ok), default=-1)
    reached = max(last_matched + 1, min(len(transcript), len(reference)))

    words: List[Dict[str, Any]] = []
    for idx, word in enumerate(reference):
        if state.matched[idx]:
            status = "correct"
        elif idx >= reached:
            status = "not_reached"
        else:
            status = "needs_practice"
        words.append(
            {
                "index": idx,
                "word": word,
                "status": status,
                "errors": state.errors[idx],
                "heat": heat[idx],
            }
        )
    return words


def generate_feedback_strings(snapshot: ScoreSnapshot, breakdown: Dict[str, int]) -> Dict[str, List[str]]:
    """Coach-style strengths and improvements from the final scores."""
    strengths: List[str] = []
    improvements: List[str] = []

    if snapshot.accuracy >= PROMOTE_MIN_ACCURACY:
        strengths.append("You read the words very accurately.")
    if snapshot.wpm >= PROMOTE_MIN_WPM:
        strengths.append("Your reading pace is smooth and confident.")
    if snapshot.progress_percent >= 100:
        strengths.append("You read the whole passage.")

    if breakdown.get("deletions", 0):
        improvements.append("Some words were skipped; follow the highlight word by word.")
    if breakdown.get("substitutions", 0):
        improvements.append("A few words were read as different words; slow down on tricky ones.")
    if breakdown.get("insertions", 0):
        improvements.append("Extra words crept in; try not to repeat or add words.")
    if 0 < snapshot.wpm <= DEMOTE_MAX_WPM:
        improvements.append("Practice the passage again to build up speed.")

    return {"strengths": strengths[:3], "improvements": improvements[:3]}


def build_session_report(
    reference: Sequence[str],
    transcript: Sequence[str],
    snapshot: ScoreSnapshot,
    duration_seconds: float = 0.0,
) -> Dict[str, Any]:
    """Summarize a finished reading.

    Args:
        reference: Reference tokens
        transcript: Finalized transcript tokens
        snapshot: Final scores
        duration_seconds: Recording length

    Returns:
        Dict with summary, per-word statuses, pronunciation hints and feedback
    """
    breakdown = error_breakdown(reference, transcript)
    hints = [
        {"index": f.index, "word": f.target, "spoken": f.spoken, "score": f.score, "suggestion": f.suggestion}
        for f in pronunciation_feedback(reference, transcript)
        if f.suggestion
    ]
    feedback = generate_feedback_strings(snapshot, breakdown)

    return {
        "summary": {
            **snapshot.to_dict(),
            "total_words": len(reference),
            "confidence": confidence(len(transcript)),
            "duration_seconds": round(max(0.0, duration_seconds), 1),
            **breakdown,
        },
        "words": word_statuses(reference, transcript),
        "pronunciation": hints,
        "strengths": feedback["strengths"],
        "improvements": feedback["improvements"],
    }
