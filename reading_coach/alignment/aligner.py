"""Live alignment between the reference passage and the growing transcript."""
from __future__ import annotations

from typing import List, Sequence

from reading_coach.models.alignment_state import AlignmentState

# Reference positions searched for the current spoken word (i..i+W-1).
# A match at offset k means the reader skipped k reference words.
LOOKAHEAD_WINDOW = 3

# Error count at which a heatmap cell reaches full intensity
HEATMAP_MAX_ERRORS = 3


def progress_pointer(reference: Sequence[str], transcript: Sequence[str]) -> int:
    """Forward-greedy read pointer used for progress highlighting.

    For every spoken token the cursor slides forward until it finds that token,
    then consumes it. An unmatched token runs the cursor to the end of the
    reference, so the pointer is advisory only.

    Args:
        reference: Reference tokens
        transcript: Finalized transcript tokens

    Returns:
        Index of the next reference word to be read (0..len(reference))
    """
    n = len(reference)
    idx = 0
    for word in transcript:
        while idx < n and reference[idx] != word:
            idx += 1
        if idx < n:
            idx += 1
    return idx


def align(
    reference: Sequence[str],
    transcript: Sequence[str],
    window: int = LOOKAHEAD_WINDOW,
) -> AlignmentState:
    """Single forward pass alignment producing the per-word error heatmap.

    Rules, applied while both sequences have tokens left:
      - same token: mark matched, advance both cursors
      - token found k>0 positions ahead inside the window: the k skipped
        reference words each get an error, then the found word is matched
      - not found: one error on the current reference word, advance both
    Reference words never reached get one error each. The smallest k wins.

    The state is rebuilt from scratch on every call, so repeated calls with
    the same buffers return equal results.

    Args:
        reference: Reference tokens
        transcript: Finalized transcript tokens
        window: Lookahead size in reference positions

    Returns:
        AlignmentState with matched flags, error counts and the read pointer
    """
    n = len(reference)
    m = len(transcript)
    matched: List[bool] = [False] * n
    errors: List[int] = [0] * n

    i = 0
    j = 0
    while i < n and j < m:
        if reference[i] == transcript[j]:
            matched[i] = True
            i += 1
            j += 1
            continue

        found = -1
        for k in range(1, min(window, n - i)):
            if reference[i + k] == transcript[j]:
                found = k
                break

        if found > 0:
            for k in range(found):
                errors[i + k] += 1
            i += found
            matched[i] = True
        else:
            errors[i] += 1
        i += 1
        j += 1

    # content never reached
    while i < n:
        errors[i] += 1
        i += 1

    return AlignmentState(
        matched=tuple(matched),
        errors=tuple(errors),
        read_pointer=progress_pointer(reference, transcript),
    )


def heatmap_intensity(errors: Sequence[int], max_errors: int = HEATMAP_MAX_ERRORS) -> List[float]:
    """Map error counts to a 0.0-1.0 heat level per reference word."""
    cap = max(1, max_errors)
    return [min(1.0, max(0, e) / cap) for e in errors]
