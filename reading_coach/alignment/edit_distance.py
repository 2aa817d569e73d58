"""Edit distance over token or character sequences."""
from __future__ import annotations

from typing import Hashable, List, Optional, Sequence, Tuple

# (op, ref_index, hyp_index); op is "match", "sub", "del" or "ins"
EditOp = Tuple[str, Optional[int], Optional[int]]


def levenshtein(a: Sequence[Hashable], b: Sequence[Hashable]) -> int:
    """Unit-cost edit distance between two sequences.

    Works on token lists as well as plain strings (character sequences).
    Only two DP rows are kept since no path is needed.
    """
    if not a:
        return len(b)
    if not b:
        return len(a)

    prev = list(range(len(b) + 1))
    for i in range(1, len(a) + 1):
        curr = [i] + [0] * len(b)
        for j in range(1, len(b) + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            curr[j] = min(prev[j] + 1, curr[j - 1] + 1, prev[j - 1] + cost)
        prev = curr
    return prev[-1]


def _distance_table(ref: Sequence[Hashable], hyp: Sequence[Hashable]) -> List[List[int]]:
    table = [[j for j in range(len(hyp) + 1)]]
    for i in range(1, len(ref) + 1):
        row = [i] + [0] * len(hyp)
        above = table[i - 1]
        for j in range(1, len(hyp) + 1):
            cost = 0 if ref[i - 1] == hyp[j - 1] else 1
            row[j] = min(above[j - 1] + cost, above[j] + 1, row[j - 1] + 1)
        table.append(row)
    return table


def align_sequences(ref: Sequence[str], hyp: Sequence[str]) -> List[EditOp]:
    """Minimal edit path turning ref into hyp.

    "del" marks a skipped reference word, "ins" an extra spoken word. Ties
    prefer match/sub, then del, then ins. The number of non-"match"
    operations equals levenshtein(ref, hyp).

    Args:
        ref: Reference tokens
        hyp: Transcript tokens

    Returns:
        Operations in reference order
    """
    table = _distance_table(ref, hyp)
    ops: List[EditOp] = []
    i, j = len(ref), len(hyp)
    while i > 0 or j > 0:
        here = table[i][j]
        if i > 0 and j > 0:
            same = ref[i - 1] == hyp[j - 1]
            if table[i - 1][j - 1] + (0 if same else 1) == here:
                ops.append(("match" if same else "sub", i - 1, j - 1))
                i -= 1
                j -= 1
                continue
        if i > 0 and table[i - 1][j] + 1 == here:
            ops.append(("del", i - 1, None))
            i -= 1
        else:
            ops.append(("ins", None, j - 1))
            j -= 1
    ops.reverse()
    return ops
