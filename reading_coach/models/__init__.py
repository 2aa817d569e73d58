"""Data models shared by alignment, scoring and the session layer."""
from .alignment_state import AlignmentState
from .reference_sequence import ReferenceSequence
from .score_snapshot import ScoreSnapshot

__all__ = ["AlignmentState", "ReferenceSequence", "ScoreSnapshot"]
