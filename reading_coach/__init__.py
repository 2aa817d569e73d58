"""Real-time reading alignment, scoring and adaptive difficulty."""
from .adaptive import (
    AdaptiveController,
    ControllerState,
    DifficultyDecision,
    DifficultyTier,
    TransitionNotice,
    evaluate_difficulty,
)
from .alignment import align, heatmap_intensity, levenshtein, progress_pointer, tokenize
from .models import AlignmentState, ReferenceSequence, ScoreSnapshot
from .passages import EmptyPassageError, Passage, PassageCatalog
from .pronunciation import PronunciationFeedback, pronunciation_feedback
from .scorer import accuracy, confidence, progress_percent, score, wpm
from .session import ReadingSession, SessionUpdate, TranscriptBuffer
from .stats import InMemoryStatsRepository, StatsRepository

__all__ = [
    "AdaptiveController",
    "AlignmentState",
    "ControllerState",
    "DifficultyDecision",
    "DifficultyTier",
    "EmptyPassageError",
    "InMemoryStatsRepository",
    "Passage",
    "PassageCatalog",
    "PronunciationFeedback",
    "ReadingSession",
    "ReferenceSequence",
    "ScoreSnapshot",
    "SessionUpdate",
    "StatsRepository",
    "TranscriptBuffer",
    "TransitionNotice",
    "accuracy",
    "align",
    "confidence",
    "evaluate_difficulty",
    "heatmap_intensity",
    "levenshtein",
    "progress_percent",
    "progress_pointer",
    "pronunciation_feedback",
    "score",
    "tokenize",
    "wpm",
]
