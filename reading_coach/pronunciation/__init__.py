"""Word-level pronunciation hints."""
from .heuristics import PronunciationFeedback, pronunciation_feedback, suggest, word_score

__all__ = ["PronunciationFeedback", "pronunciation_feedback", "suggest", "word_score"]
