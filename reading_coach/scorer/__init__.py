"""Scoring for live read-aloud sessions."""
from .metrics import accuracy, confidence, error_breakdown, progress_percent, score, wpm

__all__ = ["accuracy", "confidence", "error_breakdown", "progress_percent", "score", "wpm"]
