"""Adaptive difficulty: tiers, thresholds and the cooldown-gated controller."""
from .controller import (
    AdaptiveController,
    ControllerState,
    DifficultyDecision,
    TransitionNotice,
    evaluate_difficulty,
)
from .tiers import DifficultyTier

__all__ = [
    "AdaptiveController",
    "ControllerState",
    "DifficultyDecision",
    "DifficultyTier",
    "TransitionNotice",
    "evaluate_difficulty",
]
