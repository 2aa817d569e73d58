"""Hysteresis-gated difficulty controller.

The controller watches each ScoreSnapshot and moves the reader one tier up
or down when the thresholds in rules.py are crossed. A cooldown between
transitions keeps it from oscillating while scores settle after a passage
change.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional

from ..models.score_snapshot import ScoreSnapshot
from ..stats import LEVEL_KEY, InMemoryStatsRepository, StatsRepository, load_int
from .rules import (
    DEMOTE_MAX_ACCURACY,
    DEMOTE_MAX_WPM,
    NOTICE_DISPLAY_SECONDS,
    PROMOTE_MIN_ACCURACY,
    PROMOTE_MIN_WPM,
    TRANSITION_COOLDOWN,
)
from .tiers import DifficultyTier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ControllerState:
    """Current tier and when it last changed (None: never changed)."""
    tier: DifficultyTier = DifficultyTier.INTERMEDIATE
    last_transition_at: Optional[float] = None


@dataclass(frozen=True)
class TransitionNotice:
    """Tier change announcement for the UI, which hides it after display_seconds."""
    previous: DifficultyTier
    tier: DifficultyTier
    direction: str  # "promote" | "demote"
    wpm: int
    accuracy: int
    at: float
    display_seconds: float = NOTICE_DISPLAY_SECONDS

    @property
    def message(self) -> str:
        return f"Adapted to {self.tier.label} (WPM {self.wpm}, Acc {self.accuracy}%)"


@dataclass(frozen=True)
class DifficultyDecision:
    state: ControllerState
    transitioned: bool = False
    notice: Optional[TransitionNotice] = None

    @property
    def tier(self) -> DifficultyTier:
        return self.state.tier


def should_promote(snapshot: ScoreSnapshot) -> bool:
    return snapshot.wpm >= PROMOTE_MIN_WPM and snapshot.accuracy >= PROMOTE_MIN_ACCURACY


def should_demote(snapshot: ScoreSnapshot) -> bool:
    slow = 0 < snapshot.wpm <= DEMOTE_MAX_WPM
    return slow or snapshot.accuracy <= DEMOTE_MAX_ACCURACY


def in_cooldown(state: ControllerState, now: float, cooldown: float = TRANSITION_COOLDOWN) -> bool:
    if state.last_transition_at is None:
        return False
    return now - state.last_transition_at < cooldown


def evaluate_difficulty(
    state: ControllerState,
    snapshot: ScoreSnapshot,
    now: float,
    cooldown: float = TRANSITION_COOLDOWN,
) -> DifficultyDecision:
    """Decide the tier for this tick.

    Promotion is checked before demotion and at most one single-step
    transition happens per call. During the cooldown the thresholds are still
    evaluated but nothing changes.

    Args:
        state: Current controller state
        snapshot: Latest scores
        now: Current time (seconds, same clock as last_transition_at)
        cooldown: Minimum seconds between transitions

    Returns:
        DifficultyDecision with the (possibly unchanged) state and a notice
        when a transition happened
    """
    current = state.tier
    target = current
    direction = ""
    if should_promote(snapshot) and not current.is_top:
        target, direction = current.promoted(), "promote"
    elif should_demote(snapshot) and not current.is_bottom:
        target, direction = current.demoted(), "demote"

    if target == current:
        return DifficultyDecision(state=state)

    if in_cooldown(state, now, cooldown):
        logger.debug("Suppressed %s to %s during cooldown", direction, target.label)
        return DifficultyDecision(state=state)

    notice = TransitionNotice(
        previous=current,
        tier=target,
        direction=direction,
        wpm=snapshot.wpm,
        accuracy=snapshot.accuracy,
        at=now,
    )
    new_state = replace(state, tier=target, last_transition_at=now)
    return DifficultyDecision(state=new_state, transitioned=True, notice=notice)


class AdaptiveController:
    """Stateful wrapper around evaluate_difficulty.

    Loads the starting tier from the stats repository and saves every new
    tier back to it. When disabled it keeps the tier fixed.
    """

    def __init__(
        self,
        repository: Optional[StatsRepository] = None,
        *,
        initial_tier: Optional[DifficultyTier] = None,
        enabled: bool = True,
        cooldown: float = TRANSITION_COOLDOWN,
    ) -> None:
        self.repository = repository if repository is not None else InMemoryStatsRepository()
        self.enabled = enabled
        self.cooldown = cooldown
        if initial_tier is None:
            stored = load_int(self.repository, LEVEL_KEY)
            initial_tier = DifficultyTier.parse(stored, DifficultyTier.INTERMEDIATE)
        self.state = ControllerState(tier=initial_tier)
        self.last_notice: Optional[TransitionNotice] = None

    @property
    def tier(self) -> DifficultyTier:
        return self.state.tier

    def set_tier(self, tier: DifficultyTier) -> None:
        """Manual tier choice; does not start a cooldown."""
        self.state = replace(self.state, tier=tier)
        self.repository.save(LEVEL_KEY, str(int(tier)))

    def evaluate(self, snapshot: ScoreSnapshot, now: float) -> DifficultyDecision:
        if not self.enabled:
            return DifficultyDecision(state=self.state)

        decision = evaluate_difficulty(self.state, snapshot, now, self.cooldown)
        if decision.transitioned:
            self.state = decision.state
            self.last_notice = decision.notice
            self.repository.save(LEVEL_KEY, str(int(decision.tier)))
            logger.info(decision.notice.message)
        return decision
