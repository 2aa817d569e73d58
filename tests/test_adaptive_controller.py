import pytest

from reading_coach.adaptive import (
    AdaptiveController,
    ControllerState,
    DifficultyTier,
    evaluate_difficulty,
)
from reading_coach.models import ScoreSnapshot
from reading_coach.stats import LEVEL_KEY, InMemoryStatsRepository


def snap(wpm, accuracy, words_read=20):
    return ScoreSnapshot(accuracy=accuracy, wpm=wpm, words_read=words_read, progress_percent=50)


def test_promotion_moves_a_single_step():
    state = ControllerState(tier=DifficultyTier.BEGINNER)
    decision = evaluate_difficulty(state, snap(wpm=200, accuracy=100), now=0.0)

    assert decision.transitioned
    assert decision.tier == DifficultyTier.INTERMEDIATE
    assert decision.state.last_transition_at == 0.0
    assert decision.notice.message == "Adapted to intermediate (WPM 200, Acc 100%)"


def test_cooldown_suppresses_second_promotion():
    state = ControllerState(tier=DifficultyTier.BEGINNER)
    first = evaluate_difficulty(state, snap(200, 100), now=10.0)
    second = evaluate_difficulty(first.state, snap(200, 100), now=11.0)

    assert first.transitioned
    assert not second.transitioned
    assert second.tier == DifficultyTier.INTERMEDIATE

    later = evaluate_difficulty(second.state, snap(200, 100), now=16.0)
    assert later.transitioned
    assert later.tier == DifficultyTier.ADVANCED


def test_low_accuracy_demotes_after_cooldown():
    state = ControllerState(tier=DifficultyTier.INTERMEDIATE, last_transition_at=0.0)
    decision = evaluate_difficulty(state, snap(wpm=100, accuracy=60), now=10.0)

    assert decision.transitioned
    assert decision.tier == DifficultyTier.BEGINNER
    assert decision.notice.direction == "demote"


def test_slow_reading_demotes():
    state = ControllerState(tier=DifficultyTier.ADVANCED)
    assert evaluate_difficulty(state, snap(wpm=50, accuracy=95), now=0.0).tier == DifficultyTier.INTERMEDIATE


def test_zero_wpm_alone_does_not_demote():
    state = ControllerState(tier=DifficultyTier.INTERMEDIATE)
    decision = evaluate_difficulty(state, snap(wpm=0, accuracy=80), now=0.0)
    assert not decision.transitioned


def test_no_transition_past_the_ends():
    top = ControllerState(tier=DifficultyTier.ADVANCED)
    bottom = ControllerState(tier=DifficultyTier.BEGINNER)

    assert not evaluate_difficulty(top, snap(200, 100), now=0.0).transitioned
    assert not evaluate_difficulty(bottom, snap(30, 10), now=0.0).transitioned


def test_cooldown_boundary_is_inclusive():
    state = ControllerState(tier=DifficultyTier.INTERMEDIATE, last_transition_at=4.0)
    assert evaluate_difficulty(state, snap(200, 100), now=10.0).transitioned
    assert not evaluate_difficulty(state, snap(200, 100), now=9.9).transitioned


def test_steady_reader_stays_put():
    state = ControllerState(tier=DifficultyTier.INTERMEDIATE)
    decision = evaluate_difficulty(state, snap(wpm=100, accuracy=85), now=0.0)
    assert decision.state is state
    assert decision.notice is None


def test_controller_loads_and_saves_level():
    repo = InMemoryStatsRepository({LEVEL_KEY: "0"})
    controller = AdaptiveController(repo)
    assert controller.tier == DifficultyTier.BEGINNER

    controller.evaluate(snap(150, 95), now=1.0)

    assert controller.tier == DifficultyTier.INTERMEDIATE
    assert repo.load(LEVEL_KEY) == "1"
    assert controller.last_notice.previous == DifficultyTier.BEGINNER


@pytest.mark.parametrize("stored", [None, "abc", "7"])
def test_controller_defaults_to_intermediate(stored):
    repo = InMemoryStatsRepository({LEVEL_KEY: stored} if stored is not None else {})
    assert AdaptiveController(repo).tier == DifficultyTier.INTERMEDIATE


def test_disabled_controller_never_transitions():
    controller = AdaptiveController(initial_tier=DifficultyTier.BEGINNER, enabled=False)
    decision = controller.evaluate(snap(200, 100), now=0.0)

    assert not decision.transitioned
    assert controller.tier == DifficultyTier.BEGINNER


def test_tier_helpers():
    assert DifficultyTier.BEGINNER < DifficultyTier.INTERMEDIATE < DifficultyTier.ADVANCED
    assert DifficultyTier.ADVANCED.promoted() == DifficultyTier.ADVANCED
    assert DifficultyTier.BEGINNER.demoted() == DifficultyTier.BEGINNER
    assert DifficultyTier.parse("Advanced") == DifficultyTier.ADVANCED
    assert DifficultyTier.parse("1") == DifficultyTier.INTERMEDIATE
    assert DifficultyTier.parse("expert") is None
    assert DifficultyTier.BEGINNER.speech_rate == 0.85


@pytest.mark.parametrize("value", ["²", "1²", "-1", "", None, 3.0])
def test_tier_parse_returns_default_for_odd_input(value):
    assert DifficultyTier.parse(value) is None
    assert DifficultyTier.parse(value, DifficultyTier.BEGINNER) == DifficultyTier.BEGINNER
