import pytest

from reading_coach.adaptive import DifficultyTier
from reading_coach.passages import (
    DEFAULT_PASSAGES,
    EmptyPassageError,
    Passage,
    PassageCatalog,
    reference_from_text,
)
from reading_coach.report_generator import build_session_report, word_statuses
from reading_coach.models import ScoreSnapshot
from reading_coach.stats import BEST_ACCURACY_KEY, load_int, save_best


def test_default_catalog_has_one_passage_per_tier():
    catalog = PassageCatalog()

    assert len(catalog) == 3
    assert {p.tier for p in catalog.all()} == set(DifficultyTier)
    assert catalog.select(DifficultyTier.ADVANCED).id == "feathers-story"
    assert catalog.get("cat-in-the-sun").tier == DifficultyTier.BEGINNER
    assert catalog.get("missing") is None


def test_reference_for_tier():
    passage, reference = PassageCatalog().reference_for(DifficultyTier.BEGINNER)

    assert passage.id == "cat-in-the-sun"
    assert len(reference) == 28
    assert reference[:3] == ("the", "cat", "sits")


def test_select_falls_back_to_nearest_tier():
    beginner_only = PassageCatalog([DEFAULT_PASSAGES[0]])
    advanced_only = PassageCatalog([DEFAULT_PASSAGES[2]])
    ends = PassageCatalog([DEFAULT_PASSAGES[0], DEFAULT_PASSAGES[2]])

    assert beginner_only.select(DifficultyTier.ADVANCED).tier == DifficultyTier.BEGINNER
    assert advanced_only.select(DifficultyTier.BEGINNER).tier == DifficultyTier.ADVANCED
    assert ends.select(DifficultyTier.INTERMEDIATE).tier == DifficultyTier.BEGINNER


def test_empty_catalog_and_passages_are_rejected():
    with pytest.raises(EmptyPassageError):
        PassageCatalog([]).select(DifficultyTier.BEGINNER)
    with pytest.raises(EmptyPassageError):
        PassageCatalog([Passage(id="blank", title="Blank", tier=DifficultyTier.BEGINNER, text=" ... ")])
    with pytest.raises(EmptyPassageError):
        reference_from_text("!!")


def test_passage_to_dict():
    data = DEFAULT_PASSAGES[0].to_dict()

    assert data["tier"] == "beginner"
    assert data["target_words"][0] == "cat"


def test_save_best_only_raises(stats_repo):
    assert save_best(stats_repo, BEST_ACCURACY_KEY, 70)
    assert not save_best(stats_repo, BEST_ACCURACY_KEY, 60)
    assert not save_best(stats_repo, BEST_ACCURACY_KEY, 70)
    assert save_best(stats_repo, BEST_ACCURACY_KEY, 85)
    assert load_int(stats_repo, BEST_ACCURACY_KEY) == 85


def test_load_int_ignores_garbage(stats_repo):
    stats_repo.save(BEST_ACCURACY_KEY, "lots")

    assert load_int(stats_repo, BEST_ACCURACY_KEY) is None
    assert save_best(stats_repo, BEST_ACCURACY_KEY, 10)


def test_word_statuses(cat_reference):
    statuses = word_statuses(cat_reference, ["the", "cat", "sits"])

    assert [w["status"] for w in statuses] == [
        "correct",
        "correct",
        "needs_practice",
        "not_reached",
        "not_reached",
        "not_reached",
    ]
    assert statuses[2]["heat"] == pytest.approx(1 / 3)


def test_session_report_feedback(cat_reference, cat_tokens):
    snapshot = ScoreSnapshot(accuracy=100, wpm=130, words_read=6, progress_percent=100)
    report = build_session_report(cat_reference, cat_tokens, snapshot, duration_seconds=2.77)

    assert report["summary"]["total_words"] == 6
    assert report["summary"]["matches"] == 6
    assert report["summary"]["confidence"] == 60
    assert report["summary"]["duration_seconds"] == 2.8
    assert report["pronunciation"] == []
    assert len(report["strengths"]) == 3
    assert report["improvements"] == []
