from reading_coach.alignment import (
    align,
    align_sequences,
    heatmap_intensity,
    levenshtein,
    progress_pointer,
    tokenize,
)
from reading_coach.models import AlignmentState


def test_exact_read_has_no_errors(cat_reference, cat_tokens):
    state = align(cat_reference, cat_tokens)

    assert state.errors == (0, 0, 0, 0, 0, 0)
    assert all(state.matched)
    assert state.read_pointer == 6


def test_substitution_and_skipped_word(cat_reference):
    transcript = tokenize("The cat sits on mat")
    state = align(cat_reference, transcript)

    # "sat" -> "sits" is a substitution, the second "the" was skipped
    assert state.errors == (0, 0, 1, 0, 1, 0)
    assert state.matched == (True, True, False, True, False, True)


def test_empty_transcript_marks_everything_unread(cat_reference):
    state = align(cat_reference, [])

    assert state.errors == (1, 1, 1, 1, 1, 1)
    assert not any(state.matched)
    assert state.read_pointer == 0


def test_empty_reference():
    state = align([], ["hello"])
    assert state == AlignmentState(matched=(), errors=(), read_pointer=0)


def test_skip_two_words_inside_window():
    state = align(["a", "b", "c", "d"], ["a", "d"])

    assert state.errors == (0, 1, 1, 0)
    assert state.matched == (True, False, False, True)


def test_skip_beyond_window_is_a_substitution_then_unread_tail():
    state = align(["a", "b", "c", "d", "e"], ["a", "e"])

    assert state.errors == (0, 1, 1, 1, 1)
    assert state.matched == (True, False, False, False, False)


def test_lookahead_prefers_nearest_match():
    state = align(["a", "b", "x", "x"], ["a", "x"])

    assert state.errors == (0, 1, 0, 1)
    assert state.matched == (True, False, True, False)


def test_align_is_deterministic_and_does_not_accumulate(cat_reference):
    transcript = tokenize("The cat sits on mat")
    first = align(cat_reference, transcript)
    second = align(cat_reference, transcript)

    assert first == second
    assert second.error_total == 2


def test_progress_pointer_is_monotonic_while_reading(cat_reference, cat_tokens):
    pointers = [progress_pointer(cat_reference, cat_tokens[:k]) for k in range(len(cat_tokens) + 1)]

    assert pointers == sorted(pointers)
    assert pointers == [0, 1, 2, 3, 4, 5, 6]


def test_progress_pointer_unmatched_word_runs_to_end():
    assert progress_pointer(["a", "b", "c"], ["z"]) == 3
    assert progress_pointer(["a", "b", "c"], []) == 0


def test_heatmap_intensity():
    assert heatmap_intensity([0, 1, 3, 5]) == [0.0, 1 / 3, 1.0, 1.0]
    assert heatmap_intensity([2], max_errors=4) == [0.5]


def test_levenshtein():
    assert levenshtein("kitten", "sitting") == 3
    assert levenshtein(["the", "cat"], ["the", "dog", "ran"]) == 2
    assert levenshtein([], ["a", "b"]) == 2
    assert levenshtein("abc", "") == 3


def test_align_sequences_operation_count_matches_distance():
    ref = tokenize("the cat sat on the mat")
    hyp = tokenize("the cat sits on on mat")
    ops = align_sequences(ref, hyp)

    non_matches = [op for op, _, _ in ops if op != "match"]
    assert len(non_matches) == levenshtein(ref, hyp)
    assert [ri for _, ri, _ in ops if ri is not None] == list(range(len(ref)))
