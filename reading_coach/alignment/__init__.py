"""Alignment utilities for matching a reference passage to a live transcript."""
from .aligner import align, heatmap_intensity, progress_pointer
from .edit_distance import align_sequences, levenshtein
from .tokenizer import tokenize

__all__ = [
    "align",
    "align_sequences",
    "heatmap_intensity",
    "levenshtein",
    "progress_pointer",
    "tokenize",
]
