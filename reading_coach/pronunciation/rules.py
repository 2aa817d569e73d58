"""Scoring constants and canned suggestions for word-level pronunciation hints."""
from __future__ import annotations

# Score lost per character edit between spoken and target word
PENALTY_PER_EDIT = 25

# Words scoring below this get a suggestion
SUGGESTION_THRESHOLD = 80

# Letter pairs that make one sound; commonly swapped for a single letter
# ("think" -> "tink", "ship" -> "sip", "sing" -> "sin")
DIGRAPHS = ("th", "sh", "ch", "ph", "wh", "ck", "ng")

VOWELS = set("aeiouy")

# Spoken word this many letters shorter/longer than the target counts as
# dropped/added sounds
LENGTH_DELTA = 2

SUGGESTIONS = {
    "digraph": "Focus on the '{digraph}' sound in '{word}'.",
    "final_sound": "Finish the last sound in '{word}'.",
    "dropped": "Say every sound in '{word}'; some sounds were left out.",
    "added": "Read '{word}' carefully; extra sounds were added.",
    "vowel": "Check the vowel sound in '{word}'.",
    "default": "Try sounding out '{word}' slowly, one part at a time.",
}
