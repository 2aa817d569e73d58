"""Thresholds and pacing rules for adaptive difficulty."""
from __future__ import annotations

# Promote when the reader is both fast and accurate
PROMOTE_MIN_WPM = 120
PROMOTE_MIN_ACCURACY = 90

# Demote when the reader is slow (but has started) or inaccurate
DEMOTE_MAX_WPM = 70
DEMOTE_MAX_ACCURACY = 75

# Minimum time between two tier transitions (seconds)
TRANSITION_COOLDOWN = 6.0

# How long the UI should show a transition notice (seconds)
NOTICE_DISPLAY_SECONDS = 3.0

# Model reading: playback speech rate multiplier per tier
TIER_SPEECH_RATE = {
    "beginner": 0.85,
    "intermediate": 1.0,
    "advanced": 1.1,
}

# Model reading: highlight pace per tier (seconds per word)
TIER_SECONDS_PER_WORD = {
    "beginner": 0.45,
    "intermediate": 0.35,
    "advanced": 0.30,
}

# Model reading never lasts less than this, however short the passage
MIN_PLAYBACK_SECONDS = 6.0
