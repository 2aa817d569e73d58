"""Key-value stats repository for best scores and levels.

The core never touches global storage. Hosts inject a repository with
load/save; the in-memory one is the default and the one tests use.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional, Protocol

logger = logging.getLogger(__name__)

# Storage keys (same naming as the other game/feature stats)
LEVEL_KEY = "readingCoach.level"
BEST_ACCURACY_KEY = "readingCoach.bestAccuracy"


class StatsRepository(Protocol):
    def load(self, key: str) -> Optional[str]: ...

    def save(self, key: str, value: str) -> None: ...


class InMemoryStatsRepository:
    """Dict-backed repository; values are stored as strings like a browser key-value store."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._values: Dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def save(self, key: str, value: str) -> None:
        self._values[key] = str(value)


def load_int(repository: StatsRepository, key: str) -> Optional[int]:
    """Read an integer stat, treating missing or garbled values as absent."""
    raw = repository.load(key)
    if raw is None:
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-integer stat %s=%r", key, raw)
        return None


def save_best(repository: StatsRepository, key: str, value: int) -> bool:
    """Store value if it beats the stored best. Returns True when it was saved."""
    best = load_int(repository, key)
    if best is not None and value <= best:
        return False
    repository.save(key, str(value))
    return True
