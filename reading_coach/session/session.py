"""A single read-aloud session: buffers, scoring and adaptive tier changes."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from ..adaptive.controller import AdaptiveController, DifficultyDecision
from ..adaptive.tiers import DifficultyTier
from ..alignment.aligner import align
from ..models.alignment_state import AlignmentState
from ..models.reference_sequence import ReferenceSequence
from ..models.score_snapshot import ScoreSnapshot
from ..passages import Passage, PassageCatalog, reference_from_text
from ..pronunciation.heuristics import PronunciationFeedback, pronunciation_feedback
from ..report_generator import build_session_report
from ..scorer.metrics import score
from ..stats import BEST_ACCURACY_KEY, StatsRepository, save_best
from .buffer import TranscriptBuffer
from .position import PlaybackPositionSource, PositionSource, RecognitionPositionSource

logger = logging.getLogger(__name__)

# Adaptive evaluation waits for this many finalized words
MIN_WORDS_BEFORE_ADAPT = 1


@dataclass(frozen=True)
class SessionUpdate:
    """Everything the UI needs after a transcript change."""
    epoch: int
    snapshot: ScoreSnapshot
    alignment: AlignmentState
    decision: Optional[DifficultyDecision] = None

    @property
    def transitioned(self) -> bool:
        return bool(self.decision and self.decision.transitioned)


class ReadingSession:
    """Owns the transcript buffer for one reader and one passage at a time.

    Every start, stop and passage change increments `epoch`. Callbacks from
    recognition calls started under an older epoch are dropped, so a late
    result can never land on a new passage or a stopped session.
    """

    def __init__(
        self,
        catalog: Optional[PassageCatalog] = None,
        controller: Optional[AdaptiveController] = None,
        *,
        text: Optional[str] = None,
        clock: Callable[[], float] = time.monotonic,
        min_words_before_adapt: int = MIN_WORDS_BEFORE_ADAPT,
    ) -> None:
        self.catalog = catalog if catalog is not None else PassageCatalog()
        self.controller = controller if controller is not None else AdaptiveController()
        self.clock = clock
        self.min_words_before_adapt = min_words_before_adapt

        self.custom_text = text
        self.passage: Optional[Passage] = None
        self.reference: ReferenceSequence = ReferenceSequence(tokens=())
        self.buffer = TranscriptBuffer()
        self.start_time: Optional[float] = None
        self.recording = False
        self.epoch = 0
        self.last_report: Optional[Dict[str, Any]] = None
        self._playback: Optional[PlaybackPositionSource] = None
        self._alignment_cache: Optional[tuple] = None

        self._load_reference()

    @property
    def repository(self) -> StatsRepository:
        return self.controller.repository

    @property
    def tier(self) -> DifficultyTier:
        return self.controller.tier

    def _now(self, now: Optional[float]) -> float:
        return self.clock() if now is None else now

    def _load_reference(self) -> None:
        if self.custom_text is not None:
            self.passage = None
            self.reference = reference_from_text(self.custom_text)
        else:
            self.passage, self.reference = self.catalog.reference_for(self.tier)
        self.buffer = TranscriptBuffer()
        self._alignment_cache = None
        self._playback = None

    def start(self, now: Optional[float] = None) -> int:
        """Begin recording with an empty buffer; returns the epoch to tag callbacks with."""
        now = self._now(now)
        self.buffer = TranscriptBuffer()
        self._alignment_cache = None
        self.start_time = now
        self.recording = True
        self.epoch += 1
        self.last_report = None
        logger.info("Reading session started (epoch %d, %d words)", self.epoch, len(self.reference))
        return self.epoch

    def ingest(
        self,
        fragment: str,
        *,
        is_final: bool = True,
        epoch: Optional[int] = None,
        now: Optional[float] = None,
    ) -> Optional[SessionUpdate]:
        """Apply a recognition result.

        Interim fragments, fragments from another epoch and fragments arriving
        while not recording are ignored (returns None).

        Args:
            fragment: Recognized text
            is_final: Whether the recognizer finalized this text
            epoch: Epoch the recognition call was started under (None: current)
            now: Current time; defaults to the session clock

        Returns:
            SessionUpdate with fresh scores, or None when the fragment was ignored
        """
        if not self.recording:
            logger.debug("Dropped fragment: session not recording")
            return None
        if epoch is not None and epoch != self.epoch:
            logger.debug("Dropped stale fragment from epoch %d (current %d)", epoch, self.epoch)
            return None
        if not is_final:
            return None

        now = self._now(now)
        if not self.buffer.append(fragment, is_final=True):
            return None

        snapshot = self.snapshot(now)
        alignment = self.alignment()
        decision = self._evaluate(snapshot, now)
        return SessionUpdate(epoch=self.epoch, snapshot=snapshot, alignment=alignment, decision=decision)

    def _evaluate(self, snapshot: ScoreSnapshot, now: float) -> Optional[DifficultyDecision]:
        if not self.recording or self.start_time is None:
            return None
        if snapshot.words_read < self.min_words_before_adapt:
            return None
        decision = self.controller.evaluate(snapshot, now)
        if decision.transitioned and self.custom_text is None:
            self._change_passage(now)
        return decision

    def _change_passage(self, now: float) -> None:
        self._load_reference()
        self.start_time = now
        self.epoch += 1
        logger.info("Switched to %s passage (epoch %d)", self.tier.label, self.epoch)

    def select_tier(self, tier: DifficultyTier, now: Optional[float] = None) -> int:
        """Manual tier choice by the reader; discards the current transcript."""
        self.controller.set_tier(tier)
        if self.custom_text is None:
            self._load_reference()
        else:
            self.buffer = TranscriptBuffer()
            self._alignment_cache = None
        if self.recording:
            self.start_time = self._now(now)
        self.epoch += 1
        return self.epoch

    @property
    def transcript(self) -> tuple:
        return self.buffer.tokens

    def snapshot(self, now: Optional[float] = None) -> ScoreSnapshot:
        return score(self.reference, self.buffer.tokens, self.start_time, self._now(now))

    def alignment(self) -> AlignmentState:
        """Alignment for the current buffer, recomputed only when the buffer changed."""
        key = self.buffer.version
        if self._alignment_cache is None or self._alignment_cache[0] != key:
            self._alignment_cache = (key, align(self.reference, self.buffer.tokens))
        return self._alignment_cache[1]

    def pronunciation(self) -> List[PronunciationFeedback]:
        return pronunciation_feedback(self.reference, self.buffer.tokens)

    def start_playback(self, now: Optional[float] = None) -> PlaybackPositionSource:
        """Start timer-paced highlighting for the model reading of the passage."""
        self._playback = PlaybackPositionSource(self.reference, self.tier, self._now(now))
        return self._playback

    def stop_playback(self) -> None:
        self._playback = None

    @property
    def position_source(self) -> PositionSource:
        if self._playback is not None:
            return self._playback
        return RecognitionPositionSource(self.reference, self.buffer)

    def highlight_index(self, now: Optional[float] = None) -> int:
        now = self._now(now)
        source = self.position_source
        index = source.position(now)
        if source is self._playback and source.finished(now):
            self._playback = None
        return index

    def stop(self, now: Optional[float] = None) -> Optional[Dict[str, Any]]:
        """Stop recording, store the best accuracy and return the session report.

        The buffer is discarded after the report is built. Calling stop on a
        stopped session returns the previous report.
        """
        if not self.recording:
            return self.last_report

        now = self._now(now)
        self.recording = False
        self.epoch += 1
        snapshot = self.snapshot(now)
        duration = now - self.start_time if self.start_time is not None else 0.0
        self.last_report = build_session_report(self.reference, self.buffer.tokens, snapshot, duration)
        self.last_report["tier"] = self.tier.label

        if snapshot.words_read and save_best(self.repository, BEST_ACCURACY_KEY, snapshot.accuracy):
            logger.info("New best accuracy %d%%", snapshot.accuracy)

        self.buffer = TranscriptBuffer()
        self._alignment_cache = None
        self.start_time = None
        logger.info("Reading session stopped (epoch %d)", self.epoch)
        return self.last_report
