"""Session layer: transcript buffer, highlight drivers and the reading session."""
from .buffer import TranscriptBuffer
from .position import PlaybackPositionSource, PositionSource, RecognitionPositionSource
from .session import ReadingSession, SessionUpdate

__all__ = [
    "PlaybackPositionSource",
    "PositionSource",
    "ReadingSession",
    "RecognitionPositionSource",
    "SessionUpdate",
    "TranscriptBuffer",
]
