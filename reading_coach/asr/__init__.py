"""Speech recognition collaborator client."""
from .voice2text import RecognitionResult, voice2text

__all__ = ["RecognitionResult", "voice2text"]
