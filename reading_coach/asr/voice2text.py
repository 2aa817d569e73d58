"""Client for the external speech recognition service.

Recognition runs outside this package. A failed or unreachable service is
reported as an unavailable capability, never raised, so the session keeps
working on whatever transcript it already has.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Optional

import requests

from .. import config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecognitionResult:
    """Finalized text for one audio chunk, or why there is none."""
    text: str = ""
    word_timestamps: tuple = ()
    available: bool = True
    error: Optional[str] = None


def _format_word_timestamps(word_ts: Any) -> tuple:
    if not isinstance(word_ts, list):
        return ()
    return tuple(
        {"word": w.get("word", ""), "start": w.get("start", 0.0), "end": w.get("end", 0.0)}
        for w in word_ts
        if isinstance(w, dict)
    )


def voice2text(
    file_path: str,
    url: Optional[str] = None,
    timeout: Optional[float] = None,
) -> RecognitionResult:
    """Send an audio file to the ASR service and return its finalized text.

    Args:
        file_path: Path to the audio file
        url: Service endpoint (defaults to config.ASR_SERVICE_URL)
        timeout: Request timeout in seconds (defaults to config.ASR_TIMEOUT)

    Returns:
        RecognitionResult; available=False when the service could not be used
    """
    if not os.path.exists(file_path):
        return RecognitionResult(available=False, error=f"Audio file not found: {file_path}")

    url = url or config.ASR_SERVICE_URL
    timeout = config.ASR_TIMEOUT if timeout is None else timeout
    try:
        with open(file_path, "rb") as f:
            response = requests.post(url, files={"file": f}, timeout=timeout)
        response.raise_for_status()
        result = response.json()
    except (requests.RequestException, ValueError) as e:
        logger.warning("ASR service error: %s", e)
        return RecognitionResult(available=False, error=str(e))

    if not isinstance(result, dict):
        logger.warning("ASR service returned %s instead of an object", type(result).__name__)
        return RecognitionResult(available=False, error="Malformed ASR response")

    text = result.get("text")
    return RecognitionResult(
        text=text.strip() if isinstance(text, str) else "",
        word_timestamps=_format_word_timestamps(result.get("word_timestamps")),
    )
