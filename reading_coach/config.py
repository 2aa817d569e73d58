"""Runtime configuration read from the environment."""
from __future__ import annotations

import os

# Speech recognition collaborator (HTTP service returning {"text": ..., "word_timestamps": [...]})
ASR_SERVICE_URL = os.getenv("READING_COACH_ASR_URL", "http://localhost:8000/asr")
ASR_TIMEOUT = float(os.getenv("READING_COACH_ASR_TIMEOUT", "60"))

# HTTP API
API_HOST = os.getenv("READING_COACH_API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("READING_COACH_API_PORT", "5000"))
API_DEBUG = os.getenv("READING_COACH_API_DEBUG", "false").lower() in ("true", "1", "yes")

LOG_LEVEL = os.getenv("READING_COACH_LOG_LEVEL", "INFO").upper()
