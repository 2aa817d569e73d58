import logging
import os
import tempfile
import uuid
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request
from pydantic import BaseModel, ValidationError

from reading_coach import config
from reading_coach.adaptive import AdaptiveController, DifficultyTier, TransitionNotice
from reading_coach.alignment import heatmap_intensity
from reading_coach.asr import voice2text
from reading_coach.passages import EmptyPassageError, PassageCatalog
from reading_coach.scorer import confidence
from reading_coach.session import ReadingSession, SessionUpdate
from reading_coach.stats import InMemoryStatsRepository

logger = logging.getLogger(__name__)

app = Flask(__name__)

CATALOG = PassageCatalog()
STATS = InMemoryStatsRepository()

# ============================================================================
# SESSION STORE
# ============================================================================
SESSION_STORE: Dict[str, ReadingSession] = {}  # {session_id: ReadingSession}


# --- Request Models ---
class StartSessionRequest(BaseModel):
    tier: Optional[str] = None
    auto_adapt: bool = True
    text: Optional[str] = None


class TranscriptRequest(BaseModel):
    text: str
    is_final: bool = True
    epoch: Optional[int] = None


class TierRequest(BaseModel):
    tier: str


def _parse_tier(value: Optional[str]) -> Optional[DifficultyTier]:
    if value is None:
        return None
    tier = DifficultyTier.parse(value)
    if tier is None:
        raise ValueError(f"Unknown tier {value!r}; expected one of {[t.label for t in DifficultyTier]}")
    return tier


def _notice_payload(notice: Optional[TransitionNotice]) -> Optional[Dict[str, Any]]:
    if notice is None:
        return None
    return {
        "message": notice.message,
        "previous": notice.previous.label,
        "tier": notice.tier.label,
        "direction": notice.direction,
        "display_seconds": notice.display_seconds,
    }


def _state_payload(session_id: str, session: ReadingSession) -> Dict[str, Any]:
    snapshot = session.snapshot()
    alignment = session.alignment()
    return {
        "session_id": session_id,
        "epoch": session.epoch,
        "recording": session.recording,
        "tier": session.tier.label,
        "passage": session.passage.to_dict() if session.passage else None,
        "reference": list(session.reference),
        "snapshot": snapshot.to_dict(),
        "confidence": confidence(snapshot.words_read),
        "highlight_index": session.highlight_index(),
        "position_source": session.position_source.kind,
        "matched": list(alignment.matched),
        "errors": list(alignment.errors),
        "heat": heatmap_intensity(alignment.errors),
        "pronunciation": [
            {"index": f.index, "word": f.target, "spoken": f.spoken, "score": f.score, "suggestion": f.suggestion}
            for f in session.pronunciation()
        ],
    }


def _update_payload(session_id: str, session: ReadingSession, update: Optional[SessionUpdate]) -> Dict[str, Any]:
    if update is None:
        return {"session_id": session_id, "accepted": False, "epoch": session.epoch}
    payload = _state_payload(session_id, session)
    payload["accepted"] = True
    # Scores of the reading that was just evaluated (before any passage switch)
    payload["update"] = {
        "snapshot": update.snapshot.to_dict(),
        "errors": list(update.alignment.errors),
        "transitioned": update.transitioned,
        "notice": _notice_payload(update.decision.notice if update.decision else None),
    }
    return payload


@app.errorhandler(ValidationError)
def handle_validation_error(e):
    return jsonify({"error": "Invalid request", "details": e.errors(include_url=False, include_context=False)}), 400


# ============================================================================
# ROUTES - PASSAGES
# ============================================================================
@app.route('/api/passages', methods=['GET'])
def list_passages():
    """All passages available for practice."""
    return jsonify({"passages": [p.to_dict() for p in CATALOG.all()]})


# ============================================================================
# ROUTES - READING SESSION
# ============================================================================
@app.route('/api/session/start', methods=['POST'])
def start_session():
    """Create a session and start recording. Returns the epoch to tag transcript posts with."""
    body = StartSessionRequest.model_validate(request.get_json(silent=True) or {})
    try:
        tier = _parse_tier(body.tier)
        controller = AdaptiveController(STATS, initial_tier=tier, enabled=body.auto_adapt)
        session = ReadingSession(CATALOG, controller, text=body.text)
    except (ValueError, EmptyPassageError) as e:
        return jsonify({"error": str(e)}), 400

    session_id = str(uuid.uuid4())[:8]
    session.start()
    SESSION_STORE[session_id] = session
    logger.info("Session %s started at %s tier", session_id, session.tier.label)
    return jsonify(_state_payload(session_id, session))


@app.route('/api/session/<session_id>/transcript', methods=['POST'])
def post_transcript(session_id):
    """Append a recognition result. Interim or stale results are acknowledged but ignored."""
    session = SESSION_STORE.get(session_id)
    if session is None:
        return jsonify({"error": "Session not found"}), 404

    body = TranscriptRequest.model_validate(request.get_json(silent=True) or {})
    update = session.ingest(body.text, is_final=body.is_final, epoch=body.epoch)
    return jsonify(_update_payload(session_id, session, update))


@app.route('/api/session/<session_id>/audio', methods=['POST'])
def post_audio(session_id):
    """Transcribe an uploaded audio chunk with the ASR service and append the result."""
    session = SESSION_STORE.get(session_id)
    if session is None:
        return jsonify({"error": "Session not found"}), 404
    if 'file' not in request.files:
        return jsonify({"error": "No audio file"}), 400

    epoch_raw = request.form.get('epoch')
    epoch = int(epoch_raw) if epoch_raw and epoch_raw.isdigit() else session.epoch

    fd, tmp_path = tempfile.mkstemp(suffix=".wav")
    os.close(fd)
    try:
        request.files['file'].save(tmp_path)
        result = voice2text(tmp_path)
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)

    if not result.available:
        return jsonify({
            "error": "Speech recognition unavailable",
            "capability": "speech_recognition",
            "available": False,
            "detail": result.error,
        }), 503

    update = session.ingest(result.text, is_final=True, epoch=epoch)
    return jsonify(_update_payload(session_id, session, update))


@app.route('/api/session/<session_id>/state', methods=['GET'])
def session_state(session_id):
    session = SESSION_STORE.get(session_id)
    if session is None:
        return jsonify({"error": "Session not found"}), 404
    return jsonify(_state_payload(session_id, session))


@app.route('/api/session/<session_id>/playback', methods=['POST'])
def start_playback(session_id):
    """Start model-reading highlight; the client plays the passage at speech_rate."""
    session = SESSION_STORE.get(session_id)
    if session is None:
        return jsonify({"error": "Session not found"}), 404
    source = session.start_playback()
    return jsonify({
        "session_id": session_id,
        "speech_rate": source.speech_rate,
        "total_seconds": source.total_seconds,
        "step_seconds": source.step_seconds,
        "words": source.word_count,
    })


@app.route('/api/session/<session_id>/tier', methods=['POST'])
def select_tier(session_id):
    """Manually pick a tier; the transcript restarts on the tier's passage."""
    session = SESSION_STORE.get(session_id)
    if session is None:
        return jsonify({"error": "Session not found"}), 404
    body = TierRequest.model_validate(request.get_json(silent=True) or {})
    try:
        tier = _parse_tier(body.tier)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    session.select_tier(tier)
    return jsonify(_state_payload(session_id, session))


@app.route('/api/session/<session_id>/stop', methods=['POST'])
def stop_session(session_id):
    """Stop recording, return the session report and drop the session."""
    session = SESSION_STORE.pop(session_id, None)
    if session is None:
        return jsonify({"error": "Session not found"}), 404
    report = session.stop()
    logger.info("Session %s stopped", session_id)
    return jsonify({"session_id": session_id, "epoch": session.epoch, "report": report})


if __name__ == '__main__':
    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app.run(debug=config.API_DEBUG, host=config.API_HOST, port=config.API_PORT)
