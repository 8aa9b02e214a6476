import logging
import os
import threading

from flask import Flask, jsonify, request
from flask_cors import CORS

from config import load_settings
from domain.constants import VALID_MOVES
from main import GameSession
from services.random_source import SystemRandomSource

settings = load_settings()

app = Flask(__name__)
logging.basicConfig(level=settings.log_level)

# Renderer front-ends run on a different origin during development
CORS(app, resources={r"/api/*": {"origins": settings.allowed_origins}})

_session_lock = threading.Lock()
_session = None


def get_session() -> GameSession:
    """Return the process-wide session, creating it on first use."""
    global _session
    with _session_lock:
        if _session is None:
            _session = GameSession(
                level=settings.start_level,
                rng=SystemRandomSource(settings.seed),
                overlay_delay_ms=settings.overlay_delay_ms,
            )
        return _session


def reset_session(session=None) -> None:
    global _session
    with _session_lock:
        _session = session


@app.route("/api/state", methods=["GET"])
def get_state():
    """
    Current snapshot for renderers.

    Returns the board snapshot, controller phase/overlay flags, the effects of
    the last input and any sound cues not yet collected.
    """
    try:
        return jsonify(get_session().snapshot())
    except Exception as error:
        logging.error(f"Error fetching state: {error}")
        return jsonify({"error": "Failed to load state"}), 500


@app.route("/api/move", methods=["POST"])
def post_move():
    payload = request.get_json(silent=True) or {}
    direction = str(payload.get("direction", "")).upper()
    if direction not in VALID_MOVES:
        return jsonify({"error": f"Unknown direction '{payload.get('direction')}'"}), 400

    try:
        session = get_session()
        result = session.move(direction)
        body = session.snapshot()
        body["accepted"] = result.accepted
        return jsonify(body)
    except Exception as error:
        logging.error(f"Error applying move {direction}: {error}")
        return jsonify({"error": "Failed to apply move"}), 500


@app.route("/api/key", methods=["POST"])
def post_key():
    """
    Raw key event, e.g. {"key": "ArrowUp", "repeat": false}.
    Auto-repeat and unbound keys are accepted but do nothing.
    """
    payload = request.get_json(silent=True) or {}
    key = payload.get("key")
    if not isinstance(key, str):
        return jsonify({"error": "Missing 'key'"}), 400

    try:
        session = get_session()
        command = session.press(key, repeat=bool(payload.get("repeat", False)))
        body = session.snapshot()
        body["command"] = command
        return jsonify(body)
    except Exception as error:
        logging.error(f"Error handling key {key!r}: {error}")
        return jsonify({"error": "Failed to handle key"}), 500


@app.route("/api/continue", methods=["POST"])
def post_continue():
    try:
        session = get_session()
        changed = session.acknowledge()
        body = session.snapshot()
        body["changed"] = changed
        return jsonify(body)
    except Exception as error:
        logging.error(f"Error continuing: {error}")
        return jsonify({"error": "Failed to continue"}), 500


@app.route("/api/level", methods=["POST"])
def post_level():
    """Level picker. Any value is accepted and clamped to 1-10 (non-numbers become 1)."""
    payload = request.get_json(silent=True) or {}
    try:
        session = get_session()
        session.select_level(payload.get("level"))
        return jsonify(session.snapshot())
    except Exception as error:
        logging.error(f"Error selecting level: {error}")
        return jsonify({"error": "Failed to select level"}), 500


if __name__ == "__main__":
    app.run(port=int(os.getenv("PORT", "5000")), debug=bool(os.getenv("FLASK_DEBUG")))
