"""
Fluia Care Flask API — v1.0.0

Thin JSON surface over the care engine. No persistence: every request
carries the full context (event logs, seen lists) it needs.

- Error envelope: {"ok": false, "error": "...", "message": "..."}
- Global exception handler so clients never receive HTML error pages
"""

import logging
import sys
import traceback
from pathlib import Path

# -----------------------------------------------------------------------------
# Path Setup: must happen BEFORE any other imports
# -----------------------------------------------------------------------------

BASE_DIR = Path(__file__).resolve().parent

if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))


# -----------------------------------------------------------------------------
# Environment Loading: FLUIA_* overrides must exist before Config.load
# -----------------------------------------------------------------------------

from dotenv import load_dotenv


def _ensure_env_loaded():
    """Load .env from the project directory, falling back to the cwd."""
    env_path = BASE_DIR / ".env"
    if env_path.exists():
        load_dotenv(env_path, override=True)
        print(f"[FluiaAPI] Loaded .env from {env_path}", flush=True)
        return
    cwd_env = Path.cwd() / ".env"
    if cwd_env.exists():
        load_dotenv(cwd_env, override=True)
        print(f"[FluiaAPI] Loaded .env from {cwd_env}", flush=True)


_ensure_env_loaded()


from flask import Flask, request, jsonify

from system.config import Config
from system.logger import ApiLogger
from care.composer import generate_message
from care.micromoments import evaluate_micromoment
from care.milestones import evaluate_milestones
from care.pipeline import run_care_pipeline
from care.validate import (
    InvalidPayloadError,
    checkin_from_payload,
    composer_context_from_payload,
    micromoment_context_from_payload,
    milestone_context_from_payload,
)


app = Flask(__name__)

# ─────────────────────────────────────────────────────────────────────────────
# INITIALIZATION
# ─────────────────────────────────────────────────────────────────────────────

config = Config.load(BASE_DIR / "data")
api_logger = ApiLogger(config)

logging.basicConfig(
    level=getattr(logging, config.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("fluia.api")


def _error(code: str, message: str, status: int):
    return jsonify({"ok": False, "error": code, "message": message}), status


def _read_json():
    """Request body as a dict, or None when it is not valid JSON."""
    data = request.get_json(force=True, silent=True)
    return data if isinstance(data, dict) else None


def _handle(route: str, build_result):
    """
    Shared request flow: parse body, run `build_result(data)`, wrap the
    result dict in the success envelope.
    """
    data = _read_json()
    if data is None:
        return _error("invalid_json", "Request body must be a JSON object", 400)

    api_logger.log_request(route, data)
    try:
        result = build_result(data)
    except InvalidPayloadError as e:
        logger.info("rejected %s: %s", route, e)
        return _error("invalid_payload", str(e), 400)

    response = {"ok": True, **result}
    api_logger.log_response(route, response)
    return jsonify(response)


# ─────────────────────────────────────────────────────────────────────────────
# GLOBAL ERROR HANDLERS: JSON responses, never HTML
# ─────────────────────────────────────────────────────────────────────────────

@app.errorhandler(404)
def handle_404(e):
    return _error("not_found", f"Endpoint not found: {request.path}", 404)


@app.errorhandler(405)
def handle_405(e):
    return _error("method_not_allowed", f"Method {request.method} not allowed on {request.path}", 405)


@app.errorhandler(Exception)
def handle_exception(e):
    """Anything unhandled becomes a 500 JSON envelope."""
    print(f"[FluiaAPI] Unhandled exception: {type(e).__name__}: {e}", file=sys.stderr, flush=True)
    traceback.print_exc()
    api_logger.log_exception(request.path, e)
    return _error("server_error", f"An unexpected server error occurred: {e}", 500)


# ─────────────────────────────────────────────────────────────────────────────
# ROUTES
# ─────────────────────────────────────────────────────────────────────────────

@app.get("/api/health")
def api_health():
    return jsonify({"ok": True, "env": config.env, "timezone": config.timezone})


@app.post("/api/care/checkin")
def api_care_checkin():
    """
    Run one check-in through the engine.

    Body: {"dimensions": {"mood": 3, "energy": 2, "body": 4, "bond": 5},
           "baseline": {...}?, "moment": "morning"?,
           "gestationalWeek": 20?, "isFirstCheckIn": false?}

    Returns: {"ok": true, "state": {...}, "metrics": {...}, "prescription": {...}}
    """
    def build(data):
        return run_care_pipeline(**checkin_from_payload(data)).to_dict()

    return _handle("/api/care/checkin", build)


@app.post("/api/care/message")
def api_care_message():
    """
    Compose today's baby-voice message.

    Body: composer context (gestationalWeeks, zone, timeOfDay, presenceDays,
    babyName, seenOpenings, seenCores, seenClosings, seenMilestones,
    isFirstCheckIn, uid).
    """
    def build(data):
        context = composer_context_from_payload(data)
        output = generate_message(
            context,
            timezone=config.timezone,
            reset_hour=config.day_reset_hour,
        )
        return output.to_dict()

    return _handle("/api/care/message", build)


@app.post("/api/micromoment")
def api_micromoment():
    """Transactional gate. Returns {eligible, suggestion, reason?}."""
    def build(data):
        context = micromoment_context_from_payload(data)
        evaluation = evaluate_micromoment(
            context,
            timezone=config.timezone,
            reset_hour=config.day_reset_hour,
        )
        return evaluation.to_dict()

    return _handle("/api/micromoment", build)


@app.post("/api/milestone")
def api_milestone():
    """Celebration gate. Returns {milestones, count, reason?}."""
    def build(data):
        context = milestone_context_from_payload(data)
        evaluation = evaluate_milestones(context, timezone=config.timezone)
        return evaluation.to_dict()

    return _handle("/api/milestone", build)


# ─────────────────────────────────────────────────────────────────────────────
# MAIN
# ─────────────────────────────────────────────────────────────────────────────

if __name__ == "__main__":
    print("[FluiaAPI] Starting server...", flush=True)
    print(f"[FluiaAPI] Base directory: {BASE_DIR}", flush=True)
    print(f"[FluiaAPI] Timezone: {config.timezone} (day resets at {config.day_reset_hour:02d}:00)", flush=True)
    app.run(host="0.0.0.0", port=5000, debug=config.debug)
