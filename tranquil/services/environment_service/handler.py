"""Environment Service HTTP handler - session platform decisions.

Called once at session start. Reads the client's user agent (from the
body, or the User-Agent header) and frame-embedding flag, and returns the
platform profile plus the auth and speech-input strategies derived from it.
"""
import logging
import os

from flask import Flask, jsonify, request

from tranquil.shared.models import ClientDescriptor
from tranquil.services.speech_service.recognition_strategy import (
    SpeechCapabilities,
    decide_recognition,
)
from .auth_strategy import decide
from .config import EnvironmentConfig
from .platform_resolver import resolve

logger = logging.getLogger(__name__)

app = Flask(__name__)

config = EnvironmentConfig.from_env()


@app.route("/health", methods=["GET"])
def health():
    """Health check endpoint."""
    return jsonify({
        "status": "healthy",
        "service": "environment-service",
        "rules_version": config.rules_version,
    }), 200


@app.route("/ready", methods=["GET"])
def ready():
    """Readiness check."""
    return jsonify({"status": "ready"}), 200


@app.route("/session/profile", methods=["POST"])
def session_profile():
    """Resolve platform facts and strategies for a new session.

    Request Body:
        {
            "user_agent": "Mozilla/5.0 ..." (optional, defaults to User-Agent header),
            "embedded_frame": true | false (optional, default false),
            "speech": {"has_browser_recognition": true, ...} (optional)
        }

    Response:
        {
            "profile": {...},
            "auth": {"flow": "redirect" | "popup", "suggest_open_in_new_tab": bool},
            "speech_recognition": "browser" | "cloud" | "unavailable"
        }
    """
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        logger.warning("PROFILE_REQUEST_INVALID", extra={"reason": "body_not_object"})
        return jsonify({"error": "Request body must be a JSON object"}), 400

    user_agent = data.get("user_agent")
    if not isinstance(user_agent, str):
        user_agent = request.headers.get("User-Agent", "")

    descriptor = ClientDescriptor(
        user_agent=user_agent,
        is_embedded_frame=data.get("embedded_frame") is True,
    )
    profile = resolve(descriptor)
    auth = decide(profile, descriptor)
    recognition = decide_recognition(profile, SpeechCapabilities.from_dict(data.get("speech")))

    logger.info(
        "SESSION_PROFILE_RESOLVED",
        extra={
            "device_class": profile.device_class.value,
            "auth_flow": auth.flow.value,
            "suggest_open_in_new_tab": auth.suggest_open_in_new_tab,
            "speech_recognition": recognition.value,
        }
    )

    return jsonify({
        "profile": profile.to_dict(),
        "auth": auth.to_dict(),
        "speech_recognition": recognition.value,
    }), 200


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    port = int(os.getenv("PORT", "8002"))
    app.run(host="0.0.0.0", port=port, debug=False)
