"""Speech Service HTTP handler - voice selection endpoint.

The client posts the voices its speech subsystem reports right now and
gets back the one to speak companion replies with.
"""
import logging
import os

from flask import Flask, jsonify, request

from .config import SpeechConfig, TTS_PRIORITY
from .voice_selector import VoiceCandidate, coerce_language, select_voice

logger = logging.getLogger(__name__)

app = Flask(__name__)

config = SpeechConfig.from_env()


@app.route("/health", methods=["GET"])
def health():
    """Health check endpoint."""
    return jsonify({
        "status": "healthy",
        "service": "speech-service",
        "rules_version": config.rules_version,
        "tts_priority": TTS_PRIORITY,
    }), 200


@app.route("/voice/select", methods=["POST"])
def select():
    """Select the best available voice.

    Request Body:
        {
            "language": "en" | "es" (optional, default from config),
            "voices": [{"name": "Samantha", "lang": "en-US"}, ...]
        }

    Response:
        {"language": "en", "voice": {"name": ..., "language_tag": ...} | null}
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        logger.warning("VOICE_REQUEST_INVALID", extra={"reason": "empty_body"})
        return jsonify({"error": "Request body required"}), 400

    voices = data.get("voices", [])
    if not isinstance(voices, list):
        logger.warning("VOICE_REQUEST_INVALID", extra={"reason": "voices_not_list"})
        return jsonify({"error": "Field 'voices' must be a list"}), 400

    language = coerce_language(data.get("language") or config.default_language)
    candidates = [VoiceCandidate.from_dict(v) for v in voices if isinstance(v, dict)]

    voice = select_voice(language, candidates)
    return jsonify({
        "language": language.value,
        "voice": voice.to_dict() if voice else None,
    }), 200


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    port = int(os.getenv("PORT", "8003"))
    app.run(host="0.0.0.0", port=port, debug=False)
