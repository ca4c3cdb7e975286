"""Safety Service HTTP handler - escalation check endpoint.

The chat pipeline posts every inbound user message here together with its
latest risk analysis and the conversation's recent high-reading count.
When the verdict is to escalate, the response carries static crisis
resources for the client to show instead of continuing the AI chat.

No raw message text or session identifiers are logged.
"""
import logging
import os

from flask import Flask, jsonify, request

from tranquil.shared.utils import configure_pii_salt, hash_pii
from .config import PHRASE_LIST_VERSION, EscalationThresholds
from .escalation_gate import EscalationGate, EscalationReason

logger = logging.getLogger(__name__)

app = Flask(__name__)

configure_pii_salt(os.getenv("PII_HASH_SALT", "default_dev_salt_change_in_production_32chars"))

thresholds = EscalationThresholds.from_env()
gate = EscalationGate(thresholds=thresholds)


@app.route("/health", methods=["GET"])
def health():
    """Health check endpoint.

    Returns:
        200 with service status
    """
    return jsonify({
        "status": "healthy",
        "service": "safety-service",
        "phrase_list_version": PHRASE_LIST_VERSION,
    }), 200


@app.route("/ready", methods=["GET"])
def ready():
    """Readiness check - reports the thresholds the gate is running with."""
    return jsonify({
        "status": "ready",
        "high_anxiety_level": gate.thresholds.high_anxiety_level,
        "min_recent_high": gate.thresholds.min_recent_high,
    }), 200


@app.route("/escalation/check", methods=["POST"])
def check_escalation():
    """Decide whether a chat turn must go to the crisis pathway.

    Request Body:
        {
            "message": "Latest user message",
            "analysis": {"anxietyLevel": 9, "sentiment": "crisis",
                         "escalationDetected": true} (optional),
            "recent_high_count": 2 (optional, default 0),
            "session_id": "sess_456" (optional)
        }

    Response:
        {
            "escalate": true | false,
            "reason": "crisis_language" | "dismissive_reply" | ...,
            "matched_phrases": [...],
            "crisis_ui": {...} (only if escalate=true)
        }

    Error Handling:
        Unexpected errors escalate (fail closed). Missing crisis language
        is worse than an unneeded crisis prompt.
    """
    try:
        data = request.get_json(silent=True)

        if not isinstance(data, dict):
            logger.warning("ESCALATION_REQUEST_INVALID", extra={"reason": "empty_body"})
            return jsonify({"error": "Request body required"}), 400

        message = data.get("message")
        if message is None:
            logger.warning("ESCALATION_REQUEST_INVALID", extra={"reason": "missing_message"})
            return jsonify({"error": "Missing required field: message"}), 400

        session_id = data.get("session_id", "unknown")
        recent_high_count = data.get("recent_high_count", 0)

        logger.info(
            "ESCALATION_CHECK_REQUESTED",
            extra={
                "session_id_hash": hash_pii(str(session_id)),
                "message_length": len(str(message)),
                "has_analysis": bool(data.get("analysis")),
            }
        )

        decision = gate.evaluate(message, data.get("analysis"), recent_high_count)

        body = decision.to_dict()
        if decision.escalate:
            body["crisis_ui"] = _get_crisis_ui(decision.reason)
        return jsonify(body), 200

    except Exception as e:
        logger.error(
            "ESCALATION_CHECK_ERROR",
            extra={
                "error": str(e),
                "error_type": type(e).__name__,
                "action": "DEFAULTING_TO_ESCALATE",
            }
        )
        return jsonify({
            "escalate": True,
            "reason": "error",
            "matched_phrases": [],
            "error": "Escalation check failed - defaulting to escalate",
            "crisis_ui": _get_crisis_ui(None),
        }), 200


def _get_crisis_ui(reason) -> dict:
    """Static crisis resources shown when a conversation is escalated.

    No AI-generated content. Emergency options are shown for explicit
    crisis language and for failed checks.
    """
    immediate = reason is None or reason is EscalationReason.CRISIS_LANGUAGE
    return {
        "title": "You're not alone",
        "message": (
            "It sounds like you're carrying a lot right now. "
            "Talking to a person can help, and support is available any time."
        ),
        "resources": [
            {
                "name": "988 Suicide & Crisis Lifeline",
                "phone": "988",
                "description": "24/7 crisis support - call or text",
                "priority": 1,
            },
            {
                "name": "Crisis Text Line",
                "text": "HOME to 741741",
                "description": "Text-based crisis support",
                "priority": 2,
            },
            {
                "name": "Your therapist",
                "action": "CONTACT_THERAPIST",
                "description": "Reach out to your connected therapist",
                "priority": 3,
            },
        ],
        "show_emergency": immediate,
    }


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    port = int(os.getenv("PORT", "8001"))
    app.run(host="0.0.0.0", port=port, debug=False)
