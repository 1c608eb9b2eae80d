"""Risk Classifier HTTP handler.

The chat pipeline calls /analyze synchronously on every inbound user
message before generating an assistant reply, and branches on
isPotentialCrisis and confidence.

Message text is never logged, not even as a digest; only its length is.
User IDs are logged through the salted hash_pii().
"""
import logging
import os

from flask import Flask, request, jsonify

from steadyline.shared.utils import hash_pii, configure_pii_salt
from .classifier import RiskClassifier
from .config import ClassifierConfig
from .resources import CRISIS_RESOURCES, get_crisis_ui

logger = logging.getLogger(__name__)

# Initialize Flask app
app = Flask(__name__)

# Configure PII salt from environment
pii_salt = os.getenv("PII_HASH_SALT", "default_dev_salt_change_in_production_32chars")
configure_pii_salt(pii_salt)

config = ClassifierConfig.from_env()
classifier = RiskClassifier(config=config)


@app.route("/health", methods=["GET"])
def health():
    """Health check endpoint for the load balancer.

    Returns:
        200 with service status
    """
    return jsonify({
        "status": "healthy",
        "service": "risk-classifier",
        "pattern_version": config.pattern_version,
    }), 200


@app.route("/ready", methods=["GET"])
def ready():
    """Readiness check - verifies classifier is initialized.

    Returns:
        200 if ready, 503 if not
    """
    if classifier is None:
        return jsonify({"status": "not_ready", "reason": "classifier_not_initialized"}), 503
    return jsonify({"status": "ready"}), 200


@app.route("/analyze", methods=["POST"])
def analyze_message():
    """Classify a user message for crisis risk.

    Request Body:
        {
            "message": "User message text",
            "message_id": "msg_123" (optional),
            "session_id": "sess_456" (optional),
            "user_id": "user_789" (optional),
            "region": "US" (optional)
        }

    Response:
        {
            "isPotentialCrisis": true | false,
            "confidence": "low" | "medium" | "high",
            "matchedPatterns": ["...", ...],
            "pattern_version": "2026.01.14",
            "crisis_ui": {...} (only if isPotentialCrisis)
        }

    Error Handling:
        Malformed requests get 400. Any other error returns a flagged
        MEDIUM result so the pipeline interrupts rather than proceeds.
    """
    data = request.get_json(silent=True)

    if not data or not isinstance(data, dict):
        logger.warning("ANALYZE_REQUEST_INVALID", extra={"reason": "empty_body"})
        return jsonify({"error": "Request body required"}), 400

    message = data.get("message")
    if not isinstance(message, str):
        logger.warning("ANALYZE_REQUEST_INVALID", extra={"reason": "missing_message"})
        return jsonify({"error": "Missing required field: message"}), 400

    message_id = data.get("message_id", "unknown")
    region = data.get("region")
    if not region or not isinstance(region, str):
        region = config.default_region

    try:
        user_id_hash = hash_pii(str(data.get("user_id", "unknown")))

        logger.info(
            "ANALYZE_REQUESTED",
            extra={
                "message_id": message_id,
                "session_id": data.get("session_id", "unknown"),
                "user_id_hash": user_id_hash,
                "message_length": len(message),
            }
        )

        result = classifier.analyze(message)

        response = result.to_dict()
        response["pattern_version"] = config.pattern_version

        if result.is_potential_crisis:
            logger.warning(
                "CRISIS_SIGNAL_DETECTED",
                extra={
                    "message_id": message_id,
                    "user_id_hash": user_id_hash,
                    "confidence": result.confidence.value,
                    "matched_count": len(result.matched_patterns),
                }
            )
            response["crisis_ui"] = get_crisis_ui(region)
        else:
            logger.info(
                "ANALYZE_COMPLETED",
                extra={
                    "message_id": message_id,
                    "confidence": result.confidence.value,
                    "matched_count": len(result.matched_patterns),
                }
            )

        return jsonify(response), 200

    except Exception as e:
        # Never fail open - if analysis breaks, assume risk
        logger.error(
            "ANALYZE_ERROR",
            extra={
                "message_id": message_id,
                "error": str(e),
                "error_type": type(e).__name__,
                "action": "DEFAULTING_TO_MEDIUM",
            }
        )
        return jsonify({
            "isPotentialCrisis": True,
            "confidence": "medium",
            "matchedPatterns": [],
            "pattern_version": config.pattern_version,
            "error": "Classifier error - defaulting to medium",
            "crisis_ui": get_crisis_ui(region),
        }), 200  # Return 200 so the chat pipeline shows the check-in


@app.route("/resources", methods=["GET"])
def list_resources():
    """Return the full crisis resource directory keyed by region."""
    return jsonify({
        region: resource.to_dict()
        for region, resource in CRISIS_RESOURCES.items()
    }), 200


@app.route("/resources/<region>", methods=["GET"])
def get_region_resource(region: str):
    """Return one region's crisis line, or 404 for unknown regions."""
    resource = CRISIS_RESOURCES.get(region)
    if resource is None:
        return jsonify({"error": f"Unknown region: {region}"}), 404
    return jsonify(resource.to_dict()), 200


if __name__ == "__main__":
    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Run development server
    port = int(os.getenv("PORT", "8002"))
    app.run(host="0.0.0.0", port=port, debug=False)
